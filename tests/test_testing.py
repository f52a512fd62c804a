"""Tests for the testing helpers."""

import pytest

from treewalker import STOP, h, walk_tree
from treewalker.testing import VisitRecorder, resolve_later


class TestResolveLater:
    @pytest.mark.asyncio
    async def test_returns_value(self):
        assert await resolve_later('x') == 'x'


class TestVisitRecorder:
    @pytest.mark.asyncio
    async def test_records_all_arguments(self):
        recorder = VisitRecorder()

        await walk_tree('leaf', recorder, context={'a': 1})

        visit, = recorder.visits
        assert visit.node == 'leaf'
        assert visit.instance is None
        assert visit.context == {'a': 1}
        assert visit.child_context == {'a': 1}

    def test_stop_on(self):
        recorder = VisitRecorder(stop_on=lambda node, instance: node == 'x')

        assert recorder('x', None, None, None, None) is STOP
        assert recorder('y', None, None, None, None) is True

    def test_fail_on(self):
        error = KeyError('k')
        recorder = VisitRecorder(fail_on=lambda node, instance: True, error=error)

        with pytest.raises(KeyError):
            recorder('x', None, None, None, None)

    @pytest.mark.asyncio
    async def test_asynchronous_answer(self):
        recorder = VisitRecorder(stop_on=lambda node, instance: True, asynchronous=True)

        assert await recorder('x', None, None, None, None) is STOP

    @pytest.mark.asyncio
    async def test_nodes_and_instances(self):
        from treewalker import Component

        tree = h('div', None, h(Component))
        recorder = VisitRecorder()

        await walk_tree(tree, recorder)

        assert recorder.nodes[0] is tree
        assert len(recorder.instances) == 1
        assert isinstance(recorder.instances[0], Component)
