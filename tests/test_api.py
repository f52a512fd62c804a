"""Tests for the high-level API and collectors."""

import pytest

from treewalker import (
    ElementCollector,
    InstanceDataCollector,
    STOP,
    collect_elements,
    collect_instance_data,
    count_nodes,
    h,
    iter_elements,
    walk_tree,
)

from trees import Stateful


class TestCollectors:
    """Collectors used directly as visitors."""

    @pytest.mark.asyncio
    async def test_element_collector_predicate(self, sync_tree):
        collector = ElementCollector(lambda node, instance: instance is not None)

        await walk_tree(sync_tree, collector)

        assert len(collector.get_result()) == 6
        assert all(node.type is Stateful for node in collector.get_result())

    @pytest.mark.asyncio
    async def test_instance_data_stop_when(self, sync_tree):
        """Returning STOP from the collector skips that instance's children."""
        collector = InstanceDataCollector(stop_when=lambda value: value == 4)

        await walk_tree(sync_tree, collector)

        assert collector.get_result() == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_instance_data_custom_method(self):
        class Named(Stateful):
            def get_name(self):
                return self.props['name']

        tree = h('div', None, [h(Named, {'name': 'a'}), h(Named, {'name': 'b'})])
        collector = InstanceDataCollector(method='get_name')

        await walk_tree(tree, collector)

        assert collector.get_result() == ['a', 'b']

    @pytest.mark.asyncio
    async def test_reset(self, sync_tree):
        collector = ElementCollector()
        await walk_tree(sync_tree, collector)

        collector.reset()

        assert collector.get_result() == []

    @pytest.mark.asyncio
    async def test_collect_returns_stop(self):
        collector = InstanceDataCollector(stop_when=lambda value: True)

        answer = await collector.collect('node', Stateful({'data': 1}))

        assert answer is STOP


class TestApi:
    """Convenience functions."""

    @pytest.mark.asyncio
    async def test_collect_instance_data_async(self, async_tree):
        """Awaitable data is resolved before it is collected."""
        assert await collect_instance_data(async_tree) == [1, 2, 3, 4, 5, 6]

    @pytest.mark.asyncio
    async def test_collect_elements_order(self):
        """Every node on one level is visited before the next level."""
        tree = h('ul', None, [h('li', None, 'a'), h('li', None, 'b')])

        nodes = await collect_elements(tree)

        assert nodes[0] is tree
        assert [n if isinstance(n, str) else n.type for n in nodes] == ['ul', 'li', 'li', 'a', 'b']

    @pytest.mark.asyncio
    async def test_collect_elements_predicate(self):
        tree = h('ul', None, [h('li', None, 'a'), h('li', None, 'b')])

        nodes = await collect_elements(tree, predicate=lambda node, instance: isinstance(node, str))

        assert nodes == ['a', 'b']

    @pytest.mark.asyncio
    async def test_count_nodes(self, sync_tree):
        assert await count_nodes(sync_tree) == 20

    @pytest.mark.asyncio
    async def test_count_nodes_empty(self):
        assert await count_nodes(None) == 0

    @pytest.mark.asyncio
    async def test_context_is_forwarded(self):
        seen = []

        def Reader(props, context):
            seen.append(context['user'])
            return None

        await walk_tree(h(Reader), lambda node: None, context={'user': 'ann'})

        assert seen == ['ann']

    @pytest.mark.asyncio
    async def test_mapping_options(self):
        calls = []

        class Foo(Stateful):
            def component_will_unmount(self):
                calls.append(self.props['data'])

        await walk_tree(h(Foo, {'data': 1}), lambda node: None, options={'invoke_teardown': True})

        assert calls == [1]


class TestIterElements:
    """Streaming visited nodes."""

    @pytest.mark.asyncio
    async def test_streams_every_node(self, sync_tree):
        streamed = [node async for node in iter_elements(sync_tree)]

        assert streamed == await collect_elements(sync_tree)

    @pytest.mark.asyncio
    async def test_yields_then_raises(self):
        """Nodes visited before a failure are yielded before the error."""
        def Broken(props):
            raise ValueError("cannot render")

        tree = h('div', None, [h('span', None, 'ok'), h(Broken)])
        streamed = []

        with pytest.raises(ValueError, match="cannot render"):
            async for node in iter_elements(tree):
                streamed.append(node)

        assert streamed[0] is tree
        assert Broken in [getattr(node, 'type', None) for node in streamed]

    @pytest.mark.asyncio
    async def test_early_exit(self, sync_tree):
        """Closing the stream early cancels the pending walk."""
        stream = iter_elements(sync_tree)
        first = await stream.__anext__()
        await stream.aclose()

        assert first is sync_tree
