"""Test fixtures for TreeWalker consumers.

These helpers make visitor behaviour easy to script in a test suite
without writing a new visitor for every scenario.
"""

import asyncio
from typing import Any, Callable, List, NamedTuple, Optional

from ..aio.core.dispatcher import STOP


async def resolve_later(value: Any, delay: float = 0) -> Any:
    """Return ``value`` after yielding to the event loop.

    With the default delay of 0 the value arrives after every task that
    was already scheduled, which keeps test ordering deterministic.
    """
    await asyncio.sleep(delay)
    return value


class Visit(NamedTuple):
    """One recorded visitor call."""
    node: Any
    instance: Any
    overlay: Any
    context: Any
    child_context: Any


class VisitRecorder:
    """Scriptable visitor that records every call it receives.

    Example:
        recorder = VisitRecorder(stop_on=lambda node, inst: node == 'skip')
        await walk_tree(tree, recorder)
        assert recorder.nodes == [...]
    """

    def __init__(
        self,
        stop_on: Optional[Callable[[Any, Any], bool]] = None,
        fail_on: Optional[Callable[[Any, Any], bool]] = None,
        error: Optional[BaseException] = None,
        asynchronous: bool = False,
    ):
        """Initialize the recorder.

        Args:
            stop_on: Predicate; when truthy the visitor answers STOP
            fail_on: Predicate; when truthy the visitor raises ``error``
            error: Exception to raise (defaults to RuntimeError)
            asynchronous: Answer through an awaitable instead of directly
        """
        self.stop_on = stop_on
        self.fail_on = fail_on
        self.error = error or RuntimeError("visitor failure")
        self.asynchronous = asynchronous
        self.visits: List[Visit] = []

    @property
    def nodes(self) -> List[Any]:
        return [visit.node for visit in self.visits]

    @property
    def instances(self) -> List[Any]:
        return [visit.instance for visit in self.visits if visit.instance is not None]

    def _answer(self, node: Any, instance: Any) -> Any:
        if self.fail_on is not None and self.fail_on(node, instance):
            raise self.error
        if self.stop_on is not None and self.stop_on(node, instance):
            return STOP
        return True

    async def _answer_later(self, node: Any, instance: Any) -> Any:
        await asyncio.sleep(0)
        return self._answer(node, instance)

    def __call__(self, node, instance, overlay, context, child_context):
        self.visits.append(Visit(node, instance, overlay, context, child_context))
        if self.asynchronous:
            return self._answer_later(node, instance)
        return self._answer(node, instance)
