"""Async tree walker.

Walks a declarative tree exactly once, calling the visitor at every
visited node, expanding producers on demand and threading both context
channels downward. Collection members are initiated in declared order;
depending on the configured scheduling they then run concurrently or one
after the other.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Mapping, Optional, Union

from ..._common import call_with_arity
from ...config import ChildScheduling, WalkOptions
from ..error_handling import ErrorLatch, WalkFailure, WalkPhase
from .classifier import Category, classify, resolve_props, side_channel_children, unwrap
from .context import ContextOverlay, resolve_consumer_value
from .dispatcher import Outcome, VisitorDispatcher
from .instance import child_context, instantiate, teardown

logger = logging.getLogger(__name__)


class AsyncTreeWalker:
    """Runs one walk of one tree with one visitor.

    A walker owns the walk's error latch and statistics, so it is single
    use: create a new walker for every walk.

    Example:
        >>> walker = AsyncTreeWalker(visitor, options={'invoke_teardown': True})
        >>> await walker.walk(tree)
    """

    def __init__(
        self,
        visitor: Callable[..., Any],
        context: Optional[Mapping[str, Any]] = None,
        options: Union[WalkOptions, Mapping[str, Any], None] = None,
    ):
        """Initialize the walker.

        Args:
            visitor: Called as ``visitor(node, instance, overlay, context,
                child_context)``; may return an awaitable
            context: Initial legacy context (defaults to an empty dict)
            options: WalkOptions, a mapping of option names, or None
        """
        self.options = WalkOptions.from_value(options)
        self.latch = ErrorLatch()
        self.dispatcher = VisitorDispatcher(visitor, self.latch)
        self.context = {} if context is None else context
        self._started = False
        self._instances = 0
        self._teardowns = 0

    @property
    def failure(self) -> Optional[WalkFailure]:
        """The latched failure, or None while the walk is healthy."""
        return self.latch.failure

    async def walk(self, root: Any) -> None:
        """Walk ``root`` and every node reachable from it.

        Returns once every branch has settled. Raises the first error
        latched during the walk, unchanged.

        Raises:
            RuntimeError: If this walker already ran
        """
        if self._started:
            raise RuntimeError("AsyncTreeWalker runs a single walk; create a new walker")
        self._started = True

        logger.debug("Walking %r (scheduling=%s)", root, self.options.scheduling.value)
        await self._walk(root, self.context, ContextOverlay.empty())
        self.latch.raise_if_failed()

    async def _walk(self, node: Any, context: Any, overlay: ContextOverlay) -> None:
        if self.latch.failed:
            return

        try:
            node = unwrap(node)
        except Exception as e:
            self.latch.latch(e, WalkPhase.PRODUCER, node)
            return

        category = classify(node)

        if category is Category.EMPTY:
            return

        if category is Category.COLLECTION:
            await self._walk_members(node, context, overlay)

        elif category is Category.LEAF:
            # Leaves are visited but never expanded
            await self.dispatcher.dispatch(node, None, overlay, context, context)

        elif category is Category.PROVIDER:
            overlay = overlay.push(node.type.context, node.props.get('value'))
            await self._walk(node.props.get('children'), context, overlay)

        elif category is Category.CONSUMER:
            value = resolve_consumer_value(overlay, node.type.context)
            try:
                rendered = node.props['children'](value)
            except Exception as e:
                self.latch.latch(e, WalkPhase.PRODUCER, node)
                return
            if self._rejects_awaitable(node, rendered):
                return
            await self._walk(rendered, context, overlay)

        elif category is Category.SIDE_CHANNEL:
            await self._walk(side_channel_children(node), context, overlay)

        elif category is Category.STATEFUL_PRODUCER:
            await self._walk_stateful(node, context, overlay)

        else:
            await self._walk_stateless(node, category, context, overlay)

    async def _walk_members(self, members: Any, context: Any, overlay: ContextOverlay) -> None:
        try:
            members = list(members)
        except Exception as e:
            self.latch.latch(e, WalkPhase.PRODUCER, members)
            return

        if self.options.scheduling is ChildScheduling.SEQUENTIAL:
            for member in members:
                await self._walk(member, context, overlay)
            return

        # Tasks start in submission order, so visitor calls do too
        await asyncio.gather(*(self._walk(member, context, overlay) for member in members))

    async def _walk_stateless(
        self,
        node: Any,
        category: Category,
        context: Any,
        overlay: ContextOverlay,
    ) -> None:
        props = resolve_props(node)
        producer = node.type

        if category is Category.REF_FORWARDING:
            def render():
                return call_with_arity(producer.render, props, getattr(node, 'ref', None))
        elif category is Category.FUNCTION_PRODUCER:
            def render():
                return call_with_arity(producer, props, context)
        else:
            def render():
                return props.get('children')

        await self._visit_and_expand(node, None, render, context, context, overlay)

    async def _walk_stateful(self, node: Any, context: Any, overlay: ContextOverlay) -> None:
        try:
            instance = instantiate(node.type, resolve_props(node), context)
            inner_context = child_context(instance, context)
        except Exception as e:
            self.latch.latch(e, WalkPhase.PRODUCER, node)
            return
        self._instances += 1

        try:
            await self._visit_and_expand(node, instance, instance.render, context, inner_context, overlay)
        finally:
            if self.options.invoke_teardown:
                self._teardown(instance, node)

    async def _visit_and_expand(
        self,
        node: Any,
        instance: Any,
        render: Callable[[], Any],
        context: Any,
        inner_context: Any,
        overlay: ContextOverlay,
    ) -> None:
        outcome = await self.dispatcher.dispatch(node, instance, overlay, context, inner_context)
        if outcome is not Outcome.DESCEND or self.latch.failed:
            return

        # Every visitor call on this level runs before any of its children expand
        await asyncio.sleep(0)
        if self.latch.failed:
            return

        try:
            children = render()
        except Exception as e:
            self.latch.latch(e, WalkPhase.PRODUCER, node)
            return
        if self._rejects_awaitable(node, children):
            return

        await self._walk(children, inner_context, overlay)

    def _rejects_awaitable(self, node: Any, result: Any) -> bool:
        """Latch a TypeError when a producer hands back an awaitable.

        Producers expand synchronously; async work belongs in the visitor.
        """
        if not inspect.isawaitable(result):
            return False
        if inspect.iscoroutine(result):
            result.close()
        name = getattr(node.type, '__name__', None) or repr(node.type)
        error = TypeError(f"{name} returned an awaitable; producers must return nodes synchronously")
        self.latch.latch(error, WalkPhase.PRODUCER, node)
        return True

    def _teardown(self, instance: Any, node: Any) -> None:
        try:
            if teardown(instance):
                self._teardowns += 1
        except Exception as e:
            self.latch.latch(e, WalkPhase.TEARDOWN, node)

    def get_stats(self) -> dict:
        """Get walk statistics.

        Returns:
            Dictionary with visitor calls, instances created, teardown
            hooks called and error counts
        """
        stats = {
            'visits': self.dispatcher.calls,
            'instances': self._instances,
            'teardowns': self._teardowns,
            'scheduling': self.options.scheduling.value,
        }
        stats.update(self.latch.get_statistics())
        return stats
