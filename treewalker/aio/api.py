"""High-level async API for TreeWalker.

This module provides simple, user-friendly async functions for common
walks. All functions build a fresh AsyncTreeWalker per call.
"""

import asyncio
from typing import Any, AsyncIterator, Callable, List, Mapping, Optional, Union

from ..config import WalkOptions
from .core import AsyncTreeWalker, ElementCollector, InstanceDataCollector

Options = Union[WalkOptions, Mapping[str, Any], None]


async def walk_tree(
    root: Any,
    visitor: Callable[..., Any],
    context: Optional[Mapping[str, Any]] = None,
    options: Options = None,
) -> None:
    """Walk a tree, calling ``visitor`` at every visited node.

    Args:
        root: Root node
        visitor: Called as ``visitor(node, instance, overlay, context,
            child_context)``; may return an awaitable. Returning ``STOP``
            skips the node's children.
        context: Initial legacy context
        options: WalkOptions, a mapping such as ``{'invoke_teardown': True}``,
            or None

    Raises:
        Exception: The first error raised by the visitor, a producer or a
            teardown hook, once every in-flight branch has settled

    Example:
        >>> async def visitor(node, instance):
        ...     if instance is not None and hasattr(instance, 'fetch'):
        ...         await instance.fetch()
        >>> await walk_tree(app, visitor)
    """
    walker = AsyncTreeWalker(visitor, context, options)
    await walker.walk(root)


async def iter_elements(
    root: Any,
    context: Optional[Mapping[str, Any]] = None,
    options: Options = None,
) -> AsyncIterator[Any]:
    """Stream every visited node in visitor-call order.

    If the walk fails, the nodes visited before the failure are yielded
    first and the error is raised afterwards.

    Args:
        root: Root node
        context: Initial legacy context
        options: Walk options

    Yields:
        Visited nodes
    """
    queue: asyncio.Queue = asyncio.Queue()
    finished = object()

    def visitor(node, *_):
        queue.put_nowait(node)

    async def run():
        try:
            await walk_tree(root, visitor, context, options)
        finally:
            queue.put_nowait(finished)

    task = asyncio.ensure_future(run())
    try:
        while True:
            node = await queue.get()
            if node is finished:
                break
            yield node
        await task
    finally:
        if not task.done():
            task.cancel()


async def collect_elements(
    root: Any,
    context: Optional[Mapping[str, Any]] = None,
    options: Options = None,
    predicate: Optional[Callable[[Any, Any], bool]] = None,
) -> List[Any]:
    """Collect visited nodes in visitor-call order.

    Args:
        root: Root node
        context: Initial legacy context
        options: Walk options
        predicate: Optional ``predicate(node, instance)`` filter

    Returns:
        List of visited nodes
    """
    collector = ElementCollector(predicate)
    await walk_tree(root, collector, context, options)
    return collector.get_result()


async def collect_instance_data(
    root: Any,
    method: str = 'get_data',
    context: Optional[Mapping[str, Any]] = None,
    options: Options = None,
) -> List[Any]:
    """Call ``method`` on every instance defining it and gather the values.

    Awaitable results are awaited before descending below their instance.

    Args:
        root: Root node
        method: Instance method name
        context: Initial legacy context
        options: Walk options

    Returns:
        Values in completion order
    """
    collector = InstanceDataCollector(method)
    await walk_tree(root, collector, context, options)
    return collector.get_result()


async def count_nodes(
    root: Any,
    context: Optional[Mapping[str, Any]] = None,
    options: Options = None,
) -> int:
    """Count visitor calls made while walking a tree.

    Args:
        root: Root node
        context: Initial legacy context
        options: Walk options

    Returns:
        Number of visited nodes
    """
    walker = AsyncTreeWalker(lambda node: None, context, options)
    await walker.walk(root)
    return walker.get_stats()['visits']
