"""TreeWalker - Async visitor-driven walks over declarative trees.

TreeWalker walks a tree whose nodes may be producers (functions or
stateful classes) that yield further subtrees. It calls a visitor at every
node, expands producers on demand and threads context downward:

    from treewalker import h, Component, walk_tree

    async def visitor(node, instance):
        ...

    await walk_tree(h(App), visitor)

Visitors may answer synchronously or return an awaitable; returning
``STOP`` skips a node's children.
"""

__version__ = "0.1.0"

from . import aio
from .aio import (
    AsyncTreeWalker,
    STOP,
    WalkOptions,
    ChildScheduling,
    WalkFailure,
    WalkPhase,
    walk_tree,
    iter_elements,
    collect_elements,
    collect_instance_data,
    count_nodes,
    ElementCollector,
    InstanceDataCollector,
)
from .elements import (
    Element,
    Component,
    Context,
    h,
    create_context,
    forward_ref,
    create_portal,
)

__all__ = [
    "__version__",
    "aio",
    # Walking
    "AsyncTreeWalker",
    "STOP",
    "WalkOptions",
    "ChildScheduling",
    "WalkFailure",
    "WalkPhase",
    "walk_tree",
    "iter_elements",
    "collect_elements",
    "collect_instance_data",
    "count_nodes",
    "ElementCollector",
    "InstanceDataCollector",
    # Authoring
    "Element",
    "Component",
    "Context",
    "h",
    "create_context",
    "forward_ref",
    "create_portal",
]
