"""Asynchronous implementation of TreeWalker.

This package contains the native async/await walker. Visitors and
producers may suspend; branches of one walk run concurrently on the
running event loop.
"""

# Core abstractions
from .core import (
    AsyncTreeWalker,
    VisitorDispatcher,
    ContextOverlay,
    Category,
    Outcome,
    STOP,
    classify,
    AsyncDataCollector,
    ElementCollector,
    InstanceDataCollector,
)

# Error handling
from .error_handling import (
    ErrorLatch,
    WalkFailure,
    WalkPhase,
)

# High-level API
from .api import (
    walk_tree,
    iter_elements,
    collect_elements,
    collect_instance_data,
    count_nodes,
)

# Configuration
from ..config import (
    WalkOptions,
    ChildScheduling,
)

__all__ = [
    # Core abstractions
    'AsyncTreeWalker',
    'VisitorDispatcher',
    'ContextOverlay',
    'Category',
    'Outcome',
    'STOP',
    'classify',
    # Collectors
    'AsyncDataCollector',
    'ElementCollector',
    'InstanceDataCollector',
    # Error handling
    'ErrorLatch',
    'WalkFailure',
    'WalkPhase',
    # Configuration
    'WalkOptions',
    'ChildScheduling',
    # High-level API
    'walk_tree',
    'iter_elements',
    'collect_elements',
    'collect_instance_data',
    'count_nodes',
]
