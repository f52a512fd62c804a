"""Core components of the async walker.

The walker is built from small pieces, leaves first: classification,
context channels, instance management, visitor dispatch and the walker
that orchestrates them.
"""

from .classifier import Category, classify, unwrap
from .context import ContextOverlay
from .instance import instantiate, set_state
from .dispatcher import STOP, Outcome, VisitorDispatcher
from .walker import AsyncTreeWalker
from .collector import (
    AsyncDataCollector,
    ElementCollector,
    InstanceDataCollector,
)

__all__ = [
    # Classification
    'Category',
    'classify',
    'unwrap',
    # Context
    'ContextOverlay',
    # Instances
    'instantiate',
    'set_state',
    # Dispatch
    'STOP',
    'Outcome',
    'VisitorDispatcher',
    # Walker
    'AsyncTreeWalker',
    # Collectors
    'AsyncDataCollector',
    'ElementCollector',
    'InstanceDataCollector',
]
