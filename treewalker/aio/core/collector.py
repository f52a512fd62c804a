"""Async data collectors for tree walks.

Collectors extract and aggregate data from nodes during a walk. Every
collector is callable with the visitor signature, so it can be handed to
the walker directly.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from .dispatcher import STOP


class AsyncDataCollector(ABC):
    """Abstract base class for async data collectors.

    Collectors process nodes during a walk to extract specific
    information. They can maintain state and aggregate data.
    """

    def __init__(self):
        """Initialize collector with empty state."""
        self.reset()

    @abstractmethod
    async def collect(self, node: Any, instance: Any = None) -> Any:
        """Collect data from a single node.

        Args:
            node: Node being visited
            instance: Backing instance for stateful producers, else None

        Returns:
            Visitor answer; ``STOP`` skips the node's children
        """
        pass

    @abstractmethod
    def reset(self):
        """Reset collector state.

        Called before starting a new walk.
        """
        pass

    @abstractmethod
    def get_result(self) -> Any:
        """Get final collected result.

        Returns:
            Aggregated collection result
        """
        pass

    def __call__(self, node: Any, instance: Any = None, *context: Any) -> Any:
        return self.collect(node, instance)


class ElementCollector(AsyncDataCollector):
    """Collects every visited node in visitor-call order.

    An optional predicate restricts what is kept without affecting descent.
    """

    def __init__(self, predicate=None):
        """Initialize element collector.

        Args:
            predicate: Optional ``predicate(node, instance)``; nodes for which
                it is falsy are not kept
        """
        self.predicate = predicate
        super().__init__()

    def reset(self):
        """Reset collected nodes."""
        self.elements: List[Any] = []

    async def collect(self, node: Any, instance: Any = None) -> None:
        if self.predicate is None or self.predicate(node, instance):
            self.elements.append(node)

    def get_result(self) -> List[Any]:
        return self.elements


class InstanceDataCollector(AsyncDataCollector):
    """Calls a data method on every instance that defines it.

    Awaitable results are awaited, so descent below an instance waits for
    its data. Values are kept in completion order.
    """

    def __init__(self, method: str = 'get_data', stop_when=None):
        """Initialize instance data collector.

        Args:
            method: Name of the instance method to call
            stop_when: Optional ``stop_when(value)``; when truthy the
                instance's children are skipped
        """
        self.method = method
        self.stop_when = stop_when
        super().__init__()

    def reset(self):
        """Reset collected values."""
        self.values: List[Any] = []

    async def collect(self, node: Any, instance: Any = None) -> Optional[bool]:
        fetch = getattr(instance, self.method, None) if instance is not None else None
        if not callable(fetch):
            return None

        value = fetch()
        if inspect.isawaitable(value):
            value = await value
        self.values.append(value)

        if self.stop_when is not None and self.stop_when(value):
            return STOP
        return None

    def get_result(self) -> List[Any]:
        return self.values
