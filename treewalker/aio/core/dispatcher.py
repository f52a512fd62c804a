"""Visitor dispatch.

Wraps the user's visitor so the walker sees one uniform answer no matter
whether the visitor returned a value, returned an awaitable, raised, or
produced a rejected awaitable.
"""

import inspect
import logging
from enum import Enum
from typing import Any, Callable

from ..error_handling import ErrorLatch, WalkPhase
from ..._common import positional_arity

logger = logging.getLogger(__name__)

# Visitor answer that keeps the node but skips its children
STOP = False

VISITOR_ARGUMENTS = 5


class Outcome(Enum):
    """Normalized visitor answer."""
    DESCEND = "descend"            # Expand the node's children
    SKIP_CHILDREN = "skip"         # Visitor returned STOP
    FAILED = "failed"              # Walk has failed, do nothing more


class VisitorDispatcher:
    """Calls the visitor and folds every kind of answer into an Outcome.

    The visitor is called as
    ``visitor(node, instance, overlay, context, child_context)``; visitors
    declaring fewer positional parameters receive a prefix of that list.
    """

    def __init__(self, visitor: Callable[..., Any], latch: ErrorLatch):
        if not callable(visitor):
            raise ValueError(f"Visitor must be callable, got {visitor!r}")
        self.visitor = visitor
        self.latch = latch
        self.calls = 0
        arity = positional_arity(visitor)
        self._arity = VISITOR_ARGUMENTS if arity is None else min(arity, VISITOR_ARGUMENTS)

    async def dispatch(
        self,
        node: Any,
        instance: Any,
        overlay: Any,
        context: Any,
        child_context: Any,
    ) -> Outcome:
        """Visit one node.

        The visitor runs synchronously up to its first suspension point;
        an awaitable answer is awaited before the outcome is decided.

        Returns:
            Outcome for the node
        """
        if self.latch.failed:
            return Outcome.FAILED

        args = (node, instance, overlay, context, child_context)[:self._arity]
        self.calls += 1
        try:
            answer = self.visitor(*args)
            if inspect.isawaitable(answer):
                answer = await answer
        except Exception as e:
            self.latch.latch(e, WalkPhase.VISITOR, node)
            return Outcome.FAILED

        if answer is STOP:
            logger.debug("Visitor stopped descent at %r", node)
            return Outcome.SKIP_CHILDREN
        return Outcome.DESCEND
