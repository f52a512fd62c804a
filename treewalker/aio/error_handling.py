"""
Error handling for TreeWalker.

A walk has a single failure slot. The first error from a visitor, a
producer or a teardown hook latches it; from then on no new visitor call
is dispatched, branches already in flight finish on their own, and the
walk reports that first error once everything has settled.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


class WalkPhase(Enum):
    """Where in the walk an error came from."""
    VISITOR = "visitor"        # Raised or rejected by the visitor
    PRODUCER = "producer"      # Raised while expanding a node
    TEARDOWN = "teardown"      # Raised by component_will_unmount


@dataclass(frozen=True)
class WalkFailure:
    """Record of a latched error."""
    error: BaseException
    phase: WalkPhase
    node: Any = None

    @property
    def error_type(self) -> str:
        return type(self.error).__name__


class ErrorLatch:
    """
    First-error-wins failure slot for one walk.

    Errors latched after the first are kept in ``discarded`` for
    inspection but never change the walk's outcome.
    """

    def __init__(self):
        self._failure: Optional[WalkFailure] = None
        self.discarded: List[WalkFailure] = []

    @property
    def failed(self) -> bool:
        return self._failure is not None

    @property
    def failure(self) -> Optional[WalkFailure]:
        return self._failure

    def latch(self, error: BaseException, phase: WalkPhase, node: Any = None) -> bool:
        """
        Record an error.

        Args:
            error: The exception that was raised
            phase: Which part of the walk raised it
            node: The node being processed when the error occurred

        Returns:
            True if this error is now the walk's failure, False if an
            earlier one already won
        """
        record = WalkFailure(error, phase, node)
        if self._failure is None:
            self._failure = record
            logger.debug("Walk failed in %s phase at %r: %s", phase.value, node, error)
            return True

        self.discarded.append(record)
        logger.debug("Discarding later %s error at %r: %s", phase.value, node, error)
        return False

    def raise_if_failed(self) -> None:
        """Re-raise the latched error unchanged, if there is one."""
        if self._failure is not None:
            raise self._failure.error

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with the winning failure and discarded error counts
        """
        return {
            'failed': self.failed,
            'phase': self._failure.phase.value if self._failure else None,
            'error_type': self._failure.error_type if self._failure else None,
            'discarded_errors': len(self.discarded),
        }
