"""
Long-running operation states.
"""

from enum import Enum


class OperationState(Enum):
    """Lifecycle of one remote long-running operation."""

    PENDING = "pending"
    POLLING = "polling"
    DONE = "done"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    def is_terminal(self) -> bool:
        """Check if this state is terminal (no further polling)."""
        return self in (OperationState.DONE, OperationState.FAILED, OperationState.TIMED_OUT)


__all__ = ["OperationState"]
