r"""Outcome of a guarded invocation.

The trigger controllers return an ``Outcome`` from their programmatic
entry points so that a skipped invocation (a guard was active) can be
told apart from an invocation that completed silently.
"""

from __future__ import annotations

__all__ = ["Outcome"]

from enum import Enum


class Outcome(Enum):
    """Result of a guarded call to a caller-supplied operation.

    Attributes:
        COMPLETED: The operation ran and succeeded.
        FAILED: The operation ran and failed; the error is kept on the
            controller snapshot.
        REJECTED: The operation was not invoked because a guard was active
            (already running, exhausted, disabled or disposed).
    """

    COMPLETED = "completed"
    FAILED = "failed"
    REJECTED = "rejected"
