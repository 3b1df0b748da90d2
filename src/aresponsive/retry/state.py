r"""Observable state of a retry executor."""

from __future__ import annotations

__all__ = ["RetryState"]

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryState:
    """Snapshot of the retry executor state.

    Attributes:
        is_retrying: True once the current series went past its first
            attempt.
        attempt: The current attempt number (1-indexed), or 0 when idle.
        last_error: The error raised by the most recent failed attempt.
        can_retry: True while attempts remain in the current series.
        next_delay: The backoff delay in seconds being waited before the
            next attempt, or 0 when not sleeping.

    Example:
        ```pycon
        >>> from aresponsive.retry import RetryState
        >>> state = RetryState.idle()
        >>> state.attempt, state.is_retrying, state.can_retry
        (0, False, True)

        ```
    """

    is_retrying: bool = False
    attempt: int = 0
    last_error: BaseException | None = None
    can_retry: bool = True
    next_delay: float = 0.0

    @classmethod
    def idle(cls) -> RetryState:
        return cls()
