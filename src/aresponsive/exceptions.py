r"""Exceptions raised by the interaction controllers.

Failures of the caller-supplied operations are never wrapped while
attempts remain: the retry executor only raises ``RetryExhaustedError``
once every configured attempt failed, chained to the last failure.
Guard rejections are not exceptions; see ``aresponsive.outcome``.
"""

from __future__ import annotations

__all__ = ["AresponsiveError", "DisposedError", "RetryExhaustedError"]


class AresponsiveError(Exception):
    """Base class for the errors raised by this package."""


class RetryExhaustedError(AresponsiveError):
    """Exception raised when every retry attempt failed.

    Args:
        attempts: The number of attempts that were made.
        last_error: The exception raised by the final attempt.

    Example:
        ```pycon
        >>> from aresponsive.exceptions import RetryExhaustedError
        >>> error = RetryExhaustedError(attempts=3, last_error=ValueError("boom"))
        >>> error.attempts
        3
        >>> error.last_error
        ValueError('boom')
        >>> str(error)
        'operation failed after 3 attempts: boom'

        ```
    """

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"operation failed after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


class DisposedError(AresponsiveError, RuntimeError):
    """Exception raised when a disposed scheduler receives new input.

    Example:
        ```pycon
        >>> from aresponsive.exceptions import DisposedError
        >>> raise DisposedError("DebounceScheduler is disposed")
        Traceback (most recent call last):
            ...
        aresponsive.exceptions.DisposedError: DebounceScheduler is disposed

        ```
    """
