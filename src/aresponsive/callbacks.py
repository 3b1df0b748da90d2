r"""Callback types and data structures for retry observability.

This module provides callback support for the retry executor, enabling
users to hook into the retry lifecycle for logging, metrics or UI
feedback.

The callback system provides four lifecycle hooks:
- on_attempt: Called before each attempt
- on_retry: Called before each backoff sleep
- on_success: Called when an attempt succeeds
- on_failure: Called when all attempts are exhausted

Example:
    ```pycon
    >>> from aresponsive import RetryExecutor
    >>> from aresponsive.callbacks import RetryInfo
    >>> def log_retry(retry_info: RetryInfo):
    ...     print(f"Retry {retry_info.attempt + 1}/{retry_info.max_attempts}")
    ...
    >>> executor = RetryExecutor(on_retry=log_retry)

    ```
"""

from __future__ import annotations

__all__ = [
    "AttemptInfo",
    "FailureInfo",
    "RetryInfo",
    "SuccessInfo",
    "invoke_callback",
]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class AttemptInfo:
    """Information passed to on_attempt callback.

    Attributes:
        attempt: The current attempt number (1-indexed). First attempt is 1.
        max_attempts: Total number of attempts configured.
    """

    attempt: int
    max_attempts: int


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        attempt: The number of the attempt that just failed (1-indexed).
        max_attempts: Total number of attempts configured.
        wait_time: The sleep time in seconds before the next attempt.
        error: The exception that triggered the retry.
    """

    attempt: int
    max_attempts: int
    wait_time: float
    error: BaseException


@dataclass
class SuccessInfo:
    """Information passed to on_success callback.

    Attributes:
        attempt: The attempt number that succeeded (1-indexed).
        max_attempts: Total number of attempts configured.
        result: The value returned by the operation.
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    attempt: int
    max_attempts: int
    result: Any
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        attempt: The final attempt number (1-indexed).
        max_attempts: Total number of attempts configured.
        error: The exception raised by the final attempt.
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    attempt: int
    max_attempts: int
    error: BaseException
    total_time: float


def invoke_callback(callback: Callable[[Any], None] | None, info: Any) -> None:
    """Invoke a lifecycle callback if provided.

    Errors raised by the callback are logged and do not interrupt the
    caller.

    Args:
        callback: Optional callback to invoke.
        info: The info object passed to the callback.

    Example:
        ```pycon
        >>> from aresponsive.callbacks import AttemptInfo, invoke_callback
        >>> invoke_callback(print, AttemptInfo(attempt=1, max_attempts=3))
        AttemptInfo(attempt=1, max_attempts=3)
        >>> invoke_callback(None, AttemptInfo(attempt=1, max_attempts=3))

        ```
    """
    if callback is None:
        return
    try:
        callback(info)
    except Exception as e:  # noqa: BLE001
        logger.warning(f"Error in {type(info).__name__} callback: {e}")
