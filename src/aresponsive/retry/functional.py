r"""Functional entry points to the retry executor.

These helpers build a throwaway ``RetryExecutor`` for one series of
attempts, so the retry state never outlives the call.
"""

from __future__ import annotations

__all__ = ["execute_with_retry", "exponential_backoff_retry", "simple_retry"]

from typing import TYPE_CHECKING, Any, TypeVar

from aresponsive.core.config import RetryConfig
from aresponsive.retry.executor import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

R = TypeVar("R")


async def execute_with_retry(
    operation: Callable[[], Awaitable[R]],
    config: RetryConfig | None = None,
    **overrides: Any,
) -> R:
    """Run ``operation`` with bounded retries and exponential backoff.

    Args:
        operation: Zero-argument callable returning an awaitable.
        config: Base retry configuration. Defaults to ``RetryConfig()``.
        **overrides: Configuration fields overriding ``config``
            (``max_attempts``, ``initial_delay``, ``backoff_multiplier``,
            ``max_delay``, ``jitter_factor``...). None values are ignored.

    Returns:
        The result of the first successful attempt.

    Raises:
        RetryExhaustedError: If every attempt failed.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresponsive import execute_with_retry
        >>> async def fetch():
        ...     return ["article-1", "article-2"]
        ...
        >>> asyncio.run(execute_with_retry(fetch, max_attempts=3))
        ['article-1', 'article-2']

        ```
    """
    config = (config if config is not None else RetryConfig()).merge(**overrides)
    return await RetryExecutor(config).execute(operation)


async def simple_retry(
    operation: Callable[[], Awaitable[R]],
    max_attempts: int = 3,
    delay: float = 1.0,
) -> R:
    """Retry ``operation`` at a fixed interval.

    Args:
        operation: Zero-argument callable returning an awaitable.
        max_attempts: Total number of attempts.
        delay: Wait in seconds between two attempts.

    Returns:
        The result of the first successful attempt.
    """
    return await execute_with_retry(
        operation,
        RetryConfig(max_attempts=max_attempts, initial_delay=delay, backoff_multiplier=1.0),
    )


async def exponential_backoff_retry(
    operation: Callable[[], Awaitable[R]],
    max_attempts: int = 5,
    initial_delay: float = 1.0,
    max_delay: float = 30.0,
) -> R:
    """Retry ``operation`` with delays doubling after each failure.

    Args:
        operation: Zero-argument callable returning an awaitable.
        max_attempts: Total number of attempts.
        initial_delay: Wait in seconds after the first failure.
        max_delay: Maximum wait in seconds between two attempts.

    Returns:
        The result of the first successful attempt.
    """
    return await execute_with_retry(
        operation,
        RetryConfig(
            max_attempts=max_attempts,
            initial_delay=initial_delay,
            backoff_multiplier=2.0,
            max_delay=max_delay,
        ),
    )
