r"""Asynchronous retry executor for arbitrary operations.

This module provides the RetryExecutor class that runs a caller-supplied
zero-argument async operation with bounded retries and exponential
backoff, and exposes the progress of the current series as an observable
``RetryState``.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import asyncio
import inspect
import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from aresponsive.callbacks import (
    AttemptInfo,
    FailureInfo,
    RetryInfo,
    SuccessInfo,
    invoke_callback,
)
from aresponsive.core.config import RetryConfig
from aresponsive.exceptions import RetryExhaustedError
from aresponsive.retry.state import RetryState
from aresponsive.retry.strategy import RetryStrategy
from aresponsive.utils.listeners import ListenerRegistry

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)

R = TypeVar("R")


class RetryExecutor:
    """Executes async operations with automatic retry logic.

    The executor attempts the operation up to ``config.max_attempts``
    times. Between two attempts it sleeps
    ``min(initial_delay * backoff_multiplier ** (attempt - 1), max_delay)``
    seconds with ``asyncio.sleep``, letting other tasks run meanwhile.

    Only exceptions matching ``config.retry_on`` are retried. Any other
    exception, including ``asyncio.CancelledError``, propagates at once.

    The executor keeps the state of the latest series in ``state``. It is
    meant to drive one series at a time; concurrent ``execute`` calls on
    the same executor each keep their own attempt counter but share the
    observable state.

    Args:
        config: Retry configuration. Defaults to ``RetryConfig()``.
        on_attempt: Optional callback called before each attempt.
        on_retry: Optional callback called before each backoff sleep.
        on_success: Optional callback called when an attempt succeeds.
        on_failure: Optional callback called when all attempts failed.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresponsive import RetryConfig, RetryExecutor
        >>> calls = []
        >>> async def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 2:
        ...         raise ConnectionError("offline")
        ...     return "page-2"
        ...
        >>> executor = RetryExecutor(RetryConfig(initial_delay=0.01))
        >>> asyncio.run(executor.execute(flaky))
        'page-2'
        >>> len(calls)
        2
        >>> executor.state.attempt
        0

        ```
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        *,
        on_attempt: Callable[[AttemptInfo], None] | None = None,
        on_retry: Callable[[RetryInfo], None] | None = None,
        on_success: Callable[[SuccessInfo], None] | None = None,
        on_failure: Callable[[FailureInfo], None] | None = None,
    ) -> None:
        self.config = config if config is not None else RetryConfig()
        self.strategy = RetryStrategy(self.config)
        self.on_attempt = on_attempt
        self.on_retry = on_retry
        self.on_success = on_success
        self.on_failure = on_failure

        self._state = RetryState.idle()
        self._listeners: ListenerRegistry[RetryState] = ListenerRegistry("retry")

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self.config}, state={self._state})"

    @property
    def state(self) -> RetryState:
        """The state of the current (or latest) series of attempts."""
        return self._state

    @property
    def is_retrying(self) -> bool:
        return self._state.is_retrying

    @property
    def attempt(self) -> int:
        return self._state.attempt

    @property
    def last_error(self) -> BaseException | None:
        return self._state.last_error

    @property
    def can_retry(self) -> bool:
        return self._state.can_retry

    def add_listener(self, listener: Callable[[RetryState], None]) -> Callable[[], None]:
        """Register a listener called with each new ``RetryState``.

        Args:
            listener: The callable to register.

        Returns:
            A function that unregisters the listener.
        """
        return self._listeners.add(listener)

    def reset(self) -> None:
        """Clear the observable state for the next independent series."""
        self._set_state(RetryState.idle())

    def _set_state(self, state: RetryState) -> None:
        if state != self._state:
            self._state = state
            self._listeners.notify(state)

    async def execute(self, operation: Callable[[], Awaitable[R]]) -> R:
        """Execute the operation with automatic retry logic.

        Args:
            operation: Zero-argument callable returning an awaitable. A
                plain return value is accepted too and returned as is.

        Returns:
            The result of the first successful attempt.

        Raises:
            RetryExhaustedError: If every attempt failed. The exception is
                chained to the error raised by the final attempt.
            Exception: Any exception not matching ``config.retry_on``,
                unchanged.

        Example:
            ```pycon
            >>> import asyncio
            >>> from aresponsive import RetryConfig, RetryExecutor, RetryExhaustedError
            >>> async def broken():
            ...     raise TimeoutError("too slow")
            ...
            >>> executor = RetryExecutor(RetryConfig(max_attempts=2, initial_delay=0.01))
            >>> try:
            ...     asyncio.run(executor.execute(broken))
            ... except RetryExhaustedError as exc:
            ...     print(exc.attempts, repr(exc.last_error))
            ...
            2 TimeoutError('too slow')

            ```
        """
        max_attempts = self.config.max_attempts
        start_time = time.monotonic()
        last_error: BaseException | None = None

        for attempt in range(1, max_attempts + 1):
            self._set_state(
                RetryState(
                    is_retrying=attempt > 1,
                    attempt=attempt,
                    last_error=None,
                    can_retry=attempt < max_attempts,
                )
            )
            invoke_callback(self.on_attempt, AttemptInfo(attempt=attempt, max_attempts=max_attempts))
            logger.debug(f"Retry attempt {attempt}/{max_attempts}")

            try:
                result = operation()
                if inspect.isawaitable(result):
                    result = await result
            except self.config.retry_on as exc:
                last_error = exc
                logger.warning(f"Retry attempt {attempt}/{max_attempts} failed: {exc!r}")
            except Exception as exc:
                logger.debug(f"Not retrying {type(exc).__name__} (not in retry_on)")
                self._set_state(
                    RetryState(attempt=attempt, last_error=exc, can_retry=False)
                )
                raise
            else:
                if attempt > 1:
                    logger.info(f"Retry successful on attempt {attempt}")
                self._set_state(RetryState.idle())
                invoke_callback(
                    self.on_success,
                    SuccessInfo(
                        attempt=attempt,
                        max_attempts=max_attempts,
                        result=result,
                        total_time=time.monotonic() - start_time,
                    ),
                )
                return result

            if attempt < max_attempts:
                sleep_time = self.strategy.calculate_delay(attempt)
                self._set_state(
                    RetryState(
                        is_retrying=attempt > 1,
                        attempt=attempt,
                        last_error=last_error,
                        can_retry=True,
                        next_delay=sleep_time,
                    )
                )
                invoke_callback(
                    self.on_retry,
                    RetryInfo(
                        attempt=attempt,
                        max_attempts=max_attempts,
                        wait_time=sleep_time,
                        error=last_error,
                    ),
                )
                logger.debug(f"Waiting {sleep_time:.2f}s before attempt {attempt + 1}")
                await asyncio.sleep(sleep_time)

        # All attempts exhausted
        self._set_state(
            RetryState(
                is_retrying=False,
                attempt=max_attempts,
                last_error=last_error,
                can_retry=False,
            )
        )
        logger.error(f"All {max_attempts} retry attempts failed")
        invoke_callback(
            self.on_failure,
            FailureInfo(
                attempt=max_attempts,
                max_attempts=max_attempts,
                error=last_error,
                total_time=time.monotonic() - start_time,
            ),
        )
        raise RetryExhaustedError(attempts=max_attempts, last_error=last_error) from last_error

    def wrap(self, operation: Callable[[], Awaitable[R]]) -> Callable[[], Awaitable[R]]:
        """Return a zero-argument coroutine function running ``operation``
        through this executor.

        Args:
            operation: The operation to protect.

        Returns:
            A coroutine function suitable wherever an operation is expected,
            for example as ``load_more`` or ``on_refresh``.
        """

        async def wrapped() -> Any:
            return await self.execute(operation)

        return wrapped
