r"""Debounced and throttled callbacks.

This module provides callable wrappers that delay or rate-limit the
invocation of a function. Both wrappers remember the arguments of the
latest call and use them for the scheduled invocation. Coroutine
functions are supported: their invocation is scheduled as a task on the
running loop.
"""

from __future__ import annotations

__all__ = [
    "DebouncedCallback",
    "ThrottledCallback",
    "debounce_callback",
    "throttle_callback",
]

import asyncio
import functools
import inspect
import logging
import math
from typing import TYPE_CHECKING, Any

from aresponsive.core.config import DEFAULT_DEBOUNCE_DELAY
from aresponsive.core.validation import validate_debounce_params
from aresponsive.exceptions import DisposedError

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class _ScheduledCallback:
    """Owns the single pending timer of a delayed callback."""

    def __init__(self, func: Callable[..., Any], delay: float) -> None:
        validate_debounce_params(delay=delay)
        functools.update_wrapper(self, func)
        self.func = func
        self.delay = delay

        self._args: tuple[Any, ...] = ()
        self._kwargs: dict[str, Any] = {}
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()
        self._disposed = False

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(func={self.func!r}, delay={self.delay})"

    @property
    def is_pending(self) -> bool:
        """True while an invocation is scheduled."""
        return self._timer is not None

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def cancel(self) -> None:
        """Discard the scheduled invocation, if any."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def flush(self) -> None:
        """Invoke the function now with the arguments of the latest call.

        Does nothing if no invocation is scheduled, including after the
        scheduled invocation already ran.
        """
        if self._timer is None:
            return
        self.cancel()
        self._invoke()

    def dispose(self) -> None:
        """Cancel the scheduled invocation; later calls raise
        ``DisposedError``.

        Tasks already running are not cancelled.
        """
        self.cancel()
        self._disposed = True

    def _check_disposed(self) -> None:
        if self._disposed:
            msg = f"{self.__class__.__qualname__} for {self.func!r} is disposed"
            raise DisposedError(msg)

    def _record(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self._args = args
        self._kwargs = kwargs

    def _schedule(self, delay: float) -> None:
        self.cancel()
        self._timer = asyncio.get_running_loop().call_later(delay, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        self._invoke()

    def _invoke(self) -> None:
        try:
            result = self.func(*self._args, **self._kwargs)
        except Exception:
            logger.exception(f"Error in scheduled call to {self.func!r}")
            return
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                f"Error in scheduled call to {self.func!r}", exc_info=task.exception()
            )


class DebouncedCallback(_ScheduledCallback):
    """Debounced wrapper around a function.

    Every call records its arguments, cancels the outstanding timer and
    starts a new one. The function runs once, with the arguments of the
    last call, after ``delay`` seconds without calls.

    ``flush`` runs the pending invocation at once and does nothing when no
    invocation is pending, since there are no arguments to call the
    function with. This differs from ``DebounceScheduler.flush``, which
    always emits the current value, pending or not.

    Args:
        func: The function (or coroutine function) to debounce.
        delay: Quiet window in seconds.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresponsive import debounce_callback
        >>> async def main():
        ...     search = debounce_callback(print, 0.05)
        ...     search("a")
        ...     search("ab")
        ...     await asyncio.sleep(0.1)
        ...
        >>> asyncio.run(main())
        ab

        ```
    """

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self._check_disposed()
        self._record(args, kwargs)
        self._schedule(self.delay)


class ThrottledCallback(_ScheduledCallback):
    """Throttled wrapper around a function.

    A call runs the function at once if the previous invocation is at
    least ``delay`` seconds old. Otherwise the invocation is scheduled for
    the remaining time, with the arguments of the latest call. This bounds
    the latency of each call to ``delay``.

    Args:
        func: The function (or coroutine function) to throttle.
        delay: Minimum interval in seconds between two invocations.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresponsive import throttle_callback
        >>> async def main():
        ...     on_scroll = throttle_callback(print, 0.05)
        ...     on_scroll(10)  # runs at once
        ...     on_scroll(20)  # scheduled
        ...     on_scroll(30)  # replaces the scheduled call
        ...     await asyncio.sleep(0.1)
        ...
        >>> asyncio.run(main())
        10
        30

        ```
    """

    def __init__(self, func: Callable[..., Any], delay: float) -> None:
        super().__init__(func, delay)
        self._last_invoked_at = -math.inf

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self._check_disposed()
        self._record(args, kwargs)
        elapsed = asyncio.get_running_loop().time() - self._last_invoked_at
        if elapsed >= self.delay:
            self.cancel()
            self._invoke()
        else:
            self._schedule(self.delay - elapsed)

    def _invoke(self) -> None:
        self._last_invoked_at = asyncio.get_running_loop().time()
        super()._invoke()


def debounce_callback(
    func: Callable[..., Any], delay: float = DEFAULT_DEBOUNCE_DELAY
) -> DebouncedCallback:
    """Return a debounced wrapper around ``func``.

    Args:
        func: The function (or coroutine function) to debounce.
        delay: Quiet window in seconds.

    Returns:
        The debounced wrapper.
    """
    return DebouncedCallback(func, delay)


def throttle_callback(
    func: Callable[..., Any], delay: float = DEFAULT_DEBOUNCE_DELAY
) -> ThrottledCallback:
    """Return a throttled wrapper around ``func``.

    Args:
        func: The function (or coroutine function) to throttle.
        delay: Minimum interval in seconds between two invocations.

    Returns:
        The throttled wrapper.
    """
    return ThrottledCallback(func, delay)
