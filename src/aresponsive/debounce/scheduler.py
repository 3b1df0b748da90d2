r"""Debounced value scheduler.

This module provides the ``DebounceScheduler`` class which collapses a
rapid stream of value updates (keystrokes, slider moves) into a single
delayed emission carrying the latest value.
"""

from __future__ import annotations

__all__ = ["DebounceScheduler"]

import asyncio
import logging
import math
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from aresponsive.core.config import DebounceConfig
from aresponsive.exceptions import DisposedError
from aresponsive.utils.listeners import ListenerRegistry

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class DebounceScheduler(Generic[T]):
    r"""Debounce a stream of values.

    Each call to ``set_value`` records the value, cancels the outstanding
    timer and starts a new one of ``config.delay`` seconds. When the timer
    fires uninterrupted, ``debounced_value`` becomes the latest value and
    the emit listeners are called exactly once.

    - ``leading=True`` emits at once when the last emission is older than
      ``delay``, without starting a timer.
    - ``trailing=False`` lets the timer close the burst without emitting.
    - ``max_wait`` bounds the time between the first update of a burst and
      its emission while updates keep arriving.

    A zero delay still goes through the event loop: the emission happens
    on the next loop iteration, never synchronously inside ``set_value``.

    The scheduler must be used from a running event loop. It owns its
    timers; ``dispose`` (or leaving a ``with`` block) cancels them.

    Args:
        initial_value: The value of both ``value`` and
            ``debounced_value`` before the first update.
        config: Debounce configuration. Defaults to ``DebounceConfig()``.
        on_emit: Optional listener called with each emitted value.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresponsive import DebounceConfig, DebounceScheduler
        >>> async def main():
        ...     scheduler = DebounceScheduler("", DebounceConfig(delay=0.05), on_emit=print)
        ...     scheduler.set_value("a")
        ...     scheduler.set_value("ab")
        ...     await asyncio.sleep(0.1)
        ...     return scheduler.debounced_value
        ...
        >>> asyncio.run(main())
        ab
        'ab'

        ```
    """

    def __init__(
        self,
        initial_value: T,
        config: DebounceConfig | None = None,
        *,
        on_emit: Callable[[T], None] | None = None,
    ) -> None:
        self.config = config if config is not None else DebounceConfig()

        self._value: T = initial_value
        self._debounced_value: T = initial_value
        self._pending = False
        self._disposed = False
        self._last_emitted_at = -math.inf
        self._timer: asyncio.TimerHandle | None = None
        self._max_wait_timer: asyncio.TimerHandle | None = None
        self._listeners: ListenerRegistry[T] = ListenerRegistry("debounce")
        if on_emit is not None:
            self._listeners.add(on_emit)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(value={self._value!r}, "
            f"debounced_value={self._debounced_value!r}, pending={self._pending})"
        )

    def __enter__(self) -> DebounceScheduler[T]:
        return self

    def __exit__(self, *args: Any) -> None:
        self.dispose()

    @property
    def value(self) -> T:
        """The latest value passed to ``set_value``."""
        return self._value

    @property
    def debounced_value(self) -> T:
        """The latest emitted value."""
        return self._debounced_value

    @property
    def is_pending(self) -> bool:
        """True while an emission is scheduled."""
        return self._pending

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def add_listener(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Register a listener called with each emitted value.

        Returns:
            A function that unregisters the listener.
        """
        return self._listeners.add(listener)

    def set_value(self, value: T) -> None:
        """Record a new value and (re)start the debounce window.

        Args:
            value: The new value.

        Raises:
            DisposedError: If the scheduler was disposed.
            RuntimeError: If no event loop is running.
        """
        if self._disposed:
            msg = f"{self.__class__.__qualname__} is disposed"
            raise DisposedError(msg)
        loop = asyncio.get_running_loop()
        self._value = value
        since_last_emit = loop.time() - self._last_emitted_at

        if self.config.leading and since_last_emit >= self.config.delay:
            self._clear_timers()
            self._emit(value)
            return

        self._pending = True
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self.config.delay, self._on_timer)

        if self.config.max_wait is not None and self._max_wait_timer is None:
            self._max_wait_timer = loop.call_later(self.config.max_wait, self._on_max_wait)

    def flush(self) -> None:
        """Cancel the pending timers and emit the current value now."""
        if self._disposed:
            return
        self._clear_timers()
        self._emit(self._value)

    def cancel(self) -> None:
        """Discard the pending emission without side effects."""
        self._clear_timers()
        self._pending = False

    def dispose(self) -> None:
        """Cancel the timers and drop the listeners.

        Calling ``dispose`` more than once is a no-op.
        """
        if self._disposed:
            return
        self.cancel()
        self._listeners.clear()
        self._disposed = True
        logger.debug("Debounce scheduler disposed")

    def _on_timer(self) -> None:
        self._timer = None
        if self._max_wait_timer is not None:
            self._max_wait_timer.cancel()
            self._max_wait_timer = None
        self._close_burst()

    def _on_max_wait(self) -> None:
        self._max_wait_timer = None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        logger.debug(f"max_wait of {self.config.max_wait}s reached")
        self._close_burst()

    def _close_burst(self) -> None:
        if self.config.trailing:
            self._emit(self._value)
        else:
            self._pending = False

    def _clear_timers(self) -> None:
        for timer in (self._timer, self._max_wait_timer):
            if timer is not None:
                timer.cancel()
        self._timer = None
        self._max_wait_timer = None

    def _emit(self, value: T) -> None:
        self._debounced_value = value
        self._pending = False
        self._last_emitted_at = asyncio.get_running_loop().time()
        logger.debug(f"Emitting debounced value {value!r}")
        self._listeners.notify(value)
