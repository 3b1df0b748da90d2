r"""Pull-to-refresh gesture state machine.

This module provides the ``PullToRefreshMachine`` class which interprets
a touch stream on a scrollable surface as a pull gesture and runs a
caller-supplied refresh operation when the pull is released past a
threshold. It has three phases:

- IDLE: No gesture in progress
- PULLING: The user drags down from the top of the surface
- REFRESHING: The refresh operation runs; new gestures are ignored
"""

from __future__ import annotations

__all__ = ["PullToRefreshMachine", "simple_pull_to_refresh"]

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

from aresponsive.core.config import PullToRefreshConfig
from aresponsive.gesture.state import GesturePhase, GestureSnapshot, TouchEvent, TouchType
from aresponsive.outcome import Outcome
from aresponsive.retry.executor import RetryExecutor
from aresponsive.utils.listeners import ListenerRegistry
from aresponsive.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aresponsive.core.config import RetryConfig
    from aresponsive.gesture.surface import BaseTouchSurface

logger: logging.Logger = logging.getLogger(__name__)

# The pull distance never exceeds threshold * MAX_PULL_RATIO
MAX_PULL_RATIO = 1.5


class PullToRefreshMachine:
    r"""Interpret touch events as a pull-to-refresh gesture.

    Transitions:

    - IDLE -> PULLING: touch start while the surface scroll offset is 0.
    - PULLING (touch move): ``pull_distance = max(0, (y - start_y) *
      resistance)`` clamped to ``threshold * 1.5``. While it is positive
      the move event's default action is prevented, so the surface does
      not scroll natively. ``can_refresh`` is ``pull_distance >= threshold``.
    - PULLING -> REFRESHING: touch end with ``can_refresh``; ``on_refresh``
      runs in a task owned by the machine.
    - PULLING -> IDLE: touch end without ``can_refresh``.
    - REFRESHING -> IDLE: the refresh settles. A failure is kept in
      ``snapshot.error`` and does not block the next gesture.

    A touch start while REFRESHING is ignored, so ``on_refresh`` runs at
    most once per pull cycle.

    Args:
        on_refresh: Zero-argument callable returning an awaitable.
        config: Gesture configuration. Defaults to ``PullToRefreshConfig()``.
        retry_config: When provided, every refresh runs through a
            ``RetryExecutor`` with this configuration.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresponsive import PullToRefreshMachine
        >>> from aresponsive.gesture import TouchEvent, TouchType
        >>> async def refresh():
        ...     print("refreshing")
        ...
        >>> async def main():
        ...     machine = PullToRefreshMachine(refresh)
        ...     machine.dispatch(TouchEvent(TouchType.START, y=0.0))
        ...     snapshot = machine.dispatch(TouchEvent(TouchType.MOVE, y=200.0))
        ...     print(snapshot.pull_distance, snapshot.can_refresh)
        ...     machine.dispatch(TouchEvent(TouchType.END))
        ...     return await machine.wait_refreshed()
        ...
        >>> asyncio.run(main())
        100.0 True
        refreshing
        <Outcome.COMPLETED: 'completed'>

        ```
    """

    def __init__(
        self,
        on_refresh: Callable[[], Awaitable[Any]],
        *,
        config: PullToRefreshConfig | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        self.config = config if config is not None else PullToRefreshConfig()
        self._on_refresh = on_refresh
        self._retry_executor = RetryExecutor(retry_config) if retry_config is not None else None

        self._enabled = self.config.enabled
        self._phase = GesturePhase.IDLE
        self._start_y = 0.0
        self._current_y = 0.0
        self._pull_distance = 0.0
        self._can_refresh = False
        self._error: BaseException | None = None

        self._refresh_task: asyncio.Task[Outcome] | None = None
        self._surface: BaseTouchSurface | None = None
        self._disposed = False
        self._listeners: ListenerRegistry[GestureSnapshot] = ListenerRegistry("pull to refresh")

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(phase={self._phase.value}, "
            f"pull_distance={self._pull_distance})"
        )

    @property
    def snapshot(self) -> GestureSnapshot:
        """The current state as an immutable snapshot."""
        return GestureSnapshot(
            phase=self._phase,
            start_y=self._start_y,
            current_y=self._current_y,
            pull_distance=self._pull_distance,
            threshold=self.config.threshold,
            can_refresh=self._can_refresh,
            error=self._error,
        )

    @property
    def phase(self) -> GesturePhase:
        return self._phase

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def retry_executor(self) -> RetryExecutor | None:
        """The executor wrapping each refresh, if a retry config was
        given."""
        return self._retry_executor

    def add_listener(self, listener: Callable[[GestureSnapshot], None]) -> Callable[[], None]:
        """Register a listener called with the snapshot after each change.

        Returns:
            A function that unregisters the listener.
        """
        return self._listeners.add(listener)

    def attach(self, surface: BaseTouchSurface) -> None:
        """Listen to the touch events of ``surface``.

        Attaching to a new surface detaches from the previous one.
        """
        self._detach()
        surface.add_touch_listener(self.dispatch)
        self._surface = surface

    def set_enabled(self, enabled: bool) -> GestureSnapshot:
        """Enable or disable the machine.

        Disabling cancels a pull in progress. A running refresh is not
        affected.
        """
        if self._disposed or enabled == self._enabled:
            return self.snapshot
        self._enabled = enabled
        if not enabled and self._phase == GesturePhase.PULLING:
            self._reset_pull()
            self._set_phase(GesturePhase.IDLE)
        else:
            self._listeners.notify(self.snapshot)
        return self.snapshot

    def dispatch(self, event: TouchEvent) -> GestureSnapshot:
        """Apply a touch event and return the resulting snapshot.

        Args:
            event: The touch event. Its default action is prevented while
                the pull distance is positive.

        Returns:
            The snapshot after the event was applied.
        """
        if self._disposed or not self._enabled:
            return self.snapshot
        if event.type == TouchType.START:
            self._on_touch_start(event)
        elif event.type == TouchType.MOVE:
            self._on_touch_move(event)
        elif event.type == TouchType.END:
            self._on_touch_end()
        else:
            msg = f"Unsupported touch type: {event.type!r}"
            raise TypeError(msg)
        return self.snapshot

    async def refresh(self) -> Outcome:
        """Run the refresh operation now, without a gesture.

        Returns:
            ``Outcome.REJECTED`` if a refresh is already running or the
            machine is disabled or disposed, otherwise ``COMPLETED`` or
            ``FAILED``.
        """
        if self._disposed or not self._enabled or self._phase == GesturePhase.REFRESHING:
            logger.debug(f"Refresh rejected in phase {self._phase.value}")
            return Outcome.REJECTED
        self._reset_pull()
        return await asyncio.shield(self._start_refresh())

    async def wait_refreshed(self) -> Outcome | None:
        """Wait for the refresh running now, if any.

        Returns:
            The outcome of that refresh, or None when nothing is running.
        """
        if self._refresh_task is None:
            return None
        return await asyncio.shield(self._refresh_task)

    def dispose(self) -> None:
        """Detach from the surface and drop the listeners.

        A refresh already running keeps running; its result is discarded.
        Calling ``dispose`` more than once is a no-op.
        """
        if self._disposed:
            return
        self._disposed = True
        self._detach()
        self._listeners.clear()
        logger.debug("Pull-to-refresh machine disposed")

    def _on_touch_start(self, event: TouchEvent) -> None:
        if self._phase == GesturePhase.REFRESHING:
            logger.debug("Touch start ignored while refreshing")
            return
        if self._phase == GesturePhase.PULLING:
            return
        if event.scroll_top != 0:
            return
        self._start_y = event.y
        self._current_y = event.y
        self._pull_distance = 0.0
        self._can_refresh = False
        self._set_phase(GesturePhase.PULLING)

    def _on_touch_move(self, event: TouchEvent) -> None:
        if self._phase != GesturePhase.PULLING:
            return
        self._current_y = event.y
        pull_distance = max(0.0, (event.y - self._start_y) * self.config.resistance)
        self._pull_distance = min(pull_distance, self.config.threshold * MAX_PULL_RATIO)
        self._can_refresh = self._pull_distance >= self.config.threshold
        if self._pull_distance > 0:
            event.prevent_default()
        self._listeners.notify(self.snapshot)

    def _on_touch_end(self) -> None:
        if self._phase != GesturePhase.PULLING:
            return
        can_refresh = self._can_refresh
        self._reset_pull()
        if can_refresh:
            logger.debug("Pull released past the threshold")
            self._start_refresh()
        else:
            self._set_phase(GesturePhase.IDLE)

    def _reset_pull(self) -> None:
        self._pull_distance = 0.0
        self._can_refresh = False

    def _detach(self) -> None:
        if self._surface is not None:
            self._surface.remove_touch_listener(self.dispatch)
            self._surface = None

    def _start_refresh(self) -> asyncio.Task[Outcome]:
        self._error = None
        self._set_phase(GesturePhase.REFRESHING)
        self._refresh_task = asyncio.ensure_future(self._run_refresh())
        return self._refresh_task

    async def _run_refresh(self) -> Outcome:
        outcome = Outcome.FAILED
        try:
            if self._retry_executor is not None:
                await self._retry_executor.execute(self._on_refresh)
            else:
                result = self._on_refresh()
                if inspect.isawaitable(result):
                    await result
        except Exception as exc:
            if self._disposed:
                logger.debug(f"Discarding refresh failure after disposal: {exc!r}")
            else:
                logger.error(f"Pull to refresh failed: {exc!r}")
                self._error = exc
        else:
            outcome = Outcome.COMPLETED
            if not self._disposed:
                logger.info("Pull to refresh completed successfully")
        finally:
            self._refresh_task = None
            if not self._disposed:
                self._set_phase(GesturePhase.IDLE)
        return outcome

    def _set_phase(self, phase: GesturePhase) -> None:
        old_phase = self._phase
        self._phase = phase
        if old_phase != phase:
            log_structured(
                logger,
                logging.DEBUG,
                f"Pull-to-refresh phase changed: {old_phase.value} -> {phase.value}",
                component="pull_to_refresh",
                old_phase=old_phase.value,
                new_phase=phase.value,
            )
        self._listeners.notify(self.snapshot)


def simple_pull_to_refresh(
    on_refresh: Callable[[], Awaitable[Any]], enabled: bool = True
) -> PullToRefreshMachine:
    """Create a machine with a short, light pull (threshold 60,
    resistance 0.6).

    Args:
        on_refresh: Zero-argument callable returning an awaitable.
        enabled: Whether the machine reacts to touch events.

    Returns:
        The configured machine.
    """
    return PullToRefreshMachine(
        on_refresh,
        config=PullToRefreshConfig(threshold=60.0, resistance=0.6, enabled=enabled),
    )
