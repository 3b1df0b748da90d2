r"""Infinite scroll controller.

This module provides the ``InfiniteScrollController`` state machine which
turns sentinel intersection signals into calls to a caller-supplied
``load_more`` operation. It has five phases:

- IDLE: Observation disabled
- OBSERVING: Waiting for the sentinel to approach the viewport
- LOADING: A page is being loaded; further triggers are rejected
- ERROR: The last load failed; only an explicit retry loads again
- EXHAUSTED: No more content
"""

from __future__ import annotations

__all__ = ["InfiniteScrollController"]

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

from aresponsive.core.config import InfiniteScrollConfig
from aresponsive.outcome import Outcome
from aresponsive.retry.executor import RetryExecutor
from aresponsive.scroll.observer import BaseViewportObserver, ProximityObserver
from aresponsive.scroll.state import (
    Intersection,
    ScrollEvent,
    ScrollPhase,
    ScrollSnapshot,
    SetEnabled,
    SetHasMore,
    SetLoading,
)
from aresponsive.utils.listeners import ListenerRegistry
from aresponsive.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aresponsive.core.config import RetryConfig

logger: logging.Logger = logging.getLogger(__name__)


class InfiniteScrollController:
    r"""Load the next page when a sentinel approaches the viewport.

    Intersection signals received while OBSERVING (with more content,
    enabled and no caller-side load running) start a debounce timer of
    ``config.debounce`` seconds; rapid signals restart it. When it fires,
    the controller moves to LOADING and runs ``load_more`` in a task it
    owns. ``load_more`` is never running twice at the same time: the
    LOADING phase itself rejects every other trigger.

    The controller remembers the last intersection state, including
    signals received while a load runs. When the controller returns to
    OBSERVING (after a load, ``SetHasMore(True)``, ``SetLoading(False)``,
    re-enabling or ``reset``) while the sentinel is still in view, the
    debounce timer restarts, so a page too short to push the sentinel out
    of the viewport keeps loading.

    ``load_more`` may return a ``bool`` to report whether more content is
    available; any other return value keeps the ``has_more`` flag managed
    through ``SetHasMore``.

    Disposal cancels the debounce timer and disconnects the observer. A
    load already running is not cancelled; its result is discarded.

    Args:
        load_more: Zero-argument callable returning an awaitable.
        has_more: Whether more content is available at construction.
        config: Controller configuration. Defaults to
            ``InfiniteScrollConfig()``.
        retry_config: When provided, every load runs through a
            ``RetryExecutor`` with this configuration.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresponsive import InfiniteScrollConfig, InfiniteScrollController
        >>> from aresponsive.scroll import Intersection
        >>> pages = []
        >>> async def load_more():
        ...     pages.append(len(pages) + 1)
        ...     return len(pages) < 2
        ...
        >>> async def main():
        ...     controller = InfiniteScrollController(
        ...         load_more, config=InfiniteScrollConfig(debounce=0.01)
        ...     )
        ...     for _ in range(3):
        ...         controller.dispatch(Intersection())
        ...         await asyncio.sleep(0.05)
        ...     return controller.snapshot.phase
        ...
        >>> asyncio.run(main())
        <ScrollPhase.EXHAUSTED: 'exhausted'>
        >>> pages
        [1, 2]

        ```
    """

    def __init__(
        self,
        load_more: Callable[[], Awaitable[Any]],
        *,
        has_more: bool = True,
        config: InfiniteScrollConfig | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        self.config = config if config is not None else InfiniteScrollConfig()
        self._load_more = load_more
        self._retry_executor = RetryExecutor(retry_config) if retry_config is not None else None

        self._has_more = has_more
        self._enabled = self.config.enabled
        self._external_loading = False
        self._error: BaseException | None = None
        self._sentinel_visible = False
        if not self._enabled:
            self._phase = ScrollPhase.IDLE
        else:
            self._phase = ScrollPhase.OBSERVING if has_more else ScrollPhase.EXHAUSTED

        self._debounce_timer: asyncio.TimerHandle | None = None
        self._load_task: asyncio.Task[Outcome] | None = None
        self._observer: BaseViewportObserver | None = None
        self._disposed = False
        self._listeners: ListenerRegistry[ScrollSnapshot] = ListenerRegistry("infinite scroll")

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(phase={self._phase.value}, has_more={self._has_more})"

    @property
    def snapshot(self) -> ScrollSnapshot:
        """The current state as an immutable snapshot."""
        return ScrollSnapshot(
            phase=self._phase,
            has_more=self._has_more,
            is_loading=self._phase == ScrollPhase.LOADING or self._external_loading,
            enabled=self._enabled,
            error=self._error,
        )

    @property
    def phase(self) -> ScrollPhase:
        return self._phase

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def retry_executor(self) -> RetryExecutor | None:
        """The executor wrapping each load, if a retry config was given."""
        return self._retry_executor

    def add_listener(self, listener: Callable[[ScrollSnapshot], None]) -> Callable[[], None]:
        """Register a listener called with the snapshot after each
        change.

        Returns:
            A function that unregisters the listener.
        """
        return self._listeners.add(listener)

    def attach(self, observer: BaseViewportObserver | None = None) -> BaseViewportObserver:
        """Connect a viewport observer to the controller.

        Args:
            observer: The observer to listen to. Defaults to a new
                ``ProximityObserver`` with ``config.threshold_px`` as root
                margin.

        Returns:
            The connected observer.
        """
        if self._observer is not None:
            self._observer.disconnect()
        if observer is None:
            observer = ProximityObserver(self.config.threshold_px)
        self._sentinel_visible = False
        observer.connect(self.dispatch)
        self._observer = observer
        return observer

    def dispatch(self, event: ScrollEvent) -> ScrollSnapshot:
        """Apply an event and return the resulting snapshot.

        Args:
            event: ``Intersection``, ``SetHasMore``, ``SetLoading`` or
                ``SetEnabled``.

        Returns:
            The snapshot after the event was applied.
        """
        if self._disposed:
            logger.debug(f"Ignoring {event} on a disposed controller")
            return self.snapshot

        if isinstance(event, Intersection):
            self._on_intersection(event)
        elif isinstance(event, SetHasMore):
            self._on_has_more(event.has_more)
        elif isinstance(event, SetLoading):
            if event.is_loading != self._external_loading:
                self._external_loading = event.is_loading
                self._listeners.notify(self.snapshot)
                if not event.is_loading:
                    self._resume_if_visible()
        elif isinstance(event, SetEnabled):
            self._on_enabled(event.enabled)
        else:
            msg = f"Unsupported event: {event!r}"
            raise TypeError(msg)
        return self.snapshot

    async def load_more(self) -> Outcome:
        """Load the next page now, bypassing the debounce window.

        Returns:
            ``Outcome.REJECTED`` if a guard blocked the load (already
            loading, exhausted, disabled, disposed or in the ERROR phase),
            otherwise ``COMPLETED`` or ``FAILED``.
        """
        reason = self._guard()
        if reason is not None:
            logger.debug(f"Load rejected: {reason}")
            return Outcome.REJECTED
        return await asyncio.shield(self._start_load())

    async def retry(self) -> Outcome:
        """Clear the error and load again.

        Returns:
            The outcome of the new load, or ``Outcome.REJECTED`` if a guard
            other than the error blocked it. A rejected retry keeps the
            error and the ERROR phase.
        """
        reason = self._guard(allow_error=True)
        if reason is not None:
            logger.debug(f"Retry rejected: {reason}")
            return Outcome.REJECTED
        return await asyncio.shield(self._start_load())

    def reset(self) -> None:
        """Clear the error and the pending debounce timer.

        A load already running is left alone. If the sentinel is still in
        view once the controller is OBSERVING again, a fresh debounce
        timer starts.
        """
        self._cancel_debounce()
        self._error = None
        if self._phase == ScrollPhase.ERROR:
            self._set_phase(self._resting_phase())
        else:
            self._listeners.notify(self.snapshot)
        self._resume_if_visible()

    async def wait_loaded(self) -> Outcome | None:
        """Wait for the load running now, if any.

        Returns:
            The outcome of that load, or None when nothing is loading.
        """
        if self._load_task is None:
            return None
        return await asyncio.shield(self._load_task)

    def dispose(self) -> None:
        """Cancel the debounce timer and disconnect the observer.

        A load already running keeps running; its result is discarded.
        Calling ``dispose`` more than once is a no-op.
        """
        if self._disposed:
            return
        self._disposed = True
        self._cancel_debounce()
        if self._observer is not None:
            self._observer.disconnect()
            self._observer = None
        self._listeners.clear()
        logger.debug("Infinite scroll controller disposed")

    def _guard(self, allow_error: bool = False) -> str | None:
        if self._disposed:
            return "disposed"
        if not self._enabled:
            return "disabled"
        if self._phase == ScrollPhase.LOADING:
            return "already loading"
        if self._external_loading:
            return "caller is loading"
        if not self._has_more:
            return "no more content"
        if self._phase == ScrollPhase.ERROR and not allow_error:
            return "last load failed, waiting for retry"
        return None

    def _on_intersection(self, event: Intersection) -> None:
        self._sentinel_visible = event.is_intersecting
        if not event.is_intersecting:
            return
        reason = self._guard()
        if reason is not None:
            logger.debug(f"Intersection ignored: {reason}")
            return
        self._schedule_load()

    def _resume_if_visible(self) -> None:
        if not self._sentinel_visible or self._phase != ScrollPhase.OBSERVING:
            return
        if self._guard() is not None:
            return
        logger.debug("Sentinel still in view, scheduling the next load")
        self._schedule_load()

    def _schedule_load(self) -> None:
        self._cancel_debounce()
        loop = asyncio.get_running_loop()
        self._debounce_timer = loop.call_later(self.config.debounce, self._on_debounce_timer)

    def _on_debounce_timer(self) -> None:
        self._debounce_timer = None
        reason = self._guard()
        if reason is not None:
            logger.debug(f"Debounced load skipped: {reason}")
            return
        self._start_load()

    def _on_has_more(self, has_more: bool) -> None:
        if has_more == self._has_more:
            return
        self._has_more = has_more
        if not has_more:
            self._cancel_debounce()
            if self._phase == ScrollPhase.OBSERVING:
                self._set_phase(ScrollPhase.EXHAUSTED)
                return
        elif self._phase == ScrollPhase.EXHAUSTED:
            self._set_phase(ScrollPhase.OBSERVING)
            self._resume_if_visible()
            return
        self._listeners.notify(self.snapshot)

    def _on_enabled(self, enabled: bool) -> None:
        if enabled == self._enabled:
            return
        self._enabled = enabled
        if not enabled:
            self._cancel_debounce()
            if self._phase != ScrollPhase.LOADING:
                self._set_phase(ScrollPhase.IDLE)
                return
        elif self._phase != ScrollPhase.LOADING:
            self._error = None
            self._set_phase(self._resting_phase())
            self._resume_if_visible()
            return
        self._listeners.notify(self.snapshot)

    def _resting_phase(self) -> ScrollPhase:
        if not self._enabled:
            return ScrollPhase.IDLE
        return ScrollPhase.OBSERVING if self._has_more else ScrollPhase.EXHAUSTED

    def _start_load(self) -> asyncio.Task[Outcome]:
        self._cancel_debounce()
        self._error = None
        self._set_phase(ScrollPhase.LOADING)
        self._load_task = asyncio.ensure_future(self._run_load())
        return self._load_task

    async def _run_load(self) -> Outcome:
        try:
            if self._retry_executor is not None:
                result = await self._retry_executor.execute(self._load_more)
            else:
                result = self._load_more()
                if inspect.isawaitable(result):
                    result = await result
        except Exception as exc:
            if self._disposed:
                logger.debug(f"Discarding load failure after disposal: {exc!r}")
                return Outcome.FAILED
            logger.warning(f"Loading the next page failed: {exc!r}")
            self._error = exc
            self._set_phase(ScrollPhase.ERROR if self._enabled else ScrollPhase.IDLE)
            return Outcome.FAILED
        except asyncio.CancelledError:
            if not self._disposed:
                self._set_phase(self._resting_phase())
            raise
        finally:
            self._load_task = None

        if self._disposed:
            logger.debug("Discarding load result after disposal")
            return Outcome.COMPLETED
        if isinstance(result, bool):
            self._has_more = result
        self._set_phase(self._resting_phase())
        self._resume_if_visible()
        return Outcome.COMPLETED

    def _cancel_debounce(self) -> None:
        if self._debounce_timer is not None:
            self._debounce_timer.cancel()
            self._debounce_timer = None

    def _set_phase(self, phase: ScrollPhase) -> None:
        old_phase = self._phase
        self._phase = phase
        if old_phase != phase:
            log_structured(
                logger,
                logging.DEBUG,
                f"Infinite scroll phase changed: {old_phase.value} -> {phase.value}",
                component="infinite_scroll",
                old_phase=old_phase.value,
                new_phase=phase.value,
            )
        self._listeners.notify(self.snapshot)
