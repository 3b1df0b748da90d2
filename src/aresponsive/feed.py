r"""Infinite scroll and pull to refresh on one surface.

This module provides ``RefreshableFeed``, which wires an
``InfiniteScrollController`` and a ``PullToRefreshMachine`` to the same
scrollable surface: scrolling near the bottom loads the next page and
pulling down from the top refreshes the feed.
"""

from __future__ import annotations

__all__ = ["FEED_PULL_THRESHOLD", "RefreshableFeed"]

import logging
from typing import TYPE_CHECKING, Any

from aresponsive.core.config import PullToRefreshConfig
from aresponsive.gesture.machine import PullToRefreshMachine
from aresponsive.gesture.state import GesturePhase
from aresponsive.gesture.surface import TouchSurface
from aresponsive.scroll.controller import InfiniteScrollController

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aresponsive.core.config import InfiniteScrollConfig, RetryConfig
    from aresponsive.gesture.surface import BaseTouchSurface
    from aresponsive.outcome import Outcome
    from aresponsive.scroll.observer import ProximityObserver

logger: logging.Logger = logging.getLogger(__name__)

# Undamped finger travel required to refresh a feed
FEED_PULL_THRESHOLD = 100.0


class RefreshableFeed:
    r"""Infinite scroll and pull to refresh sharing one surface.

    The pull gesture of a feed is undamped (resistance 1.0) and commits
    at ``FEED_PULL_THRESHOLD`` pixels unless ``pull_config`` says
    otherwise. Both controllers keep their own state; a refresh does not
    block page loads and the other way around.

    Args:
        load_more: Zero-argument callable loading the next page.
        on_refresh: Zero-argument callable reloading the feed.
        has_more: Whether more content is available at construction.
        scroll_config: Configuration of the infinite scroll controller.
        pull_config: Configuration of the pull-to-refresh machine.
        retry_config: When provided, page loads and refreshes both run
            through a ``RetryExecutor`` with this configuration.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresponsive import RefreshableFeed, TouchSurface
        >>> from aresponsive.gesture import TouchType
        >>> async def load_more():
        ...     print("next page")
        ...     return False
        ...
        >>> async def refresh():
        ...     print("refreshed")
        ...
        >>> async def main():
        ...     feed = RefreshableFeed(load_more, refresh)
        ...     surface = TouchSurface()
        ...     feed.attach(surface)
        ...     surface.touch(TouchType.START, 0.0)
        ...     surface.touch(TouchType.MOVE, 120.0)
        ...     surface.touch(TouchType.END)
        ...     await feed.pull.wait_refreshed()
        ...     await feed.load_more()
        ...     feed.dispose()
        ...
        >>> asyncio.run(main())
        refreshed
        next page

        ```
    """

    def __init__(
        self,
        load_more: Callable[[], Awaitable[Any]],
        on_refresh: Callable[[], Awaitable[Any]],
        *,
        has_more: bool = True,
        scroll_config: InfiniteScrollConfig | None = None,
        pull_config: PullToRefreshConfig | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        if pull_config is None:
            pull_config = PullToRefreshConfig(threshold=FEED_PULL_THRESHOLD, resistance=1.0)
        self.scroll = InfiniteScrollController(
            load_more, has_more=has_more, config=scroll_config, retry_config=retry_config
        )
        self.pull = PullToRefreshMachine(on_refresh, config=pull_config, retry_config=retry_config)
        self.observer: ProximityObserver = self.scroll.attach()
        self._surface: BaseTouchSurface | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(scroll={self.scroll!r}, pull={self.pull!r})"

    @property
    def is_loading(self) -> bool:
        return self.scroll.snapshot.is_loading

    @property
    def is_refreshing(self) -> bool:
        return self.pull.phase == GesturePhase.REFRESHING

    @property
    def error(self) -> BaseException | None:
        """The error of the last failed page load, else of the last failed
        refresh."""
        if self.scroll.error is not None:
            return self.scroll.error
        return self.pull.snapshot.error

    def attach(self, surface: BaseTouchSurface) -> None:
        """Listen to the touch events of ``surface`` for the pull
        gesture."""
        self.pull.attach(surface)
        self._surface = surface

    def update_viewport(
        self,
        viewport_top: float,
        viewport_height: float,
        sentinel_top: float,
        sentinel_height: float = 0.0,
    ) -> None:
        """Feed new scroll geometry.

        The sentinel observer receives the geometry, and an attached
        ``TouchSurface`` takes ``viewport_top`` as its scroll offset so a
        pull only starts at the top of the feed.
        """
        if isinstance(self._surface, TouchSurface):
            self._surface.scroll_top = viewport_top
        self.observer.update(viewport_top, viewport_height, sentinel_top, sentinel_height)

    async def load_more(self) -> Outcome:
        return await self.scroll.load_more()

    async def refresh(self) -> Outcome:
        return await self.pull.refresh()

    async def retry(self) -> Outcome:
        return await self.scroll.retry()

    def reset(self) -> None:
        self.scroll.reset()

    def dispose(self) -> None:
        """Dispose both controllers.

        Calling ``dispose`` more than once is a no-op.
        """
        self.scroll.dispose()
        self.pull.dispose()
        logger.debug("Refreshable feed disposed")
