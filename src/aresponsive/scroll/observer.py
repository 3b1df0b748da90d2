r"""Viewport proximity observation.

This module provides the observer abstraction the infinite scroll
controller listens to, and ``ProximityObserver``, an implementation
computing the sentinel/viewport proximity from scroll geometry.
"""

from __future__ import annotations

__all__ = ["BaseViewportObserver", "ProximityObserver"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from aresponsive.core.config import DEFAULT_THRESHOLD_PX
from aresponsive.scroll.state import Intersection

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class BaseViewportObserver(ABC):
    """Abstract source of sentinel intersection signals.

    An observer delivers ``Intersection`` events to at most one connected
    callback until it is disconnected.
    """

    @abstractmethod
    def connect(self, callback: Callable[[Intersection], None]) -> None:
        """Start delivering intersection signals to ``callback``."""

    @abstractmethod
    def disconnect(self) -> None:
        """Stop delivering signals. Calling it twice is a no-op."""


class ProximityObserver(BaseViewportObserver):
    """Observer computing proximity from the scroll geometry.

    The sentinel counts as intersecting when it overlaps the viewport grown
    by ``threshold_px`` on each side (the root margin). A signal is
    delivered on the first update after connecting and then each time the
    intersection state flips, like a native intersection observer.

    Args:
        threshold_px: Root margin in pixels.

    Example:
        ```pycon
        >>> from aresponsive.scroll import ProximityObserver
        >>> observer = ProximityObserver(threshold_px=100)
        >>> observer.connect(print)
        >>> observer.update(viewport_top=0, viewport_height=800, sentinel_top=1000)
        Intersection(is_intersecting=False)
        >>> observer.update(viewport_top=150, viewport_height=800, sentinel_top=1000)
        Intersection(is_intersecting=True)
        >>> observer.update(viewport_top=160, viewport_height=800, sentinel_top=1000)
        >>> observer.disconnect()

        ```
    """

    def __init__(self, threshold_px: float = DEFAULT_THRESHOLD_PX) -> None:
        if threshold_px < 0:
            msg = f"threshold_px must be >= 0, got {threshold_px}"
            raise ValueError(msg)
        self.threshold_px = threshold_px
        self._callback: Callable[[Intersection], None] | None = None
        self._last: bool | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(threshold_px={self.threshold_px})"

    @property
    def is_connected(self) -> bool:
        return self._callback is not None

    def connect(self, callback: Callable[[Intersection], None]) -> None:
        self._callback = callback
        self._last = None

    def disconnect(self) -> None:
        self._callback = None
        self._last = None

    def is_intersecting(
        self,
        viewport_top: float,
        viewport_height: float,
        sentinel_top: float,
        sentinel_height: float = 0.0,
    ) -> bool:
        """Tell whether the sentinel lies within the grown viewport.

        Args:
            viewport_top: Scroll offset of the viewport.
            viewport_height: Height of the viewport.
            sentinel_top: Offset of the sentinel in the scrolled content.
            sentinel_height: Height of the sentinel.

        Returns:
            True if the sentinel overlaps the viewport grown by the margin.
        """
        top = viewport_top - self.threshold_px
        bottom = viewport_top + viewport_height + self.threshold_px
        return sentinel_top <= bottom and sentinel_top + sentinel_height >= top

    def update(
        self,
        viewport_top: float,
        viewport_height: float,
        sentinel_top: float,
        sentinel_height: float = 0.0,
    ) -> None:
        """Feed new scroll geometry and signal intersection changes."""
        if self._callback is None:
            return
        intersecting = self.is_intersecting(
            viewport_top, viewport_height, sentinel_top, sentinel_height
        )
        if intersecting == self._last:
            return
        self._last = intersecting
        logger.debug(f"Sentinel intersection changed to {intersecting}")
        self._callback(Intersection(is_intersecting=intersecting))
