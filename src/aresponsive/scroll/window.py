r"""Visible item window of a virtualized list.

A virtualized list renders only the items overlapping the viewport. This
module computes that window from the same scroll geometry the
``ProximityObserver`` is fed with, for lists whose items share one fixed
height.
"""

from __future__ import annotations

__all__ = ["VisibleWindow", "compute_visible_window"]

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class VisibleWindow:
    """The slice of items to render and where to place it.

    Attributes:
        start: Index of the first visible item.
        end: Index after the last visible item.
        total_height: Height of the whole list, for the scroll container.
        offset_y: Offset of the first rendered item from the list top.
    """

    start: int
    end: int
    total_height: float
    offset_y: float

    @property
    def count(self) -> int:
        """Number of items to render."""
        return self.end - self.start


def compute_visible_window(
    viewport_top: float,
    viewport_height: float,
    item_height: float,
    item_count: int,
) -> VisibleWindow:
    """Compute the items overlapping the viewport.

    ``start`` is ``floor(viewport_top / item_height)`` and ``end`` is
    ``ceil((viewport_top + viewport_height) / item_height)`` capped by
    ``item_count``. A negative scroll offset (overscroll) counts as 0,
    and a viewport past the end of the list yields an empty window at the
    end.

    Args:
        viewport_top: Scroll offset of the viewport.
        viewport_height: Height of the viewport.
        item_height: Height of every item. Must be > 0.
        item_count: Number of items currently loaded.

    Returns:
        The visible window.

    Raises:
        ValueError: If ``item_height`` is not positive, or if
            ``viewport_height`` or ``item_count`` is negative.

    Example:
        ```pycon
        >>> from aresponsive.scroll import compute_visible_window
        >>> compute_visible_window(
        ...     viewport_top=450, viewport_height=600, item_height=200, item_count=20
        ... )
        VisibleWindow(start=2, end=6, total_height=4000.0, offset_y=400.0)

        ```
    """
    if item_height <= 0:
        msg = f"item_height must be > 0, got {item_height}"
        raise ValueError(msg)
    if viewport_height < 0:
        msg = f"viewport_height must be >= 0, got {viewport_height}"
        raise ValueError(msg)
    if item_count < 0:
        msg = f"item_count must be >= 0, got {item_count}"
        raise ValueError(msg)

    top = max(0.0, viewport_top)
    end = min(math.ceil((top + viewport_height) / item_height), item_count)
    start = min(math.floor(top / item_height), end)
    return VisibleWindow(
        start=start,
        end=end,
        total_height=float(item_count * item_height),
        offset_y=float(start * item_height),
    )
