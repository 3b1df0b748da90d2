r"""Infinite scroll controller and viewport observation."""

from __future__ import annotations

__all__ = [
    "BaseViewportObserver",
    "InfiniteScrollController",
    "Intersection",
    "ProximityObserver",
    "ScrollEvent",
    "ScrollPhase",
    "ScrollSnapshot",
    "SetEnabled",
    "SetHasMore",
    "SetLoading",
    "VisibleWindow",
    "compute_visible_window",
]

from aresponsive.scroll.controller import InfiniteScrollController
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
from aresponsive.scroll.window import VisibleWindow, compute_visible_window
