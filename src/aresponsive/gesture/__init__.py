r"""Pull-to-refresh gesture machine and touch surfaces."""

from __future__ import annotations

__all__ = [
    "BaseTouchSurface",
    "GesturePhase",
    "GestureSnapshot",
    "PullToRefreshMachine",
    "TouchEvent",
    "TouchSurface",
    "TouchType",
    "simple_pull_to_refresh",
]

from aresponsive.gesture.machine import PullToRefreshMachine, simple_pull_to_refresh
from aresponsive.gesture.state import GesturePhase, GestureSnapshot, TouchEvent, TouchType
from aresponsive.gesture.surface import BaseTouchSurface, TouchSurface
