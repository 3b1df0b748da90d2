r"""Phases, touch events and snapshots of the pull-to-refresh
machine."""

from __future__ import annotations

__all__ = ["GesturePhase", "GestureSnapshot", "TouchEvent", "TouchType"]

from dataclasses import dataclass, field
from enum import Enum


class GesturePhase(Enum):
    """Pull-to-refresh phases.

    Attributes:
        IDLE: No gesture in progress.
        PULLING: A touch started at the top of the surface and is moving.
        REFRESHING: The refresh operation is running.
    """

    IDLE = "idle"
    PULLING = "pulling"
    REFRESHING = "refreshing"


class TouchType(Enum):
    START = "start"
    MOVE = "move"
    END = "end"


@dataclass
class TouchEvent:
    """A touch event on the gesture surface.

    Like a DOM touch event, the handler can prevent the default action
    (native scrolling) with ``prevent_default``.

    Attributes:
        type: Start, move or end of the touch.
        y: Vertical position of the touch point.
        scroll_top: Scroll offset of the surface when the event fired.
        default_prevented: Set by ``prevent_default``.

    Example:
        ```pycon
        >>> from aresponsive.gesture import TouchEvent, TouchType
        >>> event = TouchEvent(TouchType.MOVE, y=120.0)
        >>> event.default_prevented
        False
        >>> event.prevent_default()
        >>> event.default_prevented
        True

        ```
    """

    type: TouchType
    y: float = 0.0
    scroll_top: float = 0.0
    default_prevented: bool = field(default=False, compare=False)

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True)
class GestureSnapshot:
    """Immutable view of the gesture state after a transition.

    Attributes:
        phase: The current phase.
        start_y: Position of the touch that started the pull.
        current_y: Position of the latest touch move.
        pull_distance: Pull distance after resistance and clamping.
        threshold: Pull distance required to refresh.
        can_refresh: True once ``pull_distance >= threshold``.
        error: The error of the last failed refresh, if any.
    """

    phase: GesturePhase
    start_y: float
    current_y: float
    pull_distance: float
    threshold: float
    can_refresh: bool
    error: BaseException | None = None

    @property
    def progress(self) -> float:
        """Pull progress in ``[0, 1]`` for UI feedback."""
        return min(self.pull_distance / self.threshold, 1.0)

    @property
    def is_pulling(self) -> bool:
        return self.phase == GesturePhase.PULLING

    @property
    def is_refreshing(self) -> bool:
        return self.phase == GesturePhase.REFRESHING
