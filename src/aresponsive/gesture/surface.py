r"""Touch surfaces the pull-to-refresh machine can be attached to."""

from __future__ import annotations

__all__ = ["BaseTouchSurface", "TouchSurface"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from aresponsive.gesture.state import TouchEvent, TouchType
from aresponsive.utils.listeners import ListenerRegistry

if TYPE_CHECKING:
    from collections.abc import Callable


class BaseTouchSurface(ABC):
    """Abstract scrollable surface delivering touch events."""

    @abstractmethod
    def add_touch_listener(self, listener: Callable[[TouchEvent], Any]) -> None:
        """Start delivering touch events to ``listener``."""

    @abstractmethod
    def remove_touch_listener(self, listener: Callable[[TouchEvent], Any]) -> None:
        """Stop delivering touch events to ``listener``."""


class TouchSurface(BaseTouchSurface):
    """In-memory touch surface.

    Adapters for a real toolkit push touches with ``touch``; the surface
    stamps each event with its current ``scroll_top``.

    Args:
        scroll_top: Initial scroll offset.

    Example:
        ```pycon
        >>> from aresponsive.gesture import TouchSurface, TouchType
        >>> surface = TouchSurface()
        >>> surface.add_touch_listener(print)
        >>> event = surface.touch(TouchType.START, 10.0)
        TouchEvent(type=<TouchType.START: 'start'>, y=10.0, scroll_top=0.0, default_prevented=False)

        ```
    """

    def __init__(self, scroll_top: float = 0.0) -> None:
        self.scroll_top = scroll_top
        self._listeners: ListenerRegistry[TouchEvent] = ListenerRegistry("touch surface")

    def __len__(self) -> int:
        return len(self._listeners)

    def add_touch_listener(self, listener: Callable[[TouchEvent], Any]) -> None:
        self._listeners.add(listener)

    def remove_touch_listener(self, listener: Callable[[TouchEvent], Any]) -> None:
        self._listeners.remove(listener)

    def touch(self, type: TouchType, y: float = 0.0) -> TouchEvent:  # noqa: A002
        """Deliver a touch event to the listeners.

        Args:
            type: Start, move or end of the touch.
            y: Vertical position of the touch point.

        Returns:
            The delivered event; check ``default_prevented`` to decide
            whether the native scroll should run.
        """
        event = TouchEvent(type=type, y=y, scroll_top=self.scroll_top)
        self._listeners.notify(event)
        return event
