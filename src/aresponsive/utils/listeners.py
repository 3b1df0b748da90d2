r"""Listener registry shared by the state machines.

Every controller publishes an immutable snapshot after each transition.
Listeners are plain callables; an error raised by one listener is logged
and does not prevent the other listeners, nor the state machine, from
running.
"""

from __future__ import annotations

__all__ = ["ListenerRegistry"]

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class ListenerRegistry(Generic[T]):
    """Ordered collection of snapshot listeners.

    Args:
        owner: Name used in log messages to identify the publisher.

    Example:
        ```pycon
        >>> from aresponsive.utils.listeners import ListenerRegistry
        >>> registry = ListenerRegistry("example")
        >>> remove = registry.add(print)
        >>> registry.notify("snapshot")
        snapshot
        >>> remove()
        >>> registry.notify("snapshot")
        >>> len(registry)
        0

        ```
    """

    def __init__(self, owner: str) -> None:
        self._owner = owner
        self._listeners: list[Callable[[T], None]] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def add(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Callable invoked with each new snapshot.

        Returns:
            A function that removes the listener when called.
        """
        self._listeners.append(listener)

        def remove() -> None:
            self.remove(listener)

        return remove

    def remove(self, listener: Callable[[T], None]) -> None:
        """Remove a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def clear(self) -> None:
        self._listeners.clear()

    def notify(self, snapshot: T) -> None:
        """Call every listener with the snapshot, in registration order."""
        for listener in tuple(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:  # noqa: BLE001
                logger.warning(f"Error in {self._owner} listener: {e}")
