r"""Phases, events and snapshots of the infinite scroll controller."""

from __future__ import annotations

__all__ = [
    "Intersection",
    "ScrollEvent",
    "ScrollPhase",
    "ScrollSnapshot",
    "SetEnabled",
    "SetHasMore",
    "SetLoading",
]

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ScrollPhase(Enum):
    """Infinite scroll controller phases.

    Attributes:
        IDLE: Observation is disabled.
        OBSERVING: Waiting for the sentinel to approach the viewport.
        LOADING: The next page is being loaded.
        ERROR: The last load failed; waiting for an explicit retry.
        EXHAUSTED: There is no more content to load.
    """

    IDLE = "idle"
    OBSERVING = "observing"
    LOADING = "loading"
    ERROR = "error"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Intersection:
    """The sentinel entered (or left) the viewport proximity area."""

    is_intersecting: bool = True


@dataclass(frozen=True)
class SetHasMore:
    """The caller reports whether more content is available."""

    has_more: bool


@dataclass(frozen=True)
class SetLoading:
    """The caller reports that it is loading content by other means."""

    is_loading: bool


@dataclass(frozen=True)
class SetEnabled:
    """Enable or disable observation."""

    enabled: bool


ScrollEvent = Union[Intersection, SetHasMore, SetLoading, SetEnabled]


@dataclass(frozen=True)
class ScrollSnapshot:
    """Immutable view of the controller state after a transition.

    Attributes:
        phase: The current phase.
        has_more: Whether more content is available.
        is_loading: True while a load runs, here or on the caller side.
        enabled: Whether intersection signals are observed.
        error: The error of the last failed load, if any.
    """

    phase: ScrollPhase
    has_more: bool
    is_loading: bool
    enabled: bool
    error: BaseException | None = None
