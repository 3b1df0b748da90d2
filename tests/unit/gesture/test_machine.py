r"""Unit tests for PullToRefreshMachine."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import AsyncMock, Mock, call

import pytest

from aresponsive import (
    GesturePhase,
    Outcome,
    PullToRefreshConfig,
    PullToRefreshMachine,
    RetryConfig,
    simple_pull_to_refresh,
)
from aresponsive.gesture import GestureSnapshot, TouchEvent, TouchSurface, TouchType


def start(y: float = 0.0, scroll_top: float = 0.0) -> TouchEvent:
    return TouchEvent(TouchType.START, y=y, scroll_top=scroll_top)


def move(y: float) -> TouchEvent:
    return TouchEvent(TouchType.MOVE, y=y)


def end() -> TouchEvent:
    return TouchEvent(TouchType.END)


class GatedRefresh:
    """Refresh operation that blocks until released."""

    def __init__(self) -> None:
        self.calls = 0
        self.release = asyncio.Event()

    async def __call__(self) -> None:
        self.calls += 1
        await self.release.wait()


####################################
#     Tests for initial state      #
####################################


def test_pull_to_refresh_initial_snapshot() -> None:
    """Test the snapshot of a new machine."""
    machine = PullToRefreshMachine(AsyncMock())
    assert machine.snapshot == GestureSnapshot(
        phase=GesturePhase.IDLE,
        start_y=0.0,
        current_y=0.0,
        pull_distance=0.0,
        threshold=80.0,
        can_refresh=False,
    )
    assert machine.enabled
    assert machine.retry_executor is None
    assert machine.snapshot.progress == 0.0


def test_simple_pull_to_refresh_preset() -> None:
    """Test the preset threshold and resistance."""
    machine = simple_pull_to_refresh(AsyncMock(), enabled=False)
    assert machine.config == PullToRefreshConfig(threshold=60.0, resistance=0.6, enabled=False)
    assert not machine.enabled


###############################
#     Tests for pulling       #
###############################


def test_pull_to_refresh_start_at_top() -> None:
    """Test that a touch at the top of the surface starts a pull."""
    machine = PullToRefreshMachine(AsyncMock())
    snapshot = machine.dispatch(start(y=120.0))
    assert snapshot.phase == GesturePhase.PULLING
    assert snapshot.is_pulling
    assert snapshot.start_y == 120.0
    assert snapshot.current_y == 120.0


def test_pull_to_refresh_start_when_scrolled() -> None:
    """Test that a touch on a scrolled surface is ignored."""
    machine = PullToRefreshMachine(AsyncMock())
    assert machine.dispatch(start(scroll_top=1.0)).phase == GesturePhase.IDLE


@pytest.mark.parametrize(
    ("y", "pull_distance", "can_refresh"),
    [
        (100.0, 50.0, False),
        (158.0, 79.0, False),
        (160.0, 80.0, True),
        (200.0, 100.0, True),
        (240.0, 120.0, True),
        (1000.0, 120.0, True),  # clamped at threshold * 1.5
        (-50.0, 0.0, False),  # pulling up
    ],
)
def test_pull_to_refresh_pull_distance(y: float, pull_distance: float, can_refresh: bool) -> None:
    """Test the pull distance with resistance 0.5 and threshold 80."""
    machine = PullToRefreshMachine(AsyncMock())
    machine.dispatch(start(y=0.0))
    snapshot = machine.dispatch(move(y))
    assert snapshot.pull_distance == pull_distance
    assert snapshot.can_refresh is can_refresh
    assert snapshot.current_y == y


def test_pull_to_refresh_progress() -> None:
    """Test that progress is clamped to 1."""
    machine = PullToRefreshMachine(AsyncMock())
    machine.dispatch(start())
    assert machine.dispatch(move(80.0)).progress == 0.5
    assert machine.dispatch(move(400.0)).progress == 1.0


def test_pull_to_refresh_prevents_default_while_pulling() -> None:
    """Test that native scrolling is prevented only for a positive pull."""
    machine = PullToRefreshMachine(AsyncMock())
    machine.dispatch(start(y=100.0))
    pull_up = move(50.0)
    pull_down = move(150.0)
    machine.dispatch(pull_up)
    machine.dispatch(pull_down)
    assert not pull_up.default_prevented
    assert pull_down.default_prevented


def test_pull_to_refresh_move_without_start() -> None:
    """Test that moves outside of a pull are ignored."""
    machine = PullToRefreshMachine(AsyncMock())
    event = move(300.0)
    assert machine.dispatch(event).pull_distance == 0.0
    assert not event.default_prevented


def test_pull_to_refresh_second_start_keeps_origin() -> None:
    """Test that a second touch start does not move the pull origin."""
    machine = PullToRefreshMachine(AsyncMock())
    machine.dispatch(start(y=10.0))
    assert machine.dispatch(start(y=90.0)).start_y == 10.0


def test_pull_to_refresh_unknown_touch_type() -> None:
    """Test that an unknown touch type raises TypeError."""
    machine = PullToRefreshMachine(AsyncMock())
    with pytest.raises(TypeError, match=r"Unsupported touch type"):
        machine.dispatch(TouchEvent("cancel"))


######################################
#     Tests for release / refresh    #
######################################


@pytest.mark.asyncio
async def test_pull_to_refresh_release_below_threshold() -> None:
    """Test that a short pull does not refresh."""
    on_refresh = AsyncMock()
    machine = PullToRefreshMachine(on_refresh)
    machine.dispatch(start())
    machine.dispatch(move(100.0))
    snapshot = machine.dispatch(end())
    assert snapshot.phase == GesturePhase.IDLE
    assert snapshot.pull_distance == 0.0
    assert not snapshot.can_refresh

    await asyncio.sleep(0.01)
    on_refresh.assert_not_called()


@pytest.mark.asyncio
async def test_pull_to_refresh_release_at_threshold(caplog: pytest.LogCaptureFixture) -> None:
    """Test that a pull reaching the threshold refreshes once."""
    on_refresh = AsyncMock()
    machine = PullToRefreshMachine(on_refresh)
    machine.dispatch(start())
    machine.dispatch(move(160.0))
    snapshot = machine.dispatch(end())
    assert snapshot.phase == GesturePhase.REFRESHING
    assert snapshot.is_refreshing
    assert snapshot.pull_distance == 0.0

    with caplog.at_level(logging.INFO):
        assert await machine.wait_refreshed() == Outcome.COMPLETED
    on_refresh.assert_awaited_once()
    assert machine.phase == GesturePhase.IDLE
    assert "Pull to refresh completed successfully" in caplog.text


@pytest.mark.asyncio
async def test_pull_to_refresh_ignores_gestures_while_refreshing() -> None:
    """Test that a second pull during a refresh is ignored."""
    on_refresh = GatedRefresh()
    machine = PullToRefreshMachine(on_refresh)
    machine.dispatch(start())
    machine.dispatch(move(200.0))
    machine.dispatch(end())
    await asyncio.sleep(0)

    assert machine.dispatch(start()).phase == GesturePhase.REFRESHING
    event = move(300.0)
    machine.dispatch(event)
    machine.dispatch(end())
    assert not event.default_prevented
    assert await machine.refresh() == Outcome.REJECTED

    on_refresh.release.set()
    await machine.wait_refreshed()
    assert on_refresh.calls == 1
    assert machine.phase == GesturePhase.IDLE


@pytest.mark.asyncio
async def test_pull_to_refresh_failure(caplog: pytest.LogCaptureFixture) -> None:
    """Test that a failed refresh is logged and kept on the snapshot."""
    error = ConnectionError("offline")
    machine = PullToRefreshMachine(AsyncMock(side_effect=error))
    machine.dispatch(start())
    machine.dispatch(move(200.0))
    machine.dispatch(end())

    with caplog.at_level(logging.ERROR):
        assert await machine.wait_refreshed() == Outcome.FAILED
    assert machine.phase == GesturePhase.IDLE
    assert machine.snapshot.error is error
    assert "Pull to refresh failed" in caplog.text


@pytest.mark.asyncio
async def test_pull_to_refresh_error_cleared_by_next_refresh() -> None:
    """Test that the next refresh clears the previous error."""
    on_refresh = AsyncMock(side_effect=[RuntimeError("x"), None])
    machine = PullToRefreshMachine(on_refresh)
    assert await machine.refresh() == Outcome.FAILED
    assert machine.snapshot.error is not None

    machine.dispatch(start())
    assert machine.snapshot.error is not None
    machine.dispatch(move(200.0))
    machine.dispatch(end())
    assert machine.snapshot.error is None
    assert await machine.wait_refreshed() == Outcome.COMPLETED


@pytest.mark.asyncio
async def test_pull_to_refresh_programmatic_refresh() -> None:
    """Test that refresh runs on_refresh without a gesture."""
    on_refresh = AsyncMock()
    machine = PullToRefreshMachine(on_refresh)
    assert await machine.refresh() == Outcome.COMPLETED
    on_refresh.assert_awaited_once()


@pytest.mark.asyncio
async def test_pull_to_refresh_refresh_during_pull() -> None:
    """Test that a programmatic refresh ends the pull in progress."""
    machine = PullToRefreshMachine(AsyncMock())
    machine.dispatch(start())
    machine.dispatch(move(100.0))
    assert await machine.refresh() == Outcome.COMPLETED
    assert machine.snapshot.pull_distance == 0.0
    assert machine.phase == GesturePhase.IDLE


@pytest.mark.asyncio
async def test_pull_to_refresh_wait_refreshed_when_idle() -> None:
    """Test that wait_refreshed returns None when nothing runs."""
    assert await PullToRefreshMachine(AsyncMock()).wait_refreshed() is None


@pytest.mark.asyncio
async def test_pull_to_refresh_retry_config(mock_asleep: Mock) -> None:
    """Test that refreshes run through the retry executor when
    configured."""
    on_refresh = AsyncMock(side_effect=[TimeoutError("slow"), None])
    machine = PullToRefreshMachine(on_refresh, retry_config=RetryConfig(max_attempts=2))
    assert machine.retry_executor is not None
    assert await machine.refresh() == Outcome.COMPLETED
    assert on_refresh.await_count == 2
    assert mock_asleep.call_args_list == [call(1.0)]


#####################################
#     Tests for enabled / listeners #
#####################################


def test_pull_to_refresh_disabled_ignores_touches() -> None:
    """Test that a disabled machine ignores touch events."""
    machine = PullToRefreshMachine(AsyncMock(), config=PullToRefreshConfig(enabled=False))
    assert machine.dispatch(start()).phase == GesturePhase.IDLE


@pytest.mark.asyncio
async def test_pull_to_refresh_disabled_rejects_refresh() -> None:
    """Test that a disabled machine rejects programmatic refreshes."""
    on_refresh = AsyncMock()
    machine = PullToRefreshMachine(on_refresh)
    machine.set_enabled(False)
    assert await machine.refresh() == Outcome.REJECTED
    on_refresh.assert_not_called()


def test_pull_to_refresh_disable_cancels_pull() -> None:
    """Test that disabling during a pull resets the gesture."""
    machine = PullToRefreshMachine(AsyncMock())
    machine.dispatch(start())
    machine.dispatch(move(200.0))
    snapshot = machine.set_enabled(False)
    assert snapshot.phase == GesturePhase.IDLE
    assert snapshot.pull_distance == 0.0

    machine.set_enabled(True)
    assert machine.dispatch(start()).phase == GesturePhase.PULLING


def test_pull_to_refresh_listener_receives_snapshots() -> None:
    """Test the snapshots published during a short pull."""
    machine = PullToRefreshMachine(AsyncMock())
    snapshots = []
    remove = machine.add_listener(snapshots.append)
    machine.dispatch(start())
    machine.dispatch(move(40.0))
    machine.dispatch(end())
    assert [(s.phase, s.pull_distance) for s in snapshots] == [
        (GesturePhase.PULLING, 0.0),
        (GesturePhase.PULLING, 20.0),
        (GesturePhase.IDLE, 0.0),
    ]

    remove()
    machine.dispatch(start())
    assert len(snapshots) == 3


##############################################
#     Tests for surface binding / dispose    #
##############################################


@pytest.mark.asyncio
async def test_pull_to_refresh_attach_surface() -> None:
    """Test a full gesture delivered through a touch surface."""
    on_refresh = AsyncMock()
    machine = PullToRefreshMachine(on_refresh)
    surface = TouchSurface()
    machine.attach(surface)
    assert len(surface) == 1

    surface.touch(TouchType.START, 0.0)
    event = surface.touch(TouchType.MOVE, 200.0)
    surface.touch(TouchType.END)
    assert event.default_prevented
    assert await machine.wait_refreshed() == Outcome.COMPLETED
    on_refresh.assert_awaited_once()


def test_pull_to_refresh_surface_scroll_offset() -> None:
    """Test that a scrolled surface does not start a pull."""
    machine = PullToRefreshMachine(AsyncMock())
    surface = TouchSurface(scroll_top=250.0)
    machine.attach(surface)
    surface.touch(TouchType.START, 0.0)
    assert machine.phase == GesturePhase.IDLE


def test_pull_to_refresh_attach_replaces_surface() -> None:
    """Test that attaching to a second surface detaches from the first."""
    machine = PullToRefreshMachine(AsyncMock())
    first, second = TouchSurface(), TouchSurface()
    machine.attach(first)
    machine.attach(second)
    assert len(first) == 0
    assert len(second) == 1


def test_pull_to_refresh_dispose_detaches() -> None:
    """Test that dispose removes the touch listener."""
    machine = PullToRefreshMachine(AsyncMock())
    surface = TouchSurface()
    machine.attach(surface)
    machine.dispose()
    machine.dispose()
    assert machine.is_disposed
    assert len(surface) == 0
    assert machine.dispatch(start()).phase == GesturePhase.IDLE


@pytest.mark.asyncio
async def test_pull_to_refresh_dispose_during_refresh() -> None:
    """Test that a refresh settling after dispose is discarded."""
    on_refresh = GatedRefresh()
    machine = PullToRefreshMachine(on_refresh)
    task = asyncio.ensure_future(machine.refresh())
    await asyncio.sleep(0)
    listener = Mock()
    machine.add_listener(listener)
    machine.dispose()

    on_refresh.release.set()
    assert await task == Outcome.COMPLETED
    listener.assert_not_called()
    assert await machine.refresh() == Outcome.REJECTED
