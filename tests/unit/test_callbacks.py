from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

from aresponsive.callbacks import (
    AttemptInfo,
    FailureInfo,
    RetryInfo,
    SuccessInfo,
    invoke_callback,
)

#######################################
#     Tests for the info classes      #
#######################################


def test_attempt_info() -> None:
    """Test AttemptInfo fields."""
    info = AttemptInfo(attempt=2, max_attempts=3)
    assert info.attempt == 2
    assert info.max_attempts == 3


def test_retry_info() -> None:
    """Test RetryInfo fields."""
    error = ConnectionError("offline")
    info = RetryInfo(attempt=1, max_attempts=3, wait_time=1.0, error=error)
    assert info.attempt == 1
    assert info.max_attempts == 3
    assert info.wait_time == 1.0
    assert info.error is error


def test_success_info() -> None:
    """Test SuccessInfo fields."""
    info = SuccessInfo(attempt=2, max_attempts=3, result=[1, 2], total_time=1.5)
    assert info.attempt == 2
    assert info.result == [1, 2]
    assert info.total_time == 1.5


def test_failure_info() -> None:
    """Test FailureInfo fields."""
    error = TimeoutError("too slow")
    info = FailureInfo(attempt=3, max_attempts=3, error=error, total_time=3.0)
    assert info.attempt == 3
    assert info.error is error
    assert info.total_time == 3.0


#####################################
#     Tests for invoke_callback     #
#####################################


def test_invoke_callback_with_none_callback() -> None:
    """Test that invoke_callback does nothing when callback is None."""
    invoke_callback(None, AttemptInfo(attempt=1, max_attempts=3))


def test_invoke_callback_calls_callback(mock_callback: Mock) -> None:
    """Test that invoke_callback forwards the info object."""
    info = AttemptInfo(attempt=1, max_attempts=3)
    invoke_callback(mock_callback, info)
    mock_callback.assert_called_once_with(info)


def test_invoke_callback_logs_callback_errors(caplog: pytest.LogCaptureFixture) -> None:
    """Test that a failing callback is logged and does not raise."""
    callback = Mock(side_effect=RuntimeError("callback failed"))
    with caplog.at_level(logging.WARNING):
        invoke_callback(callback, AttemptInfo(attempt=1, max_attempts=3))
    callback.assert_called_once()
    assert "Error in AttemptInfo callback: callback failed" in caplog.text
