from __future__ import annotations

import pytest

from aresponsive.core import (
    validate_debounce_params,
    validate_pull_params,
    validate_retry_params,
    validate_scroll_params,
)

##############################################
#     Tests for validate_debounce_params     #
##############################################


@pytest.mark.parametrize("delay", [0.0, 0.1, 0.3, 10.0])
def test_validate_debounce_params_valid_delay(delay: float) -> None:
    """Test that non-negative delays pass validation."""
    validate_debounce_params(delay=delay)


def test_validate_debounce_params_negative_delay() -> None:
    """Test that a negative delay raises ValueError."""
    with pytest.raises(ValueError, match=r"delay must be >= 0, got -1"):
        validate_debounce_params(delay=-1)


def test_validate_debounce_params_valid_max_wait() -> None:
    """Test that max_wait >= delay passes validation."""
    validate_debounce_params(delay=0.3, max_wait=0.3)
    validate_debounce_params(delay=0.3, max_wait=1.0)


@pytest.mark.parametrize("max_wait", [0.0, -1.0])
def test_validate_debounce_params_non_positive_max_wait(max_wait: float) -> None:
    """Test that a non-positive max_wait raises ValueError."""
    with pytest.raises(ValueError, match=r"max_wait must be > 0"):
        validate_debounce_params(delay=0.0, max_wait=max_wait)


def test_validate_debounce_params_max_wait_shorter_than_delay() -> None:
    """Test that max_wait shorter than delay raises ValueError."""
    with pytest.raises(ValueError, match=r"max_wait must be >= delay \(0.5\), got 0.2"):
        validate_debounce_params(delay=0.5, max_wait=0.2)


def test_validate_debounce_params_leading_only() -> None:
    """Test that a leading-only configuration is valid."""
    validate_debounce_params(delay=0.3, leading=True, trailing=False)


def test_validate_debounce_params_no_edge() -> None:
    """Test that disabling both edges raises ValueError."""
    with pytest.raises(ValueError, match=r"at least one of leading or trailing must be enabled"):
        validate_debounce_params(delay=0.3, leading=False, trailing=False)


###########################################
#     Tests for validate_retry_params     #
###########################################


def test_validate_retry_params_valid() -> None:
    """Test that valid retry parameters pass validation."""
    validate_retry_params(
        max_attempts=3,
        initial_delay=1.0,
        backoff_multiplier=2.0,
        max_delay=10.0,
        jitter_factor=0.1,
    )


def test_validate_retry_params_single_attempt() -> None:
    """Test that max_attempts=1 (no retries) is valid."""
    validate_retry_params(max_attempts=1)


@pytest.mark.parametrize("max_attempts", [0, -1])
def test_validate_retry_params_invalid_max_attempts(max_attempts: int) -> None:
    """Test that max_attempts below 1 raises ValueError."""
    with pytest.raises(ValueError, match=r"max_attempts must be >= 1"):
        validate_retry_params(max_attempts=max_attempts)


def test_validate_retry_params_invalid_initial_delay() -> None:
    """Test that a negative initial_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"initial_delay must be >= 0, got -0.5"):
        validate_retry_params(max_attempts=3, initial_delay=-0.5)


def test_validate_retry_params_invalid_multiplier() -> None:
    """Test that a multiplier below 1 raises ValueError."""
    with pytest.raises(ValueError, match=r"backoff_multiplier must be >= 1, got 0.9"):
        validate_retry_params(max_attempts=3, backoff_multiplier=0.9)


def test_validate_retry_params_max_delay_none() -> None:
    """Test that max_delay=None (no cap) is valid."""
    validate_retry_params(max_attempts=3, max_delay=None)


def test_validate_retry_params_invalid_max_delay() -> None:
    """Test that a non-positive max_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"max_delay must be > 0, got 0"):
        validate_retry_params(max_attempts=3, max_delay=0)


def test_validate_retry_params_invalid_jitter() -> None:
    """Test that a negative jitter_factor raises ValueError."""
    with pytest.raises(ValueError, match=r"jitter_factor must be >= 0"):
        validate_retry_params(max_attempts=3, jitter_factor=-1.0)


############################################
#     Tests for validate_scroll_params     #
############################################


def test_validate_scroll_params_valid() -> None:
    """Test that valid scroll parameters pass validation."""
    validate_scroll_params(threshold_px=0.0, debounce=0.0)
    validate_scroll_params(threshold_px=100.0, debounce=0.1)


def test_validate_scroll_params_invalid_threshold() -> None:
    """Test that a negative threshold raises ValueError."""
    with pytest.raises(ValueError, match=r"threshold_px must be >= 0, got -10"):
        validate_scroll_params(threshold_px=-10, debounce=0.1)


def test_validate_scroll_params_invalid_debounce() -> None:
    """Test that a negative debounce raises ValueError."""
    with pytest.raises(ValueError, match=r"debounce must be >= 0"):
        validate_scroll_params(threshold_px=100.0, debounce=-0.1)


##########################################
#     Tests for validate_pull_params     #
##########################################


def test_validate_pull_params_valid() -> None:
    """Test that valid gesture parameters pass validation."""
    validate_pull_params(threshold=80.0, resistance=0.5)
    validate_pull_params(threshold=60.0, resistance=1.5)


def test_validate_pull_params_invalid_threshold() -> None:
    """Test that a non-positive threshold raises ValueError."""
    with pytest.raises(ValueError, match=r"threshold must be > 0, got 0"):
        validate_pull_params(threshold=0, resistance=0.5)


def test_validate_pull_params_invalid_resistance() -> None:
    """Test that a non-positive resistance raises ValueError."""
    with pytest.raises(ValueError, match=r"resistance must be > 0, got 0"):
        validate_pull_params(threshold=80.0, resistance=0)
