r"""Unit tests for ExponentialBackoff strategy."""

from __future__ import annotations

import pytest

from aresponsive.backoff import BaseBackoffStrategy, ExponentialBackoff


def test_exponential_backoff_basic() -> None:
    """Test basic exponential backoff calculation."""
    backoff = ExponentialBackoff(initial_delay=0.5)
    assert backoff.calculate(1) == 0.5  # 0.5 * 2^0
    assert backoff.calculate(2) == 1.0  # 0.5 * 2^1
    assert backoff.calculate(3) == 2.0  # 0.5 * 2^2
    assert backoff.calculate(4) == 4.0  # 0.5 * 2^3


def test_exponential_backoff_custom_multiplier() -> None:
    """Test exponential backoff with a multiplier of 3."""
    backoff = ExponentialBackoff(initial_delay=1.0, multiplier=3.0)
    assert backoff.calculate(1) == 1.0
    assert backoff.calculate(2) == 3.0
    assert backoff.calculate(3) == 9.0


def test_exponential_backoff_multiplier_one_is_constant() -> None:
    """Test that a multiplier of 1 gives fixed-interval delays."""
    backoff = ExponentialBackoff(initial_delay=0.7, multiplier=1.0)
    assert [backoff.calculate(attempt) for attempt in range(1, 5)] == [0.7, 0.7, 0.7, 0.7]


def test_exponential_backoff_with_max_delay() -> None:
    """Test exponential backoff with max_delay cap."""
    backoff = ExponentialBackoff(initial_delay=1.0, max_delay=5.0)
    assert backoff.calculate(1) == 1.0
    assert backoff.calculate(3) == 4.0
    assert backoff.calculate(4) == 5.0  # Would be 8.0, but capped
    assert backoff.calculate(10) == 5.0  # Would be 512.0, but capped


def test_exponential_backoff_attempt_zero() -> None:
    """Test that attempt 0 is treated like attempt 1."""
    assert ExponentialBackoff(initial_delay=1.0).calculate(0) == 1.0


def test_exponential_backoff_default_values() -> None:
    """Test exponential backoff with default values."""
    backoff = ExponentialBackoff()
    assert backoff.initial_delay == 1.0
    assert backoff.multiplier == 2.0
    assert backoff.max_delay is None
    assert isinstance(backoff, BaseBackoffStrategy)


def test_exponential_backoff_repr() -> None:
    """Test the string representation."""
    assert repr(ExponentialBackoff(initial_delay=0.5, max_delay=4.0)) == (
        "ExponentialBackoff(initial_delay=0.5, multiplier=2.0, max_delay=4.0)"
    )


def test_exponential_backoff_invalid_initial_delay() -> None:
    """Test that negative initial_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"initial_delay must be non-negative"):
        ExponentialBackoff(initial_delay=-1.0)


def test_exponential_backoff_invalid_multiplier() -> None:
    """Test that a multiplier below 1 raises ValueError."""
    with pytest.raises(ValueError, match=r"multiplier must be >= 1"):
        ExponentialBackoff(multiplier=0.5)


def test_exponential_backoff_invalid_max_delay() -> None:
    """Test that non-positive max_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"max_delay must be positive"):
        ExponentialBackoff(initial_delay=1.0, max_delay=0)
    with pytest.raises(ValueError, match=r"max_delay must be positive"):
        ExponentialBackoff(initial_delay=1.0, max_delay=-5.0)
