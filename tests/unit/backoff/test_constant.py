r"""Unit tests for ConstantBackoff strategy."""

from __future__ import annotations

import pytest

from aresponsive.backoff import ConstantBackoff


def test_constant_backoff_same_delay() -> None:
    """Test that every attempt gets the same delay."""
    backoff = ConstantBackoff(delay=2.5)
    assert backoff.calculate(1) == 2.5
    assert backoff.calculate(5) == 2.5
    assert backoff.calculate(100) == 2.5


def test_constant_backoff_default_delay() -> None:
    """Test the default delay of 1 second."""
    assert ConstantBackoff().calculate(1) == 1.0


def test_constant_backoff_zero_delay() -> None:
    """Test that a zero delay is accepted."""
    assert ConstantBackoff(delay=0.0).calculate(3) == 0.0


def test_constant_backoff_repr() -> None:
    """Test the string representation."""
    assert repr(ConstantBackoff(delay=0.5)) == "ConstantBackoff(delay=0.5)"


def test_constant_backoff_invalid_delay() -> None:
    """Test that negative delay raises ValueError."""
    with pytest.raises(ValueError, match=r"delay must be non-negative"):
        ConstantBackoff(delay=-0.1)
