r"""Parameter validation utilities for the interaction controllers.

This module provides validation functions for debounce, retry, infinite
scroll and pull-to-refresh parameters to ensure they meet the required
constraints before being used by the schedulers and state machines.
"""

from __future__ import annotations

__all__ = [
    "validate_debounce_params",
    "validate_pull_params",
    "validate_retry_params",
    "validate_scroll_params",
]


def validate_debounce_params(
    delay: float,
    max_wait: float | None = None,
    leading: bool = False,
    trailing: bool = True,
) -> None:
    """Validate debounce parameters.

    Args:
        delay: Quiet window in seconds. Must be >= 0. A value of 0 still
            defers the emission to the next event loop iteration.
        max_wait: Optional upper bound in seconds between the first update
            of a burst and its emission. Must be > 0 and >= delay if provided.
        leading: Whether to emit on the leading edge of a burst.
        trailing: Whether to emit on the trailing edge of a burst.

    Raises:
        ValueError: If delay is negative, if max_wait is non-positive or
            shorter than delay, or if both edges are disabled.

    Example:
        ```pycon
        >>> from aresponsive.core.validation import validate_debounce_params
        >>> validate_debounce_params(delay=0.3)
        >>> validate_debounce_params(delay=0.3, max_wait=1.0)
        >>> validate_debounce_params(delay=-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: delay must be >= 0, got -1

        ```
    """
    if delay < 0:
        msg = f"delay must be >= 0, got {delay}"
        raise ValueError(msg)
    if max_wait is not None:
        if max_wait <= 0:
            msg = f"max_wait must be > 0, got {max_wait}"
            raise ValueError(msg)
        if max_wait < delay:
            msg = f"max_wait must be >= delay ({delay}), got {max_wait}"
            raise ValueError(msg)
    if not leading and not trailing:
        msg = "at least one of leading or trailing must be enabled"
        raise ValueError(msg)


def validate_retry_params(
    max_attempts: int,
    initial_delay: float = 0.0,
    backoff_multiplier: float = 1.0,
    max_delay: float | None = None,
    jitter_factor: float = 0.0,
) -> None:
    """Validate retry parameters.

    Args:
        max_attempts: Total number of attempts including the first one.
            Must be >= 1. A value of 1 means no retries.
        initial_delay: Delay in seconds before the first retry. Must be >= 0.
        backoff_multiplier: Growth factor applied to the delay after each
            failed attempt. Must be >= 1. A value of 1 gives fixed-interval
            retries.
        max_delay: Maximum backoff delay cap in seconds. Must be > 0 if
            provided.
        jitter_factor: Factor for adding random jitter to backoff delays.
            Must be >= 0.

    Raises:
        ValueError: If any parameter is outside of its valid range.

    Example:
        ```pycon
        >>> from aresponsive.core.validation import validate_retry_params
        >>> validate_retry_params(max_attempts=3)
        >>> validate_retry_params(max_attempts=3, initial_delay=1.0, backoff_multiplier=2.0)
        >>> validate_retry_params(max_attempts=0)  # doctest: +SKIP

        ```
    """
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)
    if initial_delay < 0:
        msg = f"initial_delay must be >= 0, got {initial_delay}"
        raise ValueError(msg)
    if backoff_multiplier < 1:
        msg = f"backoff_multiplier must be >= 1, got {backoff_multiplier}"
        raise ValueError(msg)
    if max_delay is not None and max_delay <= 0:
        msg = f"max_delay must be > 0, got {max_delay}"
        raise ValueError(msg)
    if jitter_factor < 0:
        msg = f"jitter_factor must be >= 0, got {jitter_factor}"
        raise ValueError(msg)


def validate_scroll_params(threshold_px: float, debounce: float) -> None:
    """Validate infinite scroll parameters.

    Args:
        threshold_px: Root margin in pixels around the viewport. Must be >= 0.
        debounce: Debounce window in seconds applied to intersection
            signals. Must be >= 0.

    Raises:
        ValueError: If threshold_px or debounce are negative.
    """
    if threshold_px < 0:
        msg = f"threshold_px must be >= 0, got {threshold_px}"
        raise ValueError(msg)
    if debounce < 0:
        msg = f"debounce must be >= 0, got {debounce}"
        raise ValueError(msg)


def validate_pull_params(threshold: float, resistance: float) -> None:
    """Validate pull-to-refresh parameters.

    Args:
        threshold: Pull distance in pixels required to commit to a refresh.
            Must be > 0.
        resistance: Factor applied to the raw finger travel. Must be > 0.

    Raises:
        ValueError: If threshold or resistance are outside of their range.
    """
    if threshold <= 0:
        msg = f"threshold must be > 0, got {threshold}"
        raise ValueError(msg)
    if resistance <= 0:
        msg = f"resistance must be > 0, got {resistance}"
        raise ValueError(msg)
