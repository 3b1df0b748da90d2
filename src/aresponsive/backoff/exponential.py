r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from aresponsive.backoff.base import BaseBackoffStrategy


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: initial_delay * (multiplier ** (attempt - 1)),
    with optional max_delay cap. A multiplier of 1 degenerates to a fixed
    interval.

    Args:
        initial_delay: The delay in seconds after the first failed attempt
            (default: 1.0).
        multiplier: The growth factor between two consecutive delays
            (default: 2.0). Must be >= 1.
        max_delay: Optional maximum delay cap in seconds. If specified,
            delays will not exceed this value.

    Example:
        ```pycon
        >>> from aresponsive.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(initial_delay=1.0)
        >>> backoff.calculate(1)  # Before the second attempt
        1.0
        >>> backoff.calculate(2)  # Before the third attempt
        2.0
        >>> backoff.calculate(3)
        4.0
        >>> # With max_delay cap
        >>> backoff = ExponentialBackoff(initial_delay=1.0, max_delay=5.0)
        >>> backoff.calculate(10)  # Would be 512.0, but capped
        5.0

        ```
    """

    def __init__(
        self,
        initial_delay: float = 1.0,
        multiplier: float = 2.0,
        max_delay: float | None = None,
    ) -> None:
        if initial_delay < 0:
            msg = f"initial_delay must be non-negative, got {initial_delay}"
            raise ValueError(msg)
        if multiplier < 1:
            msg = f"multiplier must be >= 1, got {multiplier}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.initial_delay = initial_delay
        self.multiplier = multiplier
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(initial_delay={self.initial_delay}, "
            f"multiplier={self.multiplier}, max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The number of the attempt that just failed (1-indexed).

        Returns:
            The calculated delay: initial_delay * (multiplier ** (attempt - 1)),
            capped at max_delay if set.
        """
        delay = self.initial_delay * (self.multiplier ** max(attempt - 1, 0))
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
