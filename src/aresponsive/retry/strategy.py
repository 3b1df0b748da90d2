r"""Retry strategy for calculating backoff delays.

This module provides the ``calculate_delay`` function and the
``RetryStrategy`` class that turn a ``RetryConfig`` into the wait
between two attempts.
"""

from __future__ import annotations

__all__ = ["RetryStrategy", "calculate_delay"]

import logging
import random
from typing import TYPE_CHECKING

from aresponsive.backoff import ExponentialBackoff

if TYPE_CHECKING:
    from aresponsive.backoff import BaseBackoffStrategy
    from aresponsive.core.config import RetryConfig

logger: logging.Logger = logging.getLogger(__name__)


def calculate_delay(
    attempt: int,
    initial_delay: float,
    backoff_multiplier: float,
    max_delay: float | None = None,
    jitter_factor: float = 0.0,
    backoff_strategy: BaseBackoffStrategy | None = None,
) -> float:
    """Calculate the wait after a failed attempt.

    The delay is calculated as follows:
    1. base delay = backoff_strategy.calculate(attempt), which defaults to
       initial_delay * (backoff_multiplier ** (attempt - 1))
    2. the base delay is capped at max_delay (if set)
    3. jitter (if jitter_factor > 0) adds
       random.uniform(0, jitter_factor) * delay on top of the capped delay

    Args:
        attempt: The number of the attempt that just failed (1-indexed).
        initial_delay: Delay in seconds after the first failed attempt.
        backoff_multiplier: Growth factor between consecutive delays.
        max_delay: Optional maximum delay cap in seconds.
        jitter_factor: Factor for adding random jitter. 0 disables it.
        backoff_strategy: Optional strategy replacing the exponential
            formula.

    Returns:
        The delay in seconds, including any jitter applied.

    Example:
        ```pycon
        >>> from aresponsive.retry import calculate_delay
        >>> calculate_delay(attempt=1, initial_delay=1.0, backoff_multiplier=2.0)
        1.0
        >>> calculate_delay(attempt=2, initial_delay=1.0, backoff_multiplier=2.0)
        2.0
        >>> calculate_delay(attempt=5, initial_delay=1.0, backoff_multiplier=2.0, max_delay=10.0)
        10.0
        >>> calculate_delay(attempt=4, initial_delay=0.5, backoff_multiplier=1.0)
        0.5

        ```
    """
    if backoff_strategy is None:
        backoff_strategy = ExponentialBackoff(
            initial_delay=initial_delay, multiplier=backoff_multiplier
        )
    delay = backoff_strategy.calculate(attempt)

    if max_delay is not None and delay > max_delay:
        logger.debug(f"Capping delay from {delay:.2f}s to {max_delay:.2f}s")
        delay = max_delay

    if jitter_factor > 0:
        jitter = random.uniform(0, jitter_factor) * delay  # noqa: S311
        logger.debug(f"Adding {jitter:.2f}s of jitter to a {delay:.2f}s delay")
        delay += jitter
    return delay


class RetryStrategy:
    """Strategy for calculating retry delays from a retry configuration.

    Args:
        config: The retry configuration.

    Example:
        ```pycon
        >>> from aresponsive import RetryConfig
        >>> from aresponsive.retry import RetryStrategy
        >>> strategy = RetryStrategy(RetryConfig(initial_delay=0.5))
        >>> strategy.calculate_delay(1), strategy.calculate_delay(2)
        (0.5, 1.0)

        ```
    """

    def __init__(self, config: RetryConfig) -> None:
        self.config = config

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay before the attempt following ``attempt``.

        Args:
            attempt: The number of the attempt that just failed (1-indexed).

        Returns:
            Sleep time in seconds.
        """
        return calculate_delay(
            attempt=attempt,
            initial_delay=self.config.initial_delay,
            backoff_multiplier=self.config.backoff_multiplier,
            max_delay=self.config.max_delay,
            jitter_factor=self.config.jitter_factor,
            backoff_strategy=self.config.backoff_strategy,
        )
