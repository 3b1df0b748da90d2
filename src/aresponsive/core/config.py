r"""Configuration dataclasses and defaults for the interaction
controllers.

This module provides configuration constants and dataclass-based
configuration objects for the debounce scheduler, the retry executor,
the infinite scroll controller and the pull-to-refresh machine. All
durations are expressed in seconds.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_MULTIPLIER",
    "DEFAULT_DEBOUNCE_DELAY",
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_PULL_THRESHOLD",
    "DEFAULT_RESISTANCE",
    "DEFAULT_SCROLL_DEBOUNCE",
    "DEFAULT_THRESHOLD_PX",
    "DebounceConfig",
    "InfiniteScrollConfig",
    "PullToRefreshConfig",
    "RetryConfig",
]

from dataclasses import asdict, dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aresponsive.core.validation import (
    validate_debounce_params,
    validate_pull_params,
    validate_retry_params,
    validate_scroll_params,
)

if TYPE_CHECKING:
    from aresponsive.backoff import BaseBackoffStrategy


# Default quiet window for debounced values, tuned for keystrokes
DEFAULT_DEBOUNCE_DELAY = 0.3

# Default total number of attempts (first attempt + retries)
DEFAULT_MAX_ATTEMPTS = 3

# Default delay before the first retry
# Wait time = initial_delay * (backoff_multiplier ** (attempt - 1))
# With 1.0 and 2.0: 1st retry waits 1s, 2nd waits 2s, 3rd waits 4s
DEFAULT_INITIAL_DELAY = 1.0
DEFAULT_BACKOFF_MULTIPLIER = 2.0
DEFAULT_MAX_DELAY = 10.0

# Root margin around the viewport and debounce window for intersection signals
DEFAULT_THRESHOLD_PX = 100.0
DEFAULT_SCROLL_DEBOUNCE = 0.1

# Pull distance (after resistance) required to commit to a refresh
DEFAULT_PULL_THRESHOLD = 80.0
DEFAULT_RESISTANCE = 0.5


class _MergeMixin:
    def merge(self, **overrides: Any) -> Any:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied; the current instance
        is left unchanged.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new config instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary.

        Returns:
            Dictionary with one entry per configuration field.
        """
        return asdict(self)


@dataclass(frozen=True)
class DebounceConfig(_MergeMixin):
    """Configuration for debounced values and callbacks.

    Args:
        delay: Quiet window in seconds. Each update restarts the window.
        max_wait: Optional maximum time in seconds between the first
            update of a burst and its emission.
        leading: Emit immediately on the first update of a burst when the
            last emission is older than ``delay``.
        trailing: Emit the latest value when the window closes.

    Example:
        ```pycon
        >>> from aresponsive.core.config import DebounceConfig
        >>> config = DebounceConfig()
        >>> config.delay
        0.3
        >>> config.merge(delay=0.5).delay
        0.5

        ```
    """

    delay: float = DEFAULT_DEBOUNCE_DELAY
    max_wait: float | None = None
    leading: bool = False
    trailing: bool = True

    def __post_init__(self) -> None:
        validate_debounce_params(
            delay=self.delay,
            max_wait=self.max_wait,
            leading=self.leading,
            trailing=self.trailing,
        )


@dataclass(frozen=True)
class RetryConfig(_MergeMixin):
    """Configuration for retry behavior.

    Args:
        max_attempts: Total number of attempts, including the first one.
        initial_delay: Delay in seconds before the first retry.
        backoff_multiplier: Factor applied to the delay after each failed
            attempt. ``1.0`` gives fixed-interval retries.
        max_delay: Maximum delay in seconds between two attempts.
        jitter_factor: Factor for adding random jitter to backoff delays.
            The jitter is ADDED to the computed delay. ``0`` disables it.
        backoff_strategy: Optional custom backoff strategy. When set, it
            replaces the ``initial_delay``/``backoff_multiplier`` formula;
            ``max_delay`` still caps the result.
        retry_on: Exception types treated as retryable operation failures.
            Other exceptions propagate immediately.

    Example:
        ```pycon
        >>> from aresponsive.core.config import RetryConfig
        >>> config = RetryConfig()
        >>> config.max_attempts
        3
        >>> config = RetryConfig(max_attempts=5)
        >>> merged = config.merge(initial_delay=0.5)
        >>> merged.initial_delay
        0.5
        >>> merged.max_attempts
        5

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_delay: float = DEFAULT_INITIAL_DELAY
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER
    max_delay: float | None = DEFAULT_MAX_DELAY
    jitter_factor: float = 0.0
    backoff_strategy: BaseBackoffStrategy | None = None
    retry_on: tuple[type[BaseException], ...] = field(default_factory=lambda: (Exception,))

    def __post_init__(self) -> None:
        validate_retry_params(
            max_attempts=self.max_attempts,
            initial_delay=self.initial_delay,
            backoff_multiplier=self.backoff_multiplier,
            max_delay=self.max_delay,
            jitter_factor=self.jitter_factor,
        )

    def to_dict(self) -> dict[str, Any]:
        # asdict() would deep-copy the strategy object
        return {
            "max_attempts": self.max_attempts,
            "initial_delay": self.initial_delay,
            "backoff_multiplier": self.backoff_multiplier,
            "max_delay": self.max_delay,
            "jitter_factor": self.jitter_factor,
            "backoff_strategy": self.backoff_strategy,
            "retry_on": self.retry_on,
        }


@dataclass(frozen=True)
class InfiniteScrollConfig(_MergeMixin):
    """Configuration for the infinite scroll controller.

    Args:
        threshold_px: Root margin in pixels: the sentinel counts as
            intersecting once it is this close to the viewport.
        debounce: Debounce window in seconds applied to intersection
            signals before a load starts.
        enabled: Whether the controller reacts to intersection signals.
    """

    threshold_px: float = DEFAULT_THRESHOLD_PX
    debounce: float = DEFAULT_SCROLL_DEBOUNCE
    enabled: bool = True

    def __post_init__(self) -> None:
        validate_scroll_params(threshold_px=self.threshold_px, debounce=self.debounce)


@dataclass(frozen=True)
class PullToRefreshConfig(_MergeMixin):
    """Configuration for the pull-to-refresh machine.

    Args:
        threshold: Pull distance required to commit to a refresh. The pull
            distance itself is clamped to ``threshold * 1.5``.
        resistance: Factor applied to the raw finger travel.
        enabled: Whether the machine reacts to touch events.
    """

    threshold: float = DEFAULT_PULL_THRESHOLD
    resistance: float = DEFAULT_RESISTANCE
    enabled: bool = True

    def __post_init__(self) -> None:
        validate_pull_params(threshold=self.threshold, resistance=self.resistance)
