r"""Core configuration and validation shared by every controller.

This package contains the configuration dataclasses, their defaults and
the parameter validation used by the debounce scheduler, the retry
executor, the infinite scroll controller and the pull-to-refresh
machine.
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
    "validate_debounce_params",
    "validate_pull_params",
    "validate_retry_params",
    "validate_scroll_params",
]

from aresponsive.core.config import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_DEBOUNCE_DELAY,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_DELAY,
    DEFAULT_PULL_THRESHOLD,
    DEFAULT_RESISTANCE,
    DEFAULT_SCROLL_DEBOUNCE,
    DEFAULT_THRESHOLD_PX,
    DebounceConfig,
    InfiniteScrollConfig,
    PullToRefreshConfig,
    RetryConfig,
)
from aresponsive.core.validation import (
    validate_debounce_params,
    validate_pull_params,
    validate_retry_params,
    validate_scroll_params,
)
