r"""Default configuration values for the interaction controllers.

This module re-exports the default constants from
aresponsive.core.config, where the configuration dataclasses live.
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
)
