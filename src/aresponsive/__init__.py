r"""aresponsive - Asynchronous interaction orchestration for content
browsing UIs.

This package schedules the asynchronous work triggered by user
interaction: debounced values and callbacks, infinite scroll loading
driven by viewport proximity, pull-to-refresh driven by touch gestures,
and retries with exponential backoff around any of these operations.
Every component runs on the asyncio event loop and owns its timers.

Key Features:
    - Debounce and throttle for values, callbacks and search queries
    - Infinite scroll controller that never runs two loads at once
    - Pull-to-refresh state machine with resistance and threshold
    - Retry executor with exponential or constant backoff and jitter
    - Immutable snapshots and listeners for every state machine
    - Lifecycle callbacks and structured JSON logging

Example:
    ```pycon
    >>> import asyncio
    >>> from aresponsive import RetryConfig, execute_with_retry
    >>> calls = []
    >>> async def fetch_page():
    ...     calls.append(1)
    ...     if len(calls) < 2:
    ...         raise ConnectionError("offline")
    ...     return ["item"]
    ...
    >>> asyncio.run(execute_with_retry(fetch_page, RetryConfig(initial_delay=0.01)))
    ['item']

    ```
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
    "AresponsiveError",
    "DebounceConfig",
    "DebounceScheduler",
    "DebouncedCallback",
    "DebouncedSearch",
    "DisposedError",
    "GesturePhase",
    "InfiniteScrollConfig",
    "InfiniteScrollController",
    "Outcome",
    "ProximityObserver",
    "PullToRefreshConfig",
    "PullToRefreshMachine",
    "RefreshableFeed",
    "RetryConfig",
    "RetryExecutor",
    "RetryExhaustedError",
    "RetryState",
    "ScrollPhase",
    "ThrottledCallback",
    "TouchSurface",
    "VisibleWindow",
    "__version__",
    "compute_visible_window",
    "debounce_callback",
    "execute_with_retry",
    "exponential_backoff_retry",
    "simple_pull_to_refresh",
    "simple_retry",
    "throttle_callback",
]

from importlib.metadata import PackageNotFoundError, version

from aresponsive.config import (
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
from aresponsive.core.config import (
    DebounceConfig,
    InfiniteScrollConfig,
    PullToRefreshConfig,
    RetryConfig,
)
from aresponsive.debounce import (
    DebouncedCallback,
    DebouncedSearch,
    DebounceScheduler,
    ThrottledCallback,
    debounce_callback,
    throttle_callback,
)
from aresponsive.exceptions import AresponsiveError, DisposedError, RetryExhaustedError
from aresponsive.feed import RefreshableFeed
from aresponsive.gesture import (
    GesturePhase,
    PullToRefreshMachine,
    TouchSurface,
    simple_pull_to_refresh,
)
from aresponsive.outcome import Outcome
from aresponsive.retry import (
    RetryExecutor,
    RetryState,
    execute_with_retry,
    exponential_backoff_retry,
    simple_retry,
)
from aresponsive.scroll import (
    InfiniteScrollController,
    ProximityObserver,
    ScrollPhase,
    VisibleWindow,
    compute_visible_window,
)

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
