r"""Retry package for caller-supplied async operations.

Public API:
    - RetryExecutor: Asynchronous retry executor with observable state
    - RetryState: Snapshot of the executor state
    - RetryStrategy: Strategy for calculating retry delays
    - calculate_delay: Backoff delay for a failed attempt
    - execute_with_retry, simple_retry, exponential_backoff_retry:
      one-shot functional helpers
"""

from __future__ import annotations

__all__ = [
    "RetryExecutor",
    "RetryState",
    "RetryStrategy",
    "calculate_delay",
    "execute_with_retry",
    "exponential_backoff_retry",
    "simple_retry",
]

from aresponsive.retry.executor import RetryExecutor
from aresponsive.retry.functional import (
    execute_with_retry,
    exponential_backoff_retry,
    simple_retry,
)
from aresponsive.retry.state import RetryState
from aresponsive.retry.strategy import RetryStrategy, calculate_delay
