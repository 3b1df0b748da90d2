r"""Backoff strategies for retry delays.

This package provides the strategies used by the retry executor to
compute the wait between two attempts: exponential growth with a
configurable multiplier, and a constant interval.
"""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ConstantBackoff", "ExponentialBackoff"]

from aresponsive.backoff.base import BaseBackoffStrategy
from aresponsive.backoff.constant import ConstantBackoff
from aresponsive.backoff.exponential import ExponentialBackoff
