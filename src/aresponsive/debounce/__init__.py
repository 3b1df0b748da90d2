r"""Debounce and throttle schedulers.

This package provides the value form (``DebounceScheduler``), the
callback forms (``DebouncedCallback``, ``ThrottledCallback``) and a
debounced search box (``DebouncedSearch``).
"""

from __future__ import annotations

__all__ = [
    "DebounceScheduler",
    "DebouncedCallback",
    "DebouncedSearch",
    "ThrottledCallback",
    "debounce_callback",
    "throttle_callback",
]

from aresponsive.debounce.callback import (
    DebouncedCallback,
    ThrottledCallback,
    debounce_callback,
    throttle_callback,
)
from aresponsive.debounce.scheduler import DebounceScheduler
from aresponsive.debounce.search import DebouncedSearch
