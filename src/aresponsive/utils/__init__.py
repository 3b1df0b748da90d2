r"""Utilities shared by the controllers: listener registry and
structured logging."""

from __future__ import annotations

__all__ = [
    "ListenerRegistry",
    "StructuredFormatter",
    "clear_interaction_id",
    "get_interaction_id",
    "log_structured",
    "set_interaction_id",
]

from aresponsive.utils.listeners import ListenerRegistry
from aresponsive.utils.structured_logging import (
    StructuredFormatter,
    clear_interaction_id,
    get_interaction_id,
    log_structured,
    set_interaction_id,
)
