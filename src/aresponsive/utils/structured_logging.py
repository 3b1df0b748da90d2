r"""Structured logging utilities for machine-readable log output.

This module provides utilities for structured logging with JSON
formatting, interaction IDs, and consistent field names. The controllers
log their phase transitions through ``log_structured`` so that the extra
fields (component, phase, attempt...) end up in the JSON output.

The structured logging system is opt-in and can be enabled by configuring
Python's logging system to use the provided formatter.

Example:
    Enable structured logging for aresponsive:

    ```python
    import logging
    from aresponsive.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("aresponsive")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```

    Tag every log line of one user interaction (a search session, a
    feed screen) with the same ID:

    ```python
    from aresponsive.utils.structured_logging import (
        clear_interaction_id,
        set_interaction_id,
    )

    set_interaction_id("feed-screen-1")
    try:
        await controller.load_more()
    finally:
        clear_interaction_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_interaction_id",
    "get_interaction_id",
    "log_structured",
    "set_interaction_id",
]

import contextvars
import json
import logging
import time
from typing import Any

# Context variable for the interaction ID (task-local under asyncio)
_interaction_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "interaction_id", default=None
)

_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "sinfo",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


def get_interaction_id() -> str | None:
    """Get the current interaction ID.

    Returns:
        The current interaction ID, or None if not set.

    Example:
        ```pycon
        >>> from aresponsive.utils.structured_logging import (
        ...     clear_interaction_id,
        ...     get_interaction_id,
        ...     set_interaction_id,
        ... )
        >>> set_interaction_id("search-42")
        >>> get_interaction_id()
        'search-42'
        >>> clear_interaction_id()
        >>> get_interaction_id()

        ```
    """
    return _interaction_id.get()


def set_interaction_id(interaction_id: str) -> None:
    """Set the interaction ID for the current context.

    The ID is stored in a context variable, so tasks created afterwards
    inherit it while tasks created before keep their own value.

    Args:
        interaction_id: The identifier to attach to log records.
    """
    _interaction_id.set(interaction_id)


def clear_interaction_id() -> None:
    """Clear the interaction ID for the current context."""
    _interaction_id.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - interaction_id: Optional interaction ID
        - module, function, line: Origin of the record

    Any additional fields added via the ``extra`` parameter in logging
    calls are included in the JSON output. Values that are not JSON
    serializable (enums, exceptions) are rendered with ``str``.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from aresponsive.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("test_logger")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Load started", extra={"component": "scroll"})
        >>> output = stream.getvalue()
        >>> "Load started" in output
        True
        >>> "component" in output
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        interaction_id = get_interaction_id()
        if interaction_id is not None:
            log_data["interaction_id"] = interaction_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        """Format timestamp as ISO 8601 with millisecond precision."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Additional structured fields to include in the log.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from aresponsive.utils.structured_logging import (
        ...     StructuredFormatter,
        ...     log_structured,
        ... )
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("test_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.DEBUG)
        >>> log_structured(logger, logging.INFO, "Phase changed", old="idle", new="pulling")
        >>> '"new": "pulling"' in stream.getvalue()
        True

        ```
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=extra)
