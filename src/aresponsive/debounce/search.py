r"""Debounced search query."""

from __future__ import annotations

__all__ = ["DebouncedSearch"]

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

from aresponsive.core.config import DEFAULT_DEBOUNCE_DELAY, DebounceConfig
from aresponsive.debounce.scheduler import DebounceScheduler

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class DebouncedSearch:
    """Search box state with a debounced query.

    ``on_search`` runs with the debounced query once typing pauses for
    ``delay`` seconds, unless the query went back to ``initial_query``.
    ``is_searching`` is True until ``on_search`` returns, or until the
    awaitable it returned completes.

    Args:
        on_search: Called with the debounced query. May be a coroutine
            function.
        delay: Quiet window in seconds.
        initial_query: The query shown before any typing.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresponsive import DebouncedSearch
        >>> async def main():
        ...     search = DebouncedSearch(print, delay=0.05)
        ...     search.set_query("py")
        ...     search.set_query("pyt")
        ...     await asyncio.sleep(0.1)
        ...     return search.debounced_query
        ...
        >>> asyncio.run(main())
        pyt
        'pyt'

        ```
    """

    def __init__(
        self,
        on_search: Callable[[str], Any],
        delay: float = DEFAULT_DEBOUNCE_DELAY,
        initial_query: str = "",
    ) -> None:
        self.on_search = on_search
        self.initial_query = initial_query
        self._scheduler: DebounceScheduler[str] = DebounceScheduler(
            initial_query, DebounceConfig(delay=delay), on_emit=self._on_debounced
        )
        self._search_task: asyncio.Task | None = None
        self._is_searching = False

    @property
    def query(self) -> str:
        return self._scheduler.value

    @property
    def debounced_query(self) -> str:
        return self._scheduler.debounced_value

    @property
    def is_searching(self) -> bool:
        return self._is_searching

    @property
    def is_pending(self) -> bool:
        return self._scheduler.is_pending

    def set_query(self, query: str) -> None:
        self._scheduler.set_value(query)

    def clear_query(self) -> None:
        self._scheduler.set_value("")

    def flush(self) -> None:
        self._scheduler.flush()

    async def wait_searched(self) -> None:
        """Wait for the in-flight asynchronous search, if any.

        Raises:
            Exception: The error raised by the search, if it failed.
        """
        if self._search_task is not None:
            await asyncio.shield(self._search_task)

    def dispose(self) -> None:
        """Cancel the pending query; an in-flight search is left running."""
        self._scheduler.dispose()

    def _on_debounced(self, query: str) -> None:
        if query == self.initial_query:
            return
        logger.debug(f"Searching for {query!r}")
        self._is_searching = True
        try:
            result = self.on_search(query)
        except Exception:
            self._is_searching = False
            raise
        if inspect.isawaitable(result):
            self._search_task = asyncio.ensure_future(result)
            self._search_task.add_done_callback(self._on_search_done)
        else:
            self._is_searching = False

    def _on_search_done(self, task: asyncio.Task) -> None:
        if task is self._search_task:
            self._is_searching = False
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Search failed: {task.exception()!r}")
