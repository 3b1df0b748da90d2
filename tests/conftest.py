from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make retry tests run faster.

    Do not combine with tests that wait on real timers: they rely on
    ``asyncio.sleep`` to let the event loop run.
    """
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_operation() -> AsyncMock:
    """Create a mock async operation returning ``"ok"``."""
    return AsyncMock(return_value="ok")


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks.

    This fixture provides a simple Mock object that can be used to test
    callback and listener functionality across different test scenarios.

    Returns:
        A Mock object that can be used as a callback function.

    Example:
        >>> def test_callback(mock_callback):
        ...     executor = RetryExecutor(on_success=mock_callback)
        ...     mock_callback.assert_called_once()
    """
    return Mock()
