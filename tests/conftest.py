from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from reqchain.core.clients import close_default_client
from tests.helpers import RecordingHandler, create_mock_client

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def handler() -> RecordingHandler:
    """Create a handler answering every request with an empty 200."""
    return RecordingHandler()


@pytest.fixture
def mock_client(handler: RecordingHandler) -> Generator[httpx.Client, None, None]:
    """Create an httpx.Client backed by the recording handler."""
    with create_mock_client(handler) as client:
        yield client


@pytest.fixture
def spy_client() -> httpx.Client:
    """Create a mock httpx.Client to check that nothing is sent."""
    return Mock(spec=httpx.Client)


@pytest.fixture(autouse=True)
def reset_default_client() -> Generator[None, None, None]:
    """Make sure no test leaks the process-wide default client."""
    yield
    close_default_client()
