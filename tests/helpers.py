r"""Shared test helpers for request execution tests.

This module contains common test infrastructure used across multiple
test files: a handler for ``httpx.MockTransport`` that records every
request it receives, and a response stream that fails while being
read.
"""

from __future__ import annotations

__all__ = [
    "HTTPBIN_URL",
    "TEST_URL",
    "FailingStream",
    "RecordingHandler",
    "TrackingStream",
    "create_mock_client",
]

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

TEST_URL = "https://api.example.com/data"

# Use httpbin.org for real HTTP testing
HTTPBIN_URL = "https://httpbin.org"


class RecordingHandler:
    r"""Request handler for ``httpx.MockTransport`` that records
    requests.

    Args:
        respond: Function building the response for a request. If
            ``None``, every request gets an empty 200 response.
    """

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response] | None = None) -> None:
        self._respond = respond or (lambda request: httpx.Response(200))  # noqa: ARG005
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self._respond(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


class FailingStream(httpx.SyncByteStream):
    r"""Response stream that yields one chunk then fails."""

    def __iter__(self) -> Iterator[bytes]:
        yield b'{"partial":'
        msg = "connection reset while reading body"
        raise httpx.ReadError(msg)


class TrackingStream(httpx.SyncByteStream):
    r"""Response stream that records whether it was fully read and
    closed."""

    def __init__(self, chunks: tuple[bytes, ...] = (b"moved",)) -> None:
        self._chunks = chunks
        self.drained = False
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        yield from self._chunks
        self.drained = True

    def close(self) -> None:
        self.closed = True


def create_mock_client(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> httpx.Client:
    r"""Create an ``httpx.Client`` whose requests are answered by
    ``handler``."""
    return httpx.Client(transport=httpx.MockTransport(handler), **kwargs)
