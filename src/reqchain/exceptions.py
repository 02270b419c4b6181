r"""Exceptions raised while configuring or executing a request.

Every failure of a ``RequestBuilder`` surfaces as a subclass of
``HttpRequestError`` so callers can either catch the whole family or
branch on the stage that failed (configuration, serialization,
compression, request construction, logging, transport, body read,
status classification or decoding).
"""

from __future__ import annotations

__all__ = [
    "CompressionError",
    "ConfigurationError",
    "DecodeError",
    "HttpRequestError",
    "LoggingError",
    "RedirectError",
    "RequestConstructionError",
    "RequestTimeoutError",
    "ResponseReadError",
    "SerializationError",
    "StatusError",
    "TransportError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class HttpRequestError(RuntimeError):
    r"""Base class for all errors raised by ``reqchain``.

    Args:
        message: The human-readable error message.
        method: The HTTP method of the request, if one was resolved.
        url: The target URL, if one was given.
        status_code: The HTTP status code, if a response was received.
        response: The ``httpx.Response``, if a response was received.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from reqchain.exceptions import HttpRequestError
        >>> exc = HttpRequestError(
        ...     "GET request to https://example.com failed",
        ...     method="GET",
        ...     url="https://example.com",
        ... )
        >>> exc.method
        'GET'

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        url: str | None = None,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.method = method
        self.url = url
        self.status_code = status_code
        self.response = response
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(message={self.message!r}, method={self.method!r}, "
            f"url={self.url!r}, status_code={self.status_code!r})"
        )


class ConfigurationError(HttpRequestError):
    r"""Raised when the builder was configured with an invalid value.

    The error is recorded while configuring and raised by every later
    execution of the same builder.
    """


class SerializationError(HttpRequestError):
    r"""Raised when a POST payload cannot be converted to JSON."""


class CompressionError(HttpRequestError):
    r"""Raised when gzip compression of the request body fails."""


class RequestConstructionError(HttpRequestError):
    r"""Raised when ``httpx`` cannot build a request from the method and
    URL."""


class LoggingError(HttpRequestError):
    r"""Raised when the curl command cannot be written to the log
    file."""


class TransportError(HttpRequestError):
    r"""Raised when the exchange fails at the network level."""


class RequestTimeoutError(TransportError):
    r"""Raised when the exchange exceeds its timeout."""


class RedirectError(TransportError):
    r"""Raised when a redirect response is received while redirects are
    disabled.

    Args:
        message: The human-readable error message.
        location: The value of the ``Location`` header of the redirect.
        **kwargs: See ``HttpRequestError``.
    """

    def __init__(self, message: str, *, location: str | None = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.location = location


class ResponseReadError(HttpRequestError):
    r"""Raised when the response body cannot be fully read."""


class StatusError(HttpRequestError):
    r"""Raised when the response status code is 300 or higher.

    Args:
        message: The human-readable error message.
        status_code: The numeric status code.
        reason_phrase: The status text, e.g. ``"Not Found"``.
        body: The captured response body. It is empty when the caller
            did not ask for a result, since the body is then discarded.
        **kwargs: See ``HttpRequestError``.

    Example:
        ```pycon
        >>> from reqchain.exceptions import StatusError
        >>> exc = StatusError(
        ...     "response err: 404 Not Found not found",
        ...     status_code=404,
        ...     reason_phrase="Not Found",
        ...     body=b"not found",
        ... )
        >>> exc.text
        'not found'

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        reason_phrase: str = "",
        body: bytes = b"",
        **kwargs,
    ) -> None:
        super().__init__(message, status_code=status_code, **kwargs)
        self.reason_phrase = reason_phrase
        self.body = body

    @property
    def text(self) -> str:
        r"""The captured body decoded as UTF-8."""
        return self.body.decode("utf-8", errors="replace")


class DecodeError(HttpRequestError):
    r"""Raised when the response body cannot be decoded into the
    requested result."""
