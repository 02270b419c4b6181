r"""Execution of a single GET/POST exchange.

``execute_request`` turns the settings accumulated by a
``RequestBuilder`` plus a target URL and payload into the raw response
body, or raises the ``HttpRequestError`` subclass matching the stage
that failed.
"""

from __future__ import annotations

__all__ = ["execute_request"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from reqchain.core.clients import get_default_client
from reqchain.core.config import GZIP_ENCODING, JSON_CONTENT_TYPE, STATUS_ERROR_THRESHOLD
from reqchain.core.validation import validate_timeout, validate_url
from reqchain.exceptions import (
    RedirectError,
    RequestConstructionError,
    RequestTimeoutError,
    ResponseReadError,
    StatusError,
    TransportError,
)
from reqchain.utils.curl import emit_curl_log, format_curl, write_curl_log
from reqchain.utils.payload import encode_payload, gzip_compress

if TYPE_CHECKING:
    import os

logger: logging.Logger = logging.getLogger(__name__)


def execute_request(
    url: str | httpx.URL,
    *,
    post: bool = False,
    data: Any = None,
    need_result: bool = True,
    client: httpx.Client | None = None,
    headers: httpx.Headers | None = None,
    compress: bool = False,
    follow_redirects: bool = True,
    log_enabled: bool = False,
    log_path: str | os.PathLike | None = None,
    timeout: float | httpx.Timeout | None = None,
) -> bytes | None:
    """Send one GET or POST request and return the response body.

    The request goes through these stages, in order: payload encoding,
    optional gzip compression, request assembly, optional curl logging,
    dispatch, body capture and status classification. The response is
    always drained and closed, whether or not its body is needed.

    Args:
        url: The target URL.
        post: Whether to send a POST (``True``) or a GET (``False``).
            Only POST requests carry ``data``.
        data: The POST payload. See ``encode_payload`` for how each
            payload type is encoded.
        need_result: Whether the caller needs the body. If ``False``
            the body is discarded unread.
        client: The client used to send the request. If ``None``, the
            process-wide default client is used.
        headers: Headers added to the request, on top of the client
            defaults.
        compress: Whether to gzip a non-empty request body.
        follow_redirects: If ``False``, a redirect response raises
            ``RedirectError`` instead of being followed. If ``True``,
            the client's own redirect setting applies.
        log_enabled: Whether to print the curl command to stderr.
        log_path: Optional file that receives the curl command.
        timeout: Optional timeout for this exchange. If ``None``, the
            client's timeout applies. Must be > 0.

    Returns:
        The response body if ``need_result`` is ``True`` (possibly
        empty), otherwise ``None``.

    Raises:
        SerializationError: If the payload cannot be serialized.
        CompressionError: If the body cannot be compressed.
        RequestConstructionError: If the request cannot be built.
        LoggingError: If the curl command cannot be written to
            ``log_path``. The request is not sent in that case.
        RedirectError: If redirects are disabled and a redirect
            response is received.
        RequestTimeoutError: If the exchange times out.
        TransportError: If the exchange fails at the network level.
        ResponseReadError: If the response body cannot be read.
        StatusError: If the response status code is >= 300.
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> import httpx
        >>> from reqchain.request import execute_request
        >>> client = httpx.Client(
        ...     transport=httpx.MockTransport(lambda request: httpx.Response(200, text="ok"))
        ... )
        >>> execute_request("https://example.com", client=client)
        b'ok'

        ```
    """
    validate_url(url)
    validate_timeout(timeout)

    method = "POST" if post else "GET"
    raw_body = encode_payload(data) if post else None

    body = raw_body
    gzipped = False
    if raw_body and compress:
        body = gzip_compress(raw_body)
        gzipped = True

    request_headers = httpx.Headers(headers)
    if post:
        request_headers["Content-Type"] = JSON_CONTENT_TYPE

    client = client if client is not None else get_default_client()
    try:
        request = client.build_request(
            method,
            url,
            content=body,
            headers=request_headers,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
    except (httpx.InvalidURL, TypeError) as exc:
        msg = f"cannot build {method} request to {url}: {exc}"
        raise RequestConstructionError(msg, method=method, url=str(url), cause=exc) from exc

    if log_enabled or log_path:
        encoding = request_headers.encoding
        command = format_curl(
            method,
            str(url),
            headers=[
                (name.decode(encoding), value.decode(encoding))
                for name, value in request_headers.raw
            ],
            body=raw_body,
        )
        if log_path:
            write_curl_log(log_path, command)
        if log_enabled:
            emit_curl_log(command)

    # Set after logging so the curl command replays the uncompressed body
    if gzipped:
        request.headers["Content-Encoding"] = GZIP_ENCODING

    response = _send(client, request, follow_redirects=follow_redirects)
    try:
        if not follow_redirects and response.has_redirect_location:
            location = response.headers.get("Location")
            logger.debug(
                f"{method} request to {url} was redirected to {location} "
                f"while redirects are disabled"
            )
            _read_body(response, need_result=False)
            msg = f"redirect: {method} request to {url} returned {response.status_code} to {location}"
            raise RedirectError(
                msg,
                location=location,
                method=method,
                url=str(url),
                status_code=response.status_code,
                response=response,
            )
        content = _read_body(response, need_result=need_result)
    finally:
        response.close()

    if response.status_code >= STATUS_ERROR_THRESHOLD:
        captured = content or b""
        logger.debug(f"{method} request to {url} failed with status {response.status_code}")
        msg = (
            f"response err: {response.status_code} {response.reason_phrase} "
            f"{captured.decode('utf-8', errors='replace')}"
        )
        raise StatusError(
            msg,
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            body=captured,
            method=method,
            url=str(url),
            response=response,
        )
    return content


def _send(client: httpx.Client, request: httpx.Request, *, follow_redirects: bool) -> httpx.Response:
    method = request.method
    url = request.url
    logger.debug(f"Sending {method} request to {url}")
    kwargs: dict[str, Any] = {"stream": True}
    if not follow_redirects:
        kwargs["follow_redirects"] = False
    try:
        return client.send(request, **kwargs)
    except httpx.TimeoutException as exc:
        logger.debug(f"{method} request to {url} timed out: {exc}")
        msg = f"{method} request to {url} timed out: {exc}"
        raise RequestTimeoutError(msg, method=method, url=str(url), cause=exc) from exc
    except httpx.RequestError as exc:
        error_type = type(exc).__name__
        logger.debug(f"{method} request to {url} encountered {error_type}: {exc}")
        msg = f"{method} request to {url} failed: {exc}"
        raise TransportError(msg, method=method, url=str(url), cause=exc) from exc


def _read_body(response: httpx.Response, *, need_result: bool) -> bytes | None:
    try:
        if need_result:
            return response.read()
        if not response.is_stream_consumed:
            for _ in response.iter_raw():
                pass
    except httpx.RequestError as exc:
        request = response.request
        msg = f"cannot read response body of {request.method} request to {request.url}: {exc}"
        raise ResponseReadError(
            msg,
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
            response=response,
            cause=exc,
        ) from exc
    return None
