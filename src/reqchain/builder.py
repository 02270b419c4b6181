r"""Fluent builder for configurable GET/POST requests.

A ``RequestBuilder`` accumulates request policy through chained calls
(headers, proxy, client, compression, redirects, debug logging) and
then performs exchanges with ``get`` or ``post_json``. Configuration
errors do not raise when they happen: the first one is recorded and
raised by every later execution.
"""

from __future__ import annotations

__all__ = ["RequestBuilder"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from reqchain.core.clients import build_proxy_transport, clone_client
from reqchain.core.config import DEFAULT_MAX_REDIRECTS, DEFAULT_TIMEOUT
from reqchain.exceptions import ConfigurationError
from reqchain.request import execute_request
from reqchain.utils.decoding import decode_result

if TYPE_CHECKING:
    import os
    from types import TracebackType
    from typing import Self

logger: logging.Logger = logging.getLogger(__name__)


class RequestBuilder:
    r"""Chainable configuration for GET/POST requests.

    Every configuration method mutates the builder and returns it, so
    calls can be chained. The builder can execute any number of
    requests. It is meant to be configured and used by a single owner;
    concurrent executions on an already configured builder are as safe
    as the underlying ``httpx.Client``.

    Once a configuration error has been recorded (see ``with_proxy``),
    further configuration calls are ignored and every execution raises
    that error without any network activity.

    Args:
        client: Optional ``httpx.Client`` used to send requests. If
            ``None``, the process-wide default client is used.

    Example:
        ```pycon
        >>> from reqchain import RequestBuilder
        >>> builder = (
        ...     RequestBuilder()
        ...     .header("Authorization", "Bearer token")
        ...     .compressed()
        ...     .disable_redirect()
        ...     .log()
        ... )
        >>> data = builder.get("https://api.example.com/data", dict)  # doctest: +SKIP

        ```
    """

    def __init__(self, *, client: httpx.Client | None = None) -> None:
        self._headers = httpx.Headers()
        self._build_error: ConfigurationError | None = None
        self._log_enabled = False
        self._log_path: str | os.PathLike | None = None
        self._compress = False
        self._follow_redirects = True
        self._client = client
        self._owned_clients: list[httpx.Client] = []

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(headers={list(self._headers.keys())}, "
            f"compress={self._compress}, follow_redirects={self._follow_redirects}, "
            f"log_enabled={self._log_enabled}, log_path={self._log_path!r}, "
            f"build_error={self._build_error!r})"
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def build_error(self) -> ConfigurationError | None:
        r"""The configuration error recorded on this builder, if any."""
        return self._build_error

    @property
    def client(self) -> httpx.Client | None:
        r"""The client used to send requests, or ``None`` for the
        process-wide default client."""
        return self._client

    @property
    def headers(self) -> httpx.Headers:
        r"""A copy of the headers added to every request."""
        return self._headers.copy()

    def header(self, name: str, value: str) -> Self:
        r"""Set a header, replacing any previous value for the same
        name.

        Header names are case-insensitive.

        Args:
            name: The header name.
            value: The header value.

        Returns:
            The builder.

        Example:
            ```pycon
            >>> from reqchain import RequestBuilder
            >>> builder = RequestBuilder().header("X-Token", "a").header("x-token", "b")
            >>> builder.headers.get_list("X-Token")
            ['b']

            ```
        """
        if self._build_error is not None:
            return self
        self._headers[name] = value
        return self

    def with_proxy(self, proxy_url: str) -> Self:
        r"""Route requests through a proxy.

        An empty URL is ignored. An invalid URL records a
        ``ConfigurationError`` that is raised by every later execution.
        A valid URL attaches a proxy transport to a new client, or to a
        copy of the configured client. A client installed with
        ``with_client`` is never modified.

        Args:
            proxy_url: The proxy URL, e.g. ``"http://proxy.local:3128"``.

        Returns:
            The builder.
        """
        if not proxy_url or self._build_error is not None:
            return self
        try:
            transport = build_proxy_transport(proxy_url)
        except ConfigurationError as exc:
            logger.debug(f"Recording configuration error: {exc}")
            self._build_error = exc
            return self

        if self._client is None:
            client = httpx.Client(
                transport=transport,
                follow_redirects=True,
                max_redirects=DEFAULT_MAX_REDIRECTS,
                timeout=DEFAULT_TIMEOUT,
            )
        else:
            client = clone_client(self._client, transport=transport)
        self._owned_clients.append(client)
        self._client = client
        logger.debug(f"Using proxy {proxy_url}")
        return self

    def with_client(self, client: httpx.Client) -> Self:
        r"""Use ``client`` to send requests.

        This replaces any client configured before, including one built
        by ``with_proxy``. The builder never closes ``client``.

        Args:
            client: The ``httpx.Client`` to use.

        Returns:
            The builder.
        """
        if self._build_error is not None:
            return self
        self._client = client
        return self

    def compressed(self) -> Self:
        r"""Gzip non-empty request bodies and set ``Content-Encoding``."""
        if self._build_error is None:
            self._compress = True
        return self

    def disable_redirect(self) -> Self:
        r"""Raise ``RedirectError`` on redirect responses instead of
        following them."""
        if self._build_error is None:
            self._follow_redirects = False
        return self

    def log(self, enabled: bool = True) -> Self:
        r"""Print each request as a curl command to stderr.

        Args:
            enabled: Whether console logging is enabled.

        Returns:
            The builder.
        """
        if self._build_error is None:
            self._log_enabled = enabled
        return self

    def log_file(self, path: str | os.PathLike) -> Self:
        r"""Write each request as a curl command to ``path``.

        The file is overwritten by every request. If it cannot be
        written, the request fails with ``LoggingError`` and is not
        sent.

        Args:
            path: The log file. An empty string disables file logging.

        Returns:
            The builder.
        """
        if self._build_error is None:
            self._log_path = path or None
        return self

    def get(
        self,
        url: str | httpx.URL,
        result: Any = None,
        *,
        timeout: float | httpx.Timeout | None = None,
    ) -> Any:
        r"""Send a GET request and decode the response body.

        Args:
            url: The target URL.
            result: The requested result, see ``decode_result``. If
                ``None``, the body is discarded and ``None`` is
                returned.
            timeout: Optional timeout for this request in seconds.

        Returns:
            The decoded result, or ``None`` if no result was requested
            or the body is empty.

        Raises:
            HttpRequestError: If the request fails, see
                ``execute_request`` and ``decode_result``.

        Example:
            ```pycon
            >>> from reqchain import PlainHtml, RequestBuilder
            >>> page = RequestBuilder().get("https://example.com", PlainHtml)  # doctest: +SKIP

            ```
        """
        body = self._execute(url, post=False, need_result=result is not None, timeout=timeout)
        return decode_result(body, result)

    def post_json(
        self,
        url: str | httpx.URL,
        data: Any = None,
        result: Any = None,
        *,
        timeout: float | httpx.Timeout | None = None,
    ) -> Any:
        r"""Send a POST request labelled as JSON and decode the response
        body.

        Args:
            url: The target URL.
            data: The payload. ``bytes``, ``RawJSON`` and ``str`` are
                sent verbatim, other values are serialized to JSON. The
                ``Content-Type`` is ``application/json`` in every case.
            result: The requested result, see ``decode_result``.
            timeout: Optional timeout for this request in seconds.

        Returns:
            The decoded result, or ``None`` if no result was requested
            or the body is empty.

        Raises:
            HttpRequestError: If the request fails, see
                ``execute_request`` and ``decode_result``.

        Example:
            ```pycon
            >>> from reqchain import RequestBuilder
            >>> created = RequestBuilder().post_json(
            ...     "https://api.example.com/items", {"name": "x"}, dict
            ... )  # doctest: +SKIP

            ```
        """
        body = self._execute(
            url, post=True, data=data, need_result=result is not None, timeout=timeout
        )
        return decode_result(body, result)

    def close(self) -> None:
        r"""Close the clients created by ``with_proxy``.

        A client installed with ``with_client`` or passed to the
        constructor is left open. Requests sent through a closed proxy
        client fail, so install a new client or proxy before reusing
        the builder.
        """
        for client in self._owned_clients:
            client.close()
        self._owned_clients.clear()

    def _execute(
        self,
        url: str | httpx.URL,
        *,
        post: bool,
        need_result: bool,
        data: Any = None,
        timeout: float | httpx.Timeout | None = None,
    ) -> bytes | None:
        if self._build_error is not None:
            raise self._build_error.with_traceback(None)
        return execute_request(
            url,
            post=post,
            data=data,
            need_result=need_result,
            client=self._client,
            headers=self._headers,
            compress=self._compress,
            follow_redirects=self._follow_redirects,
            log_enabled=self._log_enabled,
            log_path=self._log_path,
            timeout=timeout,
        )
