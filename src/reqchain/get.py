r"""One-shot GET request without keeping a builder around."""

from __future__ import annotations

__all__ = ["get"]

from typing import TYPE_CHECKING, Any

from reqchain.builder import RequestBuilder

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx


def get(
    url: str | httpx.URL,
    result: Any = None,
    *,
    client: httpx.Client | None = None,
    headers: Mapping[str, str] | None = None,
    timeout: float | httpx.Timeout | None = None,
) -> Any:
    r"""Send a GET request and decode the response body.

    This is a shortcut for a ``RequestBuilder`` configured with
    ``client`` and ``headers``.

    Args:
        url: The target URL.
        result: The requested result, see ``decode_result``.
        client: Optional ``httpx.Client`` used to send the request.
        headers: Optional headers added to the request.
        timeout: Optional timeout for this request in seconds.

    Returns:
        The decoded result, or ``None`` if no result was requested or
        the body is empty.

    Raises:
        HttpRequestError: If the request fails.

    Example:
        ```pycon
        >>> from reqchain import get
        >>> data = get("https://api.example.com/data", dict)  # doctest: +SKIP

        ```
    """
    builder = RequestBuilder(client=client)
    for name, value in (headers or {}).items():
        builder.header(name, value)
    return builder.get(url, result, timeout=timeout)
