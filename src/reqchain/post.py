r"""One-shot JSON POST request without keeping a builder around."""

from __future__ import annotations

__all__ = ["post_json"]

from typing import TYPE_CHECKING, Any

from reqchain.builder import RequestBuilder

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx


def post_json(
    url: str | httpx.URL,
    data: Any = None,
    result: Any = None,
    *,
    client: httpx.Client | None = None,
    headers: Mapping[str, str] | None = None,
    compressed: bool = False,
    timeout: float | httpx.Timeout | None = None,
) -> Any:
    r"""Send a POST request labelled as JSON and decode the response
    body.

    This is a shortcut for a ``RequestBuilder`` configured with
    ``client``, ``headers`` and, optionally, body compression.

    Args:
        url: The target URL.
        data: The payload, see ``encode_payload``.
        result: The requested result, see ``decode_result``.
        client: Optional ``httpx.Client`` used to send the request.
        headers: Optional headers added to the request.
        compressed: Whether to gzip the request body.
        timeout: Optional timeout for this request in seconds.

    Returns:
        The decoded result, or ``None`` if no result was requested or
        the body is empty.

    Raises:
        HttpRequestError: If the request fails.

    Example:
        ```pycon
        >>> from reqchain import post_json
        >>> created = post_json(
        ...     "https://api.example.com/items", {"name": "x"}, dict
        ... )  # doctest: +SKIP

        ```
    """
    builder = RequestBuilder(client=client)
    for name, value in (headers or {}).items():
        builder.header(name, value)
    if compressed:
        builder.compressed()
    return builder.post_json(url, data, result, timeout=timeout)
