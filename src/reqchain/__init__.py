r"""reqchain - Chainable HTTP request builder with safe JSON decoding.

This package provides a fluent builder that accumulates request policy
(headers, proxy, client, gzip compression, redirect suppression and
curl-style debug logging) and then performs GET or JSON POST exchanges
on top of httpx, decoding the response without losing numeric
precision.

Key Features:
    - Chainable configuration with deferred configuration errors
    - Proxy support that never mutates a caller-supplied client
    - Optional gzip compression of request bodies
    - Redirect suppression with a dedicated error
    - Reproducible curl commands on stderr and/or in a log file
    - JSON decoding that keeps large integers and decimals exact
    - One error class per failure stage, all under HttpRequestError

Example:
    ```pycon
    >>> from reqchain import PlainHtml, RequestBuilder
    >>> builder = RequestBuilder().header("Accept", "application/json").log()
    >>> data = builder.get("https://api.example.com/data", dict)  # doctest: +SKIP
    >>> page = builder.get("https://example.com", PlainHtml)  # doctest: +SKIP
    >>> builder.compressed().post_json(
    ...     "https://api.example.com/items", {"id": 2**64}
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "CompressionError",
    "ConfigurationError",
    "DecodeError",
    "HttpRequestError",
    "LoggingError",
    "PlainHtml",
    "RawJSON",
    "RedirectError",
    "RequestBuilder",
    "RequestConstructionError",
    "RequestTimeoutError",
    "ResponseReadError",
    "SerializationError",
    "StatusError",
    "TransportError",
    "__version__",
    "get",
    "post_json",
]

import logging
from importlib.metadata import PackageNotFoundError, version

from reqchain.builder import RequestBuilder
from reqchain.exceptions import (
    CompressionError,
    ConfigurationError,
    DecodeError,
    HttpRequestError,
    LoggingError,
    RedirectError,
    RequestConstructionError,
    RequestTimeoutError,
    ResponseReadError,
    SerializationError,
    StatusError,
    TransportError,
)
from reqchain.get import get
from reqchain.post import post_json
from reqchain.utils.decoding import PlainHtml
from reqchain.utils.payload import RawJSON

logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
