r"""Argument validation for request execution.

These checks run before any request is built so that programming
errors surface as ``ValueError``/``TypeError`` rather than as request
failures.
"""

from __future__ import annotations

__all__ = ["validate_timeout", "validate_url"]

import httpx


def validate_timeout(timeout: float | httpx.Timeout | None) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for the exchange. ``None``
            means the client's own timeout is used. Must be > 0 if
            provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from reqchain.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_url(url: str | httpx.URL) -> None:
    """Validate the target URL argument.

    Only the argument type is checked here. Whether the URL can be
    turned into a request is decided by ``httpx`` when the request is
    built.

    Args:
        url: The target URL.

    Raises:
        TypeError: If url is neither a ``str`` nor an ``httpx.URL``.
    """
    if not isinstance(url, (str, httpx.URL)):
        msg = f"url must be a str or httpx.URL, got {type(url).__name__}"
        raise TypeError(msg)
