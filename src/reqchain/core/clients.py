r"""Client resolution and proxy support.

This module owns the process-wide default ``httpx.Client`` and the
helpers used to attach a proxy transport to a client without touching
the client object the caller handed over.
"""

from __future__ import annotations

__all__ = [
    "build_proxy_transport",
    "clone_client",
    "close_default_client",
    "get_default_client",
]

import logging
import threading

import httpx

from reqchain.core.config import (
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TIMEOUT,
    SUPPORTED_PROXY_SCHEMES,
)
from reqchain.exceptions import ConfigurationError

logger: logging.Logger = logging.getLogger(__name__)

_default_client: httpx.Client | None = None
_default_client_lock = threading.Lock()


def get_default_client() -> httpx.Client:
    """Return the process-wide default client.

    The client is created on first use. It follows redirects, like
    most HTTP clients do by default, so that disabling redirects on a
    builder has an observable effect.

    Returns:
        The shared ``httpx.Client``.

    Example:
        ```pycon
        >>> from reqchain.core.clients import get_default_client
        >>> get_default_client() is get_default_client()
        True

        ```
    """
    global _default_client  # noqa: PLW0603
    with _default_client_lock:
        if _default_client is None or _default_client.is_closed:
            logger.debug("Creating the process-wide default client")
            _default_client = httpx.Client(
                follow_redirects=True,
                max_redirects=DEFAULT_MAX_REDIRECTS,
                timeout=DEFAULT_TIMEOUT,
            )
        return _default_client


def close_default_client() -> None:
    """Close the process-wide default client if it was created.

    A new default client is created on the next call to
    ``get_default_client``.
    """
    global _default_client  # noqa: PLW0603
    with _default_client_lock:
        if _default_client is not None:
            _default_client.close()
            _default_client = None


def build_proxy_transport(proxy_url: str) -> httpx.HTTPTransport:
    """Build a transport that routes every request through a proxy.

    Args:
        proxy_url: The proxy URL, e.g. ``"http://proxy.local:3128"``.

    Returns:
        An ``httpx.HTTPTransport`` configured with the proxy.

    Raises:
        ConfigurationError: If the URL cannot be parsed, has no host,
            uses a scheme that is not supported for proxies, or needs
            a transport dependency that is not installed.
    """
    try:
        url = httpx.URL(proxy_url)
    except (httpx.InvalidURL, TypeError) as exc:
        msg = f"invalid proxy url {proxy_url!r}: {exc}"
        raise ConfigurationError(msg, url=proxy_url, cause=exc) from exc

    if url.scheme not in SUPPORTED_PROXY_SCHEMES:
        msg = (
            f"invalid proxy url {proxy_url!r}: unsupported scheme {url.scheme!r} "
            f"(expected one of {', '.join(SUPPORTED_PROXY_SCHEMES)})"
        )
        raise ConfigurationError(msg, url=proxy_url)
    if not url.host:
        msg = f"invalid proxy url {proxy_url!r}: missing host"
        raise ConfigurationError(msg, url=proxy_url)

    try:
        return httpx.HTTPTransport(proxy=httpx.Proxy(url=url))
    except (ImportError, ValueError) as exc:
        # SOCKS proxies need the optional socksio package
        msg = f"invalid proxy url {proxy_url!r}: {exc}"
        raise ConfigurationError(msg, url=proxy_url, cause=exc) from exc


def clone_client(client: httpx.Client, *, transport: httpx.BaseTransport) -> httpx.Client:
    """Create a new client that mirrors ``client`` but uses another
    transport.

    The public settings of ``client`` are copied: headers, cookies,
    auth, query params, base URL, timeout, event hooks, redirect
    settings and environment trust. ``client`` itself is left untouched
    so a caller that still holds it keeps its original transport.

    Args:
        client: The client to copy settings from.
        transport: The transport used by the new client.

    Returns:
        A new ``httpx.Client``.
    """
    return httpx.Client(
        auth=client.auth,
        params=client.params,
        headers=client.headers,
        cookies=client.cookies,
        timeout=client.timeout,
        follow_redirects=client.follow_redirects,
        max_redirects=client.max_redirects,
        event_hooks=client.event_hooks,
        base_url=client.base_url,
        trust_env=client.trust_env,
        transport=transport,
    )
