r"""Core configuration, validation and client resolution.

This package contains the defaults used by the process-wide client,
argument validation, and the helpers that attach a proxy transport to
a client without mutating the caller's client.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_REDIRECTS",
    "DEFAULT_TIMEOUT",
    "build_proxy_transport",
    "clone_client",
    "close_default_client",
    "get_default_client",
    "validate_timeout",
    "validate_url",
]

from reqchain.core.clients import (
    build_proxy_transport,
    clone_client,
    close_default_client,
    get_default_client,
)
from reqchain.core.config import DEFAULT_MAX_REDIRECTS, DEFAULT_TIMEOUT
from reqchain.core.validation import validate_timeout, validate_url
