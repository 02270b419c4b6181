r"""Default values and protocol constants used when executing requests.

The defaults only apply to the process-wide client that is used when
no client was installed on the builder. A caller-supplied client keeps
its own timeout and redirect settings.
"""

from __future__ import annotations

__all__ = [
    "CURL_LOG_PREFIX",
    "DEFAULT_MAX_REDIRECTS",
    "DEFAULT_TIMEOUT",
    "GZIP_ENCODING",
    "JSON_CONTENT_TYPE",
    "STATUS_ERROR_THRESHOLD",
    "SUPPORTED_PROXY_SCHEMES",
]

# Default timeout in seconds for the process-wide client
DEFAULT_TIMEOUT = 10.0

# Maximum number of redirects followed by the process-wide client
DEFAULT_MAX_REDIRECTS = 10

# Every POST is labelled as JSON, whatever the payload type
JSON_CONTENT_TYPE = "application/json"

# Value of the Content-Encoding header for compressed bodies
GZIP_ENCODING = "gzip"

# Any status code at or above this value is a failure
STATUS_ERROR_THRESHOLD = 300

# Proxy schemes accepted by httpx.HTTPTransport
# socks5 and socks5h require the optional ``socksio`` package
SUPPORTED_PROXY_SCHEMES = ("http", "https", "socks5", "socks5h")

# Prefix of the curl command written to stderr
CURL_LOG_PREFIX = "HTTP DEBUG: "
