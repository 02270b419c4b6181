r"""Helpers used while executing a request.

This package provides payload encoding and gzip compression, curl
command rendering for debug logs, and safe-number decoding of response
bodies.
"""

from __future__ import annotations

__all__ = [
    "PlainHtml",
    "RawJSON",
    "decode_result",
    "decode_safe_number",
    "emit_curl_log",
    "encode_payload",
    "format_curl",
    "gzip_compress",
    "quote_sh",
    "write_curl_log",
]

from reqchain.utils.curl import emit_curl_log, format_curl, quote_sh, write_curl_log
from reqchain.utils.decoding import PlainHtml, decode_result, decode_safe_number
from reqchain.utils.payload import RawJSON, encode_payload, gzip_compress
