r"""Request body encoding and compression.

The shape of a POST payload decides how it is encoded: byte-like
values, pre-serialized JSON and plain text are sent verbatim, every
other value is serialized to compact JSON.
"""

from __future__ import annotations

__all__ = ["RawJSON", "encode_payload", "gzip_compress"]

import dataclasses
import gzip
import json
from typing import Any

from reqchain.exceptions import CompressionError, SerializationError


class RawJSON(bytes):
    r"""Pre-serialized JSON document sent as the request body verbatim.

    Example:
        ```pycon
        >>> from reqchain.utils.payload import RawJSON, encode_payload
        >>> encode_payload(RawJSON(b'{"id": 12345678901234567890}'))
        b'{"id": 12345678901234567890}'

        ```
    """


def _to_json_compatible(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def encode_payload(data: Any) -> bytes | None:
    """Encode a POST payload into the request body.

    Args:
        data: The payload. ``bytes``, ``bytearray``, ``memoryview`` and
            ``RawJSON`` are used as is, ``str`` is UTF-8 encoded, and
            anything else (dataclass instances included) is serialized
            to compact JSON.

    Returns:
        The encoded body, or ``None`` if ``data`` is ``None``.

    Raises:
        SerializationError: If ``data`` cannot be serialized to JSON.

    Example:
        ```pycon
        >>> from reqchain.utils.payload import encode_payload
        >>> encode_payload({"a": 1})
        b'{"a":1}'
        >>> encode_payload("raw text")
        b'raw text'

        ```
    """
    if data is None:
        return None
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")
    try:
        return json.dumps(
            data, separators=(",", ":"), ensure_ascii=False, default=_to_json_compatible
        ).encode("utf-8")
    except (TypeError, ValueError) as exc:
        msg = f"cannot serialize payload of type {type(data).__name__}: {exc}"
        raise SerializationError(msg, cause=exc) from exc


def gzip_compress(body: bytes) -> bytes:
    """Compress a whole request body with gzip.

    Args:
        body: The body to compress.

    Returns:
        The gzip-compressed body.

    Raises:
        CompressionError: If compression fails.
    """
    try:
        return gzip.compress(body)
    except (OSError, TypeError, ValueError) as exc:
        msg = f"compress body err: {exc}"
        raise CompressionError(msg, cause=exc) from exc
