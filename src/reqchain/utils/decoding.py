r"""Decoding of response bodies into caller-requested results.

JSON numbers are decoded without going through binary floating point:
integers become Python ``int`` (arbitrary precision) and numbers with a
fraction or exponent become ``decimal.Decimal``.
"""

from __future__ import annotations

__all__ = ["PlainHtml", "decode_result", "decode_safe_number"]

import dataclasses
import json
from decimal import Decimal
from typing import Any

from reqchain.exceptions import DecodeError


class PlainHtml(str):
    r"""Result type that receives the response body verbatim, without
    JSON decoding.

    The body is decoded as UTF-8 with ``surrogateescape``, so
    ``value.encode("utf-8", "surrogateescape")`` gives back the exact
    bytes that were received.

    Example:
        ```pycon
        >>> from reqchain.utils.decoding import PlainHtml, decode_result
        >>> decode_result(b"<p>hello</p>", PlainHtml)
        '<p>hello</p>'

        ```
    """

    __slots__ = ()

    @classmethod
    def from_bytes(cls, body: bytes) -> PlainHtml:
        r"""Build a ``PlainHtml`` from raw body bytes."""
        return cls(body.decode("utf-8", errors="surrogateescape"))

    def to_bytes(self) -> bytes:
        r"""Return the raw body bytes."""
        return self.encode("utf-8", errors="surrogateescape")


def _reject_constant(name: str) -> Any:
    msg = f"invalid JSON number {name}"
    raise ValueError(msg)


def decode_safe_number(body: bytes) -> Any:
    """Decode a JSON document without losing numeric precision.

    Args:
        body: The JSON document.

    Returns:
        The decoded value.

    Raises:
        DecodeError: If the body is not valid JSON, or contains
            ``NaN``/``Infinity`` literals.

    Example:
        ```pycon
        >>> from reqchain.utils.decoding import decode_safe_number
        >>> decode_safe_number(b'{"id": 12345678901234567891, "price": 0.1}')
        {'id': 12345678901234567891, 'price': Decimal('0.1')}

        ```
    """
    try:
        return json.loads(body, parse_float=Decimal, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as exc:
        msg = f"cannot decode response body: {exc}"
        raise DecodeError(msg, cause=exc) from exc


def _shape(decoded: Any, result: Any) -> Any:
    if result is object or result is Any:
        return decoded
    if isinstance(result, type) and dataclasses.is_dataclass(result):
        if not isinstance(decoded, dict):
            msg = f"cannot decode {type(decoded).__name__} into {result.__name__}"
            raise TypeError(msg)
        names = {field.name for field in dataclasses.fields(result) if field.init}
        return result(**{key: value for key, value in decoded.items() if key in names})
    if not isinstance(result, type):
        return result(decoded)
    # JSON booleans are not numbers
    if isinstance(decoded, bool) and not issubclass(result, bool):
        msg = f"cannot decode bool into {result.__name__}"
        raise TypeError(msg)
    if isinstance(decoded, result):
        return decoded
    if result in (float, Decimal) and isinstance(decoded, (int, Decimal)):
        return result(decoded)
    msg = f"cannot decode {type(decoded).__name__} into {result.__name__}"
    raise TypeError(msg)


def decode_result(body: bytes | None, result: Any) -> Any:
    """Decode a response body into the result requested by the caller.

    Args:
        body: The captured response body.
        result: The requested result. ``None`` skips decoding,
            ``PlainHtml`` returns the raw body. ``object`` or
            ``typing.Any`` return the decoded JSON value as is. A
            dataclass type is built from the fields of a JSON object.
            Any other type must match the decoded value, except that
            ``float`` and ``Decimal`` accept any JSON number. A callable
            that is not a type is applied to the decoded value.

    Returns:
        The decoded result, or ``None`` if ``result`` is ``None`` or the
        body is empty.

    Raises:
        DecodeError: If the body is not valid JSON or its value does not
            match ``result``.

    Example:
        ```pycon
        >>> from reqchain.utils.decoding import decode_result
        >>> decode_result(b'{"a": 1}', dict)
        {'a': 1}
        >>> decode_result(b"", dict) is None
        True

        ```
    """
    if result is None or not body:
        return None
    if isinstance(result, type) and issubclass(result, PlainHtml):
        return result.from_bytes(body)

    decoded = decode_safe_number(body)
    try:
        return _shape(decoded, result)
    except (TypeError, ValueError) as exc:
        name = getattr(result, "__name__", repr(result))
        msg = f"cannot decode response body into {name}: {exc}"
        raise DecodeError(msg, cause=exc) from exc
