from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import pytest
from coola.equality import objects_are_equal

from reqchain.exceptions import DecodeError
from reqchain.utils.decoding import PlainHtml, decode_result, decode_safe_number


@dataclass
class User:
    id: int
    name: str
    tags: list[str] = field(default_factory=list)


class Page(PlainHtml):
    __slots__ = ()


###############################
#     Tests for PlainHtml     #
###############################


def test_plain_html_is_str() -> None:
    page = PlainHtml.from_bytes(b"<p>hi</p>")

    assert isinstance(page, str)
    assert page == "<p>hi</p>"


def test_plain_html_invalid_utf8_round_trip() -> None:
    body = b"<p>\xff\xfe caf\xc3\xa9</p>"

    assert PlainHtml.from_bytes(body).to_bytes() == body


########################################
#     Tests for decode_safe_number     #
########################################


def test_decode_safe_number_large_integers() -> None:
    decoded = decode_safe_number(b'{"id": 123456789012345678901234567890, "n": -9007199254740993}')

    assert decoded["id"] == 123456789012345678901234567890
    assert decoded["n"] == -9007199254740993


def test_decode_safe_number_decimals() -> None:
    decoded = decode_safe_number(b'[0.1, 1.5e3, 3.141592653589793238462643383279]')

    assert objects_are_equal(
        decoded, [Decimal("0.1"), Decimal("1.5e3"), Decimal("3.141592653589793238462643383279")]
    )


def test_decode_safe_number_nested() -> None:
    decoded = decode_safe_number(b'{"a": {"b": [1, {"c": 2.50}]}, "d": null, "e": "x"}')

    assert objects_are_equal(
        decoded, {"a": {"b": [1, {"c": Decimal("2.50")}]}, "d": None, "e": "x"}
    )


@pytest.mark.parametrize("body", [b"<html>", b'{"a": 1', b"NaN", b"[Infinity]", b"\xff"])
def test_decode_safe_number_invalid(body: bytes) -> None:
    with pytest.raises(DecodeError, match=r"cannot decode response body"):
        decode_safe_number(body)


###################################
#     Tests for decode_result     #
###################################


@pytest.mark.parametrize("body", [None, b"", b'{"a": 1}'])
def test_decode_result_no_result(body: bytes | None) -> None:
    assert decode_result(body, None) is None


@pytest.mark.parametrize("result", [dict, object, PlainHtml, User])
def test_decode_result_empty_body(result: Any) -> None:
    assert decode_result(b"", result) is None


def test_decode_result_plain_html_skips_json() -> None:
    page = decode_result(b"not json", PlainHtml)

    assert type(page) is PlainHtml
    assert page == "not json"


def test_decode_result_plain_html_subclass() -> None:
    page = decode_result(b"<p>hi</p>", Page)

    assert type(page) is Page
    assert page == "<p>hi</p>"


@pytest.mark.parametrize("result", [object, Any])
def test_decode_result_any(result: Any) -> None:
    assert decode_result(b'[1, "a", null]', result) == [1, "a", None]


def test_decode_result_dict() -> None:
    assert decode_result(b'{"a": 1}', dict) == {"a": 1}


def test_decode_result_list() -> None:
    assert decode_result(b"[1, 2]", list) == [1, 2]


def test_decode_result_string_is_not_converted_to_int() -> None:
    with pytest.raises(DecodeError, match=r"cannot decode str into int"):
        decode_result(b'"42"', int)


@pytest.mark.parametrize(
    ("body", "result", "expected"),
    [
        (b"42", int, 42),
        (b'"x"', str, "x"),
        (b"true", bool, True),
        (b"1.25", Decimal, Decimal("1.25")),
        (b"3", Decimal, Decimal(3)),
        (b"1.5", float, 1.5),
        (b"2", float, 2.0),
    ],
)
def test_decode_result_scalar(body: bytes, result: type, expected: Any) -> None:
    value = decode_result(body, result)

    assert value == expected
    assert type(value) is result


@pytest.mark.parametrize(
    ("body", "result", "message"),
    [
        (b'{"a": 1}', list, r"cannot decode dict into list"),
        (b'{"a": 1}', str, r"cannot decode dict into str"),
        (b"[1, 2]", dict, r"cannot decode list into dict"),
        (b"true", int, r"cannot decode bool into int"),
        (b"1.5", int, r"cannot decode Decimal into int"),
        (b"null", str, r"cannot decode NoneType into str"),
    ],
)
def test_decode_result_type_mismatch(body: bytes, result: type, message: str) -> None:
    with pytest.raises(DecodeError, match=message):
        decode_result(body, result)


def test_decode_result_dataclass() -> None:
    user = decode_result(b'{"id": 1, "name": "a", "tags": ["x"], "unknown": true}', User)

    assert user == User(id=1, name="a", tags=["x"])


def test_decode_result_dataclass_missing_field() -> None:
    with pytest.raises(DecodeError, match=r"cannot decode response body into User"):
        decode_result(b'{"id": 1}', User)


def test_decode_result_dataclass_from_list() -> None:
    with pytest.raises(DecodeError, match=r"cannot decode list into User"):
        decode_result(b"[1, 2]", User)


def test_decode_result_callable() -> None:
    assert decode_result(b'{"items": [1, 2]}', lambda value: value["items"]) == [1, 2]


def test_decode_result_incompatible_type() -> None:
    with pytest.raises(DecodeError, match=r"into dict"):
        decode_result(b"42", dict)


def test_decode_result_invalid_json() -> None:
    with pytest.raises(DecodeError):
        decode_result(b"<html></html>", dict)
