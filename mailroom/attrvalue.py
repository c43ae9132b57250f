"""Compact JSON encoding of table attribute values.

Attribute values are typed dicts with a single key naming the type, for
example ``{"S": "text"}``, ``{"B": b"..."}``, ``{"L": [...]}`` or
``{"M": {...}}``. The encoding writes them as short JSON-like byte strings
such as ``{"S":"text"}``. The decoder is a simple splitter: it does not
handle separators or quotes inside values, matching the encoder's output
for flat values only.
"""

from __future__ import annotations

import base64
from typing import Any, Callable, Dict, Union

from .errors import MailboxError

AttributeValue = Dict[str, Any]
Source = Union[bytes, bytearray, str]


class DecodeError(MailboxError, ValueError):
    """The input is not a valid encoded attribute value."""

    def __init__(self, message: str = "decoding error") -> None:
        super().__init__(message)


def _as_bytes(src: Source) -> bytes:
    if isinstance(src, str):
        return src.encode("utf-8", "surrogateescape")
    return bytes(src)


def _text(data: bytes) -> str:
    return data.decode("utf-8", "surrogateescape")


def _raw(text: str) -> bytes:
    return text.encode("utf-8", "surrogateescape")


def _unwrap(data: bytes, prefix: bytes, suffix: bytes) -> bytes:
    if not (data.startswith(prefix) and data.endswith(suffix)):
        raise DecodeError()
    return data.removeprefix(prefix).removesuffix(suffix)


def _unwrap_literal(data: bytes, prefix: bytes) -> bytes:
    if not data.startswith(prefix) or data[-1:] != b"}":
        raise DecodeError()
    return data.removeprefix(prefix)[:-1]


def _unquote(item: bytes) -> bytes:
    if len(item) < 2 or item[:1] != b'"' or item[-1:] != b'"':
        raise DecodeError()
    return item[1:-1]


def _b64decode(data: bytes) -> bytes:
    # binascii.Error propagates for malformed base64, distinct from DecodeError.
    return base64.b64decode(data, validate=True)


def decode_attribute_value(src: Source) -> AttributeValue:
    """Decode any encoded attribute value, dispatching on its type name."""
    data = _as_bytes(src)
    if (
        len(data) < 2
        or data[:1] != b"{"
        or data[-1:] != b"}"
        or data[1:2] != b'"'
    ):
        raise DecodeError()

    inner = data[2:-1]
    end = inner.find(b'"')
    if end < 0 or inner[end + 1 : end + 2] != b":":
        raise DecodeError()

    decoder = _DECODERS.get(inner[:end])
    if decoder is None:
        raise DecodeError()
    return decoder(data)


def decode_b(src: Source) -> AttributeValue:
    """Decode a binary value."""
    value = _unwrap(_as_bytes(src), b'{"B":"', b'"}')
    return {"B": _b64decode(value)}


def decode_bool(src: Source) -> AttributeValue:
    """Decode a boolean value."""
    value = _unwrap_literal(_as_bytes(src), b'{"BOOL":')
    if value == b"true":
        return {"BOOL": True}
    if value == b"false":
        return {"BOOL": False}
    raise DecodeError()


def decode_bs(src: Source) -> AttributeValue:
    """Decode a binary set."""
    value = _unwrap(_as_bytes(src), b'{"BS":[', b"]}")
    return {"BS": [_b64decode(_unquote(item)) for item in value.split(b",")]}


def decode_l(src: Source) -> AttributeValue:
    """Decode a list of attribute values."""
    value = _unwrap(_as_bytes(src), b'{"L":[', b"]}")
    return {"L": [decode_attribute_value(item) for item in value.split(b",")]}


def decode_m(src: Source) -> AttributeValue:
    """Decode a map of attribute values."""
    value = _unwrap(_as_bytes(src), b'{"M":{', b"}}")
    result: dict[str, AttributeValue] = {}
    for item in value.split(b","):
        parts = item.split(b":", 1)
        if len(parts) < 2:
            raise DecodeError()
        key, encoded = parts
        key = _unquote(key)
        try:
            result[_text(key)] = decode_attribute_value(encoded)
        except ValueError as exc:
            raise DecodeError() from exc
    return {"M": result}


def decode_n(src: Source) -> AttributeValue:
    """Decode a number value, kept as its string form."""
    value = _unwrap(_as_bytes(src), b'{"N":"', b'"}')
    return {"N": _text(value)}


def decode_ns(src: Source) -> AttributeValue:
    """Decode a number set."""
    value = _unwrap(_as_bytes(src), b'{"NS":[', b"]}")
    return {"NS": [_text(_unquote(item)) for item in value.split(b",")]}


def decode_null(src: Source) -> AttributeValue:
    """Decode a null value; only ``true`` is accepted."""
    value = _unwrap_literal(_as_bytes(src), b'{"NULL":')
    if value != b"true":
        raise DecodeError()
    return {"NULL": True}


def decode_s(src: Source) -> AttributeValue:
    """Decode a string value."""
    value = _unwrap(_as_bytes(src), b'{"S":"', b'"}')
    return {"S": _text(value)}


def decode_ss(src: Source) -> AttributeValue:
    """Decode a string set."""
    value = _unwrap(_as_bytes(src), b'{"SS":[', b"]}")
    return {"SS": [_text(_unquote(item)) for item in value.split(b",")]}


_DECODERS: dict[bytes, Callable[[Source], AttributeValue]] = {
    b"B": decode_b,
    b"BOOL": decode_bool,
    b"BS": decode_bs,
    b"L": decode_l,
    b"M": decode_m,
    b"N": decode_n,
    b"NS": decode_ns,
    b"NULL": decode_null,
    b"S": decode_s,
    b"SS": decode_ss,
}


def encode_attribute_value(value: AttributeValue) -> bytes:
    """Encode an attribute value; anything unrecognised encodes to empty bytes."""
    if not isinstance(value, dict) or len(value) != 1:
        return b""
    encoder = _ENCODERS.get(next(iter(value)))
    if encoder is None:
        return b""
    return encoder(value)


def _quoted_list(tag: bytes, items: list[bytes]) -> bytes:
    return b'{"' + tag + b'":[' + b",".join(b'"' + i + b'"' for i in items) + b"]}"


def encode_b(value: AttributeValue) -> bytes:
    """Encode a binary value as base64."""
    return b'{"B":"' + base64.b64encode(bytes(value["B"])) + b'"}'


def encode_bool(value: AttributeValue) -> bytes:
    """Encode a boolean value."""
    return b'{"BOOL":' + (b"true" if value["BOOL"] else b"false") + b"}"


def encode_bs(value: AttributeValue) -> bytes:
    """Encode a binary set, each member as base64."""
    return _quoted_list(b"BS", [base64.b64encode(bytes(i)) for i in value["BS"]])


def encode_l(value: AttributeValue) -> bytes:
    """Encode a list; members are written back to back."""
    return b'{"L":[' + b"".join(encode_attribute_value(v) for v in value["L"]) + b"]}"


def encode_m(value: AttributeValue) -> bytes:
    """Encode a map, entries in the map's iteration order."""
    entries = (
        b'"' + _raw(k) + b'":' + encode_attribute_value(v)
        for k, v in value["M"].items()
    )
    return b'{"M":{' + b",".join(entries) + b"}}"


def encode_n(value: AttributeValue) -> bytes:
    """Encode a number value."""
    return b'{"N":"' + _raw(value["N"]) + b'"}'


def encode_ns(value: AttributeValue) -> bytes:
    """Encode a number set."""
    return _quoted_list(b"NS", [_raw(i) for i in value["NS"]])


def encode_null(value: AttributeValue) -> bytes:
    """Encode a null value."""
    return b'{"NULL":' + (b"true" if value["NULL"] else b"false") + b"}"


def encode_s(value: AttributeValue) -> bytes:
    """Encode a string value."""
    return b'{"S":"' + _raw(value["S"]) + b'"}'


def encode_ss(value: AttributeValue) -> bytes:
    """Encode a string set."""
    return _quoted_list(b"SS", [_raw(i) for i in value["SS"]])


_ENCODERS: dict[str, Callable[[AttributeValue], bytes]] = {
    "B": encode_b,
    "BOOL": encode_bool,
    "BS": encode_bs,
    "L": encode_l,
    "M": encode_m,
    "N": encode_n,
    "NS": encode_ns,
    "NULL": encode_null,
    "S": encode_s,
    "SS": encode_ss,
}