"""Serialize values into the broker wire format."""

from __future__ import annotations

import struct
from typing import Callable, Iterable, Optional, TypeVar

from samsa.errors import EncodingError

T = TypeVar("T")

MSB = 0b1000_0000
_U64_MASK = (1 << 64) - 1
_I16_MAX = (1 << 15) - 1
_I32_MAX = (1 << 31) - 1


def _pack(fmt: str, value: int) -> bytes:
    try:
        return struct.pack(">" + fmt, value)
    except struct.error as err:
        raise EncodingError(str(err)) from err


def encode_bool(value: bool) -> bytes:
    """Encode a boolean as a single signed byte."""
    return _pack("b", 1 if value else 0)


def encode_i8(value: int) -> bytes:
    return _pack("b", value)


def encode_i16(value: int) -> bytes:
    return _pack("h", value)


def encode_i32(value: int) -> bytes:
    return _pack("i", value)


def encode_u32(value: int) -> bytes:
    return _pack("I", value)


def encode_i64(value: int) -> bytes:
    return _pack("q", value)


def zigzag_encode(value: int) -> int:
    """Zigzag-transform an unsigned 64-bit value."""
    if not 0 <= value <= _U64_MASK:
        raise EncodingError(f"value out of unsigned 64-bit range: {value}")
    return ((value << 1) & _U64_MASK) ^ (value >> 63)


def encode_varint(value: int) -> bytes:
    """Encode an unsigned value as a zigzag varint."""
    n = zigzag_encode(value)
    out = bytearray()
    while n >= 0x80:
        out.append(MSB | (n & 0x7F))
        n >>= 7
    out.append(n)
    return bytes(out)


def encode_string(value: str) -> bytes:
    """Encode a string with an i16 length prefix."""
    data = value.encode("utf-8")
    if len(data) > _I16_MAX:
        raise EncodingError(f"string too long: {len(data)} bytes")
    return encode_i16(len(data)) + data


def encode_bytes(value: bytes) -> bytes:
    """Encode bytes with an i32 length prefix."""
    data = bytes(value)
    if len(data) > _I32_MAX:
        raise EncodingError(f"byte string too long: {len(data)} bytes")
    return encode_i32(len(data)) + data


def encode_nullable_bytes(value: Optional[bytes]) -> bytes:
    """Encode optional bytes; None becomes an i32 length of -1."""
    if value is None:
        return encode_i32(-1)
    return encode_bytes(value)


def encode_nullable_str(value: Optional[str]) -> bytes:
    """Encode an optional string; None becomes an i32 length of -1."""
    if value is None:
        return encode_i32(-1)
    return encode_string(value)


def encode_nullable_string(value: Optional[str]) -> bytes:
    """Encode an optional string; None becomes an i16 length of -1."""
    if value is None:
        return encode_i16(-1)
    return encode_string(value)


def encode_array(items: Iterable[T], encoder: Callable[[T], bytes]) -> bytes:
    """Encode items as a protocol array: an i32 count, then each element."""
    elements = list(items)
    if len(elements) > _I32_MAX:
        raise EncodingError(f"array too long: {len(elements)} items")
    return encode_i32(len(elements)) + b"".join(encoder(item) for item in elements)


def encode_strings(items: Iterable[str]) -> bytes:
    """Encode strings as a protocol array of strings."""
    return encode_array(items, encode_string)