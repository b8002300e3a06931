import pytest

from samsa.encode import (
    encode_array,
    encode_bool,
    encode_bytes,
    encode_i8,
    encode_i16,
    encode_i32,
    encode_i64,
    encode_nullable_bytes,
    encode_nullable_str,
    encode_nullable_string,
    encode_string,
    encode_strings,
    encode_u32,
    encode_varint,
    zigzag_encode,
)
from samsa.errors import EncodingError


def test_string_too_long():
    with pytest.raises(EncodingError):
        encode_string("a" * (2**15))


def test_codec_i8():
    assert list(encode_i8(5)) == [5]


def test_codec_i16():
    assert list(encode_i16(5)) == [0, 5]


def test_codec_i32():
    assert list(encode_i32(5)) == [0, 0, 0, 5]


def test_codec_i64():
    assert list(encode_i64(5)) == [0, 0, 0, 0, 0, 0, 0, 5]


def test_codec_varint_simple():
    assert list(encode_varint(11)) == [22]


def test_codec_varint_twobyte():
    assert list(encode_varint(260)) == [136, 4]


def test_codec_varlong():
    assert list(encode_varint(9223372036854775807)) == [
        254, 255, 255, 255, 255, 255, 255, 255, 255, 1,
    ]


def test_codec_string():
    assert list(encode_string("test")) == [0, 4, 116, 101, 115, 116]


def test_codec_vec_u8():
    assert list(encode_bytes(bytes([1, 2, 3]))) == [0, 0, 0, 3, 1, 2, 3]


@pytest.mark.parametrize(
    "orig", [("abc", "defg"), ["abc", "defg"], iter(["abc", "defg"])]
)
def test_codec_as_strings(orig):
    assert list(encode_strings(orig)) == [
        0, 0, 0, 2, 0, 3, ord("a"), ord("b"), ord("c"),
        0, 4, ord("d"), ord("e"), ord("f"), ord("g"),
    ]


def test_bool():
    assert encode_bool(True) == b"\x01"
    assert encode_bool(False) == b"\x00"


def test_u32_and_overflow():
    assert encode_u32(5) == b"\x00\x00\x00\x05"
    with pytest.raises(EncodingError):
        encode_u32(-1)
    with pytest.raises(EncodingError):
        encode_i8(128)


def test_nullable_encodings():
    assert encode_nullable_bytes(None) == b"\xff\xff\xff\xff"
    assert encode_nullable_str(None) == b"\xff\xff\xff\xff"
    assert encode_nullable_string(None) == b"\xff\xff"
    assert encode_nullable_bytes(b"ab") == encode_bytes(b"ab")
    assert encode_nullable_str("ab") == encode_string("ab")
    assert encode_nullable_string("ab") == encode_string("ab")


def test_array_with_custom_encoder():
    assert encode_array([1, 2], encode_i16) == b"\x00\x00\x00\x02\x00\x01\x00\x02"
    assert encode_array([], encode_i16) == b"\x00\x00\x00\x00"


def test_varint_zero_and_range():
    assert encode_varint(0) == b"\x00"
    assert zigzag_encode(0) == 0
    with pytest.raises(EncodingError):
        encode_varint(-1)
    with pytest.raises(EncodingError):
        encode_varint(2**64)