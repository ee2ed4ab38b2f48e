"""
Test the Graphene binary writer primitives.
"""

import pytest

from steem_client.codec.writer import BinaryWriter, encode_uvarint
from steem_client.runtime.errors import EncodingError, ErrorCode


class TestVarint:
    """ULEB128 encoding."""

    @pytest.mark.parametrize("value,expected", [
        (0, "00"),
        (1, "01"),
        (127, "7f"),
        (128, "8001"),
        (300, "ac02"),
        (16384, "808001"),
    ])
    def test_known_values(self, value, expected):
        assert encode_uvarint(value).hex() == expected

    def test_negative_value_rejected(self):
        with pytest.raises(EncodingError) as exc_info:
            encode_uvarint(-1, "operations")
        assert exc_info.value.field == "operations"
        assert exc_info.value.code == ErrorCode.ENCODING_ERROR


class TestFixedWidth:
    """Little-endian integers."""

    def test_u16_little_endian(self):
        writer = BinaryWriter()
        writer.u16le(1234)
        assert writer.to_bytes() == b"\xd2\x04"

    def test_u32_little_endian(self):
        writer = BinaryWriter()
        writer.u32le(0xDEADBEEF)
        assert writer.to_bytes() == b"\xef\xbe\xad\xde"

    def test_i16_negative(self):
        writer = BinaryWriter()
        writer.i16le(-10000)
        assert writer.to_bytes() == b"\xf0\xd8"

    def test_i64(self):
        writer = BinaryWriter()
        writer.i64le(1000)
        assert writer.to_bytes() == b"\xe8\x03" + b"\x00" * 6

    def test_out_of_range_names_field(self):
        writer = BinaryWriter()
        with pytest.raises(EncodingError) as exc_info:
            writer.u16le(70000, "ref_block_num")
        assert exc_info.value.field == "ref_block_num"
        assert "ref_block_num" in str(exc_info.value)

    def test_failed_write_leaves_buffer_untouched(self):
        writer = BinaryWriter()
        writer.u8(1)
        with pytest.raises(EncodingError):
            writer.u8(256, "level")
        assert writer.to_bytes() == b"\x01"


class TestStrings:
    """Length prefixed strings."""

    def test_string_prefix(self):
        writer = BinaryWriter()
        writer.string("alice")
        assert writer.to_bytes() == b"\x05alice"

    def test_empty_string(self):
        writer = BinaryWriter()
        writer.string("")
        assert writer.to_bytes() == b"\x00"

    def test_utf8_length_counts_bytes(self):
        writer = BinaryWriter()
        writer.string("é")
        assert writer.to_bytes() == b"\x02\xc3\xa9"
        assert len(writer) == 3
