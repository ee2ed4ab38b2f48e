"""
Binary Writer for the Graphene wire format.

Little-endian fixed width integers, ULEB128 varints and length prefixed
strings, as used by steemd's fc::raw serialization.
"""

import struct
from typing import List, Optional

from ..runtime.errors import EncodingError


class BinaryWriter:
    """
    Append-only byte buffer with Graphene primitive encoders.

    Every encoder takes an optional ``field`` name that is reported in the
    EncodingError raised when a value is out of range for its wire type.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def _pack(self, fmt: str, v: int, field: Optional[str]) -> None:
        try:
            packed = struct.pack(fmt, v)
        except (struct.error, TypeError) as e:
            raise EncodingError(
                f"Value {v!r} of field '{field or 'value'}' cannot be encoded as '{fmt}'",
                field=field, cause=e
            )
        self._bb.extend(packed)

    def u8(self, v: int, field: Optional[str] = None) -> None:
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
            field: Field name used in error reports
        """
        self._pack('<B', v, field)

    def u16le(self, v: int, field: Optional[str] = None) -> None:
        """
        Write unsigned 16-bit integer in little-endian format.

        Args:
            v: Integer value to write (0-65535)
            field: Field name used in error reports
        """
        self._pack('<H', v, field)

    def i16le(self, v: int, field: Optional[str] = None) -> None:
        """Write signed 16-bit integer in little-endian format."""
        self._pack('<h', v, field)

    def u32le(self, v: int, field: Optional[str] = None) -> None:
        """
        Write unsigned 32-bit integer in little-endian format.

        Args:
            v: Integer value to write as 32-bit little-endian
            field: Field name used in error reports
        """
        self._pack('<I', v, field)

    def i64le(self, v: int, field: Optional[str] = None) -> None:
        """Write signed 64-bit integer in little-endian format."""
        self._pack('<q', v, field)

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def len_prefixed_bytes(self, v: bytes, field: Optional[str] = None) -> None:
        """
        Write bytes with length prefix using uvarint.

        Args:
            v: Bytes to write with length prefix
            field: Field name used in error reports
        """
        self.uvarint(len(v), field)
        self.bytes(v)

    def string(self, s: str, field: Optional[str] = None) -> None:
        """
        Write UTF-8 string with length prefix.

        Args:
            s: String to write with length prefix
            field: Field name used in error reports
        """
        try:
            encoded = s.encode('utf-8')
        except (AttributeError, UnicodeEncodeError) as e:
            raise EncodingError(f"Field '{field or 'value'}' is not a valid string", field=field, cause=e)
        self.len_prefixed_bytes(encoded, field)

    def uvarint(self, v: int, field: Optional[str] = None) -> None:
        """
        Write unsigned varint in ULEB128 format.

        7 data bits per byte, high bit set on every byte except the last.

        Args:
            v: Unsigned integer value to encode as varint
            field: Field name used in error reports
        """
        if not isinstance(v, int) or v < 0 or v > 0xFFFFFFFFFFFFFFFF:
            raise EncodingError(f"Value {v!r} of field '{field or 'value'}' is not a valid varint",
                                field=field)
        x = v
        while x >= 0x80:
            self._bb.append((x & 0x7F) | 0x80)
            x >>= 7
        self._bb.append(x)

    def __len__(self) -> int:
        return len(self._bb)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)


def encode_uvarint(v: int, field: Optional[str] = None) -> bytes:
    """Encode a single unsigned varint."""
    writer = BinaryWriter()
    writer.uvarint(v, field)
    return writer.to_bytes()
