"""
Protocol value types with their Graphene binary encoding.

Provides AccountName, Asset, TimePointSec and FutureExtensions. Each type
knows how to write itself into a BinaryWriter; the field name passed along is
reported if the value cannot be encoded.
"""

from __future__ import annotations
from typing import Any, Optional, Union
from datetime import datetime, timezone, timedelta
import re

from pydantic import BaseModel, Field, field_validator, model_serializer, model_validator

from .codec.writer import BinaryWriter
from .enums import AssetSymbol
from .runtime.errors import EncodingError

_ACCOUNT_SEGMENT = re.compile(r"^[a-z][a-z0-9-]*[a-z0-9]$")
_ASSET_SYMBOL_LENGTH = 7
_ISO_FORMAT = "%Y-%m-%dT%H:%M:%S"


class AccountName(BaseModel):
    """
    A Steem account name.

    Matches steemd's is_valid_account_name: 3 to 16 characters, dot
    separated segments of at least three characters, each starting with a
    lowercase letter, containing only lowercase letters, digits and dashes,
    and ending with a letter or digit.
    """
    name: str

    model_config = {"frozen": True}

    def __init__(self, name: str, **data: Any):
        super().__init__(name=name, **data)

    @model_validator(mode='before')
    @classmethod
    def from_plain_string(cls, data: Any) -> Any:
        """Let fields typed AccountName accept plain strings."""
        if isinstance(data, str):
            return {"name": data}
        return data

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names steemd would refuse."""
        if not 3 <= len(v) <= 16:
            raise ValueError(f"Account name '{v}' must be between 3 and 16 characters long")
        for segment in v.split('.'):
            if len(segment) < 3 or not _ACCOUNT_SEGMENT.match(segment):
                raise ValueError(f"Account name '{v}' contains the invalid segment '{segment}'")
        return v

    @model_serializer
    def serialize(self) -> str:
        return self.name

    def write(self, writer: BinaryWriter, field: Optional[str] = None) -> None:
        writer.string(self.name, field)

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write(writer)
        return writer.to_bytes()

    def __str__(self) -> str:
        return self.name


class Asset(BaseModel):
    """
    An amount of a core asset, stored in its smallest unit.

    ``Asset(amount=1000, symbol=AssetSymbol.STEEM)`` is 1.000 STEEM.
    """
    amount: int
    symbol: AssetSymbol

    model_config = {"frozen": True}

    @classmethod
    def from_string(cls, value: str) -> Asset:
        """
        Parse the steemd string form, e.g. ``"1.000 STEEM"``.

        Raises:
            ValueError: If the string is malformed or the precision is wrong
        """
        try:
            amount_str, symbol_str = value.strip().split(' ')
            symbol = AssetSymbol(symbol_str)
        except ValueError as e:
            raise ValueError(f"Cannot parse asset from: {value!r}") from e
        whole, _, fraction = amount_str.partition('.')
        if len(fraction) != symbol.precision:
            raise ValueError(f"{symbol.value} requires {symbol.precision} decimal places, got {value!r}")
        return cls(amount=int(whole + fraction), symbol=symbol)

    @property
    def precision(self) -> int:
        return self.symbol.precision

    @model_serializer
    def serialize(self) -> str:
        return str(self)

    def write(self, writer: BinaryWriter, field: Optional[str] = None) -> None:
        writer.i64le(self.amount, field)
        writer.u8(self.precision, field)
        writer.bytes(self.symbol.value.encode('ascii').ljust(_ASSET_SYMBOL_LENGTH, b'\x00'))

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write(writer)
        return writer.to_bytes()

    def __str__(self) -> str:
        sign = '-' if self.amount < 0 else ''
        whole, fraction = divmod(abs(self.amount), 10 ** self.precision)
        return f"{sign}{whole}.{fraction:0{self.precision}d} {self.symbol.value}"


class TimePointSec(BaseModel):
    """
    Seconds resolution UTC timestamp (fc::time_point_sec).

    Encoded as a 4 byte little-endian count of seconds since the Unix epoch.
    A value of 0 means "not set".
    """
    seconds: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @field_validator('seconds', mode='before')
    @classmethod
    def parse_seconds(cls, v: Any) -> int:
        """Accept datetimes and ISO strings as well as plain integers."""
        if isinstance(v, datetime):
            if v.tzinfo is None:
                v = v.replace(tzinfo=timezone.utc)
            return int(v.timestamp())
        if isinstance(v, str):
            return int(datetime.strptime(v.rstrip('Z'), _ISO_FORMAT).replace(tzinfo=timezone.utc).timestamp())
        return v

    @classmethod
    def from_datetime(cls, value: Union[datetime, str]) -> TimePointSec:
        return cls(seconds=value)

    @property
    def is_set(self) -> bool:
        return self.seconds != 0

    @model_serializer
    def serialize(self) -> str:
        return str(self)

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc)

    def add_seconds(self, seconds: int) -> TimePointSec:
        """Return a new time point shifted by ``seconds``."""
        return TimePointSec(seconds=self.seconds + seconds)

    def __add__(self, other: timedelta) -> TimePointSec:
        return self.add_seconds(int(other.total_seconds()))

    def write(self, writer: BinaryWriter, field: Optional[str] = None) -> None:
        writer.u32le(self.seconds, field)

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write(writer, 'expiration')
        return writer.to_bytes()

    def __str__(self) -> str:
        return self.to_datetime().strftime(_ISO_FORMAT)


class FutureExtensions(BaseModel):
    """
    Forward compatibility slot of a transaction.

    steemd declares it as static_variant<void_t>, so the only valid value
    encodes as the single varint tag 0.
    """
    type_id: int = 0

    def write(self, writer: BinaryWriter, field: Optional[str] = None) -> None:
        if self.type_id != 0:
            raise EncodingError(f"Unsupported extension type {self.type_id}", field=field)
        writer.uvarint(self.type_id, field)

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write(writer, 'extensions')
        return writer.to_bytes()


__all__ = ["AccountName", "Asset", "TimePointSec", "FutureExtensions"]
