"""
Enumerations shared across the steem_client package.
"""

from enum import Enum, IntEnum


class PrivateKeyType(str, Enum):
    """Authority roles an account can hold a key for."""

    OWNER = "owner"
    ACTIVE = "active"
    POSTING = "posting"
    MEMO = "memo"
    OTHER = "other"


class OperationType(IntEnum):
    """
    Operation ids of the steemd static_variant, in protocol order.

    Only the operations shipped with this package are listed; the numeric
    value is the varint tag written in front of each operation.
    """

    VOTE = 0
    TRANSFER = 2
    ACCOUNT_WITNESS_VOTE = 12
    CUSTOM_JSON = 18


class AssetSymbol(str, Enum):
    """Core asset symbols with their fixed precision."""

    STEEM = "STEEM"
    SBD = "SBD"
    VESTS = "VESTS"

    @property
    def precision(self) -> int:
        return 6 if self is AssetSymbol.VESTS else 3


__all__ = ["PrivateKeyType", "OperationType", "AssetSymbol"]
