"""
Network configuration for the signing core.

SteemConfig holds the chain id the signing digest is bound to, the expiration
window accepted by the network and the clock used to default expirations. A
process-wide default is available through get_config()/set_config().
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel, Field, field_validator

STEEM_CHAIN_ID = "0000000000000000000000000000000000000000000000000000000000000000"
# steemd's STEEM_MAX_TIME_UNTIL_EXPIRATION
STEEM_MAX_EXPIRATION_OFFSET = 3600
EXPIRATION_SAFETY_MARGIN = 60


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SteemConfig(BaseModel):
    """
    Settings the signing core reads from its network.
    """
    chain_id: str = Field(default=STEEM_CHAIN_ID, description="Hex encoded chain id")
    max_expiration_offset: int = Field(
        default=STEEM_MAX_EXPIRATION_OFFSET,
        gt=EXPIRATION_SAFETY_MARGIN,
        description="Maximum seconds between now and a transaction's expiration"
    )
    max_signing_attempts: int = Field(
        default=500,
        ge=1,
        description="Upper bound of canonical signature attempts per signing pass"
    )
    strict_expiration: bool = Field(
        default=False,
        description="Reject expirations beyond the allowed window instead of warning"
    )
    clock: Callable[[], datetime] = Field(default=utc_now, exclude=True)

    @field_validator('chain_id')
    @classmethod
    def validate_chain_id(cls, v: str) -> str:
        """The chain id must decode as hex; an empty string disables the prefix."""
        try:
            bytes.fromhex(v)
        except ValueError as e:
            raise ValueError(f"chain_id is not valid hex: {v!r}") from e
        return v.lower()

    @property
    def chain_id_bytes(self) -> bytes:
        return bytes.fromhex(self.chain_id)

    def now(self) -> datetime:
        return self.clock()


_default_config: Optional[SteemConfig] = None


def get_config() -> SteemConfig:
    """Return the process-wide configuration, creating the default on first use."""
    global _default_config
    if _default_config is None:
        _default_config = SteemConfig()
    return _default_config


def set_config(config: Optional[SteemConfig]) -> None:
    """Replace the process-wide configuration; None restores the defaults."""
    global _default_config
    _default_config = config


__all__ = [
    "SteemConfig",
    "get_config",
    "set_config",
    "utc_now",
    "STEEM_CHAIN_ID",
    "STEEM_MAX_EXPIRATION_OFFSET",
    "EXPIRATION_SAFETY_MARGIN",
]
