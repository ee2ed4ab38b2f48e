"""
Transaction and SignedTransaction models.

A Transaction is the header (reference block and expiration), the ordered
operations and the extensions. SignedTransaction adds the list of compact
signatures and the entry points to sign and serialize.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ..codec.transaction_codec import ChainId, serialize_transaction, transaction_id
from ..operations.base import Operation
from ..types import FutureExtensions, TimePointSec

if TYPE_CHECKING:
    from ..config import SteemConfig
    from ..crypto.secp256k1 import Secp256k1KeyPair
    from ..keys.keystore import KeyStore


class Transaction(BaseModel):
    """
    Unsigned transaction.

    ``ref_block_num`` is the lower 16 bits of a recent block number and
    ``ref_block_prefix`` the first 4 bytes of that block's id read as a
    little-endian integer. ``expiration`` of 0 means "not set yet".
    """
    ref_block_num: int = Field(default=0, ge=0, description="Reference block number (uint16)")
    ref_block_prefix: int = Field(default=0, ge=0, description="Reference block prefix (uint32)")
    expiration: TimePointSec = Field(default_factory=TimePointSec)
    operations: List[Operation] = Field(default_factory=list)
    extensions: List[FutureExtensions] = Field(default_factory=list)

    model_config = {"validate_assignment": True}

    @field_validator('expiration', mode='before')
    @classmethod
    def parse_expiration(cls, v: Any) -> Any:
        """Accept None, seconds, datetimes and ISO strings."""
        if v is None:
            return TimePointSec()
        if isinstance(v, (int, datetime, str)):
            return TimePointSec(seconds=v)
        return v

    def to_bytes(self, chain_id: ChainId = None) -> bytes:
        """
        Serialize the transaction.

        Args:
            chain_id: Prepended when given; omit it for the wire form

        Returns:
            Serialized transaction bytes
        """
        return serialize_transaction(self, chain_id)

    @property
    def id(self) -> str:
        """Transaction id (hex) derived from the wire form."""
        return transaction_id(self)

    def to_dict(self) -> Dict[str, Any]:
        """JSON representation in the layout steemd's API expects."""
        return {
            "ref_block_num": self.ref_block_num,
            "ref_block_prefix": self.ref_block_prefix,
            "expiration": str(self.expiration),
            "operations": [
                [op.operation_type.name.lower(), op.model_dump(by_alias=True)]
                for op in self.operations
            ],
            "extensions": [ext.model_dump() for ext in self.extensions],
        }


class SignedTransaction(Transaction):
    """
    Transaction plus the ordered list of hex encoded compact signatures.

    Instances are not safe to sign or serialize from two threads at once;
    signing mutates ``expiration`` and ``signatures``.
    """
    signatures: List[str] = Field(default_factory=list)

    def get_required_signatures(self, key_store: KeyStore) -> List[Secp256k1KeyPair]:
        """
        Resolve the keys needed to sign this transaction.

        Raises:
            MissingKeyError: If the key store lacks a required key
        """
        from .resolver import KeyResolver
        return KeyResolver(key_store).resolve(self.operations)

    def to_bytes(self, chain_id: ChainId = None, key_store: Optional[KeyStore] = None) -> bytes:
        """
        Serialize the transaction; signatures are not part of the output.

        When a key store is given every required key is resolved first, so
        no bytes are produced for a transaction that could not be signed.

        Args:
            chain_id: Prepended when given; omit it for the wire form
            key_store: Optional key store to check required keys against
        """
        if key_store is not None:
            self.get_required_signatures(key_store)
        return serialize_transaction(self, chain_id)

    def sign(self, key_store: KeyStore, chain_id: ChainId = None,
             config: Optional[SteemConfig] = None) -> SignedTransaction:
        """
        Sign with every key the operations require.

        Args:
            key_store: Source of private keys
            chain_id: Chain id bound into the digest (defaults to the config's)
            config: Network settings (defaults to get_config())

        Returns:
            self, with signatures appended and expiration possibly advanced
        """
        from .signing import SigningEngine
        SigningEngine(key_store, config).sign(self, chain_id)
        return self

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["signatures"] = list(self.signatures)
        return result


__all__ = ["Transaction", "SignedTransaction"]
