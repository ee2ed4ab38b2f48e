"""
Steem Binary Codec Module

Canonical Graphene binary encoding of transactions.

Key components:
- writer.py: Binary writer with varint/primitive encoding
- transaction_codec.py: Transaction serialization, digest and id
- hashes.py: SHA-256 hashing helper
"""

from .hashes import sha256_bytes
from .writer import BinaryWriter, encode_uvarint
from .transaction_codec import chain_id_to_bytes, serialize_transaction, transaction_digest, transaction_id

__all__ = [
    "BinaryWriter",
    "encode_uvarint",
    "sha256_bytes",
    "chain_id_to_bytes",
    "serialize_transaction",
    "transaction_digest",
    "transaction_id",
]
