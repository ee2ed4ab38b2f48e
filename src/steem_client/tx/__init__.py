"""
Transaction models, key resolution and signing.
"""

from .transaction import Transaction, SignedTransaction
from .resolver import KeyResolver, iter_required_authorities
from .signing import (
    SigningEngine,
    is_canonical,
    encode_compact_signature,
    find_recovery_id,
    sign_digest_compact,
)

__all__ = [
    "Transaction",
    "SignedTransaction",
    "KeyResolver",
    "iter_required_authorities",
    "SigningEngine",
    "is_canonical",
    "encode_compact_signature",
    "find_recovery_id",
    "sign_digest_compact",
]
