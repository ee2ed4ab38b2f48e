"""
Transaction signing engine.

Signs the SHA-256 digest of the chain-id-prefixed transaction with every
required key and encodes each result as a 65 byte compact, recoverable
signature. steemd only accepts canonical signatures; when a signature is not
canonical the expiration is pushed forward by one second, which changes the
digest, and signing starts over.
"""

from __future__ import annotations
from datetime import timedelta
from typing import List, Optional, Sequence
import logging

from ..codec.transaction_codec import ChainId, chain_id_to_bytes, transaction_digest
from ..config import EXPIRATION_SAFETY_MARGIN, SteemConfig, get_config
from ..crypto.secp256k1 import Secp256k1KeyPair, recover_public_point
from ..keys.keystore import KeyStore
from ..runtime.errors import InvalidTransactionError, SigningFatalError
from ..types import TimePointSec
from .resolver import KeyResolver
from .transaction import SignedTransaction

logger = logging.getLogger(__name__)

COMPACT_SIGNATURE_SIZE = 65
COMPACT_HEADER_BASE = 27
COMPACT_COMPRESSED_FLAG = 4


def is_canonical(signature: bytes) -> bool:
    """
    Check a compact signature against steemd's canonical form.

    Rejects a header byte that is zero or has its top bit set, an r whose
    first byte has its top bit set, an r whose last byte is zero and an s
    whose first byte has its top bit set.

    Args:
        signature: 65 byte compact signature

    Returns:
        True if the signature is canonical
    """
    if len(signature) != COMPACT_SIGNATURE_SIZE:
        return False
    return not (
        signature[0] == 0
        or signature[0] & 0x80
        or signature[1] & 0x80
        or signature[32] == 0
        or signature[33] & 0x80
    )


def encode_compact_signature(recovery_id: int, r: int, s: int, compressed: bool) -> bytes:
    """
    Build the 65 byte compact signature.

    Byte 0 is ``27 + recovery_id`` (+4 for compressed keys), followed by r
    and s as 32 byte big-endian integers.
    """
    header = COMPACT_HEADER_BASE + recovery_id + (COMPACT_COMPRESSED_FLAG if compressed else 0)
    return bytes([header]) + r.to_bytes(32, 'big') + s.to_bytes(32, 'big')


def find_recovery_id(key: Secp256k1KeyPair, r: int, s: int, digest: bytes) -> int:
    """
    Find the recovery id that reproduces ``key``'s public key.

    Raises:
        SigningFatalError: If none of the four candidates matches
    """
    expected = key.public_point
    for recovery_id in range(4):
        if recover_public_point(recovery_id, r, s, digest) == expected:
            return recovery_id
    raise SigningFatalError("Could not construct a recoverable key. This should never happen.",
                            details={"digest": digest.hex()})


def sign_digest_compact(key: Secp256k1KeyPair, digest: bytes) -> bytes:
    """Sign ``digest`` and return the compact, recoverable encoding."""
    r, s = key.sign_digest(digest)
    recovery_id = find_recovery_id(key, r, s, digest)
    return encode_compact_signature(recovery_id, r, s, key.compressed)


class SigningEngine:
    """
    Signs SignedTransaction instances.

    One engine may sign many independent transactions; a single transaction
    must not be signed from two threads at once.
    """

    def __init__(self, key_store: KeyStore, config: Optional[SteemConfig] = None):
        self.config = config or get_config()
        self.resolver = KeyResolver(key_store)

    def check_preconditions(self, transaction: SignedTransaction) -> None:
        """
        Reject transactions that can never be signed.

        Raises:
            InvalidTransactionError: If there are no operations or the
                reference block fields are unset
        """
        if not transaction.operations:
            raise InvalidTransactionError("At least one operation is required to sign the transaction.")
        if transaction.ref_block_num == 0:
            raise InvalidTransactionError("The ref_block_num field needs to be set.")
        if transaction.ref_block_prefix == 0:
            raise InvalidTransactionError("The ref_block_prefix field needs to be set.")

    def prepare_expiration(self, transaction: SignedTransaction) -> None:
        """
        Default an unset expiration and check a given one against the window.

        An unset expiration becomes now + max offset - safety margin. An
        expiration beyond now + max offset is logged as a warning, or rejected
        when ``strict_expiration`` is configured.
        """
        now = TimePointSec.from_datetime(self.config.now())
        latest = now + timedelta(seconds=self.config.max_expiration_offset)

        if not transaction.expiration.is_set:
            transaction.expiration = latest.add_seconds(-EXPIRATION_SAFETY_MARGIN)
            logger.debug(f"No expiration date has been provided so {transaction.expiration} is used.")
        elif transaction.expiration.seconds > latest.seconds:
            message = (f"The expiration date {transaction.expiration} of this transaction is too far "
                       f"in the future and may not be accepted by the node.")
            if self.config.strict_expiration:
                raise InvalidTransactionError(message, details={"expiration": str(transaction.expiration),
                                                                "latest": str(latest)})
            logger.warning(message)

    def sign(self, transaction: SignedTransaction, chain_id: ChainId = None) -> List[str]:
        """
        Sign ``transaction`` with every key its operations require.

        All keys sign the same digest. If any of them produces a non-canonical
        signature the expiration is advanced by one second and every key signs
        again, so the appended signatures always cover the final transaction.

        Args:
            transaction: Transaction to sign; mutated in place
            chain_id: Chain id bound into the digest (defaults to the config's)

        Returns:
            The signatures appended by this call

        Raises:
            InvalidTransactionError: Precondition violation
            MissingKeyError: A required key is not in the key store
            EncodingError: The transaction cannot be serialized
            SigningFatalError: Recovery failed or no canonical signature was
                found within ``max_signing_attempts``
        """
        self.check_preconditions(transaction)
        keys = self.resolver.resolve(transaction.operations)
        chain_bytes = chain_id_to_bytes(self.config.chain_id if chain_id is None else chain_id)
        self.prepare_expiration(transaction)

        signatures = self._sign_canonical(transaction, keys, chain_bytes)

        encoded = [signature.hex() for signature in signatures]
        transaction.signatures.extend(encoded)
        return encoded

    def _sign_canonical(self, transaction: SignedTransaction, keys: Sequence[Secp256k1KeyPair],
                        chain_id: bytes) -> List[bytes]:
        for attempt in range(1, self.config.max_signing_attempts + 1):
            digest = transaction_digest(transaction, chain_id)
            signatures = []
            for key in keys:
                signature = sign_digest_compact(key, digest)
                if not is_canonical(signature):
                    break
                signatures.append(signature)
            else:
                logger.debug(f"Signed transaction with {len(signatures)} key(s) after {attempt} attempt(s)")
                return signatures

            transaction.expiration = transaction.expiration.add_seconds(1)
            logger.debug(f"Non-canonical signature on attempt {attempt}, "
                         f"retrying with expiration {transaction.expiration}")

        raise SigningFatalError(
            f"No canonical signature found within {self.config.max_signing_attempts} attempts",
            details={"attempts": self.config.max_signing_attempts}
        )


__all__ = [
    "SigningEngine",
    "is_canonical",
    "encode_compact_signature",
    "find_recovery_id",
    "sign_digest_compact",
]
