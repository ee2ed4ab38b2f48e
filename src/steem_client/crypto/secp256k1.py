"""
SECP256K1 cryptographic operations for Steem transaction signing.

Provides deterministic (RFC 6979) ECDSA signatures with low-S normalisation,
public key recovery from (r, s, recovery id) and WIF import/export. Backed by
the pure Python ``ecdsa`` library.
"""

from __future__ import annotations
import hashlib
import os
from typing import Optional, Tuple

import base58
from ecdsa import SigningKey, SECP256k1
from ecdsa import numbertheory
from ecdsa.ellipticcurve import PointJacobi

from ..runtime.errors import InvalidKeyError

CURVE_ORDER = SECP256k1.order
WIF_VERSION = 0x80
_COMPRESSED_WIF_SUFFIX = b'\x01'


class Secp256k1Error(InvalidKeyError):
    """Base exception for SECP256K1 operations."""
    pass


def _raw_signature(r: int, s: int, order: int) -> Tuple[int, int]:
    return r, s


def recover_public_point(recovery_id: int, r: int, s: int, digest: bytes,
                         ) -> Optional[Tuple[int, int]]:
    """
    Recover the public point that produced ``(r, s)`` over ``digest``.

    Implements SEC 1 v2 section 4.1.6 for a single recovery id: bit 0 picks
    the parity of R.y, bit 1 selects x = r + n.

    Args:
        recovery_id: 0..3
        r: Signature r component
        s: Signature s component
        digest: 32-byte message hash that was signed

    Returns:
        Affine (x, y) of the recovered key, or None if this recovery id
        does not yield a point
    """
    if not 0 <= recovery_id <= 3:
        raise ValueError(f"recovery_id must be between 0 and 3, got {recovery_id}")

    curve = SECP256k1.curve
    p = curve.p()
    n = CURVE_ORDER

    x = r + (recovery_id // 2) * n
    if x >= p:
        return None

    alpha = (pow(x, 3, p) + curve.a() * x + curve.b()) % p
    if numbertheory.jacobi(alpha, p) != 1:
        return None
    beta = numbertheory.square_root_mod_prime(alpha, p)
    y = beta if beta % 2 == recovery_id % 2 else p - beta

    point_r = PointJacobi(curve, x, y, 1, n)
    e = int.from_bytes(digest, 'big') % n
    q = numbertheory.inverse_mod(r, n) * (s * point_r + ((-e) % n) * SECP256k1.generator)
    if q.x() is None:
        return None
    return q.x(), q.y()


class Secp256k1KeyPair:
    """
    SECP256K1 key pair used to sign Steem transactions.

    Two key pairs are equal when they hold the same private scalar and the
    same point-compression flag, so they can be deduplicated and hashed.
    """

    def __init__(self, private_key_bytes: Optional[bytes] = None, compressed: bool = True):
        """
        Initialize key pair.

        Args:
            private_key_bytes: 32-byte private key (random when omitted)
            compressed: Whether the public key uses compressed point encoding
        """
        if private_key_bytes is None:
            private_key_bytes = os.urandom(32)
        if len(private_key_bytes) != 32:
            raise Secp256k1Error(f"Private key must be 32 bytes, got {len(private_key_bytes)}")
        secret = int.from_bytes(private_key_bytes, 'big')
        if not 0 < secret < CURVE_ORDER:
            raise Secp256k1Error("Private key is outside the secp256k1 scalar range")

        self._private_key_bytes = bytes(private_key_bytes)
        self.compressed = compressed
        self._signing_key = SigningKey.from_string(self._private_key_bytes, curve=SECP256k1,
                                                   hashfunc=hashlib.sha256)
        self._verifying_key = self._signing_key.get_verifying_key()

    @classmethod
    def generate(cls) -> Secp256k1KeyPair:
        """Generate a new random key pair."""
        return cls()

    @classmethod
    def from_hex(cls, private_key_hex: str, compressed: bool = True) -> Secp256k1KeyPair:
        """Create key pair from private key hex string."""
        try:
            private_key_bytes = bytes.fromhex(private_key_hex)
        except ValueError as e:
            raise Secp256k1Error(f"Invalid hex string: {e}", cause=e)
        return cls(private_key_bytes, compressed)

    @classmethod
    def from_wif(cls, wif: str, compressed: bool = True) -> Secp256k1KeyPair:
        """
        Create key pair from a Wallet Import Format string.

        Steem exports keys in the uncompressed WIF form ("5..."), yet signs
        with compressed public keys, so ``compressed`` defaults to True
        regardless of the WIF flavour.

        Args:
            wif: Base58check encoded private key
            compressed: Point compression flag of the resulting key pair

        Raises:
            Secp256k1Error: If the checksum or version byte is wrong
        """
        try:
            payload = base58.b58decode_check(wif)
        except ValueError as e:
            raise Secp256k1Error("Invalid WIF checksum", cause=e)
        if len(payload) not in (33, 34):
            raise Secp256k1Error(f"WIF payload has unexpected length {len(payload)}")
        if payload[0] != WIF_VERSION:
            raise Secp256k1Error(f"Unexpected WIF version byte 0x{payload[0]:02x}")
        key = payload[1:]
        if len(key) == 33 and key[32:] == _COMPRESSED_WIF_SUFFIX:
            key = key[:32]
        return cls(key, compressed)

    def to_wif(self) -> str:
        """Export the private key in uncompressed WIF, as steem wallets do."""
        return base58.b58encode_check(bytes([WIF_VERSION]) + self._private_key_bytes).decode('ascii')

    @property
    def public_point(self) -> Tuple[int, int]:
        """Affine (x, y) coordinates of the public key."""
        point = self._verifying_key.pubkey.point
        return point.x(), point.y()

    @property
    def public_key_bytes(self) -> bytes:
        """SEC1 encoded public key, 33 bytes if compressed else 65."""
        return self._verifying_key.to_string("compressed" if self.compressed else "uncompressed")

    def sign_digest(self, digest: bytes) -> Tuple[int, int]:
        """
        Sign a 32-byte digest deterministically.

        The nonce is derived per RFC 6979 from the key and digest, so equal
        inputs give equal signatures. ``s`` is normalised to the lower half of
        the curve order.

        Returns:
            (r, s) as integers
        """
        if len(digest) != 32:
            raise Secp256k1Error(f"Digest must be 32 bytes, got {len(digest)}")
        r, s = self._signing_key.sign_digest_deterministic(digest, hashfunc=hashlib.sha256,
                                                           sigencode=_raw_signature)
        if s > CURVE_ORDER // 2:
            s = CURVE_ORDER - s
        return r, s

    def to_hex(self) -> str:
        """Get private key as hex string."""
        return self._private_key_bytes.hex()

    def to_bytes(self) -> bytes:
        """Get private key as bytes."""
        return self._private_key_bytes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secp256k1KeyPair):
            return NotImplemented
        return (self._private_key_bytes == other._private_key_bytes
                and self.compressed == other.compressed)

    def __hash__(self) -> int:
        return hash((self._private_key_bytes, self.compressed))

    def __str__(self) -> str:
        return f"Secp256k1KeyPair(public={self.public_key_bytes.hex()[:16]}...)"

    __repr__ = __str__


__all__ = [
    "Secp256k1KeyPair",
    "Secp256k1Error",
    "recover_public_point",
    "CURVE_ORDER",
]
