"""
Cryptographic primitives for Steem transaction signing.
"""

from .secp256k1 import Secp256k1KeyPair, Secp256k1Error, recover_public_point, CURVE_ORDER

__all__ = [
    "Secp256k1KeyPair",
    "Secp256k1Error",
    "recover_public_point",
    "CURVE_ORDER",
]
