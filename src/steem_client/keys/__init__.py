"""
Key management for Steem transaction signing.
"""

from .keystore import KeyStore, MemoryKeyStore, TimeoutKeyStore

__all__ = [
    "KeyStore",
    "MemoryKeyStore",
    "TimeoutKeyStore",
]
