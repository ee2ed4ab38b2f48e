"""
Shared fixtures:
- a fixed clock so expiration handling is deterministic
- deterministic key pairs and a populated in-memory key store
- transaction factories with valid reference block fields
"""
from datetime import datetime, timezone

import pytest

from steem_client.config import SteemConfig, set_config
from steem_client.crypto.secp256k1 import Secp256k1KeyPair
from steem_client.enums import PrivateKeyType
from steem_client.keys.keystore import MemoryKeyStore
from steem_client.operations import VoteOperation, TransferOperation
from steem_client.tx.transaction import SignedTransaction
from steem_client.types import Asset, TimePointSec
from steem_client.enums import AssetSymbol

FIXED_NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)
TEST_CHAIN_ID = "ab" * 32


@pytest.fixture(autouse=True)
def _reset_global_config():
    """Never leak a process-wide configuration between tests."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def config():
    """Configuration with a frozen clock and a non-zero chain id."""
    return SteemConfig(chain_id=TEST_CHAIN_ID, clock=lambda: FIXED_NOW)


@pytest.fixture
def alice_active():
    return Secp256k1KeyPair(bytes.fromhex("11" * 32))


@pytest.fixture
def alice_posting():
    return Secp256k1KeyPair(bytes.fromhex("22" * 32))


@pytest.fixture
def bob_posting():
    return Secp256k1KeyPair(bytes.fromhex("33" * 32))


@pytest.fixture
def carol_active():
    return Secp256k1KeyPair(bytes.fromhex("44" * 32))


@pytest.fixture
def key_store(alice_active, alice_posting, bob_posting, carol_active):
    store = MemoryKeyStore()
    store.add_account("alice", {PrivateKeyType.ACTIVE: alice_active,
                                PrivateKeyType.POSTING: alice_posting})
    store.add_account("bob", {PrivateKeyType.POSTING: bob_posting})
    store.add_account("carol", {PrivateKeyType.ACTIVE: carol_active})
    return store


@pytest.fixture
def vote_op():
    return VoteOperation(voter="alice", author="bob", permlink="post", weight=10000)


@pytest.fixture
def transfer_op():
    return TransferOperation(**{"from": "alice", "to": "bob",
                                "amount": Asset(amount=1000, symbol=AssetSymbol.STEEM), "memo": "hi"})


@pytest.fixture
def make_transaction():
    """Factory for signable transactions with a known header."""
    def _make(*operations, expiration=1_700_000_000, ref_block_num=1234, ref_block_prefix=0xDEADBEEF):
        return SignedTransaction(
            ref_block_num=ref_block_num,
            ref_block_prefix=ref_block_prefix,
            expiration=TimePointSec(seconds=expiration) if expiration else None,
            operations=list(operations),
        )
    return _make
