"""
Steem Python Client - signed transaction core

Builds, serializes and signs Steem transactions: deterministic Graphene
binary encoding, key resolution per operation authority and canonical
compact secp256k1 signatures.
"""

from .enums import *
from .types import *
from .config import SteemConfig, get_config, set_config
from .runtime.errors import *
from .crypto import *
from .keys import *
from .operations import *
from .codec import *
from .tx import *

__version__ = "0.4.0"
__all__ = [
    # Configuration
    "SteemConfig",
    "get_config",
    "set_config",

    # Values
    "PrivateKeyType",
    "OperationType",
    "AssetSymbol",
    "AccountName",
    "Asset",
    "TimePointSec",
    "FutureExtensions",

    # Errors
    "SteemError",
    "ErrorCode",
    "InvalidTransactionError",
    "MissingKeyError",
    "KeyStoreTimeoutError",
    "EncodingError",
    "InvalidKeyError",
    "SigningFatalError",
    "OperationContractError",

    # Keys
    "Secp256k1KeyPair",
    "KeyStore",
    "MemoryKeyStore",
    "TimeoutKeyStore",

    # Operations
    "Operation",
    "SignatureRequirement",
    "VoteOperation",
    "TransferOperation",
    "AccountWitnessVoteOperation",
    "CustomJsonOperation",

    # Transactions
    "Transaction",
    "SignedTransaction",
    "KeyResolver",
    "SigningEngine",
    "serialize_transaction",
    "is_canonical",
]
