"""
Runtime support for the steem_client package.
"""

from .errors import *

__all__ = [
    "ErrorCode",
    "SteemError",
    "InvalidTransactionError",
    "MissingKeyError",
    "KeyStoreTimeoutError",
    "EncodingError",
    "InvalidKeyError",
    "SigningFatalError",
    "OperationContractError",
    "ErrorHandler",
]
