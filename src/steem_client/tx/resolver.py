"""
Key resolution for transaction signing.

Turns the signature requirements declared by a list of operations into the
minimal, ordered list of private keys that have to sign. Including a key that
is not required makes steemd reject the transaction ("irrelevant signature
included"), so every key appears exactly once.
"""

from __future__ import annotations
from typing import Iterator, List, Sequence, Tuple
import logging

from ..crypto.secp256k1 import Secp256k1KeyPair
from ..enums import PrivateKeyType
from ..keys.keystore import KeyStore
from ..operations.base import Operation
from ..runtime.errors import MissingKeyError, OperationContractError
from ..types import AccountName

logger = logging.getLogger(__name__)


def iter_required_authorities(operation: Operation) -> Iterator[Tuple[PrivateKeyType, AccountName]]:
    """
    Yield every (authority type, account) pair an operation declares.

    Raises:
        OperationContractError: If a declared field holds something other
            than an AccountName or a list of AccountNames
    """
    for requirement in operation.signature_requirements():
        value = requirement.value
        if isinstance(value, AccountName):
            yield requirement.key_type, value
        elif isinstance(value, (list, tuple)) and all(isinstance(a, AccountName) for a in value):
            for account in value:
                yield requirement.key_type, account
        else:
            raise OperationContractError(
                f"{operation.name} declares '{requirement.field}' as signature-required but it holds "
                f"{type(value).__name__}, not an account name or a list of account names",
                details={"operation": operation.name, "field": requirement.field}
            )


class KeyResolver:
    """
    Resolves the keys required by a sequence of operations.
    """

    def __init__(self, key_store: KeyStore):
        self.key_store = key_store

    def resolve(self, operations: Sequence[Operation]) -> List[Secp256k1KeyPair]:
        """
        Resolve and deduplicate the required keys.

        Keys are listed in the order they are first discovered: operations in
        transaction order, then requirements in declaration order, then
        accounts in list order. Two pairs resolving to the same key yield one
        entry.

        Args:
            operations: Operations of the transaction

        Returns:
            Ordered, duplicate-free list of key pairs

        Raises:
            MissingKeyError: If any required key is not in the key store
            OperationContractError: If an operation's declaration is malformed
        """
        required_keys: List[Secp256k1KeyPair] = []
        for operation in operations:
            for key_type, account in iter_required_authorities(operation):
                try:
                    key = self.key_store.resolve(key_type, account)
                except MissingKeyError as e:
                    raise type(e)(
                        f"Could not find all required keys to sign the '{operation.name}': "
                        f"no {key_type.value} key for account '{account}'",
                        details={"operation": operation.name, "account": str(account),
                                 "keyType": key_type.value},
                        cause=e
                    ) from e
                if key not in required_keys:
                    required_keys.append(key)
                    logger.debug(f"{operation.name} requires the {key_type.value} key of {account}")
        return required_keys


__all__ = ["KeyResolver", "iter_required_authorities"]
