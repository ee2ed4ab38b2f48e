"""
Key storage interface for Steem transaction signing.

Maps (authority type, account name) pairs to private keys. The signing core
only ever calls ``resolve``; how keys get into a store is up to the
implementation.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Dict, List, Optional, Union
import logging

from ..crypto.secp256k1 import Secp256k1KeyPair
from ..enums import PrivateKeyType
from ..runtime.errors import MissingKeyError, KeyStoreTimeoutError
from ..types import AccountName

logger = logging.getLogger(__name__)


def _as_account(account: Union[str, AccountName]) -> AccountName:
    return account if isinstance(account, AccountName) else AccountName(account)


class KeyStore(ABC):
    """
    Abstract key store interface.
    """

    @abstractmethod
    def resolve(self, key_type: PrivateKeyType, account: AccountName) -> Secp256k1KeyPair:
        """
        Look up the key ``account`` uses for ``key_type``.

        Args:
            key_type: Authority role of the key
            account: Account the key belongs to

        Returns:
            The matching key pair

        Raises:
            MissingKeyError: If no key is registered for the pair
        """
        pass

    def has_key(self, key_type: PrivateKeyType, account: AccountName) -> bool:
        """
        Check if a key exists.

        Returns:
            True if ``resolve`` would succeed
        """
        try:
            self.resolve(key_type, account)
        except MissingKeyError:
            return False
        return True


class MemoryKeyStore(KeyStore):
    """
    In-memory key store implementation.

    Keys are grouped per account, one key per authority type.
    """

    def __init__(self):
        """Initialize memory key store."""
        self._accounts: Dict[AccountName, Dict[PrivateKeyType, Secp256k1KeyPair]] = {}

    def add_account(self, account: Union[str, AccountName],
                    keys: Optional[Dict[PrivateKeyType, Union[str, Secp256k1KeyPair]]] = None) -> None:
        """
        Register an account, optionally with its keys.

        Args:
            account: Account name
            keys: Keys per authority type, as key pairs or WIF strings
        """
        account = _as_account(account)
        self._accounts.setdefault(account, {})
        for key_type, key in (keys or {}).items():
            self.add_private_key_to_account(account, key_type, key)

    def add_private_key_to_account(self, account: Union[str, AccountName], key_type: PrivateKeyType,
                                   key: Union[str, Secp256k1KeyPair]) -> None:
        """
        Add or replace one key of an account.

        Args:
            account: Account name
            key_type: Authority type the key is used for
            key: Key pair or WIF string
        """
        account = _as_account(account)
        if isinstance(key, str):
            key = Secp256k1KeyPair.from_wif(key)
        self._accounts.setdefault(account, {})[key_type] = key
        logger.debug(f"Stored {key_type.value} key for account {account}")

    def get_key_for_account(self, key_type: PrivateKeyType,
                            account: Union[str, AccountName]) -> Secp256k1KeyPair:
        """Alias of ``resolve`` accepting plain strings."""
        return self.resolve(key_type, _as_account(account))

    def resolve(self, key_type: PrivateKeyType, account: AccountName) -> Secp256k1KeyPair:
        """Retrieve a key pair from memory."""
        keys = self._accounts.get(account)
        if keys is None:
            raise MissingKeyError(f"The account '{account}' has not been added to the key store",
                                  details={"account": str(account), "keyType": key_type.value})
        key = keys.get(key_type)
        if key is None:
            raise MissingKeyError(f"No {key_type.value} key stored for account '{account}'",
                                  details={"account": str(account), "keyType": key_type.value})
        return key

    def remove_account(self, account: Union[str, AccountName]) -> bool:
        """Delete an account and all of its keys."""
        account = _as_account(account)
        if account in self._accounts:
            del self._accounts[account]
            logger.debug(f"Removed account {account} from memory key store")
            return True
        return False

    def list_accounts(self) -> List[AccountName]:
        return list(self._accounts)

    def __str__(self) -> str:
        return f"MemoryKeyStore({len(self._accounts)} accounts)"

    def __repr__(self) -> str:
        return f"MemoryKeyStore(count={len(self._accounts)})"


class TimeoutKeyStore(KeyStore):
    """
    Bounds the time spent in a slow (network or disk backed) key store.

    Each lookup runs on a worker thread; if it does not finish within
    ``timeout`` seconds a KeyStoreTimeoutError is raised instead of hanging
    the signing pass.
    """

    def __init__(self, inner: KeyStore, timeout: float = 5.0):
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.inner = inner
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="keystore")

    def resolve(self, key_type: PrivateKeyType, account: AccountName) -> Secp256k1KeyPair:
        future = self._executor.submit(self.inner.resolve, key_type, account)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError as e:
            # the hung lookup keeps its worker; later lookups get a fresh one
            self._executor.shutdown(wait=False)
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="keystore")
            logger.warning(f"Key store lookup for {key_type.value} key of '{account}' timed out "
                           f"after {self.timeout}s")
            raise KeyStoreTimeoutError(
                f"Key store did not resolve the {key_type.value} key of '{account}' "
                f"within {self.timeout}s",
                details={"account": str(account), "keyType": key_type.value},
                cause=e
            )

    def close(self) -> None:
        self._executor.shutdown(wait=False)

    def __enter__(self) -> TimeoutKeyStore:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["KeyStore", "MemoryKeyStore", "TimeoutKeyStore"]
