"""
Steem Client Error Model

This module provides the error handling framework for the signing core.
Every error carries an ErrorCode so callers can tell precondition problems,
missing keys, encoding failures and internal consistency failures apart.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes for the signing core."""

    OK = 0

    # 1-99: failures not caused by caller input
    UNKNOWN = 1
    INTERNAL = 2

    # 100-199: serializer
    ENCODING_ERROR = 100

    # 200-299: key store availability
    TIMEOUT = 202

    # 400-499: transaction and operation contents
    INVALID_TRANSACTION = 400
    INVALID_OPERATION = 401

    # 700-799: key material and lookup
    INVALID_KEY = 700
    KEY_NOT_FOUND = 701


class SteemError(Exception):
    """
    Base class for all steem_client errors.

    Provides structured error information (code, details and cause).
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Steem error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    @property
    def is_internal(self) -> bool:
        """True for should-never-happen failures operators should alert on."""
        return self.code == ErrorCode.INTERNAL

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Structured form for logs and API responses."""
        result = {
            "error": type(self).__name__,
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidTransactionError(SteemError):
    """The transaction violates a signing precondition."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_TRANSACTION, details, cause)


class MissingKeyError(SteemError):
    """No private key is registered for a required (authority, account) pair."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.KEY_NOT_FOUND, details, cause)


class KeyStoreTimeoutError(MissingKeyError):
    """The key store did not answer in time."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.TIMEOUT


class EncodingError(SteemError):
    """A value could not be turned into its binary representation."""

    def __init__(self, message: str, field: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        details = dict(details or {})
        if field is not None:
            details.setdefault("field", field)
        super().__init__(message, ErrorCode.ENCODING_ERROR, details, cause)
        self.field = field


class InvalidKeyError(SteemError):
    """Malformed key material (bad WIF, out of range scalar, ...)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY, details, cause)


class SigningFatalError(SteemError):
    """
    Internal consistency failure while signing.

    Raised when no recovery id reproduces the signing key or when the
    canonical signature search runs out of attempts. Neither is caused by
    caller input.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INTERNAL, details, cause)


class OperationContractError(SteemError):
    """An operation declared its signature requirements incorrectly."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_OPERATION, details, cause)


class ErrorHandler:
    """
    Utility class for handling and categorizing errors.
    """

    @staticmethod
    def is_retryable(error: Exception) -> bool:
        """
        Check if an error is retryable.

        Only key store timeouts are worth another attempt; precondition,
        encoding and internal failures need a code or data fix first.

        Args:
            error: Exception to check

        Returns:
            True if the error should be retried
        """
        if isinstance(error, SteemError):
            return error.code == ErrorCode.TIMEOUT
        return False


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
