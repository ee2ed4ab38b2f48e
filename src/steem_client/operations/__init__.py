"""
Steem operations.

The closed set of operation classes shipped with this package, keyed by
their protocol id.
"""

from typing import Dict, Type

from ..enums import OperationType
from .base import Operation, SignatureRequirement, write_account_set
from .account import TransferOperation, AccountWitnessVoteOperation
from .social import VoteOperation, CustomJsonOperation

OPERATION_REGISTRY: Dict[OperationType, Type[Operation]] = {
    OperationType.VOTE: VoteOperation,
    OperationType.TRANSFER: TransferOperation,
    OperationType.ACCOUNT_WITNESS_VOTE: AccountWitnessVoteOperation,
    OperationType.CUSTOM_JSON: CustomJsonOperation,
}


def get_operation_class(operation_type: OperationType) -> Type[Operation]:
    """
    Look up the class implementing an operation id.

    Raises:
        KeyError: If the operation is not part of this package
    """
    try:
        return OPERATION_REGISTRY[OperationType(operation_type)]
    except (KeyError, ValueError):
        raise KeyError(f"Unsupported operation type: {operation_type}")


__all__ = [
    "Operation",
    "SignatureRequirement",
    "write_account_set",
    "TransferOperation",
    "AccountWitnessVoteOperation",
    "VoteOperation",
    "CustomJsonOperation",
    "OPERATION_REGISTRY",
    "get_operation_class",
]
