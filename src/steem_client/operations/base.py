"""
Base operation contract.

Every operation knows two things: its own Graphene byte encoding and which
of its fields hold accounts whose authority has to sign the transaction.
The second is an explicit per-class declaration, so the key resolver never
inspects fields on its own.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, ClassVar, List, NamedTuple, Sequence

from pydantic import BaseModel

from ..codec.writer import BinaryWriter
from ..enums import OperationType, PrivateKeyType
from ..types import AccountName


class SignatureRequirement(NamedTuple):
    """
    One signature-required field of an operation.

    ``value`` is either a single AccountName or a sequence of them.
    """
    key_type: PrivateKeyType
    field: str
    value: Any


class Operation(BaseModel, ABC):
    """
    Base class of all operations.

    Subclasses set ``operation_type`` and implement ``write_fields`` and
    ``signature_requirements``.
    """
    operation_type: ClassVar[OperationType]

    model_config = {"populate_by_name": True}

    @abstractmethod
    def write_fields(self, writer: BinaryWriter) -> None:
        """Write the operation body (everything after the type tag)."""
        pass

    @abstractmethod
    def signature_requirements(self) -> List[SignatureRequirement]:
        """
        Declare the accounts that must sign this operation.

        Returns:
            Requirements in the order their keys should be looked up
        """
        pass

    def write(self, writer: BinaryWriter) -> None:
        writer.uvarint(self.operation_type.value, 'operation_type')
        self.write_fields(writer)

    def to_bytes(self) -> bytes:
        """Serialize as the steemd static_variant: varint type id followed by the body."""
        writer = BinaryWriter()
        self.write(writer)
        return writer.to_bytes()

    @property
    def name(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return f"{self.name}({self.operation_type.name})"


def write_account_set(writer: BinaryWriter, accounts: Sequence[AccountName], field: str) -> None:
    """
    Write a flat_set<account_name_type>.

    steemd keeps flat sets sorted and unique, so the bytes are produced from
    the sorted distinct names regardless of the order given by the caller.
    """
    names = sorted({account.name for account in accounts})
    writer.uvarint(len(names), field)
    for name in names:
        writer.string(name, field)


__all__ = ["Operation", "SignatureRequirement", "write_account_set"]
