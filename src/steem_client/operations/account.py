"""
Active-authority operations: token transfers and witness votes.
"""

from __future__ import annotations
from typing import ClassVar, List

from pydantic import Field, field_validator

from ..codec.writer import BinaryWriter
from ..enums import OperationType, PrivateKeyType
from ..types import AccountName, Asset
from .base import Operation, SignatureRequirement

# steemd's STEEM_MAX_MEMO_SIZE
MAX_MEMO_SIZE = 2048


class TransferOperation(Operation):
    """
    Move liquid STEEM or SBD from one account to another.
    """
    operation_type: ClassVar[OperationType] = OperationType.TRANSFER

    from_account: AccountName = Field(alias="from")
    to: AccountName
    amount: Asset
    memo: str = ""

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Asset) -> Asset:
        if v.amount <= 0:
            raise ValueError("Transfer amount must be positive")
        if v.symbol.value == "VESTS":
            raise ValueError("VESTS cannot be transferred")
        return v

    @field_validator('memo')
    @classmethod
    def validate_memo(cls, v: str) -> str:
        if len(v.encode('utf-8')) >= MAX_MEMO_SIZE:
            raise ValueError(f"Memo must be shorter than {MAX_MEMO_SIZE} bytes")
        return v

    def write_fields(self, writer: BinaryWriter) -> None:
        self.from_account.write(writer, 'from')
        self.to.write(writer, 'to')
        self.amount.write(writer, 'amount')
        writer.string(self.memo, 'memo')

    def signature_requirements(self) -> List[SignatureRequirement]:
        return [SignatureRequirement(PrivateKeyType.ACTIVE, 'from', self.from_account)]


class AccountWitnessVoteOperation(Operation):
    """
    Approve or remove approval of a witness.
    """
    operation_type: ClassVar[OperationType] = OperationType.ACCOUNT_WITNESS_VOTE

    account: AccountName
    witness: AccountName
    approve: bool = True

    def write_fields(self, writer: BinaryWriter) -> None:
        self.account.write(writer, 'account')
        self.witness.write(writer, 'witness')
        writer.u8(1 if self.approve else 0, 'approve')

    def signature_requirements(self) -> List[SignatureRequirement]:
        return [SignatureRequirement(PrivateKeyType.ACTIVE, 'account', self.account)]


__all__ = ["TransferOperation", "AccountWitnessVoteOperation", "MAX_MEMO_SIZE"]
