"""
Posting-authority operations: votes and custom JSON payloads.
"""

from __future__ import annotations
from typing import ClassVar, List

from pydantic import Field

from ..codec.writer import BinaryWriter
from ..enums import OperationType, PrivateKeyType
from ..types import AccountName
from .base import Operation, SignatureRequirement, write_account_set

STEEM_100_PERCENT = 10000


class VoteOperation(Operation):
    """
    Up- or down-vote a post.

    ``weight`` is in basis points, -10000 (full flag) to 10000 (full upvote).
    """
    operation_type: ClassVar[OperationType] = OperationType.VOTE

    voter: AccountName
    author: AccountName
    permlink: str
    weight: int = Field(ge=-STEEM_100_PERCENT, le=STEEM_100_PERCENT)

    def write_fields(self, writer: BinaryWriter) -> None:
        self.voter.write(writer, 'voter')
        self.author.write(writer, 'author')
        writer.string(self.permlink, 'permlink')
        writer.i16le(self.weight, 'weight')

    def signature_requirements(self) -> List[SignatureRequirement]:
        return [SignatureRequirement(PrivateKeyType.POSTING, 'voter', self.voter)]


class CustomJsonOperation(Operation):
    """
    Publish an application specific JSON document.

    Accounts in ``required_auths`` sign with their active key, those in
    ``required_posting_auths`` with their posting key.
    """
    operation_type: ClassVar[OperationType] = OperationType.CUSTOM_JSON

    required_auths: List[AccountName] = Field(default_factory=list)
    required_posting_auths: List[AccountName] = Field(default_factory=list)
    id: str
    json_payload: str = Field(alias="json")

    def write_fields(self, writer: BinaryWriter) -> None:
        write_account_set(writer, self.required_auths, 'required_auths')
        write_account_set(writer, self.required_posting_auths, 'required_posting_auths')
        writer.string(self.id, 'id')
        writer.string(self.json_payload, 'json')

    def signature_requirements(self) -> List[SignatureRequirement]:
        return [
            SignatureRequirement(PrivateKeyType.ACTIVE, 'required_auths', self.required_auths),
            SignatureRequirement(PrivateKeyType.POSTING, 'required_posting_auths', self.required_posting_auths),
        ]


__all__ = ["VoteOperation", "CustomJsonOperation", "STEEM_100_PERCENT"]
