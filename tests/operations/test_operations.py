"""
Operation encoding, validation and signature requirement tests.
"""

import pytest
from pydantic import ValidationError

from steem_client.enums import AssetSymbol, OperationType, PrivateKeyType
from steem_client.operations import (
    OPERATION_REGISTRY,
    AccountWitnessVoteOperation,
    CustomJsonOperation,
    TransferOperation,
    VoteOperation,
    get_operation_class,
)
from steem_client.types import AccountName, Asset


class TestVote:
    """Test vote_operation."""

    def test_bytes(self, vote_op):
        assert vote_op.to_bytes() == b"\x00\x05alice\x03bob\x04post\x10\x27"

    def test_downvote_weight(self):
        op = VoteOperation(voter="alice", author="bob", permlink="post", weight=-10000)
        assert op.to_bytes()[-2:] == b"\xf0\xd8"

    @pytest.mark.parametrize("weight", [10001, -10001])
    def test_weight_out_of_range(self, weight):
        with pytest.raises(ValidationError):
            VoteOperation(voter="alice", author="bob", permlink="post", weight=weight)

    def test_requires_voter_posting(self, vote_op):
        (requirement,) = vote_op.signature_requirements()
        assert requirement.key_type == PrivateKeyType.POSTING
        assert requirement.field == "voter"
        assert requirement.value == AccountName("alice")


class TestTransfer:
    """Test transfer_operation."""

    def test_bytes(self, transfer_op):
        """Test asset amount, precision and padded symbol."""
        assert transfer_op.to_bytes() == (
            b"\x02\x05alice\x03bob"
            + b"\xe8\x03\x00\x00\x00\x00\x00\x00" + b"\x03" + b"STEEM\x00\x00"
            + b"\x02hi"
        )

    def test_populate_by_field_name(self):
        op = TransferOperation(from_account="alice", to="bob", amount=Asset.from_string("0.001 SBD"))
        assert op.from_account == AccountName("alice")
        assert op.model_dump(by_alias=True)["from"] == "alice"

    def test_requires_sender_active(self, transfer_op):
        (requirement,) = transfer_op.signature_requirements()
        assert requirement.key_type == PrivateKeyType.ACTIVE
        assert requirement.value == AccountName("alice")

    @pytest.mark.parametrize("amount", [
        Asset(amount=0, symbol=AssetSymbol.STEEM),
        Asset(amount=-5, symbol=AssetSymbol.SBD),
        Asset(amount=1, symbol=AssetSymbol.VESTS),
    ])
    def test_invalid_amounts(self, amount):
        with pytest.raises(ValidationError):
            TransferOperation(from_account="alice", to="bob", amount=amount)

    def test_memo_too_long(self):
        with pytest.raises(ValidationError):
            TransferOperation(from_account="alice", to="bob",
                              amount=Asset.from_string("1.000 STEEM"), memo="x" * 2048)


class TestWitnessVote:
    """Test account_witness_vote_operation."""

    def test_bytes(self):
        op = AccountWitnessVoteOperation(account="alice", witness="bob")
        assert op.to_bytes() == b"\x0c\x05alice\x03bob\x01"

    def test_unapprove(self):
        op = AccountWitnessVoteOperation(account="alice", witness="bob", approve=False)
        assert op.to_bytes()[-1:] == b"\x00"

    def test_requires_account_active(self):
        op = AccountWitnessVoteOperation(account="carol", witness="bob")
        assert op.signature_requirements()[0].key_type == PrivateKeyType.ACTIVE


class TestCustomJson:
    """Test custom_json_operation."""

    def test_account_sets_are_sorted_and_unique(self):
        """Test flat_set encoding of the authority lists."""
        op = CustomJsonOperation(required_posting_auths=["bob", "alice", "bob"], id="follow", json="[]")

        assert op.to_bytes() == b"\x12\x00\x02\x05alice\x03bob\x06follow\x02[]"

    def test_requirements_in_declaration_order(self):
        op = CustomJsonOperation(required_auths=["carol"], required_posting_auths=["bob"],
                                 id="follow", json="{}")
        requirements = op.signature_requirements()

        assert [r.key_type for r in requirements] == [PrivateKeyType.ACTIVE, PrivateKeyType.POSTING]
        assert requirements[0].value == [AccountName("carol")]

    def test_json_alias(self):
        op = CustomJsonOperation(id="follow", json="{}")
        assert op.json_payload == "{}"
        assert op.model_dump(by_alias=True)["json"] == "{}"


class TestRegistry:

    def test_every_type_is_registered(self):
        for operation_type, cls in OPERATION_REGISTRY.items():
            assert cls.operation_type == operation_type

    def test_lookup(self):
        assert get_operation_class(OperationType.TRANSFER) is TransferOperation
        assert get_operation_class(0) is VoteOperation

    def test_unknown_type(self):
        with pytest.raises(KeyError):
            get_operation_class(99)
