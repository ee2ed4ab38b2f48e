"""
Protocol value type tests: account names, assets and time points.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from steem_client.enums import AssetSymbol
from steem_client.types import AccountName, Asset, FutureExtensions, TimePointSec


class TestAccountName:

    @pytest.mark.parametrize("name", ["abc", "alice", "steem-dev", "a1b", "init.miner", "abcdefghijklmnop"])
    def test_valid(self, name):
        assert str(AccountName(name)) == name

    @pytest.mark.parametrize("name", [
        "ab",                    # too short
        "abcdefghijklmnopq",     # too long
        "Alice",                 # upper case
        "1abc",                  # leading digit
        "abc-",                  # trailing dash
        "ab.cde",                # short segment
        "abc..def",              # empty segment
    ])
    def test_invalid(self, name):
        with pytest.raises(ValidationError):
            AccountName(name)

    def test_bytes(self):
        assert AccountName("alice").to_bytes() == b"\x05alice"

    def test_hashable(self):
        assert len({AccountName("alice"), AccountName("alice"), AccountName("bob")}) == 2


class TestAsset:

    def test_from_string(self):
        asset = Asset.from_string("1.000 STEEM")
        assert asset.amount == 1000
        assert asset.symbol == AssetSymbol.STEEM

    def test_str(self):
        assert str(Asset(amount=1, symbol=AssetSymbol.VESTS)) == "0.000001 VESTS"
        assert str(Asset(amount=12345, symbol=AssetSymbol.SBD)) == "12.345 SBD"

    @pytest.mark.parametrize("value", ["1.00 STEEM", "1.000", "1.000 GOLD"])
    def test_from_bad_string(self, value):
        with pytest.raises(ValueError):
            Asset.from_string(value)

    def test_bytes(self):
        asset = Asset.from_string("1.000000 VESTS")
        assert asset.to_bytes() == b"\x40\x42\x0f\x00\x00\x00\x00\x00\x06VESTS\x00\x00"


class TestTimePointSec:

    def test_from_iso_string(self):
        assert TimePointSec(seconds="2023-11-14T22:13:20").seconds == 1_700_000_000

    def test_from_naive_datetime_is_utc(self):
        naive = datetime(2023, 11, 14, 22, 13, 20)
        aware = naive.replace(tzinfo=timezone.utc)
        assert TimePointSec.from_datetime(naive) == TimePointSec.from_datetime(aware)

    def test_str_roundtrip(self):
        point = TimePointSec(seconds=1_700_000_000)
        assert str(point) == "2023-11-14T22:13:20"
        assert point.model_dump() == "2023-11-14T22:13:20"

    def test_arithmetic_returns_new_value(self):
        point = TimePointSec(seconds=100)
        assert point.add_seconds(5).seconds == 105
        assert (point + timedelta(minutes=1)).seconds == 160
        assert point.seconds == 100

    def test_unset(self):
        assert not TimePointSec().is_set
        assert TimePointSec().to_bytes() == b"\x00\x00\x00\x00"

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            TimePointSec(seconds=-1)


class TestFutureExtensions:

    def test_void_extension(self):
        assert FutureExtensions().to_bytes() == b"\x00"
