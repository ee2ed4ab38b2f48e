"""
Error model and configuration tests.
"""

import pytest
from pydantic import ValidationError

from steem_client.config import STEEM_CHAIN_ID, SteemConfig, get_config, set_config
from steem_client.runtime.errors import (
    EncodingError,
    ErrorCode,
    ErrorHandler,
    InvalidTransactionError,
    MissingKeyError,
    OperationContractError,
    SigningFatalError,
    SteemError,
)


class TestErrors:
    """Test the structured error hierarchy."""

    @pytest.mark.parametrize("error,code", [
        (InvalidTransactionError("x"), ErrorCode.INVALID_TRANSACTION),
        (MissingKeyError("x"), ErrorCode.KEY_NOT_FOUND),
        (EncodingError("x"), ErrorCode.ENCODING_ERROR),
        (SigningFatalError("x"), ErrorCode.INTERNAL),
        (OperationContractError("x"), ErrorCode.INVALID_OPERATION),
    ])
    def test_codes(self, error, code):
        assert isinstance(error, SteemError)
        assert error.code == code

    def test_only_signing_fatal_is_internal(self):
        assert SigningFatalError("x").is_internal
        assert not MissingKeyError("x").is_internal

    def test_to_dict(self):
        cause = ValueError("boom")
        error = EncodingError("bad value", field="weight", cause=cause)

        assert error.to_dict() == {
            "error": "EncodingError",
            "code": ErrorCode.ENCODING_ERROR.value,
            "message": "bad value",
            "details": {"field": "weight"},
            "cause": "boom",
        }

    def test_str(self):
        error = MissingKeyError("no key", details={"account": "alice"})
        assert str(error) == "[KEY_NOT_FOUND] no key | Details: {'account': 'alice'}"

    def test_not_retryable(self):
        assert not ErrorHandler.is_retryable(MissingKeyError("x"))
        assert not ErrorHandler.is_retryable(ValueError("x"))


class TestConfig:
    """Test SteemConfig and the process-wide default."""

    def test_defaults(self):
        config = SteemConfig()
        assert config.chain_id == STEEM_CHAIN_ID
        assert config.chain_id_bytes == b"\x00" * 32
        assert config.max_expiration_offset == 3600
        assert config.max_signing_attempts == 500
        assert not config.strict_expiration

    def test_chain_id_is_lowercased(self):
        assert SteemConfig(chain_id="AB" * 32).chain_id == "ab" * 32

    @pytest.mark.parametrize("kwargs", [
        {"chain_id": "xyz"},
        {"max_signing_attempts": 0},
        {"max_expiration_offset": 60},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            SteemConfig(**kwargs)

    def test_clock_is_not_dumped(self, config):
        assert "clock" not in config.model_dump()

    def test_global_config(self, config):
        assert get_config() is get_config()
        set_config(config)
        assert get_config() is config
        set_config(None)
        assert get_config() is not config
