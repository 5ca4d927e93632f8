"""
Test Errors Module

Tests for exchange_adapter.errors package.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_error_code():
    """Test ErrorCode enum"""
    from exchange_adapter.errors import ErrorCode

    assert ErrorCode.RPC_CONNECTION_FAILED.value == "1001"
    assert ErrorCode.TX_REVERTED.value == "2006"
    assert ErrorCode.NO_LIQUIDITY.value == "3001"
    assert ErrorCode.INVALID_AMOUNT.value == "4001"

    values = [code.value for code in ErrorCode]
    assert len(values) == len(set(values)), "Error codes must be unique"


def test_exchange_adapter_error():
    """Test ExchangeAdapterError base class"""
    from exchange_adapter.errors import ExchangeAdapterError, ErrorCode

    error = ExchangeAdapterError(
        message="Test error",
        code=ErrorCode.RPC_CONNECTION_FAILED,
        recoverable=True,
    )

    # __str__ returns "[code] message" format
    assert "[1001] Test error" == str(error)
    assert error.code == ErrorCode.RPC_CONNECTION_FAILED
    assert error.recoverable is True
    assert error.details == {}
    assert "ExchangeAdapterError" in repr(error)


def test_division_by_zero():
    from exchange_adapter.errors import DivisionByZero, ExchangeAdapterError, ErrorCode

    error = DivisionByZero.no_liquidity()
    assert isinstance(error, ExchangeAdapterError)
    assert error.code == ErrorCode.NO_LIQUIDITY
    assert error.recoverable is True
    assert error.operand == "total_lp_supply"
    assert error.details == {"operand": "total_lp_supply"}
    assert "No liquidity" in str(error)


def test_remote_call_failure_from_exception():
    from exchange_adapter.errors import RemoteCallFailure, ErrorCode

    original = ConnectionError("Connection refused by node")
    error = RemoteCallFailure.from_exception("totalSupply", original)
    assert error.code == ErrorCode.RPC_CONNECTION_FAILED
    assert error.recoverable is True
    assert error.original_error is original
    assert error.operation == "totalSupply"
    assert error.details["operation"] == "totalSupply"

    # Unknown errors keep the generic code and are not recoverable
    error = RemoteCallFailure.from_exception("getReserve", ValueError("execution reverted"))
    assert error.code == ErrorCode.RPC_CALL_FAILED
    assert error.recoverable is False

    error = RemoteCallFailure.from_exception(
        "cryptoDevTokenToEth", ValueError("execution reverted: insufficient output amount")
    )
    assert error.code == ErrorCode.SLIPPAGE_EXCEEDED


def test_remote_call_failure_constructors():
    from exchange_adapter.errors import RemoteCallFailure, ErrorCode

    reverted = RemoteCallFailure.reverted("0xabc", "approve")
    assert reverted.code == ErrorCode.TX_REVERTED
    assert reverted.tx_hash == "0xabc"
    assert "approve reverted" in str(reverted)
    assert reverted.recoverable is False

    timeout = RemoteCallFailure.confirmation_timeout("0xdef", 120.0)
    assert timeout.code == ErrorCode.TX_CONFIRMATION_FAILED
    assert timeout.recoverable is True

    funds = RemoteCallFailure.send_failed("removeLiquidity", ValueError("insufficient funds for gas * price + value"))
    assert funds.code == ErrorCode.TX_INSUFFICIENT_FUNDS
    assert funds.recoverable is False

    send = RemoteCallFailure.send_failed("approve", OSError("connection reset"))
    assert send.code == ErrorCode.TX_SEND_FAILED
    assert send.recoverable is True


def test_invalid_input():
    from exchange_adapter.errors import InvalidInput, ErrorCode

    error = InvalidInput.amount("lp_amount", -1)
    assert error.code == ErrorCode.INVALID_AMOUNT
    assert error.field_name == "lp_amount"
    assert "-1" in str(error)

    error = InvalidInput.direction("up")
    assert error.code == ErrorCode.INVALID_DIRECTION

    error = InvalidInput.address("owner", "0x12")
    assert error.code == ErrorCode.INVALID_ADDRESS
    assert error.details == {"field": "owner"}


def test_signer_error():
    from exchange_adapter.errors import SignerError, ErrorCode

    error = SignerError.not_configured()
    assert error.code == ErrorCode.SIGNER_NOT_CONFIGURED

    error = SignerError.failed("bad key")
    assert error.code == ErrorCode.SIGNER_FAILED
    assert "bad key" in str(error)


def test_configuration_error():
    from exchange_adapter.errors import ConfigurationError, ErrorCode

    error = ConfigurationError.missing("exchange_address")
    assert error.code == ErrorCode.CONFIG_MISSING
    assert "exchange_address" in str(error)

    error = ConfigurationError.invalid("token_address", "not an EVM address")
    assert error.code == ErrorCode.CONFIG_INVALID
