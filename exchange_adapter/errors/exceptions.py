"""
Exception definitions for the Exchange Adapter
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Unified error codes for exchange operations

    1xxx - RPC errors
    2xxx - Transaction errors
    3xxx - Liquidity/Price errors
    4xxx - Input errors
    6xxx - Signer errors
    7xxx - Operation errors
    9xxx - Configuration errors
    """
    # RPC errors (recoverable)
    RPC_CONNECTION_FAILED = "1001"
    RPC_TIMEOUT = "1002"
    RPC_RATE_LIMITED = "1003"
    RPC_INVALID_RESPONSE = "1004"
    RPC_CALL_FAILED = "1005"

    # Transaction errors
    TX_SEND_FAILED = "2002"
    TX_CONFIRMATION_FAILED = "2003"
    TX_INSUFFICIENT_FUNDS = "2004"
    TX_REVERTED = "2006"

    # Liquidity/Price errors
    NO_LIQUIDITY = "3001"
    SLIPPAGE_EXCEEDED = "3002"

    # Input errors
    INVALID_AMOUNT = "4001"
    INVALID_DIRECTION = "4002"
    INVALID_ADDRESS = "4003"

    # Signer errors
    SIGNER_NOT_CONFIGURED = "6001"
    SIGNER_FAILED = "6002"

    # Operation errors
    OPERATION_FAILED = "7002"
    OPERATION_INVALID_STATE = "7003"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class ExchangeAdapterError(Exception):
    """
    Base exception for all exchange adapter errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed if the caller tries again
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class DivisionByZero(ExchangeAdapterError):
    """
    Local computation attempted against an empty pool

    Raised when:
    - Total LP supply is zero (nothing to withdraw yet)
    - Base reserve is zero when pricing a deposit

    Recoverable: the pool can receive liquidity later, so the caller may
    retry once it is funded.
    """

    def __init__(self, message: str, operand: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.NO_LIQUIDITY,
            recoverable=True,
            details={"operand": operand} if operand else None,
        )
        self.operand = operand

    @classmethod
    def no_liquidity(cls, operand: str = "total_lp_supply") -> "DivisionByZero":
        return cls(
            f"No liquidity exists yet: {operand} is zero",
            operand=operand,
        )


class RemoteCallFailure(ExchangeAdapterError):
    """
    Any RPC, transport or contract-revert failure

    Raised when:
    - A contract read call fails
    - A transaction cannot be built or sent
    - A transaction reverts or its receipt never arrives
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CALL_FAILED,
        operation: Optional[str] = None,
        tx_hash: Optional[str] = None,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if tx_hash:
            details["tx_hash"] = tx_hash
        super().__init__(
            message,
            code,
            recoverable=recoverable,
            original_error=original_error,
            details=details,
        )
        self.operation = operation
        self.tx_hash = tx_hash

    @classmethod
    def from_exception(cls, operation: str, error: Exception) -> "RemoteCallFailure":
        """Wrap a web3/transport exception, classifying it by message"""
        # Import here to avoid circular import
        from ..infra.tracing import classify_error

        recoverable, error_code = classify_error(error)
        return cls(
            f"{operation} failed: {error}",
            error_code or ErrorCode.RPC_CALL_FAILED,
            operation=operation,
            recoverable=recoverable,
            original_error=error,
        )

    @classmethod
    def send_failed(cls, operation: str, error: Exception) -> "RemoteCallFailure":
        error_str = str(error).lower()
        if "insufficient funds" in error_str:
            code = ErrorCode.TX_INSUFFICIENT_FUNDS
        else:
            code = ErrorCode.TX_SEND_FAILED
        # Some send failures are recoverable (network issues)
        recoverable = "timeout" in error_str or "connection" in error_str
        return cls(
            f"Failed to send {operation} transaction: {error}",
            code,
            operation=operation,
            recoverable=recoverable,
            original_error=error,
        )

    @classmethod
    def reverted(cls, tx_hash: str, operation: Optional[str] = None) -> "RemoteCallFailure":
        label = operation or "transaction"
        return cls(
            f"{label} reverted on chain: {tx_hash}",
            ErrorCode.TX_REVERTED,
            operation=operation,
            tx_hash=tx_hash,
        )

    @classmethod
    def confirmation_timeout(cls, tx_hash: str, timeout_seconds: float) -> "RemoteCallFailure":
        return cls(
            f"Transaction not confirmed after {timeout_seconds}s: {tx_hash}",
            ErrorCode.TX_CONFIRMATION_FAILED,
            tx_hash=tx_hash,
            recoverable=True,
        )


class InvalidInput(ExchangeAdapterError):
    """
    Malformed amount, direction or address passed by the caller
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        code: ErrorCode = ErrorCode.INVALID_AMOUNT,
    ):
        super().__init__(
            message,
            code,
            recoverable=False,
            details={"field": field_name} if field_name else None,
        )
        self.field_name = field_name

    @classmethod
    def amount(cls, field_name: str, value) -> "InvalidInput":
        return cls(
            f"'{field_name}' must be an integer wei amount in [0, 2**256 - 1], got {value!r}",
            field_name=field_name,
        )

    @classmethod
    def direction(cls, value) -> "InvalidInput":
        return cls(
            f"Unknown swap direction: {value!r}",
            field_name="direction",
            code=ErrorCode.INVALID_DIRECTION,
        )

    @classmethod
    def address(cls, field_name: str, value) -> "InvalidInput":
        return cls(
            f"'{field_name}' must be an EVM address, got {value!r}",
            field_name=field_name,
            code=ErrorCode.INVALID_ADDRESS,
        )


class SignerError(ExchangeAdapterError):
    """
    Signing-related errors

    Raised when:
    - A transaction is requested on a read-only (provider) client
    - Signing operation fails
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SIGNER_FAILED,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def not_configured(cls) -> "SignerError":
        return cls(
            "No signer configured. Provide a private key or keystore.",
            ErrorCode.SIGNER_NOT_CONFIGURED,
        )

    @classmethod
    def failed(cls, reason: str) -> "SignerError":
        return cls(f"Signing failed: {reason}", ErrorCode.SIGNER_FAILED)


class ConfigurationError(ExchangeAdapterError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
