"""
Exchange Adapter - Python client for the Crypto Dev ETH/CD exchange

Provides:
- Withdrawal quotes computed off-chain with exact integer math
- Swap quotes priced by the exchange contract
- Remove/add liquidity and ETH <-> CD swaps, each confirmed before returning
"""

from .client import ExchangeClient
from .config import ExchangeConfig, setup_logging, enable_file_logging
from .types import (
    SwapDirection,
    ReservePair,
    LiquidityWithdrawalRequest,
    WithdrawalQuote,
    TxResult,
    TxStatus,
    Outcome,
    SwapStage,
    SwapExecution,
    AddLiquidityResult,
    parse_amount,
    format_amount,
)
from .errors import (
    ErrorCode,
    ExchangeAdapterError,
    DivisionByZero,
    RemoteCallFailure,
    InvalidInput,
    SignerError,
    ConfigurationError,
)
from .infra.evm_signer import EVMSigner, create_web3, create_evm_signer
from .protocols.cryptodev import ExchangeAdapter, compute_withdrawal_quote, calculate_paired_deposit

__all__ = [
    # Client
    "ExchangeClient",
    "ExchangeConfig",
    "setup_logging",
    "enable_file_logging",
    # Types
    "SwapDirection",
    "ReservePair",
    "LiquidityWithdrawalRequest",
    "WithdrawalQuote",
    "TxResult",
    "TxStatus",
    "Outcome",
    "SwapStage",
    "SwapExecution",
    "AddLiquidityResult",
    "parse_amount",
    "format_amount",
    # Errors
    "ErrorCode",
    "ExchangeAdapterError",
    "DivisionByZero",
    "RemoteCallFailure",
    "InvalidInput",
    "SignerError",
    "ConfigurationError",
    # EVM infrastructure
    "EVMSigner",
    "create_web3",
    "create_evm_signer",
    # Protocol
    "ExchangeAdapter",
    "compute_withdrawal_quote",
    "calculate_paired_deposit",
]
