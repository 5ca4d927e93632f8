"""
Type definitions for the Exchange Adapter
"""

from .amounts import (
    DEFAULT_DECIMALS,
    SwapDirection,
    ReservePair,
    LiquidityWithdrawalRequest,
    WithdrawalQuote,
    require_amount,
    parse_amount,
    format_amount,
)
from .result import (
    TxResult,
    TxStatus,
    Outcome,
    SwapStage,
    SwapExecution,
    AddLiquidityResult,
)

__all__ = [
    # Amounts
    "DEFAULT_DECIMALS",
    "SwapDirection",
    "ReservePair",
    "LiquidityWithdrawalRequest",
    "WithdrawalQuote",
    "require_amount",
    "parse_amount",
    "format_amount",
    # Results
    "TxResult",
    "TxStatus",
    "Outcome",
    "SwapStage",
    "SwapExecution",
    "AddLiquidityResult",
]
