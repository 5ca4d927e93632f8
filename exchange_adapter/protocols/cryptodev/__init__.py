"""
Crypto Dev exchange protocol: contract adapter and off-chain math
"""

from .adapter import ExchangeAdapter
from .api import EXCHANGE_ABI, TOKEN_ABI, TOKEN_DECIMALS
from .math import compute_withdrawal_quote, calculate_paired_deposit

__all__ = [
    "ExchangeAdapter",
    "EXCHANGE_ABI",
    "TOKEN_ABI",
    "TOKEN_DECIMALS",
    "compute_withdrawal_quote",
    "calculate_paired_deposit",
]
