"""
Functional modules for ExchangeClient

Provides high-level operations:
- MarketModule: reserves, LP supply, balances
- LiquidityModule: remove/add liquidity, withdrawal previews
- SwapModule: swap quotes and staged swap execution
"""

from .market import MarketModule
from .liquidity import LiquidityModule
from .swap import SwapModule

__all__ = [
    "MarketModule",
    "LiquidityModule",
    "SwapModule",
]
