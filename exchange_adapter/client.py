"""
ExchangeClient - Unified entry point for exchange operations

Provides a high-level interface to the Crypto Dev exchange through functional
modules (market, lp, swap).
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from web3 import Web3

if TYPE_CHECKING:
    from .modules import MarketModule, LiquidityModule, SwapModule

from .config import ExchangeConfig, TxConfig
from .infra.evm_signer import EVMSigner, create_web3
from .protocols.cryptodev import ExchangeAdapter


class ExchangeClient:
    """
    Exchange client

    Provides access to exchange operations through functional modules:
    - market: reserves, LP supply, balances
    - lp: remove/add liquidity, withdrawal previews
    - swap: swap quotes and execution

    Without a signer the client is read-only.

    Usage:
        exchange = ExchangeConfig.from_env()
        client = ExchangeClient(
            exchange,
            rpc_url="https://...",
            signer=EVMSigner.from_env(),
        )

        reserves = client.market.reserves()
        quote = client.lp.tokens_after_remove(10**18, reserves).unwrap()
        out = client.swap.quote(10**17, SwapDirection.BASE_IN, reserves)
        client.swap.swap(10**17, out, SwapDirection.BASE_IN)
    """

    def __init__(
        self,
        exchange: ExchangeConfig,
        rpc_url: Optional[str] = None,
        signer: Optional[EVMSigner] = None,
        web3: Optional[Web3] = None,
        chain_id: Optional[int] = None,
        tx_config: Optional[TxConfig] = None,
    ):
        """
        Initialize ExchangeClient

        Args:
            exchange: Contract addresses
            rpc_url: RPC endpoint URL (uses config.rpc.url if not provided)
            signer: Optional signer for transactions
            web3: Pre-built Web3 instance (rpc_url and chain_id are ignored)
            chain_id: Chain ID (detected from RPC if not provided)
            tx_config: Confirmation settings
        """
        if web3 is None:
            web3 = create_web3(rpc_url, chain_id)

        self._adapter = ExchangeAdapter(web3, exchange, signer=signer, tx_config=tx_config)

        # Lazy-loaded modules
        self._market: Optional["MarketModule"] = None
        self._lp: Optional["LiquidityModule"] = None
        self._swap: Optional["SwapModule"] = None

    @property
    def adapter(self) -> ExchangeAdapter:
        """Access to the contract adapter"""
        return self._adapter

    @property
    def web3(self) -> Web3:
        return self._adapter.web3

    @property
    def address(self) -> Optional[str]:
        """Signer wallet address, None for read-only clients"""
        return self._adapter.address

    @property
    def market(self) -> "MarketModule":
        """
        Market module

        Provides:
        - reserves(): ETH / Crypto Dev reserves
        - total_lp_supply(): LP supply
        - ether_balance(), token_balance(), lp_balance()
        """
        if self._market is None:
            from .modules.market import MarketModule
            self._market = MarketModule(self)
        return self._market

    @property
    def lp(self) -> "LiquidityModule":
        """
        Liquidity module

        Provides:
        - remove(lp_amount): burn LP tokens
        - quote_withdrawal(lp_amount) / tokens_after_remove(lp_amount)
        - paired_amount_for(base_amount)
        - add(base_amount, paired_amount)
        """
        if self._lp is None:
            from .modules.liquidity import LiquidityModule
            self._lp = LiquidityModule(self)
        return self._lp

    @property
    def swap(self) -> "SwapModule":
        """
        Swap module

        Provides:
        - quote(amount_in, direction)
        - swap(amount_in, expected_amount_out, direction)
        """
        if self._swap is None:
            from .modules.swap import SwapModule
            self._swap = SwapModule(self)
        return self._swap

    def __repr__(self) -> str:
        return f"ExchangeClient({self._adapter!r})"
