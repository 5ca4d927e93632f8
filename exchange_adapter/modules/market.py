"""
Market Module

Read-only queries: pool reserves, LP supply and wallet balances.
"""

import logging
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import ExchangeClient

from ..types import ReservePair
from ..errors import SignerError

logger = logging.getLogger(__name__)


class MarketModule:
    """
    Market data module

    Provides:
    - reserves(): ETH and Crypto Dev reserves of the exchange
    - total_lp_supply(): LP token supply
    - ether_balance / token_balance / lp_balance for a wallet
    """

    def __init__(self, client: "ExchangeClient"):
        self._client = client
        self._adapter = client.adapter

    def _resolve_owner(self, address: Optional[str]) -> str:
        if address:
            return address
        if not self._adapter.can_sign:
            raise SignerError.not_configured()
        return self._adapter.address

    def ether_balance(self, address: Optional[str] = None) -> int:
        """ETH balance in wei (defaults to the signer's wallet)"""
        return self._adapter.ether_balance_of(self._resolve_owner(address))

    def exchange_ether_balance(self) -> int:
        """ETH held by the exchange contract, i.e. the base reserve"""
        return self._adapter.ether_balance_of(self._adapter.exchange_address)

    def token_balance(self, address: Optional[str] = None) -> int:
        """Crypto Dev token balance in wei"""
        return self._adapter.token_balance_of(self._resolve_owner(address))

    def lp_balance(self, address: Optional[str] = None) -> int:
        """LP token balance in wei"""
        return self._adapter.lp_balance_of(self._resolve_owner(address))

    def token_reserve(self) -> int:
        """Crypto Dev tokens held by the exchange, i.e. the paired reserve"""
        return self._adapter.get_reserve()

    def total_lp_supply(self) -> int:
        return self._adapter.total_supply()

    def reserves(self) -> ReservePair:
        """Current reserves read from chain"""
        reserves = ReservePair(
            base_reserve=self.exchange_ether_balance(),
            paired_reserve=self.token_reserve(),
        )
        logger.debug(f"Reserves: base={reserves.base_reserve} paired={reserves.paired_reserve}")
        return reserves
