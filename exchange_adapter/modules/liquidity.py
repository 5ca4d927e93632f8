"""
Liquidity Module

Remove liquidity, preview a withdrawal, and add liquidity at the pool ratio.
"""

import logging
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import ExchangeClient

from ..types import (
    ReservePair,
    LiquidityWithdrawalRequest,
    WithdrawalQuote,
    Outcome,
    TxResult,
    AddLiquidityResult,
    require_amount,
)
from ..errors import ExchangeAdapterError
from ..protocols.cryptodev.math import compute_withdrawal_quote, calculate_paired_deposit
from ..infra.tracing import CorrelationContext, log_with_correlation

logger = logging.getLogger(__name__)


class LiquidityModule:
    """
    Liquidity operations module

    Provides:
    - remove(lp_amount): burn LP tokens
    - tokens_after_remove(lp_amount): expected payout, as a tagged Outcome
    - paired_amount_for(base_amount): Crypto Dev tokens to pair with an ETH deposit
    - add(base_amount, paired_amount): approve and deposit
    """

    def __init__(self, client: "ExchangeClient"):
        self._client = client
        self._adapter = client.adapter

    def remove(self, lp_amount: int) -> TxResult:
        """
        Burn lp_amount LP tokens and wait for the confirmation

        Raises:
            RemoteCallFailure: If the transaction fails or reverts
            SignerError: If the client is read-only
        """
        request = LiquidityWithdrawalRequest(lp_amount=lp_amount)

        with CorrelationContext("lp_remove"):
            log_with_correlation(logging.INFO, f"Removing {request.lp_amount} LP tokens", "remove_liquidity")
            result = self._adapter.remove_liquidity(request.lp_amount)
            log_with_correlation(
                logging.INFO, "Liquidity removed", "remove_liquidity", tx_hash=result.tx_hash
            )
        return result

    def quote_withdrawal(self, lp_amount: int, reserves: Optional[ReservePair] = None) -> WithdrawalQuote:
        """
        Expected ETH and Crypto Dev payout for burning lp_amount LP tokens

        Reads the LP total supply from chain, and the reserves too when not given.

        Raises:
            DivisionByZero: If no LP tokens exist yet
            RemoteCallFailure: If a chain read fails
        """
        request = LiquidityWithdrawalRequest(lp_amount=lp_amount)
        if reserves is None:
            reserves = self._client.market.reserves()
        total_supply = self._adapter.total_supply()
        return compute_withdrawal_quote(
            request.lp_amount,
            reserves.base_reserve,
            reserves.paired_reserve,
            total_supply,
        )

    def tokens_after_remove(
        self,
        lp_amount: int,
        reserves: Optional[ReservePair] = None,
    ) -> Outcome[WithdrawalQuote]:
        """
        Same as quote_withdrawal, but failures are returned instead of raised

        Returns:
            Outcome.ok(WithdrawalQuote) or Outcome.err(error)
        """
        try:
            return Outcome.ok(self.quote_withdrawal(lp_amount, reserves))
        except ExchangeAdapterError as e:
            logger.warning(f"Withdrawal quote for {lp_amount!r} LP tokens failed: {e}")
            return Outcome.err(e)

    def paired_amount_for(self, base_amount: int, reserves: Optional[ReservePair] = None) -> int:
        """
        Crypto Dev tokens required alongside base_amount ETH

        Raises:
            DivisionByZero: If the pool is empty and any ratio is accepted
        """
        if reserves is None:
            reserves = self._client.market.reserves()
        return calculate_paired_deposit(base_amount, reserves)

    def add(self, base_amount: int, paired_amount: int) -> AddLiquidityResult:
        """
        Approve paired_amount for the exchange, then deposit both assets

        Each transaction is confirmed before the next one is sent. A failed
        approval aborts before the deposit.

        Raises:
            RemoteCallFailure: If either transaction fails or reverts
        """
        require_amount(base_amount, "base_amount")
        require_amount(paired_amount, "paired_amount")

        with CorrelationContext("lp_add"):
            log_with_correlation(
                logging.INFO,
                f"Approving {paired_amount} tokens for deposit",
                "add_liquidity",
            )
            approval = self._adapter.approve(self._adapter.exchange_address, paired_amount)

            log_with_correlation(
                logging.INFO,
                f"Depositing {base_amount} wei + {paired_amount} tokens",
                "add_liquidity",
                tx_hash=approval.tx_hash,
            )
            deposit = self._adapter.add_liquidity(paired_amount, base_amount)

        return AddLiquidityResult(approval=approval, deposit=deposit)
