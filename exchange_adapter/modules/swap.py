"""
Swap Module

Quotes swaps through the exchange contract and executes them as a staged
sequence: approval (Crypto Dev in only) then the swap itself.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

if TYPE_CHECKING:
    from ..client import ExchangeClient

from ..types import (
    ReservePair,
    SwapDirection,
    SwapExecution,
    SwapStage,
    require_amount,
)
from ..errors import ExchangeAdapterError
from ..infra.tracing import CorrelationContext, log_with_correlation

logger = logging.getLogger(__name__)


class SwapModule:
    """
    Swap module for ETH <-> Crypto Dev exchanges

    Provides:
    - quote(amount_in, direction): output amount priced by the contract
    - swap(amount_in, expected_amount_out, direction): staged execution

    Usage:
        out = client.swap.quote(10**18, SwapDirection.BASE_IN)
        execution = client.swap.swap(10**18, out, SwapDirection.BASE_IN)
        assert execution.is_done
    """

    def __init__(self, client: "ExchangeClient"):
        self._client = client
        self._adapter = client.adapter

    def quote(
        self,
        amount_in: int,
        direction: Union[SwapDirection, str],
        reserves: Optional[ReservePair] = None,
    ) -> int:
        """
        Amount received for swapping amount_in in the given direction

        The reserves are oriented by direction and passed to the contract's
        getAmountOfTokens; the fee and formula are the contract's.

        Args:
            amount_in: Amount paid in (wei)
            direction: BASE_IN (ETH in) or PAIRED_IN (Crypto Dev in)
            reserves: Current reserves (read from chain if omitted)

        Raises:
            RemoteCallFailure: If a chain call fails
        """
        require_amount(amount_in, "amount_in")
        direction = SwapDirection.coerce(direction)
        if reserves is None:
            reserves = self._client.market.reserves()

        input_reserve, output_reserve = reserves.oriented(direction)
        amount_out = self._adapter.get_amount_of_tokens(amount_in, input_reserve, output_reserve)
        logger.debug(f"Quote {direction.value}: {amount_in} -> {amount_out}")
        return amount_out

    def swap(
        self,
        amount_in: int,
        expected_amount_out: int,
        direction: Union[SwapDirection, str],
        on_transition: Optional[Callable[[SwapExecution], Any]] = None,
    ) -> SwapExecution:
        """
        Execute a swap, waiting for each transaction to be confirmed

        BASE_IN:   PENDING_SWAP -> ethToCryptoDevToken (value=amount_in) -> DONE
        PAIRED_IN: PENDING_APPROVAL -> approve(exchange, amount_in)
                   -> PENDING_SWAP -> cryptoDevTokenToEth -> DONE

        expected_amount_out is passed to the contract as the minimum output.

        Args:
            amount_in: Amount paid in (wei)
            expected_amount_out: Minimum amount accepted (wei)
            direction: Which asset is paid in
            on_transition: Called with the execution after every stage change

        Returns:
            SwapExecution in stage DONE

        Raises:
            ExchangeAdapterError: The first failing step's error; its
                details["stage"] names the stage that failed. Later steps
                are not issued. Exceptions raised by on_transition propagate
                unchanged; an execution that already reached DONE stays DONE.
        """
        require_amount(amount_in, "amount_in")
        require_amount(expected_amount_out, "expected_amount_out")
        direction = SwapDirection.coerce(direction)

        execution = SwapExecution.start(
            direction,
            amount_in,
            expected_amount_out,
            listeners=[on_transition] if on_transition else None,
        )
        operation = f"swap({direction.value})"

        with CorrelationContext("swap"):
            log_with_correlation(logging.INFO, f"Starting {execution}", operation)
            try:
                if execution.stage is SwapStage.PENDING_APPROVAL:
                    execution.approval = self._adapter.approve(self._adapter.exchange_address, amount_in)
                    log_with_correlation(
                        logging.INFO, "Approval confirmed", operation, tx_hash=execution.approval.tx_hash
                    )
                    execution.advance(SwapStage.PENDING_SWAP)

                if direction is SwapDirection.BASE_IN:
                    execution.swap = self._adapter.eth_to_token(expected_amount_out, value=amount_in)
                else:
                    execution.swap = self._adapter.token_to_eth(amount_in, expected_amount_out)
                log_with_correlation(
                    logging.INFO, "Swap confirmed", operation, tx_hash=execution.swap.tx_hash
                )
                execution.advance(SwapStage.DONE)

            except Exception as e:
                code = e.code.value if isinstance(e, ExchangeAdapterError) else None
                log_with_correlation(
                    logging.ERROR,
                    f"Failed during {execution.stage.value}: {e}",
                    operation,
                    error_code=code,
                )
                execution.fail(e)
                raise

        return execution
