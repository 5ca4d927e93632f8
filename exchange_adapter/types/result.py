"""
Result type definitions for transactions, quotes and staged swaps
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, TypeVar

from ..errors import ErrorCode, ExchangeAdapterError
from .amounts import SwapDirection

T = TypeVar("T")


class TxStatus(Enum):
    """Transaction status"""
    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"


@dataclass
class TxResult:
    """
    Transaction execution result

    Attributes:
        status: Transaction status
        tx_hash: Transaction hash (0x-prefixed hex)
        error: Error message if failed
        block_number: Block the transaction was included in
        gas_used: Gas consumed by the transaction
        effective_gas_price: Price paid per gas unit (wei)
    """
    status: TxStatus
    tx_hash: Optional[str] = None
    error: Optional[str] = None
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    effective_gas_price: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.status == TxStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status == TxStatus.FAILED

    @property
    def fee_wei(self) -> Optional[int]:
        """Fee paid in wei"""
        if self.gas_used is None or self.effective_gas_price is None:
            return None
        return self.gas_used * self.effective_gas_price

    @classmethod
    def success(cls, tx_hash: str, **kwargs) -> "TxResult":
        """Create successful result"""
        return cls(status=TxStatus.SUCCESS, tx_hash=tx_hash, **kwargs)

    @classmethod
    def failed(cls, error: str, tx_hash: str = None, **kwargs) -> "TxResult":
        """Create failed result"""
        return cls(status=TxStatus.FAILED, tx_hash=tx_hash, error=error, **kwargs)

    @classmethod
    def from_receipt(cls, result: dict) -> "TxResult":
        """Convert a signer result dict to TxResult"""
        if result["status"] == "success":
            return cls.success(
                tx_hash=result["tx_hash"],
                block_number=result.get("block_number"),
                gas_used=result.get("gas_used"),
                effective_gas_price=result.get("effective_gas_price"),
            )
        if result["status"] == "pending":
            return cls(status=TxStatus.PENDING, tx_hash=result.get("tx_hash"))
        return cls.failed(error=result.get("error", "Transaction failed"), tx_hash=result.get("tx_hash"))

    def __str__(self) -> str:
        if self.is_success:
            hash_display = f"{self.tx_hash[:18]}..." if self.tx_hash else "no hash"
            return f"TxResult(SUCCESS, {hash_display})"
        return f"TxResult({self.status.value}, error={self.error})"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Tagged result: exactly one of value or error is set

    Usage:
        outcome = client.lp.tokens_after_remove(lp_amount)
        if outcome.is_ok:
            quote = outcome.value
        else:
            print(outcome.error.code)
        quote = outcome.unwrap()  # re-raises the error
    """
    value: Optional[T] = None
    error: Optional[ExchangeAdapterError] = None

    @classmethod
    def ok(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ExchangeAdapterError) -> "Outcome[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


class SwapStage(Enum):
    """Stages of a swap execution"""
    PENDING_APPROVAL = "pending_approval"
    PENDING_SWAP = "pending_swap"
    DONE = "done"
    FAILED = "failed"


_SWAP_TRANSITIONS = {
    SwapStage.PENDING_APPROVAL: {SwapStage.PENDING_SWAP, SwapStage.FAILED},
    SwapStage.PENDING_SWAP: {SwapStage.DONE, SwapStage.FAILED},
    SwapStage.DONE: set(),
    SwapStage.FAILED: set(),
}


@dataclass
class SwapExecution:
    """
    State of one swap sequence

    Paired-asset swaps start in PENDING_APPROVAL because the exchange needs an
    allowance before it can pull tokens; base-asset swaps start in PENDING_SWAP.

    Attributes:
        direction: Which asset is paid in
        amount_in: Amount paid in (wei)
        min_amount_out: Minimum amount accepted from the exchange (wei)
        stage: Current stage
        approval: Confirmed approval transaction (PAIRED_IN only)
        swap: Confirmed swap transaction
        failed_stage: Stage that was active when the sequence failed
        error: Error that failed the sequence
    """
    direction: SwapDirection
    amount_in: int
    min_amount_out: int
    stage: SwapStage = SwapStage.PENDING_SWAP
    approval: Optional[TxResult] = None
    swap: Optional[TxResult] = None
    failed_stage: Optional[SwapStage] = None
    error: Optional[Exception] = None
    listeners: List[Callable[["SwapExecution"], Any]] = field(default_factory=list, repr=False)

    @classmethod
    def start(
        cls,
        direction: SwapDirection,
        amount_in: int,
        min_amount_out: int,
        listeners: Optional[List[Callable[["SwapExecution"], Any]]] = None,
    ) -> "SwapExecution":
        if direction is SwapDirection.PAIRED_IN:
            stage = SwapStage.PENDING_APPROVAL
        else:
            stage = SwapStage.PENDING_SWAP
        return cls(
            direction=direction,
            amount_in=amount_in,
            min_amount_out=min_amount_out,
            stage=stage,
            listeners=list(listeners or []),
        )

    @property
    def is_done(self) -> bool:
        return self.stage == SwapStage.DONE

    @property
    def is_failed(self) -> bool:
        return self.stage == SwapStage.FAILED

    @property
    def transactions(self) -> List[TxResult]:
        """Confirmed transactions in the order they were issued"""
        return [tx for tx in (self.approval, self.swap) if tx is not None]

    def advance(self, stage: SwapStage) -> None:
        if stage not in _SWAP_TRANSITIONS[self.stage]:
            raise ExchangeAdapterError(
                f"Illegal swap transition {self.stage.value} -> {stage.value}",
                ErrorCode.OPERATION_INVALID_STATE,
                details={"from": self.stage.value, "to": stage.value},
            )
        self.stage = stage
        for listener in self.listeners:
            listener(self)

    @property
    def is_terminal(self) -> bool:
        return not _SWAP_TRANSITIONS[self.stage]

    def fail(self, error: Exception) -> None:
        """
        Move to FAILED and tag the error with the stage that failed

        A finished execution is left as it is; an error raised after DONE
        (by a listener) does not undo the confirmed swap.
        """
        if self.is_terminal:
            return
        self.failed_stage = self.stage
        self.error = error
        if isinstance(error, ExchangeAdapterError):
            error.details.setdefault("stage", self.stage.value)
        self.advance(SwapStage.FAILED)

    def __str__(self) -> str:
        return f"SwapExecution({self.direction.value}, {self.amount_in} -> >={self.min_amount_out}, {self.stage.value})"


@dataclass
class AddLiquidityResult:
    """
    Result of adding liquidity

    Attributes:
        approval: Confirmed token approval for the exchange
        deposit: Confirmed addLiquidity transaction
    """
    approval: TxResult
    deposit: TxResult

    @property
    def is_success(self) -> bool:
        return self.approval.is_success and self.deposit.is_success
