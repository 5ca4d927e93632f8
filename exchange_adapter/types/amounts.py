"""
Amount and reserve type definitions

All on-chain quantities are plain ints in the asset's smallest unit (wei).
Decimal is only used at the edges, when converting to or from a human amount.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from enum import Enum
from typing import Union

from ..errors import InvalidInput

# Both ETH and the Crypto Dev token use 18 decimals
DEFAULT_DECIMALS = 18

# Contract amounts are uint256
MAX_UINT256 = 2 ** 256 - 1


def require_amount(value, field_name: str = "amount") -> int:
    """
    Validate an AmountWei value

    Args:
        value: Candidate amount
        field_name: Name reported in the error

    Returns:
        The amount unchanged

    Raises:
        InvalidInput: If value is not an int in [0, 2**256 - 1] (bool is rejected)
    """
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_UINT256:
        raise InvalidInput.amount(field_name, value)
    return value


def parse_amount(value: Union[Decimal, int, str], decimals: int = DEFAULT_DECIMALS) -> int:
    """
    Convert a human amount ("1.5") to wei

    Fractions below the smallest unit are truncated.
    """
    if isinstance(value, (bool, float)):
        raise InvalidInput.amount("value", value)
    try:
        ui_amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise InvalidInput.amount("value", value)
    if not ui_amount.is_finite() or ui_amount < 0:
        raise InvalidInput.amount("value", value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(ui_amount.as_tuple().digits) + decimals + 1)
        return int(ui_amount * Decimal(10 ** decimals))


def format_amount(amount_wei: int, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """Convert wei to a human amount with full precision"""
    require_amount(amount_wei, "amount_wei")
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(str(amount_wei)) + 1)
        return Decimal(amount_wei) / Decimal(10 ** decimals)


class SwapDirection(Enum):
    """Which asset is paid into the exchange"""
    BASE_IN = "base_in"  # ETH in, Crypto Dev tokens out
    PAIRED_IN = "paired_in"  # Crypto Dev tokens in, ETH out

    @classmethod
    def from_eth_selected(cls, eth_selected: bool) -> "SwapDirection":
        return cls.BASE_IN if eth_selected else cls.PAIRED_IN

    @classmethod
    def coerce(cls, value: Union["SwapDirection", str]) -> "SwapDirection":
        """Accept an enum member or its string value (case-insensitive)"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized or member.name.lower() == normalized:
                    return member
        raise InvalidInput.direction(value)


@dataclass(frozen=True)
class ReservePair:
    """
    Current on-chain holdings of the pool

    Attributes:
        base_reserve: ETH held by the exchange contract (wei)
        paired_reserve: Crypto Dev tokens held by the exchange contract (wei)
    """
    base_reserve: int
    paired_reserve: int

    def __post_init__(self):
        require_amount(self.base_reserve, "base_reserve")
        require_amount(self.paired_reserve, "paired_reserve")

    @property
    def is_empty(self) -> bool:
        return self.base_reserve == 0 and self.paired_reserve == 0

    def oriented(self, direction: SwapDirection) -> tuple:
        """(input_reserve, output_reserve) for a swap in the given direction"""
        if direction is SwapDirection.BASE_IN:
            return self.base_reserve, self.paired_reserve
        return self.paired_reserve, self.base_reserve


@dataclass(frozen=True)
class LiquidityWithdrawalRequest:
    """A user's intent to burn lp_amount liquidity tokens"""
    lp_amount: int

    def __post_init__(self):
        require_amount(self.lp_amount, "lp_amount")


@dataclass(frozen=True)
class WithdrawalQuote:
    """
    Expected payout for burning LP tokens

    Attributes:
        base_amount_out: ETH returned (wei)
        paired_amount_out: Crypto Dev tokens returned (wei)
    """
    base_amount_out: int
    paired_amount_out: int

    def as_tuple(self) -> tuple:
        return self.base_amount_out, self.paired_amount_out

    def __str__(self) -> str:
        return (
            f"WithdrawalQuote(base={format_amount(self.base_amount_out)}, "
            f"paired={format_amount(self.paired_amount_out)})"
        )
