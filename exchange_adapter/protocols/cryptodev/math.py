"""
Crypto Dev Exchange Math Utilities

Off-chain counterparts of the contract's proportional formulas. Integer
arithmetic only, multiply before divide, floor division, so results match the
contract's uint256 arithmetic exactly.
"""

from ...errors import DivisionByZero
from ...types.amounts import ReservePair, WithdrawalQuote, require_amount


def compute_withdrawal_quote(
    lp_amount: int,
    base_reserve: int,
    paired_reserve: int,
    total_lp_supply: int,
) -> WithdrawalQuote:
    """
    Amounts returned for burning lp_amount LP tokens

    base_out   = base_reserve   * lp_amount // total_lp_supply
    paired_out = paired_reserve * lp_amount // total_lp_supply

    lp_amount larger than total_lp_supply is not rejected; the result is
    scaled proportionally.

    Args:
        lp_amount: LP tokens to burn (wei)
        base_reserve: ETH held by the exchange (wei)
        paired_reserve: Crypto Dev tokens held by the exchange (wei)
        total_lp_supply: Total LP token supply (wei)

    Returns:
        WithdrawalQuote

    Raises:
        DivisionByZero: If total_lp_supply is zero
        InvalidInput: If any amount is negative or not an int
    """
    require_amount(lp_amount, "lp_amount")
    require_amount(base_reserve, "base_reserve")
    require_amount(paired_reserve, "paired_reserve")
    require_amount(total_lp_supply, "total_lp_supply")

    if total_lp_supply == 0:
        raise DivisionByZero.no_liquidity("total_lp_supply")

    return WithdrawalQuote(
        base_amount_out=base_reserve * lp_amount // total_lp_supply,
        paired_amount_out=paired_reserve * lp_amount // total_lp_supply,
    )


def calculate_paired_deposit(base_amount: int, reserves: ReservePair) -> int:
    """
    Crypto Dev tokens that must accompany base_amount ETH in addLiquidity

    Keeps the deposit at the current pool ratio:
        paired = base_amount * paired_reserve // base_reserve

    Raises:
        DivisionByZero: If the pool holds no ETH yet (first deposit sets the ratio)
    """
    require_amount(base_amount, "base_amount")
    if reserves.base_reserve == 0:
        raise DivisionByZero.no_liquidity("base_reserve")
    return base_amount * reserves.paired_reserve // reserves.base_reserve
