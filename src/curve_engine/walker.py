"""
Curve walker: push an amount through a curve's segments in increasing-price order.

Two walks are provided:
- quote walk (`get_migration_threshold_price`): locate the sqrt price reached
  after `quote_amount` of quote has been absorbed from the start price.
- base walk (`get_base_token_for_swap`): base released from the start price up
  to a target sqrt price; with the target at MAX_SQRT_PRICE this is the curve's
  total base capacity.

Running off the last segment is never clamped: it raises
`InsufficientCurveLiquidity`, because a clamped price would no longer match
what the ledger does with the same input.
"""

from __future__ import annotations

from .core import (
    MAX_SQRT_PRICE,
    Curve,
    FixedPrice,
    InsufficientCurveLiquidity,
    Rounding,
    require_non_negative,
)
from .curve_math import (
    get_delta_amount_base,
    get_delta_amount_quote,
    get_next_sqrt_price_from_quote_input,
)

# Debug printing control
DEBUG_WALKER = False

def _dbg(msg: str) -> None:
    if DEBUG_WALKER:
        print(f"[WALKER] {msg}")


def get_migration_threshold_price(curve: Curve, quote_amount: int) -> FixedPrice:
    """Sqrt price reached after absorbing `quote_amount` of quote from the start price.

    Per segment the capacity is Δquote rounded up. A remainder strictly below
    capacity is solved inside the segment (price rounded down); a remainder
    equal to capacity lands exactly on the segment bound.
    """
    require_non_negative(quote_amount=quote_amount)
    sqrt_price = curve.sqrt_start_price
    amount_left = quote_amount
    for i, seg in enumerate(curve.segments):
        if amount_left == 0:
            break
        max_amount = get_delta_amount_quote(sqrt_price, seg.sqrt_price, seg.liquidity, Rounding.UP)
        if amount_left < max_amount:
            sqrt_price = get_next_sqrt_price_from_quote_input(sqrt_price, seg.liquidity, amount_left)
            _dbg(f"seg[{i}] partial: amount={amount_left} < capacity={max_amount} -> price={sqrt_price}")
            amount_left = 0
            break
        amount_left -= max_amount
        sqrt_price = seg.sqrt_price
        _dbg(f"seg[{i}] full: capacity={max_amount}, left={amount_left}, price={sqrt_price}")

    if amount_left != 0:
        raise InsufficientCurveLiquidity(
            quote_amount, quote_amount - amount_left, remaining=amount_left
        )
    return sqrt_price


def get_base_token_for_swap(curve: Curve, target_sqrt_price: FixedPrice) -> int:
    """Base released walking from the start price up to `target_sqrt_price` (Δbase rounded up)."""
    total = 0
    for i, seg in enumerate(curve.segments):
        lower = curve.lower_bound(i)
        if seg.sqrt_price > target_sqrt_price:
            if target_sqrt_price > lower:
                total += get_delta_amount_base(lower, target_sqrt_price, seg.liquidity, Rounding.UP)
            break
        total += get_delta_amount_base(lower, seg.sqrt_price, seg.liquidity, Rounding.UP)
    _dbg(f"base for swap up to {target_sqrt_price}: {total}")
    return total


def get_total_base_capacity(curve: Curve) -> int:
    """Base released by draining the whole curve."""
    return get_base_token_for_swap(curve, MAX_SQRT_PRICE)


def get_total_quote_capacity(curve: Curve) -> int:
    """Quote needed to drain the whole curve (Δquote rounded up per segment)."""
    total = 0
    for i, seg in enumerate(curve.segments):
        total += get_delta_amount_quote(curve.lower_bound(i), seg.sqrt_price, seg.liquidity, Rounding.UP)
    return total


__all__ = [
    "get_migration_threshold_price",
    "get_base_token_for_swap",
    "get_total_base_capacity",
    "get_total_quote_capacity",
]
