"""
Swap simulation against a synthesized curve (**prediction only**).

This module predicts what the ledger would do for a given input; it never
decides whether a trade should run. The integer formulas and rounding
directions are the ones of the segment integral library:

- quote in (buy base): capacity per segment is Δquote rounded up; a partial
  fill solves the next price rounded down; base out is Δbase rounded down.
- base in (sell base): capacity per segment is Δbase rounded up; a partial
  fill solves the next price rounded up; quote out is Δquote rounded down.

Trading fees use the fee grid in `fees.py`:
- CollectFeeMode.QUOTE_TOKEN: fees are always taken in quote (on the input
  when buying, on the output when selling).
- CollectFeeMode.OUTPUT_TOKEN: fees are taken on the output token.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from .core import (
    DEFAULT_FEE_NUMERATOR,
    Curve,
    CurveDesign,
    FixedPrice,
    InsufficientCurveLiquidity,
    InvalidPriceDomain,
    Rounding,
    checked_u64,
    require_non_negative,
)
from .curve_math import (
    get_delta_amount_base,
    get_delta_amount_quote,
    get_next_sqrt_price_from_base_input,
    get_next_sqrt_price_from_quote_input,
)
from .fees import get_fee_on_amount

# Debug printing control
DEBUG_SWAP = False

def _dbg(msg: str) -> None:
    if DEBUG_SWAP:
        print(f"[SWAP] {msg}")


class TradeDirection(Enum):
    BASE_TO_QUOTE = "base_to_quote"
    QUOTE_TO_BASE = "quote_to_base"


class CollectFeeMode(IntEnum):
    QUOTE_TOKEN = 0
    OUTPUT_TOKEN = 1


def _check_price_on_curve(curve: Curve, sqrt_price: FixedPrice) -> None:
    if sqrt_price < curve.sqrt_start_price or sqrt_price > curve.sqrt_end_price:
        raise InvalidPriceDomain(
            f"sqrt_price={sqrt_price} outside curve [{curve.sqrt_start_price}, {curve.sqrt_end_price}]"
        )


# ---------------------------------------------------------------------------
# Curve walks (fee-free)
# ---------------------------------------------------------------------------

def get_swap_amount_from_quote_to_base(curve: Curve, sqrt_price: FixedPrice, amount_in: int) -> tuple[int, FixedPrice]:
    """Base out and next sqrt price for `amount_in` quote, starting at `sqrt_price`."""
    require_non_negative(amount_in=amount_in)
    _check_price_on_curve(curve, sqrt_price)
    total_output = 0
    current = sqrt_price
    amount_left = amount_in
    for i, seg in enumerate(curve.segments):
        if amount_left == 0:
            break
        if seg.sqrt_price <= current:
            continue
        max_amount_in = get_delta_amount_quote(current, seg.sqrt_price, seg.liquidity, Rounding.UP)
        if amount_left < max_amount_in:
            next_price = get_next_sqrt_price_from_quote_input(current, seg.liquidity, amount_left)
            total_output += get_delta_amount_base(current, next_price, seg.liquidity, Rounding.DOWN)
            current = next_price
            amount_left = 0
            break
        total_output += get_delta_amount_base(current, seg.sqrt_price, seg.liquidity, Rounding.DOWN)
        current = seg.sqrt_price
        amount_left -= max_amount_in
        _dbg(f"buy seg[{i}] full: left={amount_left} out={total_output}")

    if amount_left != 0:
        raise InsufficientCurveLiquidity(amount_in, amount_in - amount_left, remaining=amount_left)
    return checked_u64(total_output, "output_amount"), current


def get_swap_amount_from_base_to_quote(curve: Curve, sqrt_price: FixedPrice, amount_in: int) -> tuple[int, FixedPrice]:
    """Quote out and next sqrt price for `amount_in` base, starting at `sqrt_price`."""
    require_non_negative(amount_in=amount_in)
    _check_price_on_curve(curve, sqrt_price)
    total_output = 0
    current = sqrt_price
    amount_left = amount_in
    for i in reversed(range(len(curve.segments))):
        if amount_left == 0:
            break
        seg = curve.segments[i]
        lower = curve.lower_bound(i)
        if lower >= current:
            continue
        max_amount_in = get_delta_amount_base(lower, current, seg.liquidity, Rounding.UP)
        if amount_left < max_amount_in:
            next_price = get_next_sqrt_price_from_base_input(current, seg.liquidity, amount_left)
            total_output += get_delta_amount_quote(next_price, current, seg.liquidity, Rounding.DOWN)
            current = next_price
            amount_left = 0
            break
        total_output += get_delta_amount_quote(lower, current, seg.liquidity, Rounding.DOWN)
        current = lower
        amount_left -= max_amount_in
        _dbg(f"sell seg[{i}] full: left={amount_left} out={total_output}")

    if amount_left != 0:
        raise InsufficientCurveLiquidity(amount_in, amount_in - amount_left, remaining=amount_left)
    return checked_u64(total_output, "output_amount"), current


# ---------------------------------------------------------------------------
# Swap with fees
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SwapResult:
    """Predicted outcome of one swap."""

    amount_in: int
    actual_input_amount: int
    output_amount: int
    next_sqrt_price: FixedPrice
    trading_fee: int
    protocol_fee: int
    referral_fee: int
    fee_on_input: bool

    @property
    def total_fee(self) -> int:
        return self.trading_fee + self.protocol_fee + self.referral_fee


def simulate_swap(
    curve: Curve,
    sqrt_price: FixedPrice,
    amount_in: int,
    direction: TradeDirection,
    fee_numerator: int = DEFAULT_FEE_NUMERATOR,
    collect_fee_mode: CollectFeeMode = CollectFeeMode.QUOTE_TOKEN,
    has_referral: bool = False,
) -> SwapResult:
    """Predict the result of swapping `amount_in` in `direction` from `sqrt_price`."""
    checked_u64(amount_in, "amount_in")
    mode = CollectFeeMode(collect_fee_mode)
    fee_on_input = direction is TradeDirection.QUOTE_TO_BASE and mode is CollectFeeMode.QUOTE_TOKEN

    trading_fee = protocol_fee = referral_fee = 0
    actual_in = amount_in
    if fee_on_input:
        fee = get_fee_on_amount(fee_numerator, amount_in, has_referral)
        actual_in = fee.amount
        trading_fee, protocol_fee, referral_fee = fee.trading_fee, fee.protocol_fee, fee.referral_fee

    if direction is TradeDirection.QUOTE_TO_BASE:
        raw_out, next_price = get_swap_amount_from_quote_to_base(curve, sqrt_price, actual_in)
    else:
        raw_out, next_price = get_swap_amount_from_base_to_quote(curve, sqrt_price, actual_in)

    output = raw_out
    if not fee_on_input:
        fee = get_fee_on_amount(fee_numerator, raw_out, has_referral)
        output = fee.amount
        trading_fee, protocol_fee, referral_fee = fee.trading_fee, fee.protocol_fee, fee.referral_fee

    _dbg(f"{direction.value}: in={amount_in} actual_in={actual_in} out={output} price {sqrt_price}->{next_price}")
    return SwapResult(
        amount_in=amount_in,
        actual_input_amount=actual_in,
        output_amount=output,
        next_sqrt_price=next_price,
        trading_fee=trading_fee,
        protocol_fee=protocol_fee,
        referral_fee=referral_fee,
        fee_on_input=fee_on_input,
    )


def is_curve_complete(quote_reserve: int, migration_quote_threshold: int) -> bool:
    return quote_reserve >= migration_quote_threshold


# ---------------------------------------------------------------------------
# Stateful pool view
# ---------------------------------------------------------------------------

class VirtualPool:
    """Mutable mirror of a pool's curve state for multi-swap simulations.

    The curve itself is shared and immutable; only price and reserves move.
    Reserves track what the curve holds: base reserve starts at the design's
    initial base supply (swap + migration), quote reserve at zero. Fees are
    not added to reserves.
    """

    def __init__(self, design: CurveDesign, *, collect_fee_mode: CollectFeeMode = CollectFeeMode.QUOTE_TOKEN) -> None:
        self.design = design
        self.curve = design.curve
        self.sqrt_price = design.curve.sqrt_start_price
        self.base_reserve = design.supply.swap_amount + design.supply.migration_amount
        self.quote_reserve = 0
        self.collect_fee_mode = CollectFeeMode(collect_fee_mode)

    def is_complete(self) -> bool:
        return is_curve_complete(self.quote_reserve, self.design.migration_quote_threshold)

    def quote(self, amount_in: int, direction: TradeDirection, *, has_referral: bool = False) -> SwapResult:
        """Preview a swap without applying it."""
        return simulate_swap(
            self.curve,
            self.sqrt_price,
            amount_in,
            direction,
            self.design.fee_numerator,
            self.collect_fee_mode,
            has_referral,
        )

    def swap(self, amount_in: int, direction: TradeDirection, *, has_referral: bool = False) -> SwapResult:
        """Apply a swap to price and reserves and return its result."""
        result = self.quote(amount_in, direction, has_referral=has_referral)
        # gross amounts the curve actually moved
        if direction is TradeDirection.QUOTE_TO_BASE:
            base_out = result.output_amount if result.fee_on_input else result.output_amount + result.total_fee
            if base_out > self.base_reserve:
                raise InsufficientCurveLiquidity(base_out, self.base_reserve, remaining=base_out - self.base_reserve)
            self.quote_reserve += result.actual_input_amount
            self.base_reserve -= base_out
        else:
            quote_out = result.output_amount + result.total_fee
            if quote_out > self.quote_reserve:
                raise InsufficientCurveLiquidity(quote_out, self.quote_reserve, remaining=quote_out - self.quote_reserve)
            self.base_reserve += result.actual_input_amount
            self.quote_reserve -= quote_out
        self.sqrt_price = result.next_sqrt_price
        return result


__all__ = [
    "TradeDirection",
    "CollectFeeMode",
    "get_swap_amount_from_quote_to_base",
    "get_swap_amount_from_base_to_quote",
    "SwapResult",
    "simulate_swap",
    "is_curve_complete",
    "VirtualPool",
]
