"""
Curve synthesizers: market parameters -> piecewise-constant-liquidity curve.

Two designs are provided:

- `design_linear_curve`: a single liquidity segment from the start price to
  the migration price, solved in closed form so that the swap phase releases
  the swap-phase supply and absorbs exactly the migration quote threshold,
  followed by a terminal segment up to MAX_SQRT_PRICE that drains any
  remainder of the supply.

- `design_graph_curve`: 16 geometric segments between the initial and
  migration market-cap prices with liquidities L1 * k^i. L1 is solved from a
  weighted sum so that swap-phase base plus migration-phase base equals the
  supply available to the curve; the migration quote threshold is then
  derived from what is left for migration at the final price.

Both designs reconcile the result against the requested total supply before
returning it.
"""

from __future__ import annotations

from decimal import Decimal, localcontext
from typing import List, Sequence

from .core import (
    CURVE_CONTEXT,
    DEFAULT_FEE_NUMERATOR,
    GRAPH_CURVE_SEGMENTS,
    MAX_SQRT_PRICE,
    RESOLUTION,
    SWAP_BUFFER_PERCENTAGE,
    AmountDomainError,
    Curve,
    CurveDesign,
    CurveSupplyMismatch,
    DecimalLike,
    FixedPrice,
    InvalidPriceDomain,
    LiquiditySegment,
    LockedVesting,
    MigrationOption,
    MigrationThreshold,
    Rounding,
    SupplyBreakdown,
    check_sqrt_price,
    checked_u64,
    checked_u128,
    div_rounding,
    floor_to_int,
    scale_to_units,
    to_positive_decimal,
)
from .curve_math import (
    get_delta_amount_quote,
    get_liquidity,
    get_liquidity_from_delta_base,
    get_liquidity_from_delta_quote,
)
from .fees import validate_fee_numerator
from .migration import get_migration_base_token
from .price import price_from_quote_and_base, price_to_sqrt_price, sqrt_price_from_market_cap
from .supply import check_supply, get_swap_amount_with_buffer, reconstruct_supply
from .walker import get_base_token_for_swap, get_migration_threshold_price

# Debug printing control
DEBUG_DESIGN = False

def _dbg(msg: str) -> None:
    if DEBUG_DESIGN:
        print(f"[DESIGN] {msg}")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _reconcile(
    curve: Curve,
    migration_quote_threshold: int,
    locked_vesting: LockedVesting,
    option: MigrationOption,
    total_supply: int,
    leftover: int,
    buffer_percentage: int,
) -> tuple[SupplyBreakdown, FixedPrice]:
    """Reconstruct the supply of `curve`, enforce the tolerance, fold under-supply into leftover."""
    breakdown = reconstruct_supply(
        curve,
        migration_quote_threshold,
        locked_vesting,
        option,
        leftover,
        buffer_percentage=buffer_percentage,
    )
    remainder = check_supply(breakdown, total_supply, leftover)
    if remainder:
        breakdown = SupplyBreakdown(
            swap_amount=breakdown.swap_amount,
            migration_amount=breakdown.migration_amount,
            vesting_amount=breakdown.vesting_amount,
            leftover_amount=breakdown.leftover_amount + remainder,
        )
    return breakdown, get_migration_threshold_price(curve, migration_quote_threshold)


# ---------------------------------------------------------------------------
# Linear (single-segment) design
# ---------------------------------------------------------------------------

def get_first_curve(
    sqrt_migration_price: FixedPrice,
    migration_base_amount: int,
    swap_amount: int,
    migration_quote_threshold: int,
) -> Curve:
    """Single segment ending at the migration price.

    The start price places the migration reserve and the swap amount at the
    same ratio as their prices; liquidity is the largest value backed by both
    the swap amount (base) and the threshold (quote) over that range.

    When that liquidity cannot absorb the whole threshold (the concentrated
    migration reserve is slightly smaller than the constant-product one), the
    start price is moved up to ceil(threshold * 2^128 / (swap_amount * P_m))
    and liquidity is taken from the quote side. The segment then absorbs
    exactly the threshold and releases at most `swap_amount`.
    """
    if swap_amount <= 0:
        raise AmountDomainError(f"swap amount must be > 0, got {swap_amount}")
    sqrt_start_price = sqrt_migration_price * migration_base_amount // swap_amount
    check_sqrt_price(sqrt_start_price, "sqrt_start_price")
    if sqrt_start_price >= sqrt_migration_price:
        raise InvalidPriceDomain(
            f"start price {sqrt_start_price} not below migration price {sqrt_migration_price}: "
            f"migration reserve ({migration_base_amount}) must be smaller than swap amount ({swap_amount})"
        )
    liquidity = get_liquidity(swap_amount, migration_quote_threshold, sqrt_start_price, sqrt_migration_price)
    if get_delta_amount_quote(sqrt_start_price, sqrt_migration_price, liquidity, Rounding.UP) < migration_quote_threshold:
        # base side too thin to absorb the threshold: restart where swap_amount / threshold
        # matches the segment's base / quote ratio, then size from the quote side
        sqrt_start_price = div_rounding(
            migration_quote_threshold << (RESOLUTION * 2), swap_amount * sqrt_migration_price, Rounding.UP
        )
        check_sqrt_price(sqrt_start_price, "sqrt_start_price")
        if sqrt_start_price >= sqrt_migration_price:
            raise InvalidPriceDomain(
                f"start price {sqrt_start_price} not below migration price {sqrt_migration_price}"
            )
        liquidity = get_liquidity_from_delta_quote(migration_quote_threshold, sqrt_start_price, sqrt_migration_price)
        _dbg(f"first curve resized from quote side: start={sqrt_start_price}")
    _dbg(f"first curve: start={sqrt_start_price} migration={sqrt_migration_price} L={liquidity}")
    return Curve(sqrt_start_price, (LiquiditySegment(sqrt_migration_price, checked_u128(liquidity, "liquidity")),))


def design_linear_curve(
    total_token_supply: DecimalLike,
    percentage_supply_on_migration: DecimalLike,
    migration_quote_threshold: DecimalLike,
    migration_option,
    base_decimals: int,
    quote_decimals: int,
    locked_vesting: LockedVesting = LockedVesting(),
    *,
    fee_numerator: int = DEFAULT_FEE_NUMERATOR,
    buffer_percentage: int = SWAP_BUFFER_PERCENTAGE,
) -> CurveDesign:
    """Design a 1-2 segment curve from supply, migration share and quote threshold.

    Amounts are given in whole tokens; the returned design is in smallest units.
    """
    option = MigrationOption.parse(migration_option)
    validate_fee_numerator(fee_numerator)
    supply_tokens = to_positive_decimal(total_token_supply, "total_token_supply")
    pct = to_positive_decimal(percentage_supply_on_migration, "percentage_supply_on_migration")
    threshold_tokens = to_positive_decimal(migration_quote_threshold, "migration_quote_threshold")
    if pct >= 100:
        raise AmountDomainError(f"percentage_supply_on_migration must be < 100, got {pct}")

    with localcontext(CURVE_CONTEXT):
        migration_base_supply = Decimal(floor_to_int(supply_tokens * pct / 100))
    total_supply = checked_u64(scale_to_units(supply_tokens, base_decimals), "total_supply")
    quote_threshold = checked_u64(scale_to_units(threshold_tokens, quote_decimals), "migration_quote_threshold")

    migration_price = price_from_quote_and_base(threshold_tokens, migration_base_supply)
    sqrt_migration_price = check_sqrt_price(
        price_to_sqrt_price(migration_price, base_decimals, quote_decimals), "sqrt_migration_price"
    )

    migration_base_amount = get_migration_base_token(quote_threshold, sqrt_migration_price, option)
    vesting_amount = locked_vesting.total_amount()
    swap_amount = total_supply - migration_base_amount - vesting_amount
    if swap_amount <= 0:
        raise CurveSupplyMismatch(migration_base_amount + vesting_amount, total_supply, 0)
    _dbg(
        f"total={total_supply} migration={migration_base_amount} vesting={vesting_amount} "
        f"swap={swap_amount} threshold={quote_threshold}"
    )

    curve = get_first_curve(sqrt_migration_price, migration_base_amount, swap_amount, quote_threshold)

    first = reconstruct_supply(
        curve, quote_threshold, locked_vesting, option, 0, buffer_percentage=buffer_percentage
    )
    remaining_amount = check_supply(first, total_supply, 0)
    last_liquidity = get_liquidity_from_delta_base(remaining_amount, sqrt_migration_price, MAX_SQRT_PRICE)
    curve = curve.with_segment(LiquiditySegment(MAX_SQRT_PRICE, checked_u128(last_liquidity, "liquidity")))
    _dbg(f"terminal segment: remaining={remaining_amount} L={last_liquidity}")

    breakdown, sqrt_price_at_threshold = _reconcile(
        curve, quote_threshold, locked_vesting, option, total_supply, 0, buffer_percentage
    )
    return CurveDesign(
        curve=curve,
        migration=MigrationThreshold(quote_amount=quote_threshold, sqrt_price=sqrt_price_at_threshold),
        supply=breakdown,
        total_supply=total_supply,
        migration_option=option,
        base_decimals=base_decimals,
        quote_decimals=quote_decimals,
        locked_vesting=locked_vesting,
        fee_numerator=fee_numerator,
    )


# ---------------------------------------------------------------------------
# Graph (16-segment geometric) design
# ---------------------------------------------------------------------------

def get_geometric_sqrt_prices(
    sqrt_min_price: FixedPrice,
    sqrt_max_price: FixedPrice,
    segments: int = GRAPH_CURVE_SEGMENTS,
) -> List[FixedPrice]:
    """Boundaries P_0..P_n with P_i = floor(q * P_{i-1}), q = (Pmax/Pmin)^(1/n), P_n := Pmax."""
    if segments <= 0:
        raise AmountDomainError(f"segments must be > 0, got {segments}")
    if sqrt_min_price >= sqrt_max_price:
        raise InvalidPriceDomain(
            f"initial sqrt price {sqrt_min_price} must be below migration sqrt price {sqrt_max_price}"
        )
    with localcontext(CURVE_CONTEXT):
        q = (Decimal(sqrt_max_price) / Decimal(sqrt_min_price)) ** (Decimal(1) / Decimal(segments))
        prices = [sqrt_min_price]
        current = sqrt_min_price
        for _ in range(segments - 1):
            current = floor_to_int(q * Decimal(current))
            prices.append(current)
    # pin the last boundary to cancel compounding error
    prices.append(sqrt_max_price)
    _dbg(f"q={q} boundaries={prices}")
    return prices


def get_graph_weight_sum(sqrt_prices: Sequence[FixedPrice], k_factor: DecimalLike) -> Decimal:
    """S = Σ_{i=1..n} k^(i-1) * [ (P_i - P_{i-1}) / (P_i P_{i-1}) + (P_i - P_{i-1}) / Pmax^2 ].

    The first term is base released per unit of liquidity during the swap
    phase; the second is base the same quote is worth at the final price
    (migration phase).
    """
    if len(sqrt_prices) < 2:
        raise AmountDomainError("need at least two boundaries")
    with localcontext(CURVE_CONTEXT):
        k = to_positive_decimal(k_factor, "k_factor")
        pmax = Decimal(sqrt_prices[-1])
        pmax_sq = pmax * pmax
        total = Decimal(0)
        for i in range(1, len(sqrt_prices)):
            pi = Decimal(sqrt_prices[i])
            pi_minus = Decimal(sqrt_prices[i - 1])
            delta = pi - pi_minus
            w1 = delta / (pi * pi_minus)
            w2 = delta / pmax_sq
            total += (k ** (i - 1)) * (w1 + w2)
    return total


def get_graph_segments(
    sqrt_prices: Sequence[FixedPrice],
    base_liquidity: Decimal,
    k_factor: DecimalLike,
) -> List[LiquiditySegment]:
    """Segment i covers (P_i, P_{i+1}] with liquidity floor(L1 * k^i)."""
    segments = []
    with localcontext(CURVE_CONTEXT):
        k = to_positive_decimal(k_factor, "k_factor")
        for i in range(len(sqrt_prices) - 1):
            liquidity = floor_to_int(base_liquidity * (k ** i))
            segments.append(LiquiditySegment(sqrt_prices[i + 1], checked_u128(liquidity, "liquidity")))
    return segments


def design_graph_curve(
    total_token_supply: DecimalLike,
    initial_market_cap: DecimalLike,
    migration_market_cap: DecimalLike,
    migration_option,
    base_decimals: int,
    quote_decimals: int,
    locked_vesting: LockedVesting,
    leftover: DecimalLike,
    k_factor: DecimalLike,
    *,
    fee_numerator: int = DEFAULT_FEE_NUMERATOR,
    buffer_percentage: int = SWAP_BUFFER_PERCENTAGE,
) -> CurveDesign:
    """Design a 16-segment geometric curve with convexity `k_factor`.

    Supply, market caps and leftover are whole tokens; k = 1 spreads liquidity
    uniformly, k > 1 back-loads it, k < 1 front-loads it.
    """
    option = MigrationOption.parse(migration_option)
    validate_fee_numerator(fee_numerator)
    supply_tokens = to_positive_decimal(total_token_supply, "total_token_supply")

    # 1. price range from market caps
    sqrt_min_price = check_sqrt_price(
        sqrt_price_from_market_cap(initial_market_cap, supply_tokens, base_decimals, quote_decimals),
        "sqrt_min_price",
    )
    sqrt_max_price = check_sqrt_price(
        sqrt_price_from_market_cap(migration_market_cap, supply_tokens, base_decimals, quote_decimals),
        "sqrt_max_price",
    )

    # 2. geometric boundaries
    sqrt_prices = get_geometric_sqrt_prices(sqrt_min_price, sqrt_max_price)

    # 3. supply available to swap + migration
    total_supply = checked_u64(scale_to_units(supply_tokens, base_decimals), "total_supply")
    total_leftover = scale_to_units(leftover, base_decimals)
    vesting_amount = locked_vesting.total_amount()
    total_swap_and_migration_amount = total_supply - vesting_amount - total_leftover
    if total_swap_and_migration_amount <= 0:
        raise CurveSupplyMismatch(vesting_amount + total_leftover, total_supply, 0)

    # 4-5. weighted sum -> L1 -> segments
    sum_factor = get_graph_weight_sum(sqrt_prices, k_factor)
    with localcontext(CURVE_CONTEXT):
        base_liquidity = Decimal(total_swap_and_migration_amount) / sum_factor
    curve = Curve(sqrt_min_price, get_graph_segments(sqrt_prices, base_liquidity, k_factor))
    _dbg(f"S={sum_factor} L1={base_liquidity}")

    # 6. swap amount with buffer
    swap_base_amount = get_base_token_for_swap(curve, sqrt_max_price)
    swap_base_amount_buffer = get_swap_amount_with_buffer(swap_base_amount, curve, buffer_percentage)

    # 7. migration reserve and derived threshold
    migration_amount = total_swap_and_migration_amount - swap_base_amount_buffer
    if migration_amount < 0:
        raise CurveSupplyMismatch(swap_base_amount_buffer, total_swap_and_migration_amount, 0)
    migration_quote_threshold = checked_u64(
        (migration_amount * sqrt_max_price * sqrt_max_price) >> (RESOLUTION * 2),
        "migration_quote_threshold",
    )
    _dbg(
        f"swap={swap_base_amount} buffered={swap_base_amount_buffer} "
        f"migration={migration_amount} threshold={migration_quote_threshold}"
    )

    # 8. reconcile; over-supply beyond leftover is fatal
    breakdown, sqrt_price_at_threshold = _reconcile(
        curve,
        migration_quote_threshold,
        locked_vesting,
        option,
        total_supply,
        total_leftover,
        buffer_percentage,
    )
    return CurveDesign(
        curve=curve,
        migration=MigrationThreshold(quote_amount=migration_quote_threshold, sqrt_price=sqrt_price_at_threshold),
        supply=breakdown,
        total_supply=total_supply,
        migration_option=option,
        base_decimals=base_decimals,
        quote_decimals=quote_decimals,
        locked_vesting=locked_vesting,
        fee_numerator=fee_numerator,
    )


__all__ = [
    "get_first_curve",
    "design_linear_curve",
    "get_geometric_sqrt_prices",
    "get_graph_weight_sum",
    "get_graph_segments",
    "design_graph_curve",
]
