"""
Supply reconciliation: re-derive where every base token of a curve goes.

    total = swap amount (with buffer) + migration reserve + vesting + leftover

The swap amount is walked from the start price to the price reached at the
migration quote threshold, then padded by a buffer percentage and capped at
what the curve can release in total. Over-supply beyond the leftover
carve-out is fatal; under-supply simply becomes extra leftover.
"""

from __future__ import annotations

from .core import (
    SWAP_BUFFER_PERCENTAGE,
    Curve,
    CurveSupplyMismatch,
    LockedVesting,
    SupplyBreakdown,
    require_non_negative,
)
from .migration import get_migration_base_token
from .walker import (
    get_base_token_for_swap,
    get_migration_threshold_price,
    get_total_base_capacity,
)

# Debug printing control
DEBUG_SUPPLY = False

def _dbg(msg: str) -> None:
    if DEBUG_SUPPLY:
        print(f"[SUPPLY] {msg}")


def get_total_vesting_amount(locked_vesting: LockedVesting) -> int:
    return locked_vesting.total_amount()


def get_swap_amount_with_buffer(
    swap_base_amount: int,
    curve: Curve,
    buffer_percentage: int = SWAP_BUFFER_PERCENTAGE,
) -> int:
    """swap amount * (100 + buffer) / 100, capped at the curve's total base capacity."""
    require_non_negative(swap_base_amount=swap_base_amount, buffer_percentage=buffer_percentage)
    swap_amount_buffer = swap_base_amount + swap_base_amount * buffer_percentage // 100
    max_base_amount_on_curve = get_total_base_capacity(curve)
    return min(swap_amount_buffer, max_base_amount_on_curve)


def reconstruct_supply(
    curve: Curve,
    migration_quote_threshold: int,
    locked_vesting: LockedVesting,
    migration_option,
    leftover: int = 0,
    *,
    buffer_percentage: int = SWAP_BUFFER_PERCENTAGE,
) -> SupplyBreakdown:
    """Forward-simulate `curve` up to the migration threshold and itemise the supply."""
    require_non_negative(leftover=leftover)
    sqrt_migration_price = get_migration_threshold_price(curve, migration_quote_threshold)
    swap_base_amount = get_base_token_for_swap(curve, sqrt_migration_price)
    swap_amount = get_swap_amount_with_buffer(swap_base_amount, curve, buffer_percentage)
    migration_amount = get_migration_base_token(
        migration_quote_threshold, sqrt_migration_price, migration_option
    )
    breakdown = SupplyBreakdown(
        swap_amount=swap_amount,
        migration_amount=migration_amount,
        vesting_amount=get_total_vesting_amount(locked_vesting),
        leftover_amount=leftover,
    )
    _dbg(
        f"migration price={sqrt_migration_price} swap={swap_base_amount} "
        f"buffered={swap_amount} migration={migration_amount} total={breakdown.total()}"
    )
    return breakdown


def check_supply(breakdown: SupplyBreakdown, total_supply: int, tolerance: int) -> int:
    """Raise CurveSupplyMismatch if the breakdown over-spends total_supply by more than tolerance.

    Returns the unallocated remainder (>= 0), which callers treat as extra leftover.
    """
    require_non_negative(total_supply=total_supply, tolerance=tolerance)
    reconstructed = breakdown.total()
    if reconstructed > total_supply:
        if reconstructed - total_supply > tolerance:
            raise CurveSupplyMismatch(reconstructed, total_supply, tolerance)
        return 0
    return total_supply - reconstructed


def get_total_supply_from_curve(
    curve: Curve,
    migration_quote_threshold: int,
    locked_vesting: LockedVesting,
    migration_option,
    leftover: int = 0,
    *,
    buffer_percentage: int = SWAP_BUFFER_PERCENTAGE,
) -> int:
    """Minimum base supply (with buffer) a curve needs; shorthand for reconstruct_supply(...).total()."""
    return reconstruct_supply(
        curve,
        migration_quote_threshold,
        locked_vesting,
        migration_option,
        leftover,
        buffer_percentage=buffer_percentage,
    ).total()


__all__ = [
    "get_total_vesting_amount",
    "get_swap_amount_with_buffer",
    "reconstruct_supply",
    "check_supply",
    "get_total_supply_from_curve",
]
