"""
Migration reserve sizing: base tokens needed to seed the downstream venue.

Strategies (selected by `MigrationOption`):
- CONSTANT_PRODUCT: the venue prices the pair at P^2, so
      base = ceil( quote * 2^128 / P^2 )
- CONCENTRATED: the venue provides liquidity from P up to MAX_SQRT_PRICE;
      L    = quote * 2^128 / (P - MIN_SQRT_PRICE)          (rounded down)
      base = Δbase(P, MAX_SQRT_PRICE, L)                   (rounded up)

Both round the reserve up so the venue is never under-seeded.
"""

from __future__ import annotations

from dataclasses import dataclass

from .core import (
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    RESOLUTION,
    AmountDomainError,
    FixedPrice,
    MigrationOption,
    Rounding,
    check_sqrt_price,
    checked_u64,
    div_rounding,
    mul_div,
    require_non_negative,
)
from .curve_math import get_delta_amount_base, get_liquidity_from_delta_quote

# Debug printing control
DEBUG_MIGRATION = False

def _dbg(msg: str) -> None:
    if DEBUG_MIGRATION:
        print(f"[MIGRATION] {msg}")


def get_migration_base_token(
    migration_quote_threshold: int,
    sqrt_migration_price: FixedPrice,
    migration_option,
) -> int:
    """Base reserve that `migration_quote_threshold` of quote pairs with at the migration price."""
    option = MigrationOption.parse(migration_option)
    require_non_negative(migration_quote_threshold=migration_quote_threshold)
    check_sqrt_price(sqrt_migration_price, "sqrt_migration_price")

    if option is MigrationOption.CONSTANT_PRODUCT:
        price = sqrt_migration_price * sqrt_migration_price
        base = div_rounding(migration_quote_threshold << (RESOLUTION * 2), price, Rounding.UP)
    else:
        liquidity = get_liquidity_from_delta_quote(
            migration_quote_threshold, MIN_SQRT_PRICE, sqrt_migration_price
        )
        base = get_delta_amount_base(sqrt_migration_price, MAX_SQRT_PRICE, liquidity, Rounding.UP)
    _dbg(f"option={option.name} quote={migration_quote_threshold} price={sqrt_migration_price} -> base={base}")
    return base


# ---------------------------------------------------------------------------
# Migration fee
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MigrationAmount:
    """Quote actually migrated and the fee withheld from the threshold."""

    quote_amount: int
    fee: int


@dataclass(frozen=True)
class MigrationFeeDistribution:
    partner_migration_fee: int
    creator_migration_fee: int


def _check_percentage(value: int, name: str) -> None:
    if not isinstance(value, int) or value < 0 or value > 100:
        raise AmountDomainError(f"{name} must be an int in [0, 100], got {value!r}")


def get_migration_quote_amount(migration_quote_threshold: int, migration_fee_percentage: int) -> MigrationAmount:
    """Split the threshold into migrated quote (rounded up) and migration fee."""
    checked_u64(migration_quote_threshold, "migration_quote_threshold")
    _check_percentage(migration_fee_percentage, "migration_fee_percentage")
    quote_amount = mul_div(migration_quote_threshold, 100 - migration_fee_percentage, 100, Rounding.UP)
    return MigrationAmount(quote_amount=quote_amount, fee=migration_quote_threshold - quote_amount)


def get_migration_fee_distribution(
    migration_quote_threshold: int,
    migration_fee_percentage: int,
    creator_migration_fee_percentage: int,
) -> MigrationFeeDistribution:
    """Share the migration fee between creator (rounded down) and partner (the rest)."""
    _check_percentage(creator_migration_fee_percentage, "creator_migration_fee_percentage")
    fee = get_migration_quote_amount(migration_quote_threshold, migration_fee_percentage).fee
    creator = mul_div(fee, creator_migration_fee_percentage, 100, Rounding.DOWN)
    return MigrationFeeDistribution(partner_migration_fee=fee - creator, creator_migration_fee=creator)


__all__ = [
    "get_migration_base_token",
    "MigrationAmount",
    "MigrationFeeDistribution",
    "get_migration_quote_amount",
    "get_migration_fee_distribution",
]
