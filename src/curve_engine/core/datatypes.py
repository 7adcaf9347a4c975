"""
Core datatypes for curve synthesis and simulation.

These datatypes are intentionally minimal and immutable (where appropriate)
so that walking and synthesis logic can remain deterministic and testable.

Notes:
- Sqrt prices are Q64.64 integers (`FixedPrice`); amounts are integer smallest
  units; liquidity is a u128 integer.
- A `Curve` validates its boundaries on construction and never changes
  afterwards; any number of simulations may share one instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Tuple

from .constants import DEFAULT_FEE_NUMERATOR, MAX_CURVE_POINT, MAX_SQRT_PRICE, MIN_SQRT_PRICE
from .exc import InvalidMigrationOption, InvalidPriceDomain
from .rounding import checked_u64, checked_u128

#: Q64.64 sqrt price.
FixedPrice = int


def check_sqrt_price(sqrt_price: FixedPrice, what: str = "sqrt_price") -> FixedPrice:
    """Return sqrt_price if it lies within [MIN_SQRT_PRICE, MAX_SQRT_PRICE]."""
    if not isinstance(sqrt_price, int) or sqrt_price < MIN_SQRT_PRICE or sqrt_price > MAX_SQRT_PRICE:
        raise InvalidPriceDomain(
            f"{what}={sqrt_price} outside [{MIN_SQRT_PRICE}, {MAX_SQRT_PRICE}]"
        )
    return sqrt_price


# ---------------------------------------------------------------------------
# Curve
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LiquiditySegment:
    """Constant-liquidity slice covering (previous bound, sqrt_price].

    Fields:
    - sqrt_price: upper bound of the slice (Q64.64).
    - liquidity: constant liquidity within the slice (u128). Zero is allowed
      for a terminal placeholder slice.
    """

    sqrt_price: FixedPrice
    liquidity: int

    def __post_init__(self):
        check_sqrt_price(self.sqrt_price, "segment.sqrt_price")
        checked_u128(self.liquidity, "segment.liquidity")


@dataclass(frozen=True)
class Curve:
    """Piecewise-constant-liquidity curve: a start price plus ordered segments."""

    sqrt_start_price: FixedPrice
    segments: Tuple[LiquiditySegment, ...]

    def __post_init__(self):
        # accept any iterable; store as tuple
        object.__setattr__(self, "segments", tuple(self.segments))
        self.validate()

    def validate(self) -> None:
        check_sqrt_price(self.sqrt_start_price, "sqrt_start_price")
        if not self.segments:
            raise InvalidPriceDomain("curve needs at least one segment")
        if len(self.segments) > MAX_CURVE_POINT:
            raise InvalidPriceDomain(
                f"curve has {len(self.segments)} segments, max is {MAX_CURVE_POINT}"
            )
        prev = self.sqrt_start_price
        for i, seg in enumerate(self.segments):
            if seg.sqrt_price <= prev:
                raise InvalidPriceDomain(
                    f"segment {i} bound {seg.sqrt_price} is not above previous bound {prev}"
                )
            prev = seg.sqrt_price

    # ------------- views -------------

    @property
    def sqrt_end_price(self) -> FixedPrice:
        return self.segments[-1].sqrt_price

    def lower_bound(self, index: int) -> FixedPrice:
        """Lower bound of segment `index` (start price for the first one)."""
        return self.sqrt_start_price if index == 0 else self.segments[index - 1].sqrt_price

    def is_open_ended(self) -> bool:
        """True if the last bound is MAX_SQRT_PRICE (any finite input can be priced)."""
        return self.sqrt_end_price == MAX_SQRT_PRICE

    def with_segment(self, segment: LiquiditySegment) -> "Curve":
        """Return a new curve with `segment` appended."""
        return Curve(self.sqrt_start_price, self.segments + (segment,))

    def to_dict(self) -> dict:
        return {
            "sqrt_start_price": str(self.sqrt_start_price),
            "curve": [
                {"sqrt_price": str(s.sqrt_price), "liquidity": str(s.liquidity)}
                for s in self.segments
            ],
        }

    @classmethod
    def from_points(cls, sqrt_start_price: FixedPrice, points: Iterable[Tuple[int, int]]) -> "Curve":
        """Build from (sqrt_price, liquidity) pairs."""
        return cls(sqrt_start_price, tuple(LiquiditySegment(p, l) for p, l in points))


# ---------------------------------------------------------------------------
# Market parameters
# ---------------------------------------------------------------------------

class MigrationOption(IntEnum):
    """Downstream venue shape used to size the migration reserve."""

    CONSTANT_PRODUCT = 0
    CONCENTRATED = 1

    @classmethod
    def parse(cls, value) -> "MigrationOption":
        try:
            return cls(value)
        except ValueError:
            raise InvalidMigrationOption(value) from None


@dataclass(frozen=True)
class LockedVesting:
    """Locked vesting schedule (base token smallest units)."""

    amount_per_period: int = 0
    cliff_duration_from_migration_time: int = 0
    frequency: int = 0
    number_of_period: int = 0
    cliff_unlock_amount: int = 0

    def __post_init__(self):
        checked_u64(self.amount_per_period, "amount_per_period")
        checked_u64(self.cliff_duration_from_migration_time, "cliff_duration_from_migration_time")
        checked_u64(self.frequency, "frequency")
        checked_u64(self.number_of_period, "number_of_period")
        checked_u64(self.cliff_unlock_amount, "cliff_unlock_amount")

    def total_amount(self) -> int:
        """cliff + periods x amount per period (must fit u64)."""
        return checked_u64(
            self.cliff_unlock_amount + self.amount_per_period * self.number_of_period,
            "total_vesting_amount",
        )

    def is_none(self) -> bool:
        return self.total_amount() == 0


# ---------------------------------------------------------------------------
# Derived results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MigrationThreshold:
    """Cumulative quote input at which the curve completes, and the price reached."""

    quote_amount: int
    sqrt_price: FixedPrice


@dataclass(frozen=True)
class SupplyBreakdown:
    """Where every base token of a design goes."""

    swap_amount: int
    migration_amount: int
    vesting_amount: int
    leftover_amount: int

    def total(self) -> int:
        return self.swap_amount + self.migration_amount + self.vesting_amount + self.leftover_amount


@dataclass(frozen=True)
class CurveDesign:
    """Output of a synthesizer: the curve plus everything derived alongside it."""

    curve: Curve
    migration: MigrationThreshold
    supply: SupplyBreakdown
    total_supply: int
    migration_option: MigrationOption
    base_decimals: int
    quote_decimals: int
    locked_vesting: LockedVesting = field(default_factory=LockedVesting)
    fee_numerator: int = DEFAULT_FEE_NUMERATOR

    @property
    def sqrt_start_price(self) -> FixedPrice:
        return self.curve.sqrt_start_price

    @property
    def migration_quote_threshold(self) -> int:
        return self.migration.quote_amount

    def to_dict(self) -> dict:
        out = self.curve.to_dict()
        out.update({
            "migration_option": int(self.migration_option),
            "token_decimal": self.base_decimals,
            "quote_decimal": self.quote_decimals,
            "migration_quote_threshold": str(self.migration.quote_amount),
            "migration_sqrt_price": str(self.migration.sqrt_price),
            "total_supply": str(self.total_supply),
            "supply": {
                "swap_amount": str(self.supply.swap_amount),
                "migration_amount": str(self.supply.migration_amount),
                "vesting_amount": str(self.supply.vesting_amount),
                "leftover_amount": str(self.supply.leftover_amount),
            },
            "locked_vesting": {
                "amount_per_period": str(self.locked_vesting.amount_per_period),
                "cliff_duration_from_migration_time": str(self.locked_vesting.cliff_duration_from_migration_time),
                "frequency": str(self.locked_vesting.frequency),
                "number_of_period": str(self.locked_vesting.number_of_period),
                "cliff_unlock_amount": str(self.locked_vesting.cliff_unlock_amount),
            },
        })
        out["fee_numerator"] = self.fee_numerator
        return out


__all__ = [
    "FixedPrice",
    "check_sqrt_price",
    "LiquiditySegment",
    "Curve",
    "MigrationOption",
    "LockedVesting",
    "MigrationThreshold",
    "SupplyBreakdown",
    "CurveDesign",
]
