"""
Decimal context, Decimal<->int bridges and formatting helpers.

Core amount arithmetic uses plain integers. Decimal is used only where the
design needs real-valued algebra (square roots, geometric ratios, weighted
sums) and for display; results are floored to integers at materialisation.
"""

from __future__ import annotations

from decimal import Context, Decimal, ROUND_FLOOR, ROUND_HALF_EVEN, localcontext
from typing import Union

from .exc import AmountDomainError

# ---------------------------------------------------------------------------
# Decimal precision (design algebra)
# ---------------------------------------------------------------------------

#: Significant digits used for sqrt/ratio/weighted-sum algebra. Sqrt prices
#: reach ~8e28 and products of two of them ~6e57, so 60 digits keep every
#: intermediate exact to well below one fixed-point unit.
DEFAULT_DECIMAL_PRECISION: int = 60

#: Context used with `decimal.localcontext`; the global context is never mutated.
CURVE_CONTEXT: Context = Context(prec=DEFAULT_DECIMAL_PRECISION, rounding=ROUND_HALF_EVEN)


DecimalLike = Union[Decimal, int, str, float]


def to_decimal(x: DecimalLike) -> Decimal:
    """Normalise numeric-like to Decimal (floats go through `str`, never binary expansion)."""
    if isinstance(x, Decimal):
        return x
    if isinstance(x, bool):
        raise AmountDomainError("bool is not a numeric input")
    return Decimal(str(x))


def to_positive_decimal(x: DecimalLike, name: str = "value") -> Decimal:
    """to_decimal plus a strictly-positive, finite check."""
    d = to_decimal(x)
    if d.is_nan() or d.is_infinite():
        raise AmountDomainError(f"{name} must be finite, got {d}")
    if d <= 0:
        raise AmountDomainError(f"{name} must be > 0, got {d}")
    return d


def floor_to_int(x: Decimal) -> int:
    """Floor a non-negative Decimal to int."""
    if x.is_nan() or x.is_infinite():
        raise AmountDomainError("floor_to_int: invalid Decimal")
    if x < 0:
        raise AmountDomainError(f"floor_to_int: negative not allowed ({x})")
    return int(x.to_integral_value(rounding=ROUND_FLOOR))


def scale_to_units(amount: DecimalLike, decimals: int) -> int:
    """Whole-token amount -> integer smallest units (floored)."""
    if decimals < 0:
        raise AmountDomainError(f"decimals must be >= 0, got {decimals}")
    with localcontext(CURVE_CONTEXT):
        return floor_to_int(to_decimal(amount) * (Decimal(10) ** decimals))


def fmt_dec(x: Decimal, places: int = 18) -> str:
    """Format a Decimal in scientific notation with fixed fractional digits.

    The output is stable for logs and tests, e.g.:
      Decimal('1')        -> '1.000000000000000000E+0'
      Decimal('123456')   -> '1.234560000000000000E+5'
    """
    return format(x, f".{places}E")


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "CURVE_CONTEXT",
    "DecimalLike",
    "to_decimal",
    "to_positive_decimal",
    "floor_to_int",
    "scale_to_units",
    "fmt_dec",
]
