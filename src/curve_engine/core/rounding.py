"""
Integer rounding helpers (centralised) and fixed-width guards.

- Rounding direction is an explicit `Rounding` value threaded through every
  amount formula; there is no implicit default.
- All helpers operate on the non-negative integer domain. Python ints are
  unbounded, so widths are enforced explicitly at the points where the ledger
  would store or cast a value (u64 amounts, u128 prices/liquidity).

# Alignment notes:
# - mul_div mirrors the ledger's `safe_mul_div_cast` (widen, multiply, divide
#   with the requested rounding, then cast back to the target width).
"""

from __future__ import annotations

from enum import Enum

from .constants import U64_MAX, U128_MAX
from .exc import AmountDomainError, MathOverflow


class Rounding(Enum):
    """Rounding direction for integer division."""

    UP = "U"
    DOWN = "D"


def _ceil_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("_ceil_div expects a>=0 and b>0")
    return 0 if a == 0 else -(-a // b)


def _floor_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("_floor_div expects a>=0 and b>0")
    return a // b


def div_rounding(a: int, b: int, rounding: Rounding) -> int:
    """Divide a by b in the requested direction."""
    if rounding is Rounding.UP:
        return _ceil_div(a, b)
    if rounding is Rounding.DOWN:
        return _floor_div(a, b)
    raise AmountDomainError(f"invalid rounding: {rounding!r}")


def mul_div(x: int, y: int, denominator: int, rounding: Rounding) -> int:
    """Return x * y / denominator with explicit rounding (non-negative domain)."""
    if x < 0 or y < 0:
        raise AmountDomainError(f"mul_div expects non-negative operands: x={x}, y={y}")
    if denominator == 0:
        raise ZeroDivisionError("mul_div: division by zero")
    return div_rounding(x * y, denominator, rounding)


def checked_u64(value: int, what: str = "amount") -> int:
    """Return value if it fits in u64, else raise MathOverflow."""
    if value < 0:
        raise AmountDomainError(f"{what} must be >= 0, got {value}")
    if value > U64_MAX:
        raise MathOverflow(value, 64, what=what)
    return value


def checked_u128(value: int, what: str = "value") -> int:
    """Return value if it fits in u128, else raise MathOverflow."""
    if value < 0:
        raise AmountDomainError(f"{what} must be >= 0, got {value}")
    if value > U128_MAX:
        raise MathOverflow(value, 128, what=what)
    return value


def require_non_negative(**values: int) -> None:
    """Reject negative (or non-integer) inputs by keyword name."""
    for name, v in values.items():
        if not isinstance(v, int) or isinstance(v, bool):
            raise AmountDomainError(f"{name} must be int, got {type(v).__name__}")
        if v < 0:
            raise AmountDomainError(f"{name} must be >= 0, got {v}")


__all__ = [
    "Rounding",
    "div_rounding",
    "mul_div",
    "checked_u64",
    "checked_u128",
    "require_non_negative",
]
