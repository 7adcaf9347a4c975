"""
Trading fee arithmetic on the ledger's fee grid (numerator / FEE_DENOMINATOR).

- Fees taken from an amount round UP (the pool never under-collects).
- Protocol and referral shares round DOWN and are carved out of the fee.
"""

from __future__ import annotations

from dataclasses import dataclass

from .core import (
    FEE_DENOMINATOR,
    HOST_FEE_PERCENT,
    MAX_FEE_NUMERATOR,
    PROTOCOL_FEE_PERCENT,
    InvalidFee,
    Rounding,
    checked_u64,
    mul_div,
)


def validate_fee_numerator(fee_numerator: int) -> int:
    if not isinstance(fee_numerator, int) or fee_numerator < 0 or fee_numerator > MAX_FEE_NUMERATOR:
        raise InvalidFee(f"fee numerator must be in [0, {MAX_FEE_NUMERATOR}], got {fee_numerator!r}")
    return fee_numerator


def get_excluded_fee_amount(fee_numerator: int, included_fee_amount: int) -> tuple[int, int]:
    """Strip the fee from an amount that includes it. Returns (excluded amount, fee)."""
    validate_fee_numerator(fee_numerator)
    checked_u64(included_fee_amount, "included_fee_amount")
    trading_fee = mul_div(included_fee_amount, fee_numerator, FEE_DENOMINATOR, Rounding.UP)
    return included_fee_amount - trading_fee, trading_fee


def get_included_fee_amount(fee_numerator: int, excluded_fee_amount: int) -> tuple[int, int]:
    """Gross up an amount so that stripping the fee leaves at least `excluded_fee_amount`.

    Returns (included amount, fee).
    """
    validate_fee_numerator(fee_numerator)
    checked_u64(excluded_fee_amount, "excluded_fee_amount")
    included = mul_div(excluded_fee_amount, FEE_DENOMINATOR, FEE_DENOMINATOR - fee_numerator, Rounding.UP)
    checked_u64(included, "included_fee_amount")
    return included, included - excluded_fee_amount


@dataclass(frozen=True)
class FeeOnAmount:
    """Amount after fees plus how the fee is shared."""

    amount: int
    trading_fee: int
    protocol_fee: int
    referral_fee: int

    @property
    def total_fee(self) -> int:
        return self.trading_fee + self.protocol_fee + self.referral_fee


def split_fees(fee_amount: int, has_referral: bool) -> tuple[int, int, int]:
    """Split a fee into (trading, protocol, referral) shares."""
    checked_u64(fee_amount, "fee_amount")
    protocol_fee = mul_div(fee_amount, PROTOCOL_FEE_PERCENT, 100, Rounding.DOWN)
    trading_fee = fee_amount - protocol_fee
    referral_fee = mul_div(protocol_fee, HOST_FEE_PERCENT, 100, Rounding.DOWN) if has_referral else 0
    return trading_fee, protocol_fee - referral_fee, referral_fee


def get_fee_on_amount(fee_numerator: int, amount: int, has_referral: bool = False) -> FeeOnAmount:
    """Take the fee out of `amount` and split it."""
    excluded, fee = get_excluded_fee_amount(fee_numerator, amount)
    trading_fee, protocol_fee, referral_fee = split_fees(fee, has_referral)
    return FeeOnAmount(
        amount=excluded,
        trading_fee=trading_fee,
        protocol_fee=protocol_fee,
        referral_fee=referral_fee,
    )


__all__ = [
    "validate_fee_numerator",
    "get_excluded_fee_amount",
    "get_included_fee_amount",
    "FeeOnAmount",
    "split_fees",
    "get_fee_on_amount",
]
