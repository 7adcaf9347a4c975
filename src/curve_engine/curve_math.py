"""
Segment integral library: closed-form amounts over a constant-liquidity price range.

Given sqrt prices lower <= upper (Q64.64) and liquidity L:

    Δbase  = L * (upper - lower) / (lower * upper)
    Δquote = L * (upper - lower) / 2^128

and the inverses used while swapping:

    base in  :  P' = ceil( P * L / (L + Δbase * P) )        (price moves down)
    quote in :  P' = P + floor( Δquote * 2^128 / L )         (price moves up)

Rounding direction is part of the contract: amounts charged *to* a trader
round up, amounts paid *out* round down, and next-price solves round so the
price never passes where the exact real-valued formula would land. These
choices must match the ledger bit-for-bit.

Intermediate products are unbounded Python ints (the ledger widens to
U256); only the next sqrt price is cast back to u128.
"""

from __future__ import annotations

from .core import (
    RESOLUTION,
    AmountDomainError,
    FixedPrice,
    Rounding,
    checked_u128,
    div_rounding,
    require_non_negative,
)

# Debug printing control
DEBUG_CURVE_MATH = False

def _dbg(msg: str) -> None:
    if DEBUG_CURVE_MATH:
        print(f"[CURVE_MATH] {msg}")


def _check_range(lower: FixedPrice, upper: FixedPrice) -> None:
    require_non_negative(lower=lower, upper=upper)
    if lower == 0:
        raise AmountDomainError("lower sqrt price must be > 0")
    if lower > upper:
        raise AmountDomainError(f"lower sqrt price {lower} above upper {upper}")


# ---------------------------------------------------------------------------
# Amount given price range
# ---------------------------------------------------------------------------

def get_delta_amount_base(
    lower_sqrt_price: FixedPrice,
    upper_sqrt_price: FixedPrice,
    liquidity: int,
    rounding: Rounding,
) -> int:
    """Δbase = L * (√P_upper - √P_lower) / (√P_upper * √P_lower)."""
    _check_range(lower_sqrt_price, upper_sqrt_price)
    require_non_negative(liquidity=liquidity)
    numerator = liquidity * (upper_sqrt_price - lower_sqrt_price)
    denominator = lower_sqrt_price * upper_sqrt_price
    return div_rounding(numerator, denominator, rounding)


def get_delta_amount_quote(
    lower_sqrt_price: FixedPrice,
    upper_sqrt_price: FixedPrice,
    liquidity: int,
    rounding: Rounding,
) -> int:
    """Δquote = L * (√P_upper - √P_lower) / 2^128."""
    _check_range(lower_sqrt_price, upper_sqrt_price)
    require_non_negative(liquidity=liquidity)
    prod = liquidity * (upper_sqrt_price - lower_sqrt_price)
    return div_rounding(prod, 1 << (RESOLUTION * 2), rounding)


# ---------------------------------------------------------------------------
# Next price given amount
# ---------------------------------------------------------------------------

def get_next_sqrt_price_from_base_input(sqrt_price: FixedPrice, liquidity: int, amount_in: int) -> FixedPrice:
    """√P' = √P * L / (L + Δx * √P), rounded up so the price never undershoots."""
    require_non_negative(sqrt_price=sqrt_price, liquidity=liquidity, amount_in=amount_in)
    if amount_in == 0:
        return sqrt_price
    if liquidity == 0:
        raise AmountDomainError("cannot absorb base input with zero liquidity")
    prod = sqrt_price * liquidity
    denominator = liquidity + amount_in * sqrt_price
    return checked_u128(div_rounding(prod, denominator, Rounding.UP), "next_sqrt_price")


def get_next_sqrt_price_from_quote_input(sqrt_price: FixedPrice, liquidity: int, amount_in: int) -> FixedPrice:
    """√P' = √P + Δy / L, with the quotient rounded down so the price never overshoots."""
    require_non_negative(sqrt_price=sqrt_price, liquidity=liquidity, amount_in=amount_in)
    if amount_in == 0:
        return sqrt_price
    if liquidity == 0:
        raise AmountDomainError("cannot absorb quote input with zero liquidity")
    quotient = div_rounding(amount_in << (RESOLUTION * 2), liquidity, Rounding.DOWN)
    return checked_u128(sqrt_price + quotient, "next_sqrt_price")


def get_next_sqrt_price_from_input(
    sqrt_price: FixedPrice,
    liquidity: int,
    amount_in: int,
    base_for_quote: bool,
) -> FixedPrice:
    """Dispatch on trade direction: base in moves the price down, quote in moves it up."""
    if base_for_quote:
        return get_next_sqrt_price_from_base_input(sqrt_price, liquidity, amount_in)
    return get_next_sqrt_price_from_quote_input(sqrt_price, liquidity, amount_in)


# ---------------------------------------------------------------------------
# Liquidity given amount (inverses, always rounded down)
# ---------------------------------------------------------------------------

def get_liquidity_from_delta_base(base_amount: int, lower_sqrt_price: FixedPrice, upper_sqrt_price: FixedPrice) -> int:
    """L = Δbase * √P_lower * √P_upper / (√P_upper - √P_lower), rounded down."""
    _check_range(lower_sqrt_price, upper_sqrt_price)
    require_non_negative(base_amount=base_amount)
    if lower_sqrt_price == upper_sqrt_price:
        raise AmountDomainError("empty price range")
    prod = base_amount * lower_sqrt_price * upper_sqrt_price
    return prod // (upper_sqrt_price - lower_sqrt_price)


def get_liquidity_from_delta_quote(quote_amount: int, lower_sqrt_price: FixedPrice, upper_sqrt_price: FixedPrice) -> int:
    """L = Δquote * 2^128 / (√P_upper - √P_lower), rounded down."""
    _check_range(lower_sqrt_price, upper_sqrt_price)
    require_non_negative(quote_amount=quote_amount)
    if lower_sqrt_price == upper_sqrt_price:
        raise AmountDomainError("empty price range")
    return (quote_amount << (RESOLUTION * 2)) // (upper_sqrt_price - lower_sqrt_price)


def get_liquidity(
    base_amount: int,
    quote_amount: int,
    lower_sqrt_price: FixedPrice,
    upper_sqrt_price: FixedPrice,
) -> int:
    """Largest liquidity over [lower, upper] backed by both amounts."""
    from_base = get_liquidity_from_delta_base(base_amount, lower_sqrt_price, upper_sqrt_price)
    from_quote = get_liquidity_from_delta_quote(quote_amount, lower_sqrt_price, upper_sqrt_price)
    _dbg(f"liquidity from base={from_base}, from quote={from_quote}")
    return min(from_base, from_quote)


__all__ = [
    "get_delta_amount_base",
    "get_delta_amount_quote",
    "get_next_sqrt_price_from_base_input",
    "get_next_sqrt_price_from_quote_input",
    "get_next_sqrt_price_from_input",
    "get_liquidity_from_delta_base",
    "get_liquidity_from_delta_quote",
    "get_liquidity",
]
