"""
Fixed-point price codec: human decimal price <-> Q64.64 sqrt price.

    sqrt_price = floor( sqrt(price / 10^(base_decimals - quote_decimals)) * 2^64 )
    price      = (sqrt_price / 2^64)^2 * 10^(base_decimals - quote_decimals)

The square root is taken in `CURVE_CONTEXT` (arbitrary precision Decimal);
conversion to an integer happens only at the last step, floored.
"""

from __future__ import annotations

from decimal import Decimal, localcontext

from .core import (
    CURVE_CONTEXT,
    ONE_Q64,
    AmountDomainError,
    DecimalLike,
    FixedPrice,
    floor_to_int,
    to_positive_decimal,
)

# Debug printing control
DEBUG_PRICE = False

def _dbg(msg: str) -> None:
    if DEBUG_PRICE:
        print(f"[PRICE] {msg}")


def _decimal_shift(base_decimals: int, quote_decimals: int) -> Decimal:
    if base_decimals < 0 or quote_decimals < 0:
        raise AmountDomainError(
            f"decimals must be >= 0 (base={base_decimals}, quote={quote_decimals})"
        )
    return Decimal(10) ** (base_decimals - quote_decimals)


def price_to_sqrt_price(price: DecimalLike, base_decimals: int, quote_decimals: int) -> FixedPrice:
    """Human price (quote per base, whole tokens) -> Q64.64 sqrt price (floored)."""
    with localcontext(CURVE_CONTEXT):
        p = to_positive_decimal(price, "price")
        adjusted = p / _decimal_shift(base_decimals, quote_decimals)
        sqrt_q64 = adjusted.sqrt() * ONE_Q64
        out = floor_to_int(sqrt_q64)
    _dbg(f"price={p} -> sqrt_price={out}")
    return out


def sqrt_price_to_price(sqrt_price: FixedPrice, base_decimals: int, quote_decimals: int) -> Decimal:
    """Q64.64 sqrt price -> human price (quote per base, whole tokens)."""
    if sqrt_price < 0:
        raise AmountDomainError(f"sqrt_price must be >= 0, got {sqrt_price}")
    with localcontext(CURVE_CONTEXT):
        d = Decimal(sqrt_price)
        return d * d * _decimal_shift(base_decimals, quote_decimals) / (Decimal(ONE_Q64) * ONE_Q64)


def sqrt_price_from_market_cap(
    market_cap: DecimalLike,
    total_supply: DecimalLike,
    base_decimals: int,
    quote_decimals: int,
) -> FixedPrice:
    """Market cap and whole-token supply -> sqrt price of `market_cap / total_supply`."""
    with localcontext(CURVE_CONTEXT):
        price = to_positive_decimal(market_cap, "market_cap") / to_positive_decimal(total_supply, "total_supply")
    return price_to_sqrt_price(price, base_decimals, quote_decimals)


def price_from_quote_and_base(quote_amount: DecimalLike, base_amount: DecimalLike) -> Decimal:
    """Price implied by exchanging `base_amount` for `quote_amount` (whole tokens)."""
    with localcontext(CURVE_CONTEXT):
        return to_positive_decimal(quote_amount, "quote_amount") / to_positive_decimal(base_amount, "base_amount")


__all__ = [
    "price_to_sqrt_price",
    "sqrt_price_to_price",
    "sqrt_price_from_market_cap",
    "price_from_quote_and_base",
]
