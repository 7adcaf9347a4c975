from decimal import Decimal

import pytest

from curve_engine.core import ONE_Q64, AmountDomainError
from curve_engine.price import (
    price_from_quote_and_base,
    price_to_sqrt_price,
    sqrt_price_from_market_cap,
    sqrt_price_to_price,
)


# -----------------------------
# Encode
# -----------------------------

@pytest.mark.parametrize(
    "price,base_dec,quote_dec,expected",
    [
        (1, 6, 6, ONE_Q64),
        (4, 9, 9, ONE_Q64 * 2),
        ("0.25", 0, 0, ONE_Q64 // 2),
        # 1 quote per base with 6/9 decimals -> sqrt(1000) * 2^64
        (1, 6, 9, 583337266871351588485),
    ],
)
def test_price_to_sqrt_price_exact(price, base_dec, quote_dec, expected):
    got = price_to_sqrt_price(price, base_dec, quote_dec)
    print(f"[encode] price={price} dec={base_dec}/{quote_dec} -> {got}")
    assert got == expected


def test_market_cap_prices():
    # 300 / 1e9 = 3e-7 per token -> sqrt(3e-4) * 2^64
    assert sqrt_price_from_market_cap(300, 1_000_000_000, 6, 9) == 319506979698850302
    assert sqrt_price_from_market_cap(30, 1_000_000_000, 6, 9) == 101036978416954620


def test_float_input_goes_through_str():
    assert price_to_sqrt_price(0.25, 0, 0) == price_to_sqrt_price(Decimal("0.25"), 0, 0)


@pytest.mark.parametrize("bad", [0, -1, "nan", "inf"])
def test_non_positive_or_non_finite_price_rejected(bad):
    with pytest.raises(AmountDomainError):
        price_to_sqrt_price(bad, 6, 9)


def test_negative_decimals_rejected():
    with pytest.raises(AmountDomainError):
        price_to_sqrt_price(1, -1, 9)


# -----------------------------
# Decode / round trip
# -----------------------------

def test_decode_exact():
    assert sqrt_price_to_price(ONE_Q64, 6, 6) == 1
    assert sqrt_price_to_price(ONE_Q64 * 2, 9, 9) == 4


@pytest.mark.parametrize("price", ["0.000003", "1", "123.456", "98765.4321"])
def test_round_trip_within_one_unit(price):
    sp = price_to_sqrt_price(price, 6, 9)
    back = sqrt_price_to_price(sp, 6, 9)
    # floor on encode: decoded price never exceeds the input
    assert back <= Decimal(price)
    # and the next fixed-point step would
    assert sqrt_price_to_price(sp + 1, 6, 9) > Decimal(price)


def test_price_from_quote_and_base():
    assert price_from_quote_and_base(300, 100_000_000) == Decimal("0.000003")
    with pytest.raises(AmountDomainError):
        price_from_quote_and_base(1, 0)
