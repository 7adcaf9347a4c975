import random

import pytest

from curve_engine.core import (
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    ONE_Q64,
    AmountDomainError,
    MathOverflow,
    Rounding,
)
from curve_engine.curve_math import (
    get_delta_amount_base,
    get_delta_amount_quote,
    get_liquidity,
    get_liquidity_from_delta_base,
    get_liquidity_from_delta_quote,
    get_next_sqrt_price_from_base_input,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_quote_input,
)


P1 = ONE_Q64        # price 1
P2 = ONE_Q64 << 1   # price 4


# -----------------------------
# Δbase / Δquote
# -----------------------------

def test_delta_amounts_exact_and_rounded():
    # L = 1000 * 2^65 + 1 over [2^64, 2^65]:
    #   Δbase  = L / 2^65 = 1000 + tiny
    #   Δquote = L / 2^64 = 2000 + tiny
    liquidity = 1000 * (1 << 65) + 1
    assert get_delta_amount_base(P1, P2, liquidity, Rounding.DOWN) == 1000
    assert get_delta_amount_base(P1, P2, liquidity, Rounding.UP) == 1001
    assert get_delta_amount_quote(P1, P2, liquidity, Rounding.DOWN) == 2000
    assert get_delta_amount_quote(P1, P2, liquidity, Rounding.UP) == 2001


def test_delta_amounts_empty_range_or_zero_liquidity():
    assert get_delta_amount_base(P1, P1, 10**20, Rounding.UP) == 0
    assert get_delta_amount_quote(P1, P2, 0, Rounding.UP) == 0


def test_delta_amounts_reject_bad_range():
    with pytest.raises(AmountDomainError):
        get_delta_amount_base(P2, P1, 1, Rounding.DOWN)
    with pytest.raises(AmountDomainError):
        get_delta_amount_quote(0, P1, 1, Rounding.DOWN)
    with pytest.raises(AmountDomainError):
        get_delta_amount_base(P1, P2, -1, Rounding.DOWN)


def test_rounding_direction_difference_is_zero_or_one():
    rng = random.Random(1234)
    for _ in range(300):
        lo = rng.randint(MIN_SQRT_PRICE, MAX_SQRT_PRICE - 1)
        hi = rng.randint(lo, MAX_SQRT_PRICE)
        liquidity = rng.randint(0, 1 << 128)
        db = get_delta_amount_base(lo, hi, liquidity, Rounding.UP) - get_delta_amount_base(lo, hi, liquidity, Rounding.DOWN)
        dq = get_delta_amount_quote(lo, hi, liquidity, Rounding.UP) - get_delta_amount_quote(lo, hi, liquidity, Rounding.DOWN)
        assert db in (0, 1)
        assert dq in (0, 1)


# -----------------------------
# Next price
# -----------------------------

def test_next_price_from_quote_input_exact():
    # P + 500 * 2^128 / (1000 * 2^64) = 1.5 * 2^64
    assert get_next_sqrt_price_from_quote_input(P1, 1000 * ONE_Q64, 500) == P1 + (P1 >> 1)


def test_next_price_from_base_input_exact():
    # P * L / (L + 1000 * P) with L = 1000 * P  ->  P / 2
    assert get_next_sqrt_price_from_base_input(P1, 1000 * ONE_Q64, 1000) == P1 >> 1


def test_next_price_rounding_directions():
    # 2^65 * 2/3 is not an integer: base input rounds up
    liquidity = 1000 * P2
    assert get_next_sqrt_price_from_base_input(P2, liquidity, 500) == 24595658764946068822
    # quote input rounds the quotient down
    assert get_next_sqrt_price_from_quote_input(P1, 3, 1) == P1 + ((1 << 128) // 3)


def test_next_price_zero_amount_is_identity():
    assert get_next_sqrt_price_from_base_input(P1, 0, 0) == P1
    assert get_next_sqrt_price_from_quote_input(P1, 0, 0) == P1


def test_next_price_zero_liquidity_rejected():
    with pytest.raises(AmountDomainError):
        get_next_sqrt_price_from_base_input(P1, 0, 1)
    with pytest.raises(AmountDomainError):
        get_next_sqrt_price_from_quote_input(P1, 0, 1)


def test_next_price_overflow_is_not_clamped():
    with pytest.raises(MathOverflow):
        get_next_sqrt_price_from_quote_input(MAX_SQRT_PRICE, 1, 1 << 64)


def test_next_price_dispatch():
    liquidity = 1000 * ONE_Q64
    assert get_next_sqrt_price_from_input(P1, liquidity, 1000, True) == P1 >> 1
    assert get_next_sqrt_price_from_input(P1, liquidity, 500, False) == P1 + (P1 >> 1)


def test_next_price_moves_the_right_way():
    rng = random.Random(99)
    for _ in range(200):
        p = rng.randint(MIN_SQRT_PRICE, 1 << 80)
        liquidity = rng.randint(1 << 60, 1 << 100)
        amount = rng.randint(1, 1 << 40)
        assert get_next_sqrt_price_from_base_input(p, liquidity, amount) <= p
        assert get_next_sqrt_price_from_quote_input(p, liquidity, amount) >= p


# -----------------------------
# Liquidity from amounts
# -----------------------------

def test_liquidity_from_deltas_exact():
    assert get_liquidity_from_delta_base(1000, P1, P2) == 1000 * (1 << 65)
    assert get_liquidity_from_delta_quote(2000, P1, P2) == 1000 * (1 << 65)


def test_get_liquidity_takes_the_smaller():
    from_base = get_liquidity_from_delta_base(1000, P1, P2)
    assert get_liquidity(1000, 10**9, P1, P2) == from_base
    assert get_liquidity(10**9, 2000, P1, P2) == get_liquidity_from_delta_quote(2000, P1, P2)


def test_liquidity_inverse_never_exceeds_amount():
    rng = random.Random(7)
    for _ in range(200):
        lo = rng.randint(MIN_SQRT_PRICE, 1 << 90)
        hi = rng.randint(lo + 1, lo + (1 << 70))
        amount = rng.randint(0, 1 << 60)
        lb = get_liquidity_from_delta_base(amount, lo, hi)
        lq = get_liquidity_from_delta_quote(amount, lo, hi)
        assert get_delta_amount_base(lo, hi, lb, Rounding.DOWN) <= amount
        assert get_delta_amount_quote(lo, hi, lq, Rounding.DOWN) <= amount


def test_liquidity_from_empty_range_rejected():
    with pytest.raises(AmountDomainError):
        get_liquidity_from_delta_base(1, P1, P1)
    with pytest.raises(AmountDomainError):
        get_liquidity_from_delta_quote(1, P1, P1)
