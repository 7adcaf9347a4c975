from decimal import Decimal, getcontext

import pytest

from curve_engine.core import (
    CURVE_CONTEXT,
    DEFAULT_DECIMAL_PRECISION,
    AmountDomainError,
    floor_to_int,
    fmt_dec,
    scale_to_units,
    to_decimal,
    to_positive_decimal,
)


def test_to_decimal_goes_through_str_for_floats():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(7) == Decimal(7)
    d = Decimal("1.5")
    assert to_decimal(d) is d
    with pytest.raises(AmountDomainError):
        to_decimal(True)


@pytest.mark.parametrize("bad", [0, "-1", "nan", "Infinity"])
def test_to_positive_decimal_rejects(bad):
    with pytest.raises(AmountDomainError):
        to_positive_decimal(bad, "x")


def test_floor_to_int():
    assert floor_to_int(Decimal("2.999")) == 2
    assert floor_to_int(Decimal("3")) == 3
    with pytest.raises(AmountDomainError):
        floor_to_int(Decimal("-0.5"))


def test_scale_to_units():
    assert scale_to_units(1_000_000_000, 6) == 10**15
    assert scale_to_units("300", 9) == 300 * 10**9
    assert scale_to_units("0.0000001", 6) == 0    # below one unit floors away
    with pytest.raises(AmountDomainError):
        scale_to_units(1, -1)


def test_curve_context_is_local():
    assert CURVE_CONTEXT.prec == DEFAULT_DECIMAL_PRECISION
    before = getcontext().prec
    scale_to_units(1, 6)
    assert getcontext().prec == before


def test_fmt_dec():
    print("fmt_dec(1) ->", fmt_dec(Decimal("1")))
    assert fmt_dec(Decimal("1")) == "1.000000000000000000E+0"
    assert fmt_dec(Decimal("123456"), 2) == "1.23E+5"
