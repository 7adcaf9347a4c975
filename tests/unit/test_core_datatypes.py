import pytest

from curve_engine.core import (
    MAX_CURVE_POINT,
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    ONE_Q64,
    U64_MAX,
    U128_MAX,
    Curve,
    InvalidMigrationOption,
    InvalidPriceDomain,
    LiquiditySegment,
    LockedVesting,
    MathOverflow,
    MigrationOption,
    SupplyBreakdown,
)


# -----------------------------
# Curve validation
# -----------------------------

def test_curve_accepts_increasing_bounds(simple_curve):
    assert simple_curve.sqrt_end_price == ONE_Q64 << 2
    assert simple_curve.lower_bound(0) == ONE_Q64
    assert simple_curve.lower_bound(1) == ONE_Q64 << 1
    assert isinstance(simple_curve.segments, tuple)
    assert not simple_curve.is_open_ended()


def test_curve_from_points_and_list_input():
    c = Curve.from_points(ONE_Q64, [(ONE_Q64 * 2, 1), (MAX_SQRT_PRICE, 0)])
    assert c.is_open_ended()
    c2 = Curve(ONE_Q64, [LiquiditySegment(ONE_Q64 * 2, 1)])
    assert c2.segments == (LiquiditySegment(ONE_Q64 * 2, 1),)


@pytest.mark.parametrize(
    "start,points,name",
    [
        (ONE_Q64, [], "empty"),
        (ONE_Q64, [(ONE_Q64, 1)], "first bound equals start"),
        (ONE_Q64, [(ONE_Q64 * 3, 1), (ONE_Q64 * 2, 1)], "decreasing"),
        (ONE_Q64, [(ONE_Q64 * 2, 1), (ONE_Q64 * 2, 1)], "repeated bound"),
        (MIN_SQRT_PRICE - 1, [(ONE_Q64, 1)], "start below MIN"),
    ],
)
def test_curve_rejects_bad_boundaries(start, points, name):
    print(f"[curve-invalid] {name} -> expect InvalidPriceDomain")
    with pytest.raises(InvalidPriceDomain):
        Curve.from_points(start, points)


def test_curve_rejects_too_many_segments():
    points = [(ONE_Q64 + i + 1, 1) for i in range(MAX_CURVE_POINT + 1)]
    with pytest.raises(InvalidPriceDomain):
        Curve.from_points(ONE_Q64, points)
    # exactly MAX_CURVE_POINT is fine
    Curve.from_points(ONE_Q64, points[:MAX_CURVE_POINT])


def test_segment_bounds_and_liquidity_width():
    with pytest.raises(InvalidPriceDomain):
        LiquiditySegment(MAX_SQRT_PRICE + 1, 1)
    with pytest.raises(MathOverflow):
        LiquiditySegment(ONE_Q64, U128_MAX + 1)
    assert LiquiditySegment(MAX_SQRT_PRICE, 0).liquidity == 0


def test_curve_is_immutable_and_with_segment_copies(simple_curve):
    extended = simple_curve.with_segment(LiquiditySegment(MAX_SQRT_PRICE, 0))
    assert len(extended.segments) == 3
    assert len(simple_curve.segments) == 2
    with pytest.raises(Exception):
        simple_curve.sqrt_start_price = 1


def test_curve_to_dict_uses_strings(simple_curve):
    d = simple_curve.to_dict()
    assert d["sqrt_start_price"] == str(ONE_Q64)
    assert d["curve"][0] == {"sqrt_price": str(ONE_Q64 << 1), "liquidity": str(1000 * (ONE_Q64 << 1))}


# -----------------------------
# Market parameters
# -----------------------------

def test_migration_option_parse():
    assert MigrationOption.parse(0) is MigrationOption.CONSTANT_PRODUCT
    assert MigrationOption.parse(1) is MigrationOption.CONCENTRATED
    with pytest.raises(InvalidMigrationOption) as ei:
        MigrationOption.parse(2)
    assert ei.value.option == 2


def test_locked_vesting_total():
    v = LockedVesting(amount_per_period=123456, frequency=1, number_of_period=120, cliff_unlock_amount=123456)
    assert v.total_amount() == 123456 * 121
    assert not v.is_none()
    assert LockedVesting().is_none()


def test_locked_vesting_overflow():
    v = LockedVesting(amount_per_period=U64_MAX, number_of_period=2)
    with pytest.raises(MathOverflow):
        v.total_amount()


def test_supply_breakdown_total():
    b = SupplyBreakdown(swap_amount=10, migration_amount=5, vesting_amount=2, leftover_amount=1)
    assert b.total() == 18
