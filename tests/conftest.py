from __future__ import annotations

import pytest

from curve_engine import (
    Curve,
    LiquiditySegment,
    LockedVesting,
    design_graph_curve,
    design_linear_curve,
)
from curve_engine.core import ONE_Q64


# -----------------------------
# Test helpers (pure functions)
# -----------------------------

# Two-segment curve with round numbers:
#   seg0: (2^64, 2^65], L = 1000 * 2^65  -> 2000 quote / 1000 base
#   seg1: (2^65, 2^66], L = 1000 * 2^64  -> 2000 quote /  250 base
SIMPLE_L0 = 1000 * (ONE_Q64 << 1)
SIMPLE_L1 = 1000 * ONE_Q64


def make_simple_curve() -> Curve:
    return Curve(
        ONE_Q64,
        (
            LiquiditySegment(ONE_Q64 << 1, SIMPLE_L0),
            LiquiditySegment(ONE_Q64 << 2, SIMPLE_L1),
        ),
    )


def reference_vesting() -> LockedVesting:
    """Cliff 123456 plus 120 periods of 123456 (smallest base units)."""
    return LockedVesting(
        amount_per_period=123456,
        cliff_duration_from_migration_time=0,
        frequency=1,
        number_of_period=120,
        cliff_unlock_amount=123456,
    )


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def simple_curve() -> Curve:
    return make_simple_curve()


@pytest.fixture(scope="session")
def linear_design():
    # 1e9 supply, 10% on migration, 300 quote threshold, 6/9 decimals
    return design_linear_curve(1_000_000_000, 10, 300, 0, 6, 9, reference_vesting())


@pytest.fixture(scope="session")
def graph_design():
    # 1e9 supply, mcap 30 -> 300, k = 1.2, leftover 10_000 tokens
    return design_graph_curve(
        1_000_000_000, 30, 300, 0, 6, 9, reference_vesting(), 10_000, "1.2"
    )
