import random

import pytest

from curve_engine import CollectFeeMode, TradeDirection, VirtualPool


# ---------------------------
# Randomised buy sequences up to the migration threshold:
# the base released must fit in the (buffered) swap amount, so the
# migration reserve is always left intact.
# ---------------------------

def _buy_to_threshold(design, seed: int, max_chunk_div: int) -> VirtualPool:
    rng = random.Random(seed)
    pool = VirtualPool(design, collect_fee_mode=CollectFeeMode.OUTPUT_TOKEN)
    threshold = design.migration_quote_threshold
    steps = 0
    while not pool.is_complete():
        remaining = threshold - pool.quote_reserve
        chunk = min(rng.randint(1, max(threshold // max_chunk_div, 1)), remaining)
        pool.swap(chunk, TradeDirection.QUOTE_TO_BASE)
        steps += 1
    print(f"[buffer] seed={seed} steps={steps} price={pool.sqrt_price} base_left={pool.base_reserve}")
    return pool


@pytest.mark.parametrize("seed", [1, 2, 3, 7, 42])
@pytest.mark.parametrize("design_name", ["linear_design", "graph_design"])
def test_random_buys_stay_within_swap_amount(request, design_name, seed):
    design = request.getfixturevalue(design_name)
    pool = _buy_to_threshold(design, seed, max_chunk_div=5)
    released = design.supply.swap_amount + design.supply.migration_amount - pool.base_reserve
    assert pool.quote_reserve == design.migration_quote_threshold
    assert released <= design.supply.swap_amount
    assert pool.base_reserve >= design.supply.migration_amount
    # sequential rounding never carries the price past a single walk
    assert pool.sqrt_price <= design.migration.sqrt_price


@pytest.mark.parametrize("seed", [11, 12])
def test_many_small_buys_on_graph_curve(graph_design, seed):
    pool = _buy_to_threshold(graph_design, seed, max_chunk_div=200)
    released = graph_design.supply.swap_amount + graph_design.supply.migration_amount - pool.base_reserve
    assert released <= graph_design.supply.swap_amount


@pytest.mark.parametrize("seed", [5, 6])
def test_buy_sell_churn_keeps_reserves_non_negative(linear_design, seed):
    rng = random.Random(seed)
    pool = VirtualPool(linear_design)
    threshold = linear_design.migration_quote_threshold
    for _ in range(40):
        if pool.is_complete():
            break
        if pool.base_reserve < linear_design.supply.swap_amount + linear_design.supply.migration_amount and rng.random() < 0.3:
            held = linear_design.supply.swap_amount + linear_design.supply.migration_amount - pool.base_reserve
            pool.swap(rng.randint(1, held), TradeDirection.BASE_TO_QUOTE)
        else:
            remaining = threshold - pool.quote_reserve
            pool.swap(min(rng.randint(1, threshold // 20), remaining), TradeDirection.QUOTE_TO_BASE)
        assert pool.quote_reserve >= 0
        assert pool.base_reserve >= 0
        assert linear_design.sqrt_start_price <= pool.sqrt_price
