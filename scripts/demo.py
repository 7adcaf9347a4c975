"""Walk-through demo: design a curve, then trade along it until migration.

Scenarios covered:
S1) Linear design (1e9 supply, 10% on migration, 300 quote threshold)
S2) Graph design (30 -> 300 market cap, k=1.2, 10_000 leftover)
S3) Buy in equal chunks on the graph curve until the threshold is met
S4) Sell some base back and watch the price fall
"""
from __future__ import annotations

import argparse

from curve_engine import (
    CurveDesign,
    InsufficientCurveLiquidity,
    LockedVesting,
    TradeDirection,
    VirtualPool,
    design_graph_curve,
    design_linear_curve,
    sqrt_price_to_price,
)
from curve_engine.core import fmt_dec

# ---------- pretty printers ----------

def print_design(title: str, design: CurveDesign, *, show_segments: bool = True) -> None:
    b, q = design.base_decimals, design.quote_decimals
    print(f"\n=== {title} ===")
    print(f"- start price     : {fmt_dec(sqrt_price_to_price(design.sqrt_start_price, b, q), 6)}")
    print(f"- migration price : {fmt_dec(sqrt_price_to_price(design.migration.sqrt_price, b, q), 6)}")
    print(f"- threshold       : {design.migration_quote_threshold}")
    s = design.supply
    print(f"- supply          : swap={s.swap_amount} migration={s.migration_amount} "
          f"vesting={s.vesting_amount} leftover={s.leftover_amount} (total={s.total()})")
    if show_segments:
        lo = design.sqrt_start_price
        for i, seg in enumerate(design.curve.segments):
            print(f"  • seg[{i:02d}] ({lo}, {seg.sqrt_price}] L={seg.liquidity}")
            lo = seg.sqrt_price


def print_pool(pool: VirtualPool, tag: str) -> None:
    d = pool.design
    price = sqrt_price_to_price(pool.sqrt_price, d.base_decimals, d.quote_decimals)
    print(f"  [{tag}] price={fmt_dec(price, 6)} base_reserve={pool.base_reserve} "
          f"quote_reserve={pool.quote_reserve} complete={pool.is_complete()}")


# ---------- scenarios ----------

def run_linear() -> CurveDesign:
    vesting = LockedVesting(amount_per_period=123456, frequency=1, number_of_period=120, cliff_unlock_amount=123456)
    design = design_linear_curve(1_000_000_000, 10, 300, 0, 6, 9, vesting)
    print_design("S1 Linear design", design)
    return design


def run_graph(show_segments: bool) -> CurveDesign:
    design = design_graph_curve(1_000_000_000, 30, 300, 0, 6, 9, LockedVesting(), 10_000, "1.2")
    print_design("S2 Graph design (k=1.2)", design, show_segments=show_segments)
    return design


def run_buys(design: CurveDesign, chunks: int) -> VirtualPool:
    print(f"\n=== S3 Buy in {chunks} chunks until migration ===")
    pool = VirtualPool(design)
    chunk = design.migration_quote_threshold // chunks + 1
    step = 0
    while not pool.is_complete():
        try:
            res = pool.swap(chunk, TradeDirection.QUOTE_TO_BASE)
        except InsufficientCurveLiquidity as e:
            print(f"  curve exhausted: {e}")
            break
        step += 1
        print(f"  buy#{step:02d} in={res.amount_in} out={res.output_amount} fee={res.total_fee}")
    print_pool(pool, "after buys")
    return pool


def run_sell(pool: VirtualPool) -> None:
    print("\n=== S4 Sell 1% of released base ===")
    released = pool.design.supply.swap_amount + pool.design.supply.migration_amount - pool.base_reserve
    amount = max(released // 100, 1)
    res = pool.swap(amount, TradeDirection.BASE_TO_QUOTE)
    print(f"  sell in={res.amount_in} out={res.output_amount} fee={res.total_fee}")
    print_pool(pool, "after sell")


def main() -> None:
    p = argparse.ArgumentParser(description="Curve engine walk-through")
    p.add_argument("--chunks", type=int, default=8, help="Number of equal buys in S3")
    p.add_argument("--compact", action="store_true", help="Hide per-segment listing")
    args = p.parse_args()

    run_linear()
    graph = run_graph(show_segments=not args.compact)
    pool = run_buys(graph, args.chunks)
    run_sell(pool)


if __name__ == "__main__":
    main()
