#!/usr/bin/env python3
"""
Design a bonding curve from market parameters and print it as JSON.

Printing policy:
1) Curve (start price + segments) as decimal strings.
2) Migration threshold, migration sqrt price and supply breakdown.
3) With --verbose, a human-readable summary on stderr.

Examples:
    python apps/design_curve.py linear --supply 1000000000 --migration-pct 10 \
        --threshold 300 --base-decimals 6 --quote-decimals 9
    python apps/design_curve.py graph --supply 1000000000 --initial-mcap 30 \
        --migration-mcap 300 --k 1.2 --leftover 10000
"""

from __future__ import annotations

import argparse
import json
import sys
from decimal import Decimal

from curve_engine import (
    LockedVesting,
    design_graph_curve,
    design_linear_curve,
    sqrt_price_to_price,
)
from curve_engine.core import DEFAULT_FEE_NUMERATOR, SWAP_BUFFER_PERCENTAGE, fmt_dec


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--supply", type=Decimal, required=True, help="Total supply (whole base tokens)")
    p.add_argument("--migration-option", type=int, default=0, choices=[0, 1], help="0=constant product, 1=concentrated")
    p.add_argument("--base-decimals", type=int, default=6)
    p.add_argument("--quote-decimals", type=int, default=9)
    p.add_argument("--fee-numerator", type=int, default=DEFAULT_FEE_NUMERATOR, help="Trading fee numerator over 1e9")
    p.add_argument("--buffer-pct", type=int, default=SWAP_BUFFER_PERCENTAGE, help="Swap amount buffer percentage")
    # vesting (smallest base units)
    p.add_argument("--vesting-amount-per-period", type=int, default=0)
    p.add_argument("--vesting-cliff-duration", type=int, default=0)
    p.add_argument("--vesting-frequency", type=int, default=0)
    p.add_argument("--vesting-periods", type=int, default=0)
    p.add_argument("--vesting-cliff-amount", type=int, default=0)
    p.add_argument("--verbose", action="store_true", help="Print a summary to stderr")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Design a bonding curve and print it as JSON.")
    sub = parser.add_subparsers(dest="kind", required=True)

    lin = sub.add_parser("linear", help="Single segment from migration share and quote threshold")
    _add_common(lin)
    lin.add_argument("--migration-pct", type=Decimal, required=True, help="Percent of supply reserved for migration")
    lin.add_argument("--threshold", type=Decimal, required=True, help="Migration quote threshold (whole quote tokens)")

    graph = sub.add_parser("graph", help="16 geometric segments between two market caps")
    _add_common(graph)
    graph.add_argument("--initial-mcap", type=Decimal, required=True, help="Initial market cap (quote)")
    graph.add_argument("--migration-mcap", type=Decimal, required=True, help="Migration market cap (quote)")
    graph.add_argument("--k", type=Decimal, default=Decimal(1), help="Convexity factor")
    graph.add_argument("--leftover", type=Decimal, required=True, help="Leftover reserve (whole base tokens); also the over-supply tolerance")
    return parser.parse_args(argv)


def _vesting(args: argparse.Namespace) -> LockedVesting:
    return LockedVesting(
        amount_per_period=args.vesting_amount_per_period,
        cliff_duration_from_migration_time=args.vesting_cliff_duration,
        frequency=args.vesting_frequency,
        number_of_period=args.vesting_periods,
        cliff_unlock_amount=args.vesting_cliff_amount,
    )


def build_design(args: argparse.Namespace):
    if args.kind == "linear":
        return design_linear_curve(
            args.supply,
            args.migration_pct,
            args.threshold,
            args.migration_option,
            args.base_decimals,
            args.quote_decimals,
            _vesting(args),
            fee_numerator=args.fee_numerator,
            buffer_percentage=args.buffer_pct,
        )
    return design_graph_curve(
        args.supply,
        args.initial_mcap,
        args.migration_mcap,
        args.migration_option,
        args.base_decimals,
        args.quote_decimals,
        _vesting(args),
        args.leftover,
        args.k,
        fee_numerator=args.fee_numerator,
        buffer_percentage=args.buffer_pct,
    )


def _summary(design) -> str:
    b, q = design.base_decimals, design.quote_decimals
    lines = [
        f"segments           : {len(design.curve.segments)}",
        f"start price        : {fmt_dec(sqrt_price_to_price(design.sqrt_start_price, b, q), 6)}",
        f"migration price    : {fmt_dec(sqrt_price_to_price(design.migration.sqrt_price, b, q), 6)}",
        f"migration threshold: {design.migration_quote_threshold}",
        f"swap / migration   : {design.supply.swap_amount} / {design.supply.migration_amount}",
        f"vesting / leftover : {design.supply.vesting_amount} / {design.supply.leftover_amount}",
    ]
    return "\n".join(lines)


def main(argv=None) -> int:
    args = parse_args(argv)
    design = build_design(args)
    json.dump(design.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    if args.verbose:
        print(_summary(design), file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
