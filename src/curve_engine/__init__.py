# Top-level API for curve_engine (integer-domain).
"""
Top-level API for curve_engine (integer-domain).

This module exposes the stable interface for designing and simulating
bonding curves that must agree bit-for-bit with an on-chain pricing ledger:
  - price codec: human price <-> Q64.64 sqrt price
  - segment integral library: Δbase / Δquote / next price / liquidity
  - walker: quote and base walks over a piecewise curve
  - migration reserve sizing and supply reconciliation
  - curve synthesizers (linear and 16-segment graph)
  - swap simulation with trading fees

Amounts are integer smallest units, sqrt prices are Q64.64 integers and
liquidity is a u128 integer. Decimal appears only in design algebra.
"""

# NOTE:
#   Design inputs (supply, market caps, thresholds) are whole tokens and may be
#   given as Decimal, int, str or float. Everything a design returns is an int.

from __future__ import annotations


# Synthesizers
from .design import (
    design_linear_curve,
    design_graph_curve,
    get_geometric_sqrt_prices,
    get_graph_weight_sum,
)

# Price codec
from .price import (
    price_to_sqrt_price,
    sqrt_price_to_price,
    sqrt_price_from_market_cap,
)

# Segment integrals
from .curve_math import (
    get_delta_amount_base,
    get_delta_amount_quote,
    get_next_sqrt_price_from_base_input,
    get_next_sqrt_price_from_quote_input,
    get_liquidity_from_delta_base,
    get_liquidity_from_delta_quote,
)

# Walker, migration, supply
from .walker import get_migration_threshold_price, get_base_token_for_swap
from .migration import get_migration_base_token, get_migration_quote_amount
from .supply import reconstruct_supply, get_total_supply_from_curve

# Swaps
from .swap import TradeDirection, CollectFeeMode, SwapResult, simulate_swap, VirtualPool

# Core data types and errors
from .core import (
    Rounding,
    FixedPrice,
    LiquiditySegment,
    Curve,
    MigrationOption,
    LockedVesting,
    MigrationThreshold,
    SupplyBreakdown,
    CurveDesign,
    MIN_SQRT_PRICE,
    MAX_SQRT_PRICE,
    AmountDomainError,
    MathOverflow,
    InvalidPriceDomain,
    InvalidMigrationOption,
    InvalidFee,
    InsufficientCurveLiquidity,
    CurveSupplyMismatch,
)

__all__ = [
    # synthesizers
    "design_linear_curve",
    "design_graph_curve",
    "get_geometric_sqrt_prices",
    "get_graph_weight_sum",
    # codec
    "price_to_sqrt_price",
    "sqrt_price_to_price",
    "sqrt_price_from_market_cap",
    # integrals
    "get_delta_amount_base",
    "get_delta_amount_quote",
    "get_next_sqrt_price_from_base_input",
    "get_next_sqrt_price_from_quote_input",
    "get_liquidity_from_delta_base",
    "get_liquidity_from_delta_quote",
    # walker / migration / supply
    "get_migration_threshold_price",
    "get_base_token_for_swap",
    "get_migration_base_token",
    "get_migration_quote_amount",
    "reconstruct_supply",
    "get_total_supply_from_curve",
    # swaps
    "TradeDirection",
    "CollectFeeMode",
    "SwapResult",
    "simulate_swap",
    "VirtualPool",
    # core
    "Rounding",
    "FixedPrice",
    "LiquiditySegment",
    "Curve",
    "MigrationOption",
    "LockedVesting",
    "MigrationThreshold",
    "SupplyBreakdown",
    "CurveDesign",
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    # errors
    "AmountDomainError",
    "MathOverflow",
    "InvalidPriceDomain",
    "InvalidMigrationOption",
    "InvalidFee",
    "InsufficientCurveLiquidity",
    "CurveSupplyMismatch",
]
