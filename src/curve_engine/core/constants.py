"""
Curve Engine Core Constants (integer domain)
============================================

Only ledger-aligned integer constants live here. Decimal context and
formatting helpers live in `fmt.py`.
"""

# NOTE: sqrt prices are Q64.64 unsigned integers; amounts are u64, liquidity is u128.

# ---------------------------------------------------------------------------
# Fixed-point sqrt price domain
# ---------------------------------------------------------------------------

#: Number of fractional bits in a Q64.64 sqrt price.
RESOLUTION: int = 64
ONE_Q64: int = 1 << RESOLUTION

#: Ledger-wide sqrt price bounds (inclusive).
MIN_SQRT_PRICE: int = 4_295_048_016
MAX_SQRT_PRICE: int = 79_226_673_521_066_979_257_578_248_091

# ---------------------------------------------------------------------------
# Integer widths
# ---------------------------------------------------------------------------

U64_MAX: int = (1 << 64) - 1
U128_MAX: int = (1 << 128) - 1

# ---------------------------------------------------------------------------
# Curve layout
# ---------------------------------------------------------------------------

#: Storage slots the ledger allocates for a curve.
MAX_CURVE_POINT: int = 16

#: Segment count of the graph (geometric) design.
GRAPH_CURVE_SEGMENTS: int = 16

#: Headroom added to the swap-phase amount before sizing migration (percent).
SWAP_BUFFER_PERCENTAGE: int = 25

# ---------------------------------------------------------------------------
# Fees
# ---------------------------------------------------------------------------

FEE_DENOMINATOR: int = 1_000_000_000
MAX_FEE_NUMERATOR: int = 990_000_000   # 99%
DEFAULT_FEE_NUMERATOR: int = 2_500_000 # 0.25%

PROTOCOL_FEE_PERCENT: int = 20
HOST_FEE_PERCENT: int = 20


__all__ = [
    "RESOLUTION",
    "ONE_Q64",
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    "U64_MAX",
    "U128_MAX",
    "MAX_CURVE_POINT",
    "GRAPH_CURVE_SEGMENTS",
    "SWAP_BUFFER_PERCENTAGE",
    "FEE_DENOMINATOR",
    "MAX_FEE_NUMERATOR",
    "DEFAULT_FEE_NUMERATOR",
    "PROTOCOL_FEE_PERCENT",
    "HOST_FEE_PERCENT",
]
