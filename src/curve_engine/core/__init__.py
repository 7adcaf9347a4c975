"""
Curve Engine Core
=================

Unified exports for integer-domain primitives shared by the codec, the
segment integral library, the walker and the synthesizers.
All amount arithmetic is on Python ints with explicit rounding direction.
Decimal is used only for design algebra and display.
"""

# NOTE:
#   The `core` package carries no curve semantics. It defines the fixed-point
#   constants, width guards, rounding helpers, datatypes and exceptions that
#   every other module relies on.

# Integer-domain constants (ledger-aligned)
from .constants import (
    RESOLUTION,
    ONE_Q64,
    MIN_SQRT_PRICE,
    MAX_SQRT_PRICE,
    U64_MAX,
    U128_MAX,
    MAX_CURVE_POINT,
    GRAPH_CURVE_SEGMENTS,
    SWAP_BUFFER_PERCENTAGE,
    FEE_DENOMINATOR,
    MAX_FEE_NUMERATOR,
    DEFAULT_FEE_NUMERATOR,
    PROTOCOL_FEE_PERCENT,
    HOST_FEE_PERCENT,
)

# Rounding and width guards
from .rounding import (
    Rounding,
    div_rounding,
    mul_div,
    checked_u64,
    checked_u128,
    require_non_negative,
)

# Decimal context and bridges
from .fmt import (
    DEFAULT_DECIMAL_PRECISION,
    CURVE_CONTEXT,
    DecimalLike,
    to_decimal,
    to_positive_decimal,
    floor_to_int,
    scale_to_units,
    fmt_dec,
)

# Datatypes
from .datatypes import (
    FixedPrice,
    check_sqrt_price,
    LiquiditySegment,
    Curve,
    MigrationOption,
    LockedVesting,
    MigrationThreshold,
    SupplyBreakdown,
    CurveDesign,
)

# Core exceptions
from .exc import (
    AmountDomainError,
    MathOverflow,
    InvalidPriceDomain,
    InvalidMigrationOption,
    InvalidFee,
    InsufficientCurveLiquidity,
    CurveSupplyMismatch,
)

__all__ = [
    # constants
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
    # rounding
    "Rounding",
    "div_rounding",
    "mul_div",
    "checked_u64",
    "checked_u128",
    "require_non_negative",
    # fmt
    "DEFAULT_DECIMAL_PRECISION",
    "CURVE_CONTEXT",
    "DecimalLike",
    "to_decimal",
    "to_positive_decimal",
    "floor_to_int",
    "scale_to_units",
    "fmt_dec",
    # datatypes
    "FixedPrice",
    "check_sqrt_price",
    "LiquiditySegment",
    "Curve",
    "MigrationOption",
    "LockedVesting",
    "MigrationThreshold",
    "SupplyBreakdown",
    "CurveDesign",
    # exceptions
    "AmountDomainError",
    "MathOverflow",
    "InvalidPriceDomain",
    "InvalidMigrationOption",
    "InvalidFee",
    "InsufficientCurveLiquidity",
    "CurveSupplyMismatch",
]
