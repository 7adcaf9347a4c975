"""
Core exception types for curve_engine.core.

These are dependency-free and may be imported by all modules. Nothing in the
engine retries or clamps: every failure is a statement about the inputs and is
raised verbatim to the caller.
"""

__all__ = [
    "AmountDomainError",
    "MathOverflow",
    "InvalidPriceDomain",
    "InvalidMigrationOption",
    "InvalidFee",
    "InsufficientCurveLiquidity",
    "CurveSupplyMismatch",
]


class AmountDomainError(Exception):
    """Raised when inputs violate the non-negative domain or basic preconditions."""
    pass


class MathOverflow(Exception):
    """Raised when an integer result does not fit the ledger's fixed width."""

    def __init__(self, value, bits: int, *, what: str = "value"):
        super().__init__(f"{what}={value} overflows u{bits}")
        self.value = value
        self.bits = bits
        self.what = what


class InvalidPriceDomain(Exception):
    """Raised when a sqrt price falls outside [MIN_SQRT_PRICE, MAX_SQRT_PRICE]
    or a curve's boundaries are not strictly increasing."""
    pass


class InvalidMigrationOption(Exception):
    """Raised on an unrecognised migration strategy selector."""

    def __init__(self, option):
        super().__init__(f"Invalid migration option: {option!r}")
        self.option = option


class InvalidFee(Exception):
    """Raised when a trading fee numerator is outside the allowed range."""
    pass


class InsufficientCurveLiquidity(Exception):
    """Raised when walking a curve exhausts every segment before the request is met.

    Attributes
    ----------
    requested : int
        The amount the caller asked to push through the curve.
    available : int
        The total amount the curve could absorb from the walk's starting price.
    remaining : int
        What was left unconsumed after the last segment.
    """

    def __init__(self, requested: int, available: int, *, remaining: int):
        super().__init__(
            f"Not enough liquidity on curve: requested={requested}, "
            f"available={available}, amount_left={remaining}"
        )
        self.requested = requested
        self.available = available
        self.remaining = remaining


class CurveSupplyMismatch(Exception):
    """Raised when a reconstructed supply exceeds the requested supply beyond tolerance.

    Attributes
    ----------
    reconstructed : int
        Sum of swap, migration, vesting and leftover amounts re-derived from the curve.
    total_supply : int
        The supply the design was asked to realise.
    tolerance : int
        Allowed over-supply (the leftover carve-out).
    """

    def __init__(self, reconstructed: int, total_supply: int, tolerance: int):
        super().__init__(
            f"Reconstructed supply={reconstructed} exceeds total supply={total_supply} "
            f"by {reconstructed - total_supply} (tolerance={tolerance})"
        )
        self.reconstructed = reconstructed
        self.total_supply = total_supply
        self.tolerance = tolerance
