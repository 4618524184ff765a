"""
Named error conditions for the pricing core.

Callers branch on these instead of parsing messages:
- ParameterValidationError: malformed inputs, fatal to the request
- MatrixError: correlation matrix rejected at Cholesky factorization
- UnsupportedAnalyticalError: no closed form for the requested variant,
  caller should fall back to the Monte Carlo estimate

Validation errors also subclass ValueError (and the unsupported case
NotImplementedError) so code written against the builtin hierarchy keeps
working.
"""


class ExoticPricingError(Exception):
    """Root of all pricing-core errors."""


class ParameterValidationError(ExoticPricingError, ValueError):
    """Invalid simulation or option parameters."""


class InvalidBarrierError(ParameterValidationError):
    """Barrier placed on the wrong side of spot for its direction."""

    def __init__(self, barrier: float, spot: float, direction: str):
        self.barrier = barrier
        self.spot = spot
        self.direction = direction
        side = "above" if direction == "up" else "below"
        super().__init__(
            f"CRITICAL: {direction} barrier must be {side} spot, "
            f"got barrier={barrier}, spot={spot}"
        )


class InvalidVariantError(ParameterValidationError):
    """Unknown option-variant tag."""

    def __init__(self, tag: str, reason: str = "unknown option variant"):
        self.tag = tag
        super().__init__(f"CRITICAL: {reason}: {tag!r}")


class MatrixError(ParameterValidationError):
    """Correlation matrix failed validation."""


class NonSquareMatrixError(MatrixError):
    """Matrix rows do not all have the matrix dimension."""


class AsymmetricMatrixError(MatrixError):
    """Matrix differs from its transpose beyond tolerance."""


class NotPositiveDefiniteError(MatrixError):
    """Cholesky factorization hit a non-positive pivot."""

    def __init__(self, index: int, pivot: float):
        self.index = index
        self.pivot = pivot
        super().__init__(
            f"CRITICAL: matrix is not positive definite "
            f"(pivot {index} = {pivot})"
        )


class UnsupportedAnalyticalError(ExoticPricingError, NotImplementedError):
    """No closed-form price exists for this variant combination."""
