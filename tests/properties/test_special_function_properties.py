"""
Property-based tests for the normal CDF, its inverse and Cholesky.

Properties tested:
1. Symmetry: Φ(x) + Φ(-x) = 1
2. Monotonicity: x1 < x2 → Φ(x1) <= Φ(x2)
3. Range: 0 <= Φ(x) <= 1
4. Round trip: Φ⁻¹(Φ(x)) ≈ x on |x| <= 3
5. Round trip: Φ(Φ⁻¹(p)) ≈ p on (0, 1)
6. Cholesky: L·Lᵀ = A for valid correlation matrices, L lower triangular

References:
    [T1] Abramowitz & Stegun (1964) 26.2.17
    [T1] Acklam (2003) inverse normal algorithm
"""

import numpy as np
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from exotic_pricing.config.tolerances import (
    CHOLESKY_ROUND_TRIP_TOLERANCE,
    NORMAL_CDF_TOLERANCE,
)
from exotic_pricing.options.correlation import (
    cholesky,
    generate_correlated_variables,
    is_valid_correlation_matrix,
)
from exotic_pricing.options.special_functions import normal_cdf, normal_inverse

# =============================================================================
# Strategy Definitions
# =============================================================================

x_strategy = st.floats(min_value=-10.0, max_value=10.0, allow_nan=False, allow_infinity=False)

central_x_strategy = st.floats(min_value=-3.0, max_value=3.0, allow_nan=False, allow_infinity=False)

prob_strategy = st.floats(min_value=1e-6, max_value=1.0 - 1e-6, allow_nan=False, allow_infinity=False)


def _random_correlation(seed: int, k: int) -> np.ndarray:
    """Normalized Gram matrix blended with the identity."""
    rng = np.random.default_rng(seed)
    b = rng.normal(size=(k, k + 3))
    gram = b @ b.T
    scale = np.sqrt(np.diag(gram))
    corr = gram / np.outer(scale, scale)
    corr = 0.9 * (corr + corr.T) / 2.0 + 0.1 * np.eye(k)
    np.fill_diagonal(corr, 1.0)
    return corr


# =============================================================================
# Normal CDF
# =============================================================================

class TestNormalCdfProperties:
    """[T1] Φ is a distribution function symmetric about 0."""

    @given(x=x_strategy)
    @settings(max_examples=300)
    def test_symmetry(self, x: float) -> None:
        assert abs(normal_cdf(x) + normal_cdf(-x) - 1.0) < NORMAL_CDF_TOLERANCE

    @given(x=x_strategy)
    @settings(max_examples=300)
    def test_range(self, x: float) -> None:
        value = normal_cdf(x)
        assert 0.0 <= value <= 1.0

    @given(x1=x_strategy, x2=x_strategy)
    @settings(max_examples=300)
    def test_monotonic(self, x1: float, x2: float) -> None:
        assume(x1 < x2)
        assert normal_cdf(x1) <= normal_cdf(x2) + NORMAL_CDF_TOLERANCE


# =============================================================================
# Inverse Normal
# =============================================================================

class TestNormalInverseProperties:
    """[T1] Φ⁻¹ inverts Φ to the accuracy of the CDF approximation."""

    @given(x=central_x_strategy)
    @settings(max_examples=300)
    def test_inverse_of_cdf(self, x: float) -> None:
        assert abs(normal_inverse(normal_cdf(x)) - x) < 1e-4

    @given(p=prob_strategy)
    @settings(max_examples=300)
    def test_cdf_of_inverse(self, p: float) -> None:
        assert abs(normal_cdf(normal_inverse(p)) - p) < 2 * NORMAL_CDF_TOLERANCE

    @given(p=prob_strategy)
    @settings(max_examples=200)
    def test_odd_around_half(self, p: float) -> None:
        """Φ⁻¹(1 - p) = -Φ⁻¹(p)."""
        assert abs(normal_inverse(1.0 - p) + normal_inverse(p)) < 1e-6


# =============================================================================
# Cholesky
# =============================================================================

class TestCholeskyProperties:
    """[T1] A = L·Lᵀ for symmetric positive definite A."""

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1), k=st.integers(min_value=1, max_value=6))
    @settings(max_examples=100)
    def test_round_trip(self, seed: int, k: int) -> None:
        corr = _random_correlation(seed, k)
        lower = cholesky(corr)

        assert np.allclose(lower @ lower.T, corr, atol=CHOLESKY_ROUND_TRIP_TOLERANCE, rtol=0.0)
        assert np.allclose(np.triu(lower, k=1), 0.0)
        assert np.all(np.diag(lower) > 0)

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1), k=st.integers(min_value=2, max_value=6))
    @settings(max_examples=50)
    def test_valid_and_transforms(self, seed: int, k: int) -> None:
        corr = _random_correlation(seed, k)
        z = np.random.default_rng(seed).standard_normal((k, 10))

        assert is_valid_correlation_matrix(corr)
        assert generate_correlated_variables(corr, z).shape == (k, 10)
