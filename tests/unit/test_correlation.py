"""
Tests for Cholesky factorization and correlated normal generation.

[T1] A = L·Lᵀ for symmetric positive-definite A
"""

import numpy as np
import pytest

from exotic_pricing.config.tolerances import CHOLESKY_ROUND_TRIP_TOLERANCE
from exotic_pricing.errors import (
    AsymmetricMatrixError,
    MatrixError,
    NonSquareMatrixError,
    NotPositiveDefiniteError,
    ParameterValidationError,
)
from exotic_pricing.options.correlation import (
    cholesky,
    generate_correlated_variables,
    is_symmetric,
    is_valid_correlation_matrix,
)

VALID_3X3 = [
    [1.0, 0.5, 0.3],
    [0.5, 1.0, 0.2],
    [0.3, 0.2, 1.0],
]


class TestCholesky:
    """Tests for cholesky()."""

    @pytest.mark.unit
    def test_round_trip(self):
        """[T1] L @ L.T reproduces the input."""
        lower = cholesky(VALID_3X3)
        np.testing.assert_allclose(
            lower @ lower.T, VALID_3X3, atol=CHOLESKY_ROUND_TRIP_TOLERANCE
        )

    @pytest.mark.unit
    def test_lower_triangular(self):
        """Entries above the diagonal are zero."""
        lower = cholesky(VALID_3X3)
        assert np.all(np.triu(lower, k=1) == 0.0)
        assert np.all(np.diag(lower) > 0)

    @pytest.mark.unit
    def test_matches_numpy(self):
        """Agrees with numpy.linalg.cholesky."""
        np.testing.assert_allclose(
            cholesky(VALID_3X3), np.linalg.cholesky(np.array(VALID_3X3)), atol=1e-12
        )

    @pytest.mark.unit
    def test_identity(self):
        """Identity factors to itself."""
        np.testing.assert_array_equal(cholesky(np.eye(4)), np.eye(4))

    @pytest.mark.unit
    def test_off_diagonal_above_one_rejected(self):
        """Off-diagonal 1.5 makes the second pivot negative."""
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            cholesky([[1.0, 1.5], [1.5, 1.0]])
        assert exc_info.value.index == 1
        assert exc_info.value.pivot < 0

    @pytest.mark.unit
    def test_singular_rejected(self):
        """A zero pivot is rejected, not just a negative one."""
        with pytest.raises(NotPositiveDefiniteError):
            cholesky([[1.0, 1.0], [1.0, 1.0]])

    @pytest.mark.unit
    def test_asymmetric_rejected(self):
        """Asymmetric input is rejected before factorization."""
        with pytest.raises(AsymmetricMatrixError):
            cholesky([[1.0, 0.5], [0.3, 1.0]])

    @pytest.mark.unit
    def test_non_square_rejected(self):
        """Ragged and rectangular input is rejected."""
        with pytest.raises(NonSquareMatrixError):
            cholesky([[1.0, 0.5, 0.1], [0.5, 1.0, 0.2]])
        with pytest.raises(NonSquareMatrixError):
            cholesky([[1.0, 0.5], [0.5]])

    @pytest.mark.unit
    def test_matrix_errors_are_validation_errors(self):
        """Callers can catch the whole family as ParameterValidationError."""
        with pytest.raises(ParameterValidationError):
            cholesky([[1.0, 2.0], [2.0, 1.0]])
        with pytest.raises(MatrixError):
            cholesky([[1.0, 0.5], [0.3, 1.0]])


class TestCorrelatedVariables:
    """Tests for generate_correlated_variables()."""

    @pytest.mark.unit
    def test_single_vector(self):
        """L · z for a single draw."""
        z = np.array([0.5, -1.0, 2.0])
        expected = np.linalg.cholesky(np.array(VALID_3X3)) @ z
        np.testing.assert_allclose(generate_correlated_variables(VALID_3X3, z), expected)

    @pytest.mark.unit
    def test_sample_correlation(self, reproducible_rng):
        """Sample correlation of many draws approaches the target."""
        z = reproducible_rng.standard_normal((3, 100_000))
        x = generate_correlated_variables(VALID_3X3, z)
        np.testing.assert_allclose(np.corrcoef(x), VALID_3X3, atol=0.02)

    @pytest.mark.unit
    def test_length_mismatch(self):
        """Number of normals must equal the matrix dimension."""
        with pytest.raises(ParameterValidationError, match="expected 3"):
            generate_correlated_variables(VALID_3X3, [0.1, 0.2])

    @pytest.mark.unit
    def test_scalar_rejected(self):
        """A single number is not a vector of normals."""
        with pytest.raises(ParameterValidationError, match="got a scalar"):
            generate_correlated_variables(VALID_3X3, 0.5)


class TestValidation:
    """Tests for is_symmetric() and is_valid_correlation_matrix()."""

    @pytest.mark.unit
    def test_valid(self):
        assert is_valid_correlation_matrix(VALID_3X3)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "matrix",
        [
            [[1.0, 1.5], [1.5, 1.0]],  # off-diagonal out of range
            [[1.0, 0.5], [0.3, 1.0]],  # asymmetric
            [[0.9, 0.5], [0.5, 1.0]],  # diagonal not 1
            [[1.0, 0.5, 0.1], [0.5, 1.0, 0.2]],  # not square
            [[1.0, 0.99, -0.99], [0.99, 1.0, 0.99], [-0.99, 0.99, 1.0]],  # not PD
            [],
        ],
    )
    def test_invalid(self, matrix):
        """Composite check returns False and never raises."""
        assert is_valid_correlation_matrix(matrix) is False

    @pytest.mark.unit
    def test_is_symmetric_tolerance(self):
        """Differences up to the tolerance count as symmetric."""
        assert is_symmetric([[1.0, 0.5], [0.5 + 1e-12, 1.0]])
        assert not is_symmetric([[1.0, 0.5], [0.5 + 1e-6, 1.0]])
        assert is_symmetric([[1.0, 0.5], [0.5 + 1e-6, 1.0]], tolerance=1e-5)
