"""
Centralized tolerance framework for exotic option pricing.

All tolerances are derived from precision requirements, not ad hoc tuning.

Tolerance Tiers:
    Tier 1 (Analytical): Deterministic results, machine precision or the
                         published accuracy of an approximation
    Tier 2 (Stochastic): CLT-derived, Monte Carlo estimates

References:
    [T1] Abramowitz & Stegun (1964) 26.2.17 - normal CDF, |ε| < 7.5e-8
    [T1] Acklam (2003) - inverse normal, relative error < 1.15e-9
    [T1] Glasserman (2003) Ch. 3-4 - Monte Carlo error bounds
"""

import numpy as np
from typing import Final

# =============================================================================
# Tier 1: Analytical Tolerances (Deterministic)
# =============================================================================

#: No-arbitrage bounds: price >= 0, lookback >= vanilla, etc.
ANTI_PATTERN_TOLERANCE: Final[float] = 1e-10

#: Polynomial normal CDF vs exact: A&S 26.2.17 bound 7.5e-8, doubled
NORMAL_CDF_TOLERANCE: Final[float] = 1.5e-7

#: Acklam inverse normal vs exact quantile (absolute, central region)
NORMAL_INVERSE_TOLERANCE: Final[float] = 1e-8

#: Correlation matrix symmetry and unit diagonal checks
CORRELATION_TOLERANCE: Final[float] = 1e-10

#: Cholesky round trip: L @ L.T == A entrywise
CHOLESKY_ROUND_TRIP_TOLERANCE: Final[float] = 1e-8


# =============================================================================
# Tier 2: Stochastic Tolerances (CLT-Derived)
# =============================================================================


def mc_tolerance(n_paths: int, sigma: float = 20.0, confidence: float = 3.0) -> float:
    """
    Calculate CLT-derived Monte Carlo tolerance in price units.

    [T1] Standard error of MC estimate is σ/√N.
    3σ gives 99.7% confidence interval.

    Parameters
    ----------
    n_paths : int
        Number of Monte Carlo paths
    sigma : float
        Estimated payoff standard deviation (default 20 for S0=100 options)
    confidence : float
        Number of standard deviations (default 3 for 99.7% CI)

    Returns
    -------
    float
        Absolute tolerance for MC vs analytical comparison

    Examples
    --------
    >>> round(mc_tolerance(10_000), 2)
    0.6
    """
    return confidence * sigma / np.sqrt(n_paths)


#: Empirical coverage of the 95% CI over repeated trials
CI_COVERAGE_TOLERANCE: Final[float] = 0.06

#: Relative tolerance for MC vs closed form with continuous correction
MC_ANALYTICAL_RELATIVE_TOLERANCE: Final[float] = 0.05


# =============================================================================
# Tolerance Registry (For Dynamic Access)
# =============================================================================

TOLERANCE_REGISTRY: dict[str, float] = {
    # Tier 1: Analytical
    "anti_pattern": ANTI_PATTERN_TOLERANCE,
    "normal_cdf": NORMAL_CDF_TOLERANCE,
    "normal_inverse": NORMAL_INVERSE_TOLERANCE,
    "correlation": CORRELATION_TOLERANCE,
    "cholesky_round_trip": CHOLESKY_ROUND_TRIP_TOLERANCE,
    # Tier 2: Stochastic
    "ci_coverage": CI_COVERAGE_TOLERANCE,
    "mc_analytical_relative": MC_ANALYTICAL_RELATIVE_TOLERANCE,
}


def get_tolerance(name: str) -> float:
    """
    Get tolerance by name from registry.

    Parameters
    ----------
    name : str
        Tolerance name (see TOLERANCE_REGISTRY keys)

    Returns
    -------
    float
        Tolerance value

    Raises
    ------
    KeyError
        If tolerance name not found
    """
    if name not in TOLERANCE_REGISTRY:
        available = ", ".join(sorted(TOLERANCE_REGISTRY.keys()))
        raise KeyError(f"Unknown tolerance '{name}'. Available: {available}")
    return TOLERANCE_REGISTRY[name]
