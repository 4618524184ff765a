"""
Centralized pytest fixtures for the exotic-pricing test suite.

This module provides shared fixtures used across all test categories:
- anti_patterns/
- unit/
- properties/
- validation/
- integration/

Fixture Categories:
1. Market Parameters - Standard market conditions (S=K=100, r=5%, σ=20%, T=1)
2. Simulated Paths - Small seeded path sets for payoff tests
3. Random Generators - Reproducible numpy Generators
"""

from dataclasses import dataclass

import numpy as np
import pytest

from exotic_pricing.options.simulation import (
    PathResult,
    SimulationParameters,
    generate_paths,
)

# =============================================================================
# TOLERANCE TIERS
# =============================================================================

@dataclass(frozen=True)
class ToleranceTiers:
    """
    Tiered tolerance framework for different test types.

    See: exotic_pricing.config.tolerances for the derivations.
    """

    # Anti-pattern tests: Very tight (fundamental violations)
    anti_pattern: float = 1e-10

    # Closed-form identities that only involve float rounding
    analytical: float = 1e-10

    # Closed form vs scipy-based reference (normal CDF approximation error)
    reference: float = 1e-4

    # Monte Carlo: multiples of the reported standard error
    mc_standard_errors: float = 4.0


TOLERANCES = ToleranceTiers()


@pytest.fixture(scope="session")
def tolerances() -> ToleranceTiers:
    """Provide tiered tolerance settings for all tests."""
    return TOLERANCES


# =============================================================================
# MARKET PARAMETERS
# =============================================================================

@pytest.fixture
def market_params_dict() -> dict[str, float]:
    """Standard at-the-money market as keyword arguments."""
    return {
        "spot": 100.0,
        "strike": 100.0,
        "volatility": 0.20,
        "rate": 0.05,
        "time_to_expiry": 1.0,
    }


@pytest.fixture
def small_params(market_params_dict) -> SimulationParameters:
    """Cheap simulation: 2,000 paths x 50 steps, default variance reduction."""
    return SimulationParameters(**market_params_dict, n_steps=50, n_paths=2_000)


@pytest.fixture
def plain_params(market_params_dict) -> SimulationParameters:
    """Cheap simulation without variance reduction."""
    return SimulationParameters(
        **market_params_dict,
        n_steps=50,
        n_paths=2_000,
        antithetic=False,
        stratified=False,
    )


# =============================================================================
# SIMULATED PATHS
# =============================================================================

@pytest.fixture
def small_paths(small_params) -> PathResult:
    """Seeded path set for payoff tests."""
    return generate_paths(small_params, seed=42)


def make_path_result(paths, rate: float = 0.05) -> PathResult:
    """
    Wrap a hand-built path array in a PathResult.

    Column 0 must hold the common spot.
    """
    paths = np.asarray(paths, dtype=float)
    params = SimulationParameters(
        spot=float(paths[0, 0]),
        strike=100.0,
        volatility=0.2,
        rate=rate,
        time_to_expiry=1.0,
        n_steps=paths.shape[1] - 1,
        n_paths=paths.shape[0],
    )
    times = np.linspace(0.0, 1.0, paths.shape[1])
    return PathResult(paths=paths, times=times, params=params)


@pytest.fixture
def path_factory():
    """Factory building PathResult objects from explicit arrays."""
    return make_path_result


# =============================================================================
# NUMPY RANDOM GENERATOR
# =============================================================================

@pytest.fixture
def reproducible_rng():
    """Provide a reproducible numpy random generator."""
    return np.random.default_rng(seed=42)
