"""
Frozen configuration settings for exotic option pricing.

All configuration is immutable (frozen dataclasses) to ensure reproducibility.
Tolerances used by the test suite live in config/tolerances.py.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

# =============================================================================
# Simulation Configuration
# =============================================================================

def _resolve_default_seed() -> Optional[int]:
    """
    Resolve the default random seed with environment variable override.

    Priority:
    1. EXOTIC_PRICING_SEED environment variable (if set)
    2. Default: None (fresh entropy on every request)

    Returns
    -------
    int or None
        Seed for numpy.random.default_rng
    """
    env_seed = os.environ.get("EXOTIC_PRICING_SEED")
    if env_seed:
        return int(env_seed)
    return None


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable Monte Carlo configuration.

    Attributes
    ----------
    n_paths : int
        Default number of simulated paths
    n_steps : int
        Default number of monitoring steps (252 = daily for 1 year)
    seed : int, optional
        Default seed. Override with EXOTIC_PRICING_SEED environment variable.
    antithetic : bool
        Pair every draw with its negation by default
    stratified : bool
        Stratify the uniform domain by default
    display_paths : int
        Size of the bounded path sample handed to display collaborators
    """

    n_paths: int = 10_000
    n_steps: int = 252  # [T1] trading days per year
    seed: Optional[int] = field(default_factory=_resolve_default_seed)
    antithetic: bool = True
    stratified: bool = True
    display_paths: int = 100


# =============================================================================
# Jump Diffusion Configuration
# =============================================================================

@dataclass(frozen=True)
class JumpConfig:
    """
    Merton jump-diffusion parameters. [T1: Merton (1976)]

    Attributes
    ----------
    intensity : float
        Poisson jump intensity λ (jumps per year)
    mean : float
        Mean log jump size μ_J
    volatility : float
        Log jump size volatility σ_J
    """

    intensity: float = 1.0
    mean: float = -0.1
    volatility: float = 0.2


# =============================================================================
# Monitoring Correction Configuration
# =============================================================================

@dataclass(frozen=True)
class MonitoringConfig:
    """
    Discrete-to-continuous monitoring correction.

    Attributes
    ----------
    bgk_beta : float
        Broadie-Glasserman-Kou constant -ζ(1/2)/√(2π) ≈ 0.5826 [T1]
    """

    bgk_beta: float = 0.5826


# =============================================================================
# Greeks Configuration
# =============================================================================

@dataclass(frozen=True)
class GreeksConfig:
    """
    Finite-difference configuration.

    Attributes
    ----------
    bump : float
        Relative bump size h applied to spot, maturity, volatility and rate
    """

    bump: float = 0.01


# =============================================================================
# Risk Configuration
# =============================================================================

@dataclass(frozen=True)
class RiskConfig:
    """
    Risk statistics configuration.

    Attributes
    ----------
    var_level : float
        Tail probability for VaR (0.05 = 95% VaR)
    confidence_z : float
        Normal quantile for the price confidence interval (1.96 = 95%)
    """

    var_level: float = 0.05
    confidence_z: float = 1.96


# =============================================================================
# Master Configuration
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """
    Master frozen configuration combining all sub-configs.

    Usage
    -----
    >>> from exotic_pricing.config.settings import SETTINGS
    >>> SETTINGS.monitoring.bgk_beta
    0.5826
    """

    simulation: SimulationConfig = SimulationConfig()
    jumps: JumpConfig = JumpConfig()
    monitoring: MonitoringConfig = MonitoringConfig()
    greeks: GreeksConfig = GreeksConfig()
    risk: RiskConfig = RiskConfig()


# Singleton instance - import this
SETTINGS = Settings()
