"""
Monte Carlo simulation for path-dependent option pricing.

Provides:
- Standard normal sampling with antithetic and stratified variance reduction
- GBM path generation with optional Merton jumps
- Estimator statistics (price, standard error, confidence interval)
"""

from exotic_pricing.options.simulation.gbm import (
    PathResult,
    SimulationParameters,
    generate_paths,
)
from exotic_pricing.options.simulation.monte_carlo import (
    ConfidenceInterval,
    PricingResult,
    build_pricing_result,
    confidence_interval,
)
from exotic_pricing.options.simulation.sampling import generate_standard_normals

__all__ = [
    # GBM
    "SimulationParameters",
    "PathResult",
    "generate_paths",
    # Sampling
    "generate_standard_normals",
    # Monte Carlo
    "ConfidenceInterval",
    "PricingResult",
    "build_pricing_result",
    "confidence_interval",
]
