"""
exotic-pricing: Monte Carlo pricing of path-dependent options.

Quick Start
-----------
>>> from exotic_pricing import PricingRequest, SimulationParameters, price_request
>>> params = SimulationParameters(spot=100, strike=100, volatility=0.2,
...                               rate=0.05, time_to_expiry=1.0,
...                               n_steps=52, n_paths=5000)
>>> response = price_request(PricingRequest("asian-call", params), seed=42)

Version: 0.1.0
"""

__version__ = "0.1.0"

# =============================================================================
# Request / Response - Primary API
# =============================================================================
from exotic_pricing.engine import (
    PricingRequest,
    PricingResponse,
    convergence_analysis,
    parse_variant,
    price_analytical,
    price_request,
)

# =============================================================================
# Variants
# =============================================================================
from exotic_pricing.options.payoffs.base import (
    AsianSpec,
    AverageType,
    BarrierDirection,
    BarrierSpec,
    KnockType,
    LookbackSpec,
    LookbackType,
    OptionType,
)

# =============================================================================
# Simulation & Results
# =============================================================================
from exotic_pricing.options.simulation import (
    ConfidenceInterval,
    PathResult,
    PricingResult,
    SimulationParameters,
    generate_paths,
)
from exotic_pricing.options.greeks import GreeksResult
from exotic_pricing.options.risk_metrics import RiskMetricsResult

# =============================================================================
# Errors
# =============================================================================
from exotic_pricing.errors import (
    ExoticPricingError,
    InvalidBarrierError,
    InvalidVariantError,
    MatrixError,
    NotPositiveDefiniteError,
    ParameterValidationError,
    UnsupportedAnalyticalError,
)

__all__ = [
    "__version__",
    # Engine
    "PricingRequest",
    "PricingResponse",
    "convergence_analysis",
    "parse_variant",
    "price_analytical",
    "price_request",
    # Variants
    "AsianSpec",
    "AverageType",
    "BarrierDirection",
    "BarrierSpec",
    "KnockType",
    "LookbackSpec",
    "LookbackType",
    "OptionType",
    # Simulation
    "ConfidenceInterval",
    "PathResult",
    "PricingResult",
    "SimulationParameters",
    "generate_paths",
    "GreeksResult",
    "RiskMetricsResult",
    # Errors
    "ExoticPricingError",
    "InvalidBarrierError",
    "InvalidVariantError",
    "MatrixError",
    "NotPositiveDefiniteError",
    "ParameterValidationError",
    "UnsupportedAnalyticalError",
]
