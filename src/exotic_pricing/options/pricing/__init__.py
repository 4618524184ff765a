"""
Closed-form reference prices.

Provides:
- Black-Scholes vanilla prices (bounds and convergence checks)
- Discrete geometric Asian (control variate mean)
- Continuously monitored knock-out barriers (up-and-out call, down-and-out put)
- Continuously monitored lookbacks (fixed and floating strike)
"""

from exotic_pricing.options.pricing.asian import (
    geometric_asian_adjustments,
    geometric_asian_price,
)
from exotic_pricing.options.pricing.barrier import barrier_price
from exotic_pricing.options.pricing.black_scholes import (
    black_scholes_call,
    black_scholes_price,
    black_scholes_put,
)
from exotic_pricing.options.pricing.lookback import lookback_price

__all__ = [
    # Black-Scholes
    "black_scholes_call",
    "black_scholes_price",
    "black_scholes_put",
    # Asian
    "geometric_asian_adjustments",
    "geometric_asian_price",
    # Barrier
    "barrier_price",
    # Lookback
    "lookback_price",
]
