"""
Closed-form discrete geometric Asian option.

The geometric average of lognormal prices is lognormal, so the option has a
Black-Scholes form with an adjusted volatility and drift. Used as the control
variate for the arithmetic Asian estimator.

[T1] Averaging over the n+1 equally spaced prices S(0), S(dt), ..., S(T):
     E[ln G] = ln S0 + (r - σ²/2)T/2
     Var[ln G] = σ²T (2n+1) / (6(n+1))

References
----------
[T1] Kemna, A. & Vorst, A. (1990). A pricing method for options based on average asset values.
[T1] Glasserman (2003) Section 4.1.2
"""

import math

from exotic_pricing.options.payoffs.base import OptionType
from exotic_pricing.options.pricing.black_scholes import _validate_inputs
from exotic_pricing.options.special_functions import normal_cdf


def geometric_asian_adjustments(
    rate: float,
    volatility: float,
    n_steps: int,
) -> tuple[float, float]:
    """
    Adjusted volatility and drift of the discrete geometric average.

    Parameters
    ----------
    rate : float
        Risk-free rate
    volatility : float
        Volatility of the underlying
    n_steps : int
        Number of steps n; the average runs over n+1 prices

    Returns
    -------
    tuple[float, float]
        (σ_adj, μ_adj) with E[G] = S0·exp(μ_adj·T)
    """
    sigma_adj = volatility * math.sqrt((2 * n_steps + 1) / (6.0 * (n_steps + 1)))
    mu_adj = 0.5 * (rate - 0.5 * volatility**2) + 0.5 * sigma_adj**2
    return sigma_adj, mu_adj


def geometric_asian_price(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    n_steps: int,
    option_type: OptionType,
) -> float:
    """
    Price a discretely monitored geometric-average Asian option.

    [T1] C = S0·e^((μ_adj - r)T)·N(d1) - K·e^(-rT)·N(d2)
    [T1] P = K·e^(-rT)·N(-d2) - S0·e^((μ_adj - r)T)·N(-d1)
         d1 = (ln(S0/K) + (μ_adj + σ_adj²/2)T) / (σ_adj√T), d2 = d1 - σ_adj√T

    Parameters
    ----------
    spot : float
        Current spot price
    strike : float
        Strike price
    rate : float
        Risk-free rate (decimal)
    volatility : float
        Volatility (decimal)
    time_to_expiry : float
        Time to expiry (years)
    n_steps : int
        Number of monitoring steps
    option_type : OptionType
        Call or put

    Returns
    -------
    float
        Option price
    """
    _validate_inputs(spot, strike, volatility, time_to_expiry)

    sigma_adj, mu_adj = geometric_asian_adjustments(rate, volatility, n_steps)
    sqrt_t = math.sqrt(time_to_expiry)

    d1 = (math.log(spot / strike) + (mu_adj + 0.5 * sigma_adj**2) * time_to_expiry) / (
        sigma_adj * sqrt_t
    )
    d2 = d1 - sigma_adj * sqrt_t

    forward_weight = spot * math.exp((mu_adj - rate) * time_to_expiry)
    strike_weight = strike * math.exp(-rate * time_to_expiry)

    if option_type == OptionType.CALL:
        return forward_weight * normal_cdf(d1) - strike_weight * normal_cdf(d2)
    else:
        return strike_weight * normal_cdf(-d2) - forward_weight * normal_cdf(-d1)
