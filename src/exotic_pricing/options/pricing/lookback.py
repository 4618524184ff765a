"""
Closed-form continuously monitored lookback options at inception.

Running extrema start at spot (M = m = S0). Formulas follow from the
reflection principle for the maximum of Brownian motion with drift.

[T1] Fixed strike: Conze & Viswanathan (1991)
[T1] Floating strike: Goldman, Sosin & Gatto (1979)
[T1] Haug (2007) Sections 4.15.1-4.15.2, Hull (2018) Section 26.11

Notation: k = σ²/(2r). All four prices are singular at r = 0.
"""

import math

from exotic_pricing.errors import UnsupportedAnalyticalError
from exotic_pricing.options.payoffs.base import LookbackType, OptionType
from exotic_pricing.options.pricing.black_scholes import _validate_inputs
from exotic_pricing.options.special_functions import normal_cdf


def _fixed_strike_call(spot, strike, rate, volatility, time_to_expiry) -> float:
    """
    [T1] X = max(K, M):
    c = e^(-rT)(M-K)⁺ + S N(d1) - X e^(-rT) N(d2)
        + S e^(-rT) k [e^(rT) N(d1) - (S/X)^(-2r/σ²) N(d1 - 2r√T/σ)]
    """
    sqrt_t = math.sqrt(time_to_expiry)
    k = volatility**2 / (2 * rate)
    disc = math.exp(-rate * time_to_expiry)
    x = max(strike, spot)

    d1 = (math.log(spot / x) + (rate + 0.5 * volatility**2) * time_to_expiry) / (volatility * sqrt_t)
    d2 = d1 - volatility * sqrt_t
    shift = 2 * rate * sqrt_t / volatility

    return (
        disc * max(spot - strike, 0.0)
        + spot * normal_cdf(d1)
        - x * disc * normal_cdf(d2)
        + spot * disc * k * (
            math.exp(rate * time_to_expiry) * normal_cdf(d1)
            - (spot / x) ** (-2 * rate / volatility**2) * normal_cdf(d1 - shift)
        )
    )


def _fixed_strike_put(spot, strike, rate, volatility, time_to_expiry) -> float:
    """
    [T1] X = min(K, m):
    p = e^(-rT)(K-m)⁺ - S N(-d1) + X e^(-rT) N(-d2)
        + S e^(-rT) k [(S/X)^(-2r/σ²) N(-d1 + 2r√T/σ) - e^(rT) N(-d1)]
    """
    sqrt_t = math.sqrt(time_to_expiry)
    k = volatility**2 / (2 * rate)
    disc = math.exp(-rate * time_to_expiry)
    x = min(strike, spot)

    d1 = (math.log(spot / x) + (rate + 0.5 * volatility**2) * time_to_expiry) / (volatility * sqrt_t)
    d2 = d1 - volatility * sqrt_t
    shift = 2 * rate * sqrt_t / volatility

    return (
        disc * max(strike - spot, 0.0)
        - spot * normal_cdf(-d1)
        + x * disc * normal_cdf(-d2)
        + spot * disc * k * (
            (spot / x) ** (-2 * rate / volatility**2) * normal_cdf(-d1 + shift)
            - math.exp(rate * time_to_expiry) * normal_cdf(-d1)
        )
    )


def _floating_terms(rate, volatility, time_to_expiry) -> tuple[float, float, float, float]:
    sqrt_t = math.sqrt(time_to_expiry)
    a1 = (rate + 0.5 * volatility**2) * sqrt_t / volatility
    a2 = a1 - volatility * sqrt_t
    a3 = a1 - 2 * rate * sqrt_t / volatility
    k = volatility**2 / (2 * rate)
    return a1, a2, a3, k


def _floating_strike_call(spot, rate, volatility, time_to_expiry) -> float:
    """[T1] c = S [N(a1) - k N(-a1) - e^(-rT) (N(a2) - k N(-a3))]"""
    a1, a2, a3, k = _floating_terms(rate, volatility, time_to_expiry)
    disc = math.exp(-rate * time_to_expiry)
    return spot * (
        normal_cdf(a1) - k * normal_cdf(-a1) - disc * (normal_cdf(a2) - k * normal_cdf(-a3))
    )


def _floating_strike_put(spot, rate, volatility, time_to_expiry) -> float:
    """[T1] p = S [-N(-a1) + k N(a1) + e^(-rT) (N(-a2) - k N(a3))]"""
    a1, a2, a3, k = _floating_terms(rate, volatility, time_to_expiry)
    disc = math.exp(-rate * time_to_expiry)
    return spot * (
        -normal_cdf(-a1) + k * normal_cdf(a1) + disc * (normal_cdf(-a2) - k * normal_cdf(a3))
    )


def lookback_price(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    option_type: OptionType,
    lookback_type: LookbackType,
) -> float:
    """
    Closed-form price of a continuously monitored lookback option.

    Parameters
    ----------
    spot : float
        Current spot price (also the running extremum at inception)
    strike : float
        Strike price (ignored for floating strike)
    rate : float
        Risk-free rate (decimal), must be non-zero
    volatility : float
        Volatility (decimal)
    time_to_expiry : float
        Time to expiry (years)
    option_type : OptionType
        Call or put
    lookback_type : LookbackType
        Fixed or floating strike

    Returns
    -------
    float
        Option price

    Raises
    ------
    UnsupportedAnalyticalError
        At r = 0, where the σ²/(2r) terms are singular

    Examples
    --------
    >>> price = lookback_price(100, 100, 0.05, 0.20, 1.0,
    ...                        OptionType.CALL, LookbackType.FLOATING)
    >>> round(price, 1)
    17.2
    """
    _validate_inputs(spot, strike, volatility, time_to_expiry)

    if rate == 0:
        raise UnsupportedAnalyticalError(
            "Analytical lookback price is singular at rate = 0"
        )

    if lookback_type == LookbackType.FIXED:
        if option_type == OptionType.CALL:
            return _fixed_strike_call(spot, strike, rate, volatility, time_to_expiry)
        return _fixed_strike_put(spot, strike, rate, volatility, time_to_expiry)

    if option_type == OptionType.CALL:
        return _floating_strike_call(spot, rate, volatility, time_to_expiry)
    return _floating_strike_put(spot, rate, volatility, time_to_expiry)
