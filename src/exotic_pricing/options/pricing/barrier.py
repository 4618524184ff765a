"""
Closed-form continuously monitored barrier options.

Reflection-principle prices for the two canonical knock-outs:
up-and-out call (K < H) and down-and-out put (K > H), no rebate.
Every other direction/knock/type combination has no formula here and
raises UnsupportedAnalyticalError so callers can fall back to Monte Carlo.

[T1] Merton (1973), Reiner & Rubinstein (1991)
[T1] Haug (2007) "The Complete Guide to Option Pricing Formulas", Section 4.17.1
"""

import math

from exotic_pricing.errors import UnsupportedAnalyticalError
from exotic_pricing.options.payoffs.base import (
    BarrierDirection,
    KnockType,
    OptionType,
)
from exotic_pricing.options.pricing.black_scholes import _validate_inputs
from exotic_pricing.options.special_functions import normal_cdf


def _reflection_terms(
    spot: float,
    strike: float,
    barrier: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    phi: int,
    eta: int,
) -> tuple[float, float, float, float]:
    """
    Reiner-Rubinstein building blocks A, B, C, D.

    phi = +1 for calls, -1 for puts; eta = +1 for down, -1 for up barriers.
    """
    sig_rt = volatility * math.sqrt(time_to_expiry)
    mu = (rate - 0.5 * volatility**2) / volatility**2
    disc_strike = strike * math.exp(-rate * time_to_expiry)
    h_ratio = barrier / spot

    x1 = math.log(spot / strike) / sig_rt + (1 + mu) * sig_rt
    x2 = math.log(spot / barrier) / sig_rt + (1 + mu) * sig_rt
    y1 = math.log(barrier**2 / (spot * strike)) / sig_rt + (1 + mu) * sig_rt
    y2 = math.log(barrier / spot) / sig_rt + (1 + mu) * sig_rt

    a = phi * spot * normal_cdf(phi * x1) - phi * disc_strike * normal_cdf(phi * x1 - phi * sig_rt)
    b = phi * spot * normal_cdf(phi * x2) - phi * disc_strike * normal_cdf(phi * x2 - phi * sig_rt)
    c = (
        phi * spot * h_ratio ** (2 * (mu + 1)) * normal_cdf(eta * y1)
        - phi * disc_strike * h_ratio ** (2 * mu) * normal_cdf(eta * y1 - eta * sig_rt)
    )
    d = (
        phi * spot * h_ratio ** (2 * (mu + 1)) * normal_cdf(eta * y2)
        - phi * disc_strike * h_ratio ** (2 * mu) * normal_cdf(eta * y2 - eta * sig_rt)
    )
    return a, b, c, d


def barrier_price(
    spot: float,
    strike: float,
    barrier: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    option_type: OptionType,
    direction: BarrierDirection,
    knock: KnockType,
) -> float:
    """
    Closed-form price of a continuously monitored knock-out option.

    [T1] Up-and-out call, K < H:   A - B + C - D   (phi=1, eta=-1)
    [T1] Down-and-out put, K > H:  A - B + C - D   (phi=-1, eta=1)
    With the strike beyond the barrier the option is worthless.

    Parameters
    ----------
    spot : float
        Current spot price
    strike : float
        Strike price
    barrier : float
        Barrier level
    rate : float
        Risk-free rate (decimal)
    volatility : float
        Volatility (decimal)
    time_to_expiry : float
        Time to expiry (years)
    option_type : OptionType
        Call or put
    direction : BarrierDirection
        Up or down
    knock : KnockType
        In or out

    Returns
    -------
    float
        Option price

    Raises
    ------
    UnsupportedAnalyticalError
        For any combination other than up-and-out call or down-and-out put
    """
    _validate_inputs(spot, strike, volatility, time_to_expiry)

    if knock == KnockType.OUT and direction == BarrierDirection.UP and option_type == OptionType.CALL:
        if spot >= barrier or strike >= barrier:
            return 0.0
        a, b, c, d = _reflection_terms(
            spot, strike, barrier, rate, volatility, time_to_expiry, phi=1, eta=-1
        )
        return max(a - b + c - d, 0.0)

    if knock == KnockType.OUT and direction == BarrierDirection.DOWN and option_type == OptionType.PUT:
        if spot <= barrier or strike <= barrier:
            return 0.0
        a, b, c, d = _reflection_terms(
            spot, strike, barrier, rate, volatility, time_to_expiry, phi=-1, eta=1
        )
        return max(a - b + c - d, 0.0)

    raise UnsupportedAnalyticalError(
        f"Analytical price only available for up-and-out calls and down-and-out puts, "
        f"got {direction.value}-and-{knock.value} {option_type.value}"
    )
