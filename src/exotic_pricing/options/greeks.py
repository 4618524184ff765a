"""
Finite-difference Greeks by bump-and-reprice.

Every bumped price is an independent full re-simulation through the same
pricing pipeline as the base price (including any monitoring correction).
No common random numbers are used, so Greeks carry Monte Carlo noise of
order stderr / (h·x).

[T1] Relative bump h on each input x, step size h·x:
     Delta = (V(S(1+h)) - V(S(1-h))) / (2hS)
     Gamma = (V(S(1+h)) - 2V + V(S(1-h))) / (hS)²
     Theta = -(V(T(1-h)) - V) / (hT)
     Vega  = (V(σ(1+h)) - V) / (hσ)
     Rho   = (V(r(1+h)) - V) / (hr)

See: Glasserman (2003) Section 7.1 "Finite-Difference Approximations"
"""

import logging
import math
from dataclasses import dataclass, fields
from typing import Callable

from exotic_pricing.config.settings import SETTINGS
from exotic_pricing.errors import ParameterValidationError
from exotic_pricing.options.simulation.gbm import SimulationParameters

logger = logging.getLogger(__name__)

#: Maps bumped parameters to a price through a fresh simulation
Repricer = Callable[[SimulationParameters], float]


@dataclass(frozen=True)
class GreeksResult:
    """
    Immutable finite-difference Greeks.

    Attributes
    ----------
    delta : float
        dV/dS
    gamma : float
        d²V/dS²
    theta : float
        dV/dT, value lost per year as maturity shortens (positive for
        long vanilla options)
    vega : float
        dV/dσ (per unit volatility)
    rho : float
        dV/dr (per unit rate); nan when r = 0
    """

    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float

    @property
    def undefined(self) -> tuple[str, ...]:
        """Names of non-finite Greeks."""
        return tuple(f.name for f in fields(self) if not math.isfinite(getattr(self, f.name)))

    def to_dict(self) -> dict[str, float]:
        """Greeks keyed by name."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def estimate_greeks(
    params: SimulationParameters,
    reprice: Repricer,
    base_price: float,
    bump: float = SETTINGS.greeks.bump,
) -> GreeksResult:
    """
    Estimate Greeks by central/forward differences on re-simulated prices.

    Parameters
    ----------
    params : SimulationParameters
        Base parameters
    reprice : Callable[[SimulationParameters], float]
        Full pricing pipeline; must draw fresh paths on every call
    base_price : float
        Price V at the base parameters (the final, corrected price)
    bump : float, default 0.01
        Relative bump size h

    Returns
    -------
    GreeksResult
        Delta, gamma, theta, vega, rho

    Raises
    ------
    ParameterValidationError
        If bump is not in (0, 1)

    Notes
    -----
    Rho is undefined at r = 0 (zero step size). It is reported as nan with
    a warning and the rate-bumped simulation is skipped.
    """
    if not 0 < bump < 1:
        raise ParameterValidationError(f"CRITICAL: bump must be in (0, 1), got {bump}")

    spot_step = bump * params.spot
    price_up = reprice(params.bumped(spot=params.spot * (1 + bump)))
    price_down = reprice(params.bumped(spot=params.spot * (1 - bump)))

    delta = (price_up - price_down) / (2 * spot_step)
    gamma = (price_up - 2 * base_price + price_down) / spot_step**2

    price_short = reprice(params.bumped(time_to_expiry=params.time_to_expiry * (1 - bump)))
    theta = -(price_short - base_price) / (bump * params.time_to_expiry)

    price_vol = reprice(params.bumped(volatility=params.volatility * (1 + bump)))
    vega = (price_vol - base_price) / (bump * params.volatility)

    if params.rate == 0:
        logger.warning("Rho is undefined at rate = 0 (zero bump size); reporting nan")
        rho = float("nan")
    else:
        price_rate = reprice(params.bumped(rate=params.rate * (1 + bump)))
        rho = (price_rate - base_price) / (bump * params.rate)

    result = GreeksResult(
        delta=float(delta),
        gamma=float(gamma),
        theta=float(theta),
        vega=float(vega),
        rho=float(rho),
    )

    if result.undefined:
        logger.warning(f"Undefined Greeks: {', '.join(result.undefined)}")

    return result
