"""
Geometric Brownian Motion (GBM) path generation.

Implements path simulation for Monte Carlo pricing of path-dependent options:
- GBM with log-Euler discretization
- Optional Merton jump diffusion
- Antithetic and stratified sampling, re-invoked at every time step

[T1] GBM SDE: dS = rS dt + σS dW
[T1] S(t+dt) = S(t) * exp((r - σ²/2)dt + σ√dt * Z [+ J])

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
See: Merton (1976) "Option pricing when underlying stock returns are discontinuous"
"""

import dataclasses
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from exotic_pricing.config.settings import SETTINGS, JumpConfig
from exotic_pricing.errors import ParameterValidationError
from exotic_pricing.options.simulation.sampling import (
    generate_standard_normals,
    open_uniforms,
)
from exotic_pricing.options.special_functions import normal_inverse


def _is_count(value) -> bool:
    """True for a Python or numpy integer >= 1; floats and bools are rejected."""
    return (
        isinstance(value, (int, np.integer))
        and not isinstance(value, bool)
        and value >= 1
    )


@dataclass(frozen=True)
class SimulationParameters:
    """
    Market and simulation parameters for one pricing request.

    Attributes
    ----------
    spot : float
        Initial spot price S0
    strike : float
        Strike price K
    volatility : float
        Volatility σ (annualized, decimal)
    rate : float
        Risk-free rate r (annualized, decimal, any sign)
    time_to_expiry : float
        Maturity T in years
    n_steps : int
        Number of time steps n
    n_paths : int
        Number of simulated paths m
    antithetic : bool
        Use antithetic variates
    stratified : bool
        Use stratified sampling
    jump_diffusion : bool
        Add Merton jumps to the diffusion
    """

    spot: float
    strike: float
    volatility: float
    rate: float
    time_to_expiry: float
    n_steps: int = SETTINGS.simulation.n_steps
    n_paths: int = SETTINGS.simulation.n_paths
    antithetic: bool = SETTINGS.simulation.antithetic
    stratified: bool = SETTINGS.simulation.stratified
    jump_diffusion: bool = False

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not self.spot > 0:
            raise ParameterValidationError(f"CRITICAL: spot must be > 0, got {self.spot}")
        if not self.strike > 0:
            raise ParameterValidationError(f"CRITICAL: strike must be > 0, got {self.strike}")
        if not self.volatility > 0:
            raise ParameterValidationError(
                f"CRITICAL: volatility must be > 0, got {self.volatility}"
            )
        if not math.isfinite(self.rate):
            raise ParameterValidationError(f"CRITICAL: rate must be finite, got {self.rate}")
        if not self.time_to_expiry > 0:
            raise ParameterValidationError(
                f"CRITICAL: time_to_expiry must be > 0, got {self.time_to_expiry}"
            )
        if not _is_count(self.n_steps):
            raise ParameterValidationError(
                f"CRITICAL: n_steps must be an integer >= 1, got {self.n_steps}"
            )
        if not _is_count(self.n_paths):
            raise ParameterValidationError(
                f"CRITICAL: n_paths must be an integer >= 1, got {self.n_paths}"
            )

    @property
    def dt(self) -> float:
        """Time step: T / n."""
        return self.time_to_expiry / self.n_steps

    @property
    def drift(self) -> float:
        """Risk-neutral log drift: r - σ²/2."""
        return self.rate - 0.5 * self.volatility**2

    @property
    def discount_factor(self) -> float:
        """Discount factor: exp(-rT)."""
        return math.exp(-self.rate * self.time_to_expiry)

    def bumped(self, **changes) -> "SimulationParameters":
        """Return a validated copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class PathResult:
    """
    Result of path generation.

    Attributes
    ----------
    paths : np.ndarray
        Simulated paths, shape (n_paths, n_steps + 1); column 0 is spot
    times : np.ndarray
        Time points, shape (n_steps + 1,)
    params : SimulationParameters
        Parameters used for simulation
    seed : int, optional
        Random seed used, when one was given
    """

    paths: np.ndarray
    times: np.ndarray
    params: SimulationParameters
    seed: Optional[int] = None

    @property
    def n_paths(self) -> int:
        """Number of paths."""
        return self.paths.shape[0]

    @property
    def n_steps(self) -> int:
        """Number of time steps."""
        return self.paths.shape[1] - 1

    @property
    def terminal_values(self) -> np.ndarray:
        """Terminal values of all paths."""
        return self.paths[:, -1]

    @property
    def log_returns(self) -> np.ndarray:
        """Log returns ln(S_T / S0) for all paths."""
        return np.log(self.paths[:, -1] / self.paths[:, 0])


def generate_paths(
    params: SimulationParameters,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    jumps: JumpConfig = SETTINGS.jumps,
) -> PathResult:
    """
    Generate price paths under GBM, optionally with Merton jumps.

    The sampler is re-invoked at every step: step k draws a fresh vector of
    n_paths normals (antithetic/stratified across paths) and path j reads
    entry j. Variance reduction therefore acts on the cross-section of each
    step, not along the time axis of one path. Antithetic partners keep the
    same position at every step, so path j and path j + ceil(m/2) are
    mirror images of each other.

    Parameters
    ----------
    params : SimulationParameters
        Market and simulation parameters
    rng : np.random.Generator, optional
        Random source. Takes precedence over seed.
    seed : int, optional
        Seed for a fresh numpy Generator when rng is not given
    jumps : JumpConfig
        Merton jump parameters, used when params.jump_diffusion is set

    Returns
    -------
    PathResult
        Simulated paths and metadata

    Notes
    -----
    [T1] Jump term: with probability λ·dt per step a log jump
    μ_J + σ_J·Z_J is added. The diffusion drift is not compensated
    for the jumps.

    Examples
    --------
    >>> params = SimulationParameters(spot=100, strike=100, volatility=0.2,
    ...                               rate=0.05, time_to_expiry=1.0,
    ...                               n_steps=50, n_paths=1000)
    >>> result = generate_paths(params, seed=42)
    >>> result.paths.shape
    (1000, 51)
    """
    if rng is None:
        rng = np.random.default_rng(seed)

    n_paths = params.n_paths
    n_steps = params.n_steps
    dt = params.dt

    drift_per_step = params.drift * dt
    vol_per_step = params.volatility * math.sqrt(dt)
    jump_probability = jumps.intensity * dt

    paths = np.empty((n_paths, n_steps + 1))
    paths[:, 0] = params.spot

    for step in range(n_steps):
        z = generate_standard_normals(
            n_paths,
            rng,
            antithetic=params.antithetic,
            stratified=params.stratified,
            permute_strata=True,
        )
        movement = drift_per_step + vol_per_step * z

        if params.jump_diffusion:
            jump_occurs = rng.random(n_paths) < jump_probability
            jump_size = jumps.mean + jumps.volatility * normal_inverse(
                open_uniforms(rng, n_paths)
            )
            movement = movement + np.where(jump_occurs, jump_size, 0.0)

        paths[:, step + 1] = paths[:, step] * np.exp(movement)

    times = np.linspace(0.0, params.time_to_expiry, n_steps + 1)

    return PathResult(paths=paths, times=times, params=params, seed=seed)
