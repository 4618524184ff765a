"""
Monte Carlo estimator statistics.

Turns a sample of discounted path payoffs into a price, a standard error
and a normal-approximation confidence interval. Shared by every payoff
evaluator so discounting and interval construction happen in one place.

[T1] MC converges to the true price at rate 1/√N
[T1] 95% CI: mean ± 1.96 · s/√N, s the sample standard deviation (ddof=1)

See: Glasserman (2003) Section 1.1.3
"""

import math
from dataclasses import dataclass

import numpy as np

from exotic_pricing.config.settings import SETTINGS
from exotic_pricing.options.simulation.gbm import PathResult


@dataclass(frozen=True)
class ConfidenceInterval:
    """
    Normal-approximation confidence interval.

    Attributes
    ----------
    mean : float
        Sample mean
    lower : float
        mean - z · stderr
    upper : float
        mean + z · stderr
    """

    mean: float
    lower: float
    upper: float

    @property
    def width(self) -> float:
        """Width of the interval."""
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        """Check lower <= value <= upper."""
        return self.lower <= value <= self.upper


@dataclass(frozen=True)
class PricingResult:
    """
    Monte Carlo pricing result.

    Attributes
    ----------
    price : float
        Option price (mean discounted payoff)
    confidence : ConfidenceInterval
        95% confidence interval around the price
    standard_error : float
        Standard error of the price estimate
    paths : PathResult
        Path set the payoffs were evaluated on
    payoffs : np.ndarray
        Discounted payoff per path, parallel-indexed to paths
    method : str
        Estimator label (e.g. "asian", "barrier-bgk", "asian-control-variate")
    """

    price: float
    confidence: ConfidenceInterval
    standard_error: float
    paths: PathResult
    payoffs: np.ndarray
    method: str = "monte-carlo"

    @property
    def n_paths(self) -> int:
        """Number of payoffs in the estimate."""
        return len(self.payoffs)

    @property
    def relative_error(self) -> float:
        """Relative standard error (SE / price)."""
        if abs(self.price) < 1e-10:
            return float("inf")
        return self.standard_error / abs(self.price)

    def sample_paths(self, k: int = SETTINGS.simulation.display_paths) -> np.ndarray:
        """
        Bounded sample of paths for display.

        Parameters
        ----------
        k : int
            Maximum number of paths to return

        Returns
        -------
        np.ndarray
            The first min(k, n_paths) paths, shape (k, n_steps + 1)
        """
        return self.paths.paths[:k].copy()


def confidence_interval(
    values: np.ndarray,
    z: float = SETTINGS.risk.confidence_z,
) -> tuple[ConfidenceInterval, float]:
    """
    Mean and normal-approximation confidence interval of a sample.

    Parameters
    ----------
    values : np.ndarray
        Sample (discounted payoffs or bumped prices)
    z : float, default 1.96
        Normal quantile

    Returns
    -------
    tuple[ConfidenceInterval, float]
        (interval, standard error). With fewer than two values the
        standard error and bounds are nan.
    """
    values = np.asarray(values, dtype=float)
    mean = float(values.mean())

    if len(values) < 2:
        stderr = float("nan")
    else:
        stderr = float(values.std(ddof=1) / math.sqrt(len(values)))

    half_width = z * stderr
    return ConfidenceInterval(mean=mean, lower=mean - half_width, upper=mean + half_width), stderr


def build_pricing_result(
    discounted_payoffs: np.ndarray,
    paths: PathResult,
    method: str = "monte-carlo",
) -> PricingResult:
    """
    Assemble a PricingResult from discounted payoffs.

    Parameters
    ----------
    discounted_payoffs : np.ndarray
        Payoff per path, already multiplied by exp(-rT)
    paths : PathResult
        Path set the payoffs come from
    method : str
        Estimator label

    Returns
    -------
    PricingResult
        Price, interval and standard error
    """
    payoffs = np.asarray(discounted_payoffs, dtype=float)
    ci, stderr = confidence_interval(payoffs)

    return PricingResult(
        price=ci.mean,
        confidence=ci,
        standard_error=stderr,
        paths=paths,
        payoffs=payoffs,
        method=method,
    )
