"""
Risk statistics of the simulated underlying.

Computed from the log returns ln(S_T / S0) of the base path set, not from
option payoffs.

[T1] Historical-simulation VaR at level α: -r_(⌊α·m⌋) on sorted returns
[T1] Sharpe:  (mean - r) / std (ddof=1)
[T1] Sortino: (mean - r) / sqrt(Σ_{r_i<0} r_i² / #{r_i<0})

Returns are not annualized and the risk-free rate is compared as given.
"""

import logging
import math
from dataclasses import dataclass, fields

import numpy as np

from exotic_pricing.config.settings import SETTINGS
from exotic_pricing.errors import ParameterValidationError
from exotic_pricing.options.simulation.gbm import PathResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskMetricsResult:
    """
    Immutable risk statistics.

    Attributes
    ----------
    var95 : float
        Value at risk of the log return (positive = loss)
    sharpe_ratio : float
        Excess mean return per unit standard deviation
    sortino_ratio : float
        Excess mean return per unit downside deviation; nan without
        negative returns
    """

    var95: float
    sharpe_ratio: float
    sortino_ratio: float

    @property
    def undefined(self) -> tuple[str, ...]:
        """Names of non-finite metrics."""
        return tuple(f.name for f in fields(self) if not math.isfinite(getattr(self, f.name)))

    def to_dict(self) -> dict[str, float]:
        """Metrics keyed by name."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def value_at_risk(returns: np.ndarray, level: float = SETTINGS.risk.var_level) -> float:
    """
    Empirical value at risk.

    Parameters
    ----------
    returns : np.ndarray
        Sample of returns
    level : float, default 0.05
        Tail probability

    Returns
    -------
    float
        Negated ⌊level·m⌋-th order statistic (0-based)
    """
    if not 0 < level < 1:
        raise ParameterValidationError(f"CRITICAL: level must be in (0, 1), got {level}")
    ordered = np.sort(returns)
    index = int(math.floor(level * len(ordered)))
    return float(-ordered[index])


def sharpe_ratio(returns: np.ndarray, rate: float) -> float:
    """Excess mean over sample standard deviation; ±inf or nan for zero dispersion."""
    if len(returns) < 2:
        return float("nan")
    excess = float(np.mean(returns)) - rate
    std = float(np.std(returns, ddof=1))
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(excess) / np.float64(std))


def sortino_ratio(returns: np.ndarray, rate: float) -> float:
    """Excess mean over downside deviation; nan when no return is negative."""
    negative = returns[returns < 0]
    if len(negative) == 0:
        return float("nan")
    excess = float(np.mean(returns)) - rate
    downside = math.sqrt(float(np.sum(negative**2)) / len(negative))
    return excess / downside


def calculate_risk_metrics(
    paths: PathResult,
    rate: float,
    level: float = SETTINGS.risk.var_level,
) -> RiskMetricsResult:
    """
    Risk statistics from the terminal prices of a path set.

    Parameters
    ----------
    paths : PathResult
        Base simulated paths
    rate : float
        Risk-free rate used as the Sharpe/Sortino hurdle
    level : float, default 0.05
        VaR tail probability

    Returns
    -------
    RiskMetricsResult
        VaR, Sharpe and Sortino ratios. Degenerate ratios are non-finite
        and logged at WARNING.
    """
    returns = paths.log_returns

    result = RiskMetricsResult(
        var95=value_at_risk(returns, level),
        sharpe_ratio=sharpe_ratio(returns, rate),
        sortino_ratio=sortino_ratio(returns, rate),
    )

    if result.undefined:
        logger.warning(f"Undefined risk metrics: {', '.join(result.undefined)}")

    return result
