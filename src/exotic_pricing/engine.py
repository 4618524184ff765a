"""
Request/response boundary of the pricing core.

A PricingRequest names the variant by tag ("asian-call",
"barrier-up-out-call", "lookback-floating-put", ...) and carries the
market/simulation parameters. price_request runs the whole pipeline:

    paths -> payoff evaluator -> control variate / monitoring correction
          -> Greeks (full re-simulation per bump) -> risk metrics

Variants form a closed set and are dispatched explicitly by type.

Examples
--------
>>> params = SimulationParameters(spot=100, strike=100, volatility=0.2,
...                               rate=0.05, time_to_expiry=1.0,
...                               n_steps=50, n_paths=2000)
>>> request = PricingRequest("lookback-fixed-call", params, compute_greeks=False)
>>> response = price_request(request, seed=42)
>>> response.pricing.price > response.raw_pricing.price
True
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from exotic_pricing.config.settings import SETTINGS
from exotic_pricing.errors import InvalidVariantError, UnsupportedAnalyticalError
from exotic_pricing.options.greeks import GreeksResult, estimate_greeks
from exotic_pricing.options.payoffs.asian import price_asian, price_asian_control_variate
from exotic_pricing.options.payoffs.barrier import (
    adjust_for_continuous_barrier,
    price_barrier,
)
from exotic_pricing.options.payoffs.base import (
    AsianSpec,
    AverageType,
    BarrierDirection,
    BarrierSpec,
    KnockType,
    LookbackSpec,
    LookbackType,
    OptionType,
    OptionVariant,
)
from exotic_pricing.options.payoffs.lookback import (
    adjust_for_continuous_monitoring,
    price_lookback,
)
from exotic_pricing.options.pricing import (
    barrier_price,
    geometric_asian_price,
    lookback_price,
)
from exotic_pricing.options.risk_metrics import RiskMetricsResult, calculate_risk_metrics
from exotic_pricing.options.simulation import (
    PricingResult,
    SimulationParameters,
    generate_paths,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Variant tags
# =============================================================================

_OPTION_TYPES = {t.value: t for t in OptionType}
_DIRECTIONS = {d.value: d for d in BarrierDirection}
_KNOCKS = {k.value: k for k in KnockType}
_LOOKBACK_TYPES = {t.value: t for t in LookbackType}


def parse_variant(
    tag: str,
    *,
    barrier: Optional[float] = None,
    average_type: AverageType = AverageType.ARITHMETIC,
) -> OptionVariant:
    """
    Build an option variant from its tag.

    Parameters
    ----------
    tag : str
        One of "asian-{call,put}", "barrier-{up,down}-{in,out}-{call,put}",
        "lookback-{fixed,floating}-{call,put}" (case-insensitive)
    barrier : float, optional
        Barrier level, required for barrier tags
    average_type : AverageType, default ARITHMETIC
        Averaging method for Asian tags

    Returns
    -------
    OptionVariant
        AsianSpec, BarrierSpec or LookbackSpec

    Raises
    ------
    InvalidVariantError
        Unknown tag, or a barrier tag without a barrier level

    Examples
    --------
    >>> parse_variant("barrier-down-in-put", barrier=90.0).knock
    <KnockType.IN: 'in'>
    """
    parts = tag.strip().lower().split("-")
    family = parts[0]

    if family == "asian" and len(parts) == 2 and parts[1] in _OPTION_TYPES:
        return AsianSpec(option_type=_OPTION_TYPES[parts[1]], average_type=average_type)

    if (
        family == "barrier"
        and len(parts) == 4
        and parts[1] in _DIRECTIONS
        and parts[2] in _KNOCKS
        and parts[3] in _OPTION_TYPES
    ):
        if barrier is None:
            raise InvalidVariantError(tag, "barrier level required for barrier variant")
        return BarrierSpec(
            option_type=_OPTION_TYPES[parts[3]],
            barrier=barrier,
            direction=_DIRECTIONS[parts[1]],
            knock=_KNOCKS[parts[2]],
        )

    if (
        family == "lookback"
        and len(parts) == 3
        and parts[1] in _LOOKBACK_TYPES
        and parts[2] in _OPTION_TYPES
    ):
        return LookbackSpec(
            option_type=_OPTION_TYPES[parts[2]],
            lookback_type=_LOOKBACK_TYPES[parts[1]],
        )

    raise InvalidVariantError(tag)


# =============================================================================
# Request / Response
# =============================================================================

@dataclass(frozen=True)
class PricingRequest:
    """
    One pricing request.

    Attributes
    ----------
    variant_tag : str
        Option variant tag (see parse_variant)
    params : SimulationParameters
        Market and simulation parameters
    barrier : float, optional
        Barrier level for barrier variants
    average_type : AverageType
        Asian averaging method
    use_control_variate : bool
        Apply the geometric control variate (Asian only)
    compute_greeks : bool
        Estimate Greeks by bump-and-reprice
    compute_risk_metrics : bool
        Compute VaR / Sharpe / Sortino of the base paths
    """

    variant_tag: str
    params: SimulationParameters
    barrier: Optional[float] = None
    average_type: AverageType = AverageType.ARITHMETIC
    use_control_variate: bool = False
    compute_greeks: bool = True
    compute_risk_metrics: bool = True

    def __post_init__(self) -> None:
        """Validate variant tag and barrier placement."""
        variant = self.variant
        if isinstance(variant, BarrierSpec):
            variant.validate_against_spot(self.params.spot)

    @property
    def variant(self) -> OptionVariant:
        """Parsed option variant."""
        return parse_variant(
            self.variant_tag,
            barrier=self.barrier,
            average_type=self.average_type,
        )


@dataclass(frozen=True)
class PricingResponse:
    """
    Result of price_request.

    Attributes
    ----------
    pricing : PricingResult
        Final estimate: control-variate adjusted (Asian, when requested) or
        continuous-monitoring corrected (Barrier, Lookback)
    raw_pricing : PricingResult
        Plain discrete-monitoring estimate on the same paths
    greeks : GreeksResult, optional
        Finite-difference Greeks of the final price
    risk_metrics : RiskMetricsResult, optional
        Statistics of the base path set
    variant : OptionVariant
        Parsed variant that was priced
    """

    pricing: PricingResult
    raw_pricing: PricingResult
    greeks: Optional[GreeksResult]
    risk_metrics: Optional[RiskMetricsResult]
    variant: OptionVariant

    @property
    def price(self) -> float:
        """Final price."""
        return self.pricing.price


# =============================================================================
# Pipeline
# =============================================================================

def _evaluate(
    params: SimulationParameters,
    variant: OptionVariant,
    rng: np.random.Generator,
    use_control_variate: bool = False,
    seed: Optional[int] = None,
) -> tuple[PricingResult, PricingResult]:
    """Simulate fresh paths and return (final, raw) estimates."""
    paths = generate_paths(params, rng=rng, seed=seed)

    if isinstance(variant, AsianSpec):
        raw = price_asian(params, variant, paths)
        if use_control_variate:
            return price_asian_control_variate(params, variant, paths), raw
        return raw, raw

    if isinstance(variant, BarrierSpec):
        raw = price_barrier(params, variant, paths)
        return adjust_for_continuous_barrier(params, variant, paths), raw

    if isinstance(variant, LookbackSpec):
        raw = price_lookback(params, variant, paths)
        return adjust_for_continuous_monitoring(params, variant, raw), raw

    raise InvalidVariantError(repr(variant), "unsupported variant type")


def _resolve_rng(
    seed: Optional[int],
    rng: Optional[np.random.Generator],
) -> tuple[np.random.Generator, Optional[int]]:
    if rng is not None:
        return rng, seed
    if seed is None:
        seed = SETTINGS.simulation.seed
    return np.random.default_rng(seed), seed


def price_request(
    request: PricingRequest,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> PricingResponse:
    """
    Price a request end to end.

    Parameters
    ----------
    request : PricingRequest
        What to price
    seed : int, optional
        Seed for a fresh numpy Generator; falls back to the configured
        default seed (EXOTIC_PRICING_SEED)
    rng : np.random.Generator, optional
        Random source, takes precedence over seed. Base and bumped
        simulations draw from it in sequence.

    Returns
    -------
    PricingResponse
        Final and raw estimates, Greeks and risk metrics
    """
    rng, seed = _resolve_rng(seed, rng)
    variant = request.variant
    params = request.params

    use_cv = request.use_control_variate
    if use_cv and not isinstance(variant, AsianSpec):
        logger.warning(f"Control variate only applies to Asian variants, ignored for {variant.tag}")
        use_cv = False

    logger.info(
        f"Pricing {variant.tag}: {params.n_paths:,} paths x {params.n_steps} steps"
    )
    pricing, raw = _evaluate(params, variant, rng, use_control_variate=use_cv, seed=seed)
    logger.info(
        f"Price {pricing.price:.4f} ({pricing.method}), "
        f"raw {raw.price:.4f}, SE {pricing.standard_error:.4f}"
    )

    greeks = None
    if request.compute_greeks:
        logger.info("Estimating Greeks by bump-and-reprice")

        def reprice(bumped: SimulationParameters) -> float:
            return _evaluate(bumped, variant, rng, use_control_variate=use_cv)[0].price

        greeks = estimate_greeks(params, reprice, base_price=pricing.price)

    risk_metrics = None
    if request.compute_risk_metrics:
        logger.info("Computing risk metrics")
        risk_metrics = calculate_risk_metrics(pricing.paths, params.rate)

    return PricingResponse(
        pricing=pricing,
        raw_pricing=raw,
        greeks=greeks,
        risk_metrics=risk_metrics,
        variant=variant,
    )


def price_analytical(request: PricingRequest) -> float:
    """
    Closed-form price of the requested variant under continuous monitoring.

    Available for geometric Asians, up-and-out calls, down-and-out puts and
    all four lookbacks (r != 0).

    Raises
    ------
    UnsupportedAnalyticalError
        When no closed form exists for the variant
    """
    variant = request.variant
    p = request.params

    if isinstance(variant, AsianSpec):
        if variant.average_type != AverageType.GEOMETRIC:
            raise UnsupportedAnalyticalError(
                "No closed form for arithmetic Asian options; use the control variate estimate"
            )
        return geometric_asian_price(
            p.spot, p.strike, p.rate, p.volatility, p.time_to_expiry,
            p.n_steps, variant.option_type,
        )

    if isinstance(variant, BarrierSpec):
        return barrier_price(
            p.spot, p.strike, variant.barrier, p.rate, p.volatility, p.time_to_expiry,
            variant.option_type, variant.direction, variant.knock,
        )

    if isinstance(variant, LookbackSpec):
        return lookback_price(
            p.spot, p.strike, p.rate, p.volatility, p.time_to_expiry,
            variant.option_type, variant.lookback_type,
        )

    raise InvalidVariantError(repr(variant), "unsupported variant type")


# =============================================================================
# Convergence
# =============================================================================

def convergence_analysis(
    request: PricingRequest,
    path_counts: Sequence[int] = (1000, 5000, 10000, 50000),
    seed: int = 42,
) -> pd.DataFrame:
    """
    Price the request at increasing path counts.

    [T1] MC error should converge at rate 1/√N.

    Parameters
    ----------
    request : PricingRequest
        Base request; Greeks and risk metrics are not computed
    path_counts : Sequence[int]
        Numbers of paths to test
    seed : int
        Random seed, reused for every path count

    Returns
    -------
    pd.DataFrame
        One row per path count: n_paths, price, standard_error, ci_lower,
        ci_upper, analytical_price, absolute_error, within_ci. The
        analytical columns are nan when no closed form exists.
    """
    try:
        analytical = price_analytical(request)
    except UnsupportedAnalyticalError:
        analytical = float("nan")

    rows = []
    for n in path_counts:
        sized = dataclasses.replace(
            request,
            params=request.params.bumped(n_paths=n),
            compute_greeks=False,
            compute_risk_metrics=False,
        )
        pricing = price_request(sized, seed=seed).pricing
        rows.append(
            {
                "n_paths": n,
                "price": pricing.price,
                "standard_error": pricing.standard_error,
                "ci_lower": pricing.confidence.lower,
                "ci_upper": pricing.confidence.upper,
                "analytical_price": analytical,
                "absolute_error": abs(pricing.price - analytical),
                "within_ci": pricing.confidence.contains(analytical),
            }
        )

    return pd.DataFrame(rows)


def estimate_convergence_rate(frame: pd.DataFrame) -> float:
    """
    Fitted exponent of standard error vs path count.

    [T1] Should be close to -0.5. Returns nan with fewer than two usable rows.
    """
    usable = frame[(frame["standard_error"] > 0) & np.isfinite(frame["standard_error"])]
    if len(usable) < 2:
        return float("nan")
    slope, _ = np.polyfit(
        np.log(usable["n_paths"].astype(float)),
        np.log(usable["standard_error"].astype(float)),
        1,
    )
    return float(slope)
