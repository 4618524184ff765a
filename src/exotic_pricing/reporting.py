"""
Pricing report generation.

[T2] Turns a PricingResponse into structured output for downstream
consumers:
- dict / JSON for machine consumption (CLI, display collaborators)
- pandas DataFrame, one row per quantity, for tabular display
- Markdown summary for humans

Non-finite values (undefined Greeks or ratios) are emitted as None in
JSON and NaN in the DataFrame.
"""

import json
import math
from typing import Any, Dict, Optional

import pandas as pd

from exotic_pricing.engine import PricingResponse
from exotic_pricing.options.simulation import PricingResult


def _finite_or_none(value: float) -> Optional[float]:
    value = float(value)
    return value if math.isfinite(value) else None


def _pricing_to_dict(result: PricingResult) -> Dict[str, Any]:
    return {
        "price": _finite_or_none(result.price),
        "standard_error": _finite_or_none(result.standard_error),
        "ci_lower": _finite_or_none(result.confidence.lower),
        "ci_upper": _finite_or_none(result.confidence.upper),
        "method": result.method,
        "n_paths": result.n_paths,
    }


def response_to_dict(
    response: PricingResponse,
    include_paths: int = 0,
) -> Dict[str, Any]:
    """
    Convert a response to a JSON-serializable dict.

    Parameters
    ----------
    response : PricingResponse
        Pricing response
    include_paths : int, default 0
        Number of sample paths to attach under "sample_paths" (0 = none)

    Returns
    -------
    dict
        Keys: variant, pricing, raw_pricing, greeks, risk_metrics
        [, sample_paths]
    """
    data: Dict[str, Any] = {
        "variant": response.variant.tag,
        "pricing": _pricing_to_dict(response.pricing),
        "raw_pricing": _pricing_to_dict(response.raw_pricing),
        "greeks": None,
        "risk_metrics": None,
    }

    if response.greeks is not None:
        data["greeks"] = {k: _finite_or_none(v) for k, v in response.greeks.to_dict().items()}

    if response.risk_metrics is not None:
        data["risk_metrics"] = {
            k: _finite_or_none(v) for k, v in response.risk_metrics.to_dict().items()
        }

    if include_paths > 0:
        data["sample_paths"] = response.pricing.sample_paths(include_paths).tolist()

    return data


def response_to_json(response: PricingResponse, indent: int = 2) -> str:
    """Serialize a response with json.dumps."""
    return json.dumps(response_to_dict(response), indent=indent)


def response_to_frame(response: PricingResponse) -> pd.DataFrame:
    """
    Long-form table of every reported quantity.

    Returns
    -------
    pd.DataFrame
        Columns: section, metric, value
    """
    rows = []

    for section, result in (("pricing", response.pricing), ("raw_pricing", response.raw_pricing)):
        rows.extend(
            {"section": section, "metric": metric, "value": value}
            for metric, value in (
                ("price", result.price),
                ("standard_error", result.standard_error),
                ("ci_lower", result.confidence.lower),
                ("ci_upper", result.confidence.upper),
            )
        )

    if response.greeks is not None:
        rows.extend(
            {"section": "greeks", "metric": k, "value": v}
            for k, v in response.greeks.to_dict().items()
        )

    if response.risk_metrics is not None:
        rows.extend(
            {"section": "risk_metrics", "metric": k, "value": v}
            for k, v in response.risk_metrics.to_dict().items()
        )

    return pd.DataFrame(rows, columns=["section", "metric", "value"])


def _fmt(value: float, spec: str = ".4f") -> str:
    return format(value, spec) if math.isfinite(value) else "undefined"


def response_to_markdown(
    response: PricingResponse,
    title: str = "Exotic Option Pricing",
) -> str:
    """
    Markdown summary of a response.

    Parameters
    ----------
    response : PricingResponse
        Pricing response
    title : str
        Report heading

    Returns
    -------
    str
        Markdown document
    """
    pricing = response.pricing
    raw = response.raw_pricing
    params = pricing.paths.params

    lines = [f"# {title}", ""]
    lines.append(f"**Variant**: `{response.variant.tag}`")
    lines.append(
        f"**Simulation**: {params.n_paths:,} paths x {params.n_steps} steps"
        f" (antithetic={params.antithetic}, stratified={params.stratified},"
        f" jumps={params.jump_diffusion})"
    )
    lines.append("")

    lines.append("## Price")
    lines.append("")
    lines.append("| Estimate | Price | Std Error | 95% CI |")
    lines.append("|----------|-------|-----------|--------|")
    for label, result in ((pricing.method, pricing), (f"{raw.method} (raw)", raw)):
        lines.append(
            f"| {label} | {_fmt(result.price)} | {_fmt(result.standard_error)} | "
            f"[{_fmt(result.confidence.lower)}, {_fmt(result.confidence.upper)}] |"
        )
    lines.append("")

    if response.greeks is not None:
        lines.append("## Greeks")
        lines.append("")
        lines.append("| Greek | Value |")
        lines.append("|-------|-------|")
        for name, value in response.greeks.to_dict().items():
            lines.append(f"| {name.capitalize()} | {_fmt(value)} |")
        lines.append("")

    if response.risk_metrics is not None:
        metrics = response.risk_metrics
        lines.append("## Risk Metrics")
        lines.append("")
        lines.append(f"- VaR (95%): {_fmt(metrics.var95 * 100, '.2f')}%")
        lines.append(f"- Sharpe Ratio: {_fmt(metrics.sharpe_ratio)}")
        lines.append(f"- Sortino Ratio: {_fmt(metrics.sortino_ratio)}")
        lines.append("")

    return "\n".join(lines)
