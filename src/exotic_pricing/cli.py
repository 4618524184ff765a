"""
Command-line interface: exotic-price.

Usage
-----
    exotic-price asian-call --spot 100 --strike 100 --vol 0.2 --rate 0.05
    exotic-price barrier-up-out-call --barrier 120 --format json
    exotic-price lookback-floating-put --paths 20000 --no-greeks --analytical

Exit codes: 0 on success, 2 on invalid input (bad tag, parameters or barrier).
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from exotic_pricing.config.settings import SETTINGS
from exotic_pricing.engine import PricingRequest, price_analytical, price_request
from exotic_pricing.errors import ParameterValidationError, UnsupportedAnalyticalError
from exotic_pricing.options.payoffs.base import AverageType
from exotic_pricing.options.simulation import SimulationParameters
from exotic_pricing.reporting import response_to_dict, response_to_markdown

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for exotic-price."""
    parser = argparse.ArgumentParser(
        prog="exotic-price",
        description="Monte Carlo pricing of Asian, barrier and lookback options",
    )
    parser.add_argument(
        "variant",
        help="Variant tag, e.g. asian-call, barrier-down-out-put, lookback-fixed-call",
    )
    parser.add_argument("--spot", type=float, default=100.0, help="Spot price S0")
    parser.add_argument("--strike", type=float, default=100.0, help="Strike price K")
    parser.add_argument("--vol", type=float, default=0.2, help="Volatility (decimal)")
    parser.add_argument("--rate", type=float, default=0.05, help="Risk-free rate (decimal)")
    parser.add_argument("--maturity", type=float, default=1.0, help="Time to expiry (years)")
    parser.add_argument("--steps", type=int, default=SETTINGS.simulation.n_steps, help="Time steps")
    parser.add_argument("--paths", type=int, default=SETTINGS.simulation.n_paths, help="Simulated paths")
    parser.add_argument("--barrier", type=float, default=None, help="Barrier level (barrier variants)")
    parser.add_argument(
        "--average",
        choices=[a.value for a in AverageType],
        default=AverageType.ARITHMETIC.value,
        help="Asian averaging method",
    )
    parser.add_argument("--control-variate", action="store_true", help="Geometric control variate (Asian)")
    parser.add_argument("--jumps", action="store_true", help="Merton jump diffusion")
    parser.add_argument("--no-antithetic", action="store_true", help="Disable antithetic variates")
    parser.add_argument("--no-stratified", action="store_true", help="Disable stratified sampling")
    parser.add_argument("--no-greeks", action="store_true", help="Skip Greeks")
    parser.add_argument("--no-risk", action="store_true", help="Skip risk metrics")
    parser.add_argument("--analytical", action="store_true", help="Also report the closed-form price")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline stages")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the exotic-price console script."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        params = SimulationParameters(
            spot=args.spot,
            strike=args.strike,
            volatility=args.vol,
            rate=args.rate,
            time_to_expiry=args.maturity,
            n_steps=args.steps,
            n_paths=args.paths,
            antithetic=not args.no_antithetic,
            stratified=not args.no_stratified,
            jump_diffusion=args.jumps,
        )
        request = PricingRequest(
            variant_tag=args.variant,
            params=params,
            barrier=args.barrier,
            average_type=AverageType(args.average),
            use_control_variate=args.control_variate,
            compute_greeks=not args.no_greeks,
            compute_risk_metrics=not args.no_risk,
        )
    except ParameterValidationError as e:
        logger.error(str(e))
        print(f"error: {e}", file=sys.stderr)
        return 2

    response = price_request(request, seed=args.seed)

    analytical = None
    if args.analytical:
        try:
            analytical = price_analytical(request)
        except UnsupportedAnalyticalError as e:
            logger.warning(f"No analytical price: {e}")

    if args.format == "json":
        payload = response_to_dict(response)
        payload["analytical_price"] = analytical
        print(json.dumps(payload, indent=2))
    else:
        print(response_to_markdown(response))
        if analytical is not None:
            print(f"Analytical price: {analytical:.4f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
