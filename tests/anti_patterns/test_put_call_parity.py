"""
Anti-pattern test: Put-call parity for path-dependent payoffs.

[T1] max(X - K, 0) - max(K - X, 0) = X - K for any underlying X, so on a
common path set the call and put estimates differ by exactly the
discounted mean of X - K.
"""

import numpy as np
import pytest

from exotic_pricing.options.payoffs.asian import (
    arithmetic_average,
    geometric_average,
    price_asian,
)
from exotic_pricing.options.payoffs.base import AsianSpec, AverageType, OptionType
from exotic_pricing.options.pricing import geometric_asian_price
from exotic_pricing.options.simulation import SimulationParameters, generate_paths


@pytest.fixture(scope="module")
def params() -> SimulationParameters:
    return SimulationParameters(
        spot=100.0, strike=95.0, volatility=0.25, rate=0.03,
        time_to_expiry=2.0, n_steps=24, n_paths=5_000,
    )


@pytest.fixture(scope="module")
def paths(params):
    return generate_paths(params, seed=7)


class TestAsianParity:

    @pytest.mark.anti_pattern
    @pytest.mark.parametrize(
        "average, average_fn",
        [(AverageType.ARITHMETIC, arithmetic_average), (AverageType.GEOMETRIC, geometric_average)],
    )
    def test_pathwise_parity(self, params, paths, average, average_fn) -> None:
        call = price_asian(params, AsianSpec(OptionType.CALL, average), paths).price
        put = price_asian(params, AsianSpec(OptionType.PUT, average), paths).price
        forward = params.discount_factor * np.mean(average_fn(paths.paths) - params.strike)

        assert call - put == pytest.approx(forward, abs=1e-10), (
            f"PARITY VIOLATION: C - P = {call - put}, expected {forward}"
        )

    @pytest.mark.anti_pattern
    def test_geometric_closed_form_parity(self) -> None:
        """
        [T1] C - P = e^(-rT)(E[G] - K) for the closed form as well.

        E[G] = S·exp(μ_G + σ_G²/2) with the discrete adjusted moments.
        """
        args = (100.0, 95.0, 0.03, 0.25, 2.0, 24)
        call = geometric_asian_price(*args, OptionType.CALL)
        put = geometric_asian_price(*args, OptionType.PUT)

        # Forward terms cancel between strikes
        call_2 = geometric_asian_price(100.0, 105.0, 0.03, 0.25, 2.0, 24, OptionType.CALL)
        put_2 = geometric_asian_price(100.0, 105.0, 0.03, 0.25, 2.0, 24, OptionType.PUT)
        discount = np.exp(-0.03 * 2.0)

        assert (call - put) - (call_2 - put_2) == pytest.approx(10.0 * discount, abs=1e-6)
