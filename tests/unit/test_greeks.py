"""
Tests for finite-difference Greeks.

A deterministic Black-Scholes repricer isolates the difference formulas from
Monte Carlo noise.
"""

import math

import pytest
from scipy import stats

from exotic_pricing.errors import ParameterValidationError
from exotic_pricing.options.greeks import GreeksResult, estimate_greeks
from exotic_pricing.options.pricing.black_scholes import black_scholes_call
from exotic_pricing.options.simulation.gbm import SimulationParameters


def bs_repricer(calls=None):
    """Black-Scholes call as a repricer, optionally recording bumped params."""

    def reprice(params: SimulationParameters) -> float:
        if calls is not None:
            calls.append(params)
        return black_scholes_call(
            params.spot, params.strike, params.rate, params.volatility, params.time_to_expiry
        )

    return reprice


@pytest.fixture
def params(market_params_dict) -> SimulationParameters:
    return SimulationParameters(**market_params_dict, n_steps=10, n_paths=10)


class TestEstimateGreeks:
    """[T1] Finite differences against Black-Scholes Greeks."""

    @pytest.mark.unit
    def test_black_scholes_greeks(self, params):
        base = black_scholes_call(100.0, 100.0, 0.05, 0.2, 1.0)
        greeks = estimate_greeks(params, bs_repricer(), base_price=base)

        d1 = (0.05 + 0.02) / 0.2
        d2 = d1 - 0.2
        delta = stats.norm.cdf(d1)
        gamma = stats.norm.pdf(d1) / (100.0 * 0.2)
        vega = 100.0 * stats.norm.pdf(d1)
        rho = 100.0 * math.exp(-0.05) * stats.norm.cdf(d2)
        # dV/dT: value lost as maturity shortens
        theta = 100.0 * stats.norm.pdf(d1) * 0.2 / 2 + 0.05 * rho

        assert greeks.delta == pytest.approx(delta, abs=1e-4)
        assert greeks.gamma == pytest.approx(gamma, rel=1e-3)
        assert greeks.vega == pytest.approx(vega, rel=0.01)
        assert greeks.rho == pytest.approx(rho, rel=0.01)
        assert greeks.theta == pytest.approx(theta, rel=0.02)

    @pytest.mark.unit
    def test_bumps(self, params):
        calls = []
        estimate_greeks(params, bs_repricer(calls), base_price=10.0)

        assert [c.spot for c in calls[:2]] == pytest.approx([101.0, 99.0])
        assert calls[2].time_to_expiry == pytest.approx(0.99)
        assert calls[3].volatility == pytest.approx(0.202)
        assert calls[4].rate == pytest.approx(0.0505)
        assert len(calls) == 5

    @pytest.mark.unit
    def test_zero_rate_rho_undefined(self, params, caplog):
        """r = 0: rho is nan, the rate bump is skipped, a warning is logged."""
        calls = []
        zero_rate = params.bumped(rate=0.0)
        with caplog.at_level("WARNING"):
            greeks = estimate_greeks(zero_rate, bs_repricer(calls), base_price=8.0)

        assert math.isnan(greeks.rho)
        assert greeks.undefined == ("rho",)
        assert len(calls) == 4
        assert "Rho is undefined" in caplog.text

    @pytest.mark.unit
    @pytest.mark.parametrize("bump", [0.0, 1.0, -0.01])
    def test_invalid_bump(self, params, bump):
        with pytest.raises(ParameterValidationError, match="bump must be in"):
            estimate_greeks(params, bs_repricer(), base_price=10.0, bump=bump)


class TestGreeksResult:
    """Tests for GreeksResult."""

    @pytest.mark.unit
    def test_all_defined(self):
        result = GreeksResult(delta=0.5, gamma=0.02, theta=-6.0, vega=38.0, rho=50.0)
        assert result.undefined == ()
        assert result.to_dict() == {
            "delta": 0.5, "gamma": 0.02, "theta": -6.0, "vega": 38.0, "rho": 50.0,
        }

    @pytest.mark.unit
    def test_infinite_is_undefined(self):
        result = GreeksResult(delta=float("inf"), gamma=0.0, theta=0.0, vega=0.0, rho=float("nan"))
        assert result.undefined == ("delta", "rho")
