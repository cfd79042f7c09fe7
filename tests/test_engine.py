"""
Unit tests for engine entry points.
"""

from datetime import date, datetime, timedelta

import pytest

from curvekit import (
    InterpolationPolicy,
    build_curve,
    compute_dv01,
    get_curve_data,
    get_daily_forward_series,
    get_forward_jumps,
    get_forward_rates,
    get_rate,
    price_swap,
    set_policy,
)
from curvekit.errors import DuplicateTenorError


VALUATION_DATE = date(2024, 1, 15)

QUOTES = [
    {"tenor": "1M", "rate": 5.318, "days": 30},
    {"tenor": "1Y", "rate": 5.445, "days": 365},
    {"tenor": "2Y", "rate": 4.990, "days": 730},
    {"tenor": "5Y", "rate": 4.352, "days": 1825},
]


@pytest.fixture
def curve():
    return build_curve(QUOTES, valuation_date=VALUATION_DATE)


class TestCurveEntryPoints:
    """Tests for curve construction and queries."""

    def test_build_curve_default_policy(self, curve):
        assert curve.policy == InterpolationPolicy.LOG_LINEAR
        assert len(curve) == 4

    def test_build_curve_duplicate(self):
        with pytest.raises(DuplicateTenorError):
            build_curve(QUOTES + [{"tenor": "12M", "rate": 5.4, "days": 365}])

    def test_set_policy_returns_new_curve(self, curve):
        linear = set_policy(curve, "LINEAR")
        assert linear.policy == InterpolationPolicy.LINEAR
        assert curve.policy == InterpolationPolicy.LOG_LINEAR

    def test_get_rate(self, curve):
        assert get_rate(curve, 365) == 5.445
        assert get_rate(curve, VALUATION_DATE + timedelta(days=730)) == 4.990
        assert get_rate(set_policy(curve, "LINEAR"), 547) == pytest.approx(5.218, abs=1e-3)


class TestRiskEntryPoints:
    """Tests for forward and DV01 payloads."""

    def test_get_forward_rates(self, curve):
        forwards = get_forward_rates(curve)
        assert [f["tenor"] for f in forwards] == ["1M", "1Y", "2Y", "5Y"]
        assert forwards[0]["forward_rate"] == 5.318
        assert set(forwards[1]) == {"tenor", "forward_rate"}

    def test_get_daily_forward_series(self, curve):
        series = get_daily_forward_series(curve, VALUATION_DATE, VALUATION_DATE + timedelta(days=9))
        assert len(list(series)) == 10

    def test_get_daily_forward_series_datetimes(self, curve):
        series = get_daily_forward_series(curve, datetime(2024, 1, 15), datetime(2024, 1, 20))
        assert [f.date for f in series][-1] == date(2024, 1, 20)

    def test_get_forward_jumps(self, curve):
        """Stepping up to the 1Y quote at day 365 spikes the one-day forward."""
        jumps = get_forward_jumps(
            set_policy(curve, "STEP_FORWARD"),
            VALUATION_DATE + timedelta(days=360),
            VALUATION_DATE + timedelta(days=370),
        )
        assert [j["date"] for j in jumps] == [
            VALUATION_DATE + timedelta(days=364),
            VALUATION_DATE + timedelta(days=365),
        ]
        assert all(set(j) == {"date", "diff"} and j["diff"] > 0.1 for j in jumps)

    def test_compute_dv01(self, curve):
        dv01 = compute_dv01(curve)
        assert [d["tenor"] for d in dv01] == ["1M", "1Y", "2Y", "5Y"]
        assert all(d["dv01"] >= 0 for d in dv01)

    def test_get_curve_data(self, curve):
        plain = get_curve_data(curve)
        assert all(p.forward_rate is None and p.dv01 is None for p in plain)

        enriched = get_curve_data(curve, include_risk=True)
        dv01 = compute_dv01(curve)
        assert [p.dv01 for p in enriched] == [d["dv01"] for d in dv01]
        assert enriched[0].forward_rate == 5.318


class TestPriceSwapEntryPoint:
    """Tests for swap payloads."""

    def test_camel_case_payload(self, curve):
        metrics = price_swap(curve, {
            "notional": 1_000_000,
            "maturity": "5Y",
            "fixedRate": 4.5,
            "payReceive": "RECEIVE",
        })
        payer = price_swap(curve, {"notional": 1_000_000, "maturity": "5Y", "fixed_rate": 4.5})
        assert metrics.pv == -payer.pv

    def test_missing_field(self, curve):
        with pytest.raises(KeyError):
            price_swap(curve, {"notional": 1_000_000, "maturity": "5Y"})
