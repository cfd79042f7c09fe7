"""
Unit tests for risk module.
"""

from datetime import date, datetime, timedelta
import math

import pandas as pd
import pytest

from curvekit.curves import Curve, CurvePointStore, InterpolationPolicy, create_flat_curve
from curvekit.risk import (
    BumpEngine,
    BumpResult,
    DailyForwardSeries,
    RiskMetrics,
    TenorDV01,
    convexity_heuristic,
    curve_profile,
    forward_rate,
    point_forward_rates,
    reference_portfolio_pv,
)


VALUATION_DATE = date(2024, 1, 15)

SOFR_QUOTES = [
    ("1M", 5.318, 30),
    ("3M", 5.382, 90),
    ("6M", 5.452, 180),
    ("1Y", 5.445, 365),
    ("2Y", 4.990, 730),
    ("5Y", 4.352, 1825),
    ("10Y", 4.201, 3650),
]


@pytest.fixture
def curve():
    return Curve(SOFR_QUOTES, valuation_date=VALUATION_DATE)


class TestForwardRates:
    """Tests for forward rate calculations."""

    def test_forward_formula(self):
        """f = (r2*t2 - r1*t1) / (t2 - t1)."""
        fwd = forward_rate(5.445, 365, 4.990, 730)
        expected = (0.04990 * 2 - 0.05445 * 1) / (2 - 1) * 100
        assert abs(fwd - expected) < 1e-12

    def test_forward_requires_later_date(self):
        with pytest.raises(ValueError):
            forward_rate(5.0, 365, 5.0, 365)

    def test_point_forwards(self, curve):
        """The first point's forward is its spot rate; later points pair with their predecessor."""
        points = point_forward_rates(curve)

        assert [p.tenor for p in points] == [p.tenor for p in curve.points]
        assert points[0].forward_rate == 5.318
        assert abs(points[4].forward_rate - forward_rate(5.445, 365, 4.990, 730)) < 1e-12

    def test_point_forwards_do_not_mutate(self, curve):
        point_forward_rates(curve)
        assert all(p.forward_rate is None for p in curve.points)

    def test_flat_curve_forwards(self):
        """Forwards on a flat curve equal the flat rate."""
        flat = create_flat_curve(4.0)
        for p in point_forward_rates(flat.store):
            assert abs(p.forward_rate - 4.0) < 1e-10


class TestDailyForwardSeries:
    """Tests for the daily forward series."""

    def test_length_inclusive(self, curve):
        series = DailyForwardSeries(curve, date(2024, 2, 1), date(2024, 2, 29))
        assert len(series) == 29
        assert len(list(series)) == 29

    def test_restartable(self, curve):
        """Iterating twice yields the same values."""
        series = DailyForwardSeries(curve, VALUATION_DATE, date(2024, 3, 15))
        assert list(series) == list(series)

    def test_uses_one_day_forward(self, curve):
        series = DailyForwardSeries(curve, date(2024, 6, 1), date(2024, 6, 1))
        (entry,) = list(series)
        n = curve.days_from(date(2024, 6, 1))

        assert entry.date == date(2024, 6, 1)
        expected = forward_rate(curve.get_rate(n), n, curve.get_rate(n + 1), n + 1)
        assert entry.forward_rate == expected

    def test_empty_range(self, curve):
        series = DailyForwardSeries(curve, date(2024, 3, 1), date(2024, 2, 1))
        assert len(series) == 0
        assert list(series) == []

    def test_flat_curve(self):
        flat = create_flat_curve(4.0, valuation_date=VALUATION_DATE)
        for entry in DailyForwardSeries(flat, VALUATION_DATE, date(2024, 2, 15)):
            assert abs(entry.forward_rate - 4.0) < 1e-8

    def test_to_frame(self, curve):
        df = DailyForwardSeries(curve, VALUATION_DATE, date(2024, 1, 21)).to_frame()
        assert list(df.columns) == ["date", "forward_rate"]
        assert len(df) == 7

    def test_datetime_bounds(self, curve):
        """Datetimes and Timestamps are truncated to calendar dates."""
        series = DailyForwardSeries(curve, datetime(2024, 1, 15, 9, 30), pd.Timestamp("2024-01-20 17:00"))
        entries = list(series)

        assert len(series) == 6
        assert [e.date for e in entries] == [VALUATION_DATE + timedelta(days=i) for i in range(6)]
        assert entries == list(DailyForwardSeries(curve, VALUATION_DATE, date(2024, 1, 20)))


class TestForwardJumps:
    """Tests for day-to-day forward jump detection."""

    @pytest.fixture
    def step_series(self, curve):
        """Step-forward curve around the 3M tenor (day 90)."""
        step = curve.with_policy("STEP_FORWARD")
        start = VALUATION_DATE + timedelta(days=80)
        end = VALUATION_DATE + timedelta(days=100)
        return DailyForwardSeries(step, start, end)

    def test_step_boundary_flagged(self, step_series):
        """Crossing a tenor under STEP_FORWARD spikes the one-day forward."""
        jumps = step_series.jumps()

        assert [j.date for j in jumps] == [
            VALUATION_DATE + timedelta(days=89),
            VALUATION_DATE + timedelta(days=90),
        ]
        spike = forward_rate(5.318, 89, 5.382, 90)
        assert abs(jumps[0].diff - abs(spike - 5.318)) < 1e-9
        assert abs(jumps[1].diff - abs(5.382 - spike)) < 1e-9

    def test_flat_curve_has_no_jumps(self):
        flat = create_flat_curve(4.0, valuation_date=VALUATION_DATE)
        series = DailyForwardSeries(flat, VALUATION_DATE, date(2025, 1, 15))
        assert series.jumps() == []

    def test_threshold_is_strict(self, step_series):
        """A move exactly equal to the threshold is not reported."""
        forwards = {e.date: e.forward_rate for e in step_series}
        d90 = VALUATION_DATE + timedelta(days=90)
        d89 = VALUATION_DATE + timedelta(days=89)
        diff = abs(forwards[d90] - forwards[d89])

        assert d90 not in [j.date for j in step_series.jumps(threshold=diff)]
        assert d90 in [j.date for j in step_series.jumps(threshold=diff - 1e-9)]

    def test_small_moves_ignored(self, curve):
        """Log-linear forwards drift by well under 10bp per day."""
        series = DailyForwardSeries(curve, date(2024, 3, 1), date(2024, 3, 31))
        assert series.jumps() == []


class TestCurveProfile:
    """Tests for sampled curve profiles."""

    def test_sampling_grid(self, curve):
        """Daily for the first year, weekly after."""
        profile = curve_profile(curve)
        days = profile["days"].tolist()

        assert days[:366] == list(range(366))
        assert all(b - a == 7 for a, b in zip(days[365:], days[366:]))
        assert days[-1] <= 730

    def test_columns(self, curve):
        profile = curve_profile(curve, horizon_days=30)
        assert list(profile.columns) == ["days", "date", "spot_rate", "forward_rate", "discount_factor"]
        assert profile["date"].iloc[0] == VALUATION_DATE
        assert abs(profile["discount_factor"].iloc[30] - curve.discount_factor(30)) < 1e-12


class TestReferencePortfolio:
    """Tests for the DV01 reference portfolio."""

    def test_single_point_pv(self):
        store = CurvePointStore([("1Y", 5.445, 365)])
        expected = 1_000_000 * (1 - math.exp(-0.05445)) / 1.0
        assert abs(reference_portfolio_pv(store) - expected) < 1e-8

    def test_zero_day_point_ignored(self):
        store = CurvePointStore([("ON", 5.3, 0), ("1Y", 5.445, 365)])
        assert reference_portfolio_pv(store) == reference_portfolio_pv(CurvePointStore([("1Y", 5.445, 365)]))


class TestBumpEngine:
    """Tests for bump-and-reprice DV01."""

    def test_point_bump_leaves_base(self, curve):
        engine = BumpEngine(curve)
        bumped = engine.point_bump(2)

        assert abs(bumped[2].rate - 5.462) < 1e-12
        assert engine.base_store[2].rate == 5.452
        assert [p.rate for i, p in enumerate(bumped) if i != 2] == \
            [p.rate for i, p in enumerate(curve.points) if i != 2]

    def test_single_point_dv01(self):
        store = CurvePointStore([("1Y", 5.445, 365)])
        (item,) = BumpEngine(store).compute_point_dv01()

        base = 1_000_000 * (1 - math.exp(-0.05445))
        bumped = 1_000_000 * (1 - math.exp(-0.05455))
        assert item.tenor == "1Y"
        assert abs(item.dv01 - abs(bumped - base) / 0.01) < 1e-6

    def test_dv01_non_negative(self, curve):
        ladder = BumpEngine(curve).compute_point_dv01()
        assert len(ladder) == len(curve)
        assert all(item.dv01 >= 0 for item in ladder)

    def test_dv01_independent_of_policy(self, curve):
        """Bumps reprice each point's own discount factor, not the interpolated curve."""
        base = [item.dv01 for item in BumpEngine(curve).compute_point_dv01()]
        for policy in InterpolationPolicy:
            other = [item.dv01 for item in BumpEngine(curve.with_policy(policy)).compute_point_dv01()]
            assert other == base

    def test_dv01_not_propagated(self, curve):
        """Bumping one point leaves every other point's term unchanged."""
        engine = BumpEngine(curve)
        result = engine.bump_and_reprice(4)

        bumped_store = engine.point_bump(4)
        single_base = reference_portfolio_pv(CurvePointStore([SOFR_QUOTES[4]]))
        single_bumped = reference_portfolio_pv(CurvePointStore([bumped_store[4]]))
        assert abs(result.delta_pv - (single_bumped - single_base)) < 1e-6

    def test_zero_day_point_has_zero_dv01(self):
        store = CurvePointStore([("ON", 5.3, 0), ("1Y", 5.445, 365)])
        ladder = BumpEngine(store).compute_point_dv01()
        assert ladder[0].dv01 == 0.0
        assert ladder[1].dv01 > 0

    def test_bump_result(self):
        result = BumpResult(tenor="1Y", original_pv=100.0, bumped_pv=99.5, bump_size=0.01)
        assert result.delta_pv == -0.5
        assert abs(result.dv01 - 50.0) < 1e-12


class TestRiskMetrics:
    """Tests for risk containers and heuristics."""

    def test_convexity_heuristic(self):
        """notional * years^2 * 0.01."""
        assert abs(convexity_heuristic(1_000_000, 1825) - 250_000.0) < 1e-6

    def test_dv01_map_and_frame(self):
        metrics = RiskMetrics(
            pv=10.0,
            dv01=3.0,
            dv01_by_tenor=[TenorDV01("1Y", 1.0), TenorDV01("2Y", 2.0)],
        )
        assert metrics.dv01_map == {"1Y": 1.0, "2Y": 2.0}
        assert isinstance(metrics.dv01_frame(), pd.DataFrame)
        assert metrics.to_dict()["dv01_by_tenor"] == [
            {"tenor": "1Y", "dv01": 1.0},
            {"tenor": "2Y", "dv01": 2.0},
        ]
