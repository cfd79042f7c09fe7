"""
Unit tests for market state.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from curvekit.curves import InterpolationPolicy
from curvekit.errors import DuplicateTenorError
from curvekit.market_state import MarketState


VALUATION_DATE = date(2024, 1, 15)

SOFR_QUOTES = [
    ("1M", 5.318, 30),
    ("3M", 5.382, 90),
    ("1Y", 5.445, 365),
    ("5Y", 4.352, 1825),
]


@pytest.fixture
def market():
    state = MarketState(VALUATION_DATE)
    state.load("USD_SOFR", SOFR_QUOTES, metadata={"index": "SOFR"})
    return state


class TestMarketState:
    """Tests for curve snapshots."""

    def test_load(self, market):
        state = market.get("USD_SOFR")
        assert state.version == 0
        assert state.valuation_date == VALUATION_DATE
        assert state.policy == InterpolationPolicy.LOG_LINEAR
        assert "USD_SOFR" in market
        assert market.list_curves() == ["USD_SOFR"]

    def test_unknown_curve(self, market):
        with pytest.raises(KeyError):
            market.get("EUR_ESTR")

    def test_update_rate(self, market):
        """Editing a quote installs a new curve; the old snapshot is untouched."""
        old = market.curve("USD_SOFR")
        state = market.update_rate("USD_SOFR", "1Y", 5.5)

        assert state.version == 1
        assert market.curve("USD_SOFR").get_rate(365) == 5.5
        assert old.get_rate(365) == 5.445
        assert state.metadata == {"index": "SOFR"}

    def test_update_unknown_tenor(self, market):
        with pytest.raises(KeyError):
            market.update_rate("USD_SOFR", "7Y", 4.0)
        assert market.get("USD_SOFR").version == 0

    def test_failed_rebuild_keeps_snapshot(self, market):
        """A rebuild that raises leaves the previous curve in place."""
        before = market.get("USD_SOFR")
        with pytest.raises(DuplicateTenorError):
            market.replace_quotes("USD_SOFR", [("1M", 5.3, 30), ("30D", 5.31, 30)])
        assert market.get("USD_SOFR") is before

    def test_set_policy(self, market):
        state = market.set_policy("USD_SOFR", "CUBIC_SPLINE")
        assert state.policy == InterpolationPolicy.CUBIC_SPLINE
        assert len(state.curve.spline_segments) == 3

    def test_replace_quotes_keeps_policy(self, market):
        market.set_policy("USD_SOFR", "LINEAR")
        state = market.replace_quotes("USD_SOFR", [("1Y", 5.0, 365), ("2Y", 4.8, 730)])
        assert state.policy == InterpolationPolicy.LINEAR
        assert len(state.curve) == 2
        assert state.version == 2

    def test_reload_increments_version(self, market):
        state = market.load("USD_SOFR", SOFR_QUOTES)
        assert state.version == 1
        assert state.metadata == {"index": "SOFR"}

    def test_to_dict(self, market):
        data = market.to_dict()
        assert data["valuation_date"] == "2024-01-15"
        curve = data["curves"]["USD_SOFR"]
        assert curve["policy"] == "LOG_LINEAR"
        assert [p["tenor"] for p in curve["points"]] == ["1M", "3M", "1Y", "5Y"]


class TestConcurrentAccess:
    """Tests for concurrent readers and writers."""

    def test_edits_serialised(self, market):
        """Every bump lands exactly once."""
        def bump(_):
            market.rebuild("USD_SOFR", lambda c: c.bump_point(2, 0.01))

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(bump, range(50)))

        state = market.get("USD_SOFR")
        assert state.version == 50
        assert abs(state.curve.get_rate(365) - (5.445 + 50 * 0.01)) < 1e-9

    def test_readers_see_whole_snapshots(self, market):
        """Readers only observe point sets that were installed in full."""
        def write(i):
            market.replace_quotes("USD_SOFR", [(t, 4.0 + i, d) for t, _, d in SOFR_QUOTES])

        def read(_):
            rates = {p.rate for p in market.curve("USD_SOFR").points}
            return len(rates)

        with ThreadPoolExecutor(max_workers=8) as pool:
            writes = [pool.submit(write, i) for i in range(20)]
            reads = [pool.submit(read, i) for i in range(200)]
            for f in writes:
                f.result()
            observed = [f.result() for f in reads]

        # Original quotes have 4 distinct rates, replacements are flat
        assert all(n in (1, 4) for n in observed)
