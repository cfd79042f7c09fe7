#!/usr/bin/env python
"""
Curve Engine Demo Script

This script demonstrates the full workflow of the curve engine:
1. Load SOFR quotes and build a curve
2. Compare interpolation policies at off-grid dates
3. Calculate forward rates and per-tenor DV01
4. Price a sample swap
5. Generate reports

Usage:
    python run_demo.py [--output-dir OUTPUT_DIR] [--policy POLICY]
"""

import argparse
import logging
from datetime import date, timedelta
from pathlib import Path

import pandas as pd

from curvekit import (
    InterpolationPolicy,
    MarketState,
    SwapDetails,
    get_daily_forward_series,
    load_curve_quotes,
    price_swap,
)
from curvekit.reporting import ReportFormatter, build_curve_report, export_to_csv

logger = logging.getLogger("curvekit.demo")

CURVE_NAME = "USD_SOFR"


def compare_policies(market: MarketState, query_days) -> pd.DataFrame:
    """Rate at each query day under every interpolation policy."""
    base = market.curve(CURVE_NAME)
    rows = []
    for days in query_days:
        row = {"days": days}
        for policy in InterpolationPolicy:
            row[policy.value] = base.with_policy(policy).get_rate(days)
        rows.append(row)
    return pd.DataFrame(rows)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Yield Curve Engine Demo")
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory for CSV reports (skipped if omitted)"
    )
    parser.add_argument(
        "--policy",
        type=str,
        default=InterpolationPolicy.LOG_LINEAR.value,
        help="Interpolation policy (LINEAR, LOG_LINEAR, CUBIC_SPLINE, STEP_FORWARD, HYBRID)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    script_dir = Path(__file__).parent
    data_dir = script_dir.parent / "data"

    valuation_date = date(2024, 1, 15)

    print("=" * 60)
    print("YIELD CURVE ENGINE DEMO")
    print(f"Valuation Date: {valuation_date}")
    print("=" * 60)

    # Step 1: Load data and build the curve
    quotes = load_curve_quotes(data_dir / "sample_quotes" / "usd_sofr_quotes.csv")
    market = MarketState(valuation_date)
    market.load(CURVE_NAME, quotes, policy=args.policy, metadata={"index": "SOFR"})
    curve = market.curve(CURVE_NAME)

    # Step 2: Interpolation policies side by side
    formatter = ReportFormatter()
    print(formatter.subheader("Interpolation policies"))
    print(formatter.format_dataframe(compare_policies(market, [45, 120, 547, 1460, 5475])))

    # Step 3: Daily forwards over the first month
    series = get_daily_forward_series(curve, valuation_date, valuation_date + timedelta(days=30))
    print(formatter.subheader(f"Daily forwards ({len(series)} days)"))
    print(formatter.format_dataframe(series.to_frame().head(10)))
    for jump in series.jumps():
        logger.info("Forward jump on %s: %.4f%%", jump.date, jump.diff)

    # Step 4: Price a 5Y payer swap
    swap = SwapDetails(notional=1_000_000, maturity="5Y", fixed_rate=4.5, direction="PAY")
    metrics = price_swap(curve, swap)
    logger.info("5Y payer swap PV %.2f, DV01 %.2f", metrics.pv, metrics.dv01)

    # Step 5: Edit a quote and reprice against the rebuilt curve
    market.update_rate(CURVE_NAME, "5Y", 4.452)
    repriced = price_swap(market.curve(CURVE_NAME), swap)
    logger.info("After 5Y +10bp: PV %.2f (change %.2f)", repriced.pv, repriced.pv - metrics.pv)

    report = build_curve_report(
        curve, curve_name=CURVE_NAME, swap_metrics=metrics,
        include_profile=args.output_dir is not None,
    )
    print(formatter.format_report(report))

    if args.output_dir:
        files = export_to_csv(report, args.output_dir)
        print(f"\nExported {len(files)} CSV files to {args.output_dir}")
        for f in files:
            print(f"  - {f}")

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
