"""
Curve and risk reporting.

Provides formatted console output and CSV export for:
- Curve points (rates, discount factors, forwards, DV01)
- Swap risk summary and DV01 ladder
- Sampled spot/forward curve profile (optional)
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from ..curves.curve import Curve
from ..engine import get_curve_data
from ..risk.forwards import curve_profile
from ..risk.sensitivities import RiskMetrics


@dataclass
class ReportSection:
    """
    A section of a report.

    Attributes:
        title: Section title
        data: Data (DataFrame or dict)
        notes: Optional notes
    """
    title: str
    data: Union[pd.DataFrame, Dict[str, Any]]
    notes: Optional[str] = None


@dataclass
class CurveReport:
    """
    Complete curve report.

    Attributes:
        report_date: Date of report
        curve_name: Name of curve
        sections: List of report sections
        metadata: Additional metadata
    """
    report_date: date
    curve_name: str
    sections: List[ReportSection] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_section(
        self,
        title: str,
        data: Union[pd.DataFrame, Dict[str, Any]],
        notes: Optional[str] = None
    ):
        """Add a section to the report."""
        self.sections.append(ReportSection(title, data, notes))

    def to_dict(self) -> Dict:
        """Convert entire report to dictionary."""
        result = {
            "report_date": str(self.report_date),
            "curve_name": self.curve_name,
            "metadata": self.metadata,
            "sections": {}
        }

        for section in self.sections:
            if isinstance(section.data, pd.DataFrame):
                result["sections"][section.title] = section.data.to_dict(orient="records")
            else:
                result["sections"][section.title] = section.data

        return result


class ReportFormatter:
    """
    Formats reports for console output.
    """

    def __init__(
        self,
        width: int = 80,
        precision: int = 4,
        thousands_sep: bool = True
    ):
        """
        Initialize formatter.

        Args:
            width: Console width
            precision: Decimal precision for floats
            thousands_sep: Whether to use thousands separator
        """
        self.width = width
        self.precision = precision
        self.thousands_sep = thousands_sep

    def format_number(self, value: float, precision: Optional[int] = None) -> str:
        """Format a number for display."""
        p = precision if precision is not None else self.precision

        if pd.isna(value):
            return "-"
        if abs(value) >= 1e3 and self.thousands_sep:
            return f"{value:,.2f}"
        return f"{value:.{p}f}"

    def header(self, title: str) -> str:
        """Create a header line."""
        return f"\n{'='*self.width}\n{title.center(self.width)}\n{'='*self.width}\n"

    def subheader(self, title: str) -> str:
        """Create a subheader."""
        return f"\n{'-'*self.width}\n{title}\n{'-'*self.width}\n"

    def format_dict(self, data: Dict[str, Any], indent: int = 2) -> str:
        """Format dictionary as key-value pairs."""
        lines = []
        pad = " " * indent

        for key, value in data.items():
            if isinstance(value, float):
                formatted = self.format_number(value)
            else:
                formatted = str(value)
            lines.append(f"{pad}{key}: {formatted}")

        return "\n".join(lines)

    def format_dataframe(self, df: pd.DataFrame, max_rows: int = 50) -> str:
        """Format DataFrame for console."""
        with pd.option_context(
            'display.max_rows', max_rows,
            'display.width', self.width,
            'display.float_format', lambda x: self.format_number(x)
        ):
            return df.to_string(index=False)

    def format_report(self, report: CurveReport) -> str:
        """Format entire report for console."""
        lines = []

        lines.append(self.header(f"Curve Report: {report.curve_name}"))
        lines.append(f"Report Date: {report.report_date}")
        lines.append(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

        if report.metadata:
            lines.append("\nMetadata:")
            lines.append(self.format_dict(report.metadata))

        for section in report.sections:
            lines.append(self.subheader(section.title))

            if isinstance(section.data, pd.DataFrame):
                lines.append(self.format_dataframe(section.data))
            else:
                lines.append(self.format_dict(section.data))

            if section.notes:
                lines.append(f"\nNote: {section.notes}")

        lines.append(f"\n{'='*self.width}")
        lines.append("End of Report")

        return "\n".join(lines)


def curve_to_frame(curve: Curve, include_risk: bool = False) -> pd.DataFrame:
    """
    Curve points as a DataFrame.

    Columns: tenor, days, rate, discount_factor, and with include_risk
    also forward_rate and dv01.
    """
    columns = ["tenor", "days", "rate", "discount_factor"]
    if include_risk:
        columns += ["forward_rate", "dv01"]

    rows = [p.to_dict() for p in get_curve_data(curve, include_risk=include_risk)]
    return pd.DataFrame(rows, columns=columns)


def generate_swap_summary(metrics: RiskMetrics) -> Dict[str, Any]:
    """Headline swap risk figures."""
    return {
        "PV": metrics.pv,
        "Total DV01": metrics.dv01,
        "Convexity": metrics.convexity,
    }


def generate_dv01_ladder(metrics: RiskMetrics) -> pd.DataFrame:
    """
    DV01 ladder with share of total.

    Returns:
        DataFrame with columns [Tenor, DV01, % of Total, Cumulative %]
    """
    rows = []

    for item in metrics.dv01_by_tenor:
        pct = (item.dv01 / metrics.dv01 * 100) if metrics.dv01 != 0 else 0.0
        rows.append({
            "Tenor": item.tenor,
            "DV01": item.dv01,
            "% of Total": pct,
        })

    df = pd.DataFrame(rows, columns=["Tenor", "DV01", "% of Total"])
    df["Cumulative %"] = df["% of Total"].cumsum()

    return df


def build_curve_report(
    curve: Curve,
    curve_name: str = "Curve",
    swap_metrics: Optional[RiskMetrics] = None,
    include_profile: bool = False,
) -> CurveReport:
    """
    Assemble a report for a curve and, optionally, a priced swap.

    With include_profile, a sampled spot/forward profile section is added
    (daily for the first year, weekly to two years).
    """
    report = CurveReport(
        report_date=curve.valuation_date,
        curve_name=curve_name,
        metadata={
            "Policy": curve.policy.value,
            "Points": len(curve),
            "Currency": curve.currency,
        },
    )
    report.add_section(
        "Curve Points",
        curve_to_frame(curve, include_risk=True),
        notes="DV01 is per 1MM reference position at each tenor; bumps do not "
              "propagate through interpolation.",
    )

    if swap_metrics is not None:
        report.add_section("Swap Summary", generate_swap_summary(swap_metrics))
        report.add_section(
            "DV01 Ladder",
            generate_dv01_ladder(swap_metrics),
            notes="Convexity is a notional * years^2 heuristic.",
        )

    if include_profile:
        report.add_section("Curve Profile", curve_profile(curve))

    return report


def export_to_csv(
    report: CurveReport,
    output_dir: Union[str, Path],
    prefix: Optional[str] = None
) -> List[str]:
    """
    Export report to CSV files.

    Creates one CSV per section.

    Args:
        report: CurveReport to export
        output_dir: Output directory
        prefix: Optional filename prefix

    Returns:
        List of created file paths
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    prefix = prefix or report.curve_name.replace(" ", "_")
    date_str = report.report_date.strftime("%Y%m%d")

    created_files = []

    for section in report.sections:
        safe_title = section.title.replace(" ", "_").replace("/", "_")
        filename = output_path / f"{prefix}_{date_str}_{safe_title}.csv"

        if isinstance(section.data, pd.DataFrame):
            section.data.to_csv(filename, index=False)
        else:
            pd.DataFrame([section.data]).to_csv(filename, index=False)

        created_files.append(str(filename))

    return created_files


def print_report(report: CurveReport, formatter: Optional[ReportFormatter] = None):
    """
    Print report to console.

    Args:
        report: CurveReport to print
        formatter: Optional custom formatter
    """
    fmt = formatter or ReportFormatter()
    print(fmt.format_report(report))


__all__ = [
    "ReportSection",
    "CurveReport",
    "ReportFormatter",
    "curve_to_frame",
    "generate_swap_summary",
    "generate_dv01_ladder",
    "build_curve_report",
    "export_to_csv",
    "print_report",
]
