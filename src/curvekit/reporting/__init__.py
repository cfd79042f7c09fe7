"""
Reporting module for curve analytics.

Provides:
- Console reports (formatted tables)
- CSV export
"""

from .curve_report import (
    CurveReport,
    ReportFormatter,
    curve_to_frame,
    generate_swap_summary,
    generate_dv01_ladder,
    build_curve_report,
    export_to_csv,
    print_report,
)


__all__ = [
    "CurveReport",
    "ReportFormatter",
    "curve_to_frame",
    "generate_swap_summary",
    "generate_dv01_ladder",
    "build_curve_report",
    "export_to_csv",
    "print_report",
]
