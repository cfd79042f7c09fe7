"""
Market quote handling and loading.

Provides utilities for:
- Normalising raw quote tables (as delivered by a database or CSV) into
  (tenor, rate, days) quotes
- Deriving day offsets from tenor labels where none are supplied
- Loading quotes from CSV
"""

from pathlib import Path
from typing import Any, Iterable, List, Mapping, Union
import logging

import pandas as pd

from .curves.points import CurveQuote
from .dates import DateUtils

logger = logging.getLogger(__name__)

# Alternative column names seen in upstream feeds
COLUMN_ALIASES = {
    "tenor_days": "days",
    "day_offset": "days",
    "quote": "rate",
    "rate_pct": "rate",
}


def normalize_curve_quotes(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalise a raw quote table.

    Columns are lower-cased and aliased ('tenor_days' -> 'days'). Rates
    may arrive as strings and are converted to floats. Missing day
    offsets are derived from the tenor label.

    Args:
        df: Raw quotes with at least 'tenor' and 'rate' columns

    Returns:
        DataFrame with columns [tenor, rate, days] sorted by days
    """
    out = df.rename(columns=lambda c: str(c).strip().lower())
    out = out.rename(columns=COLUMN_ALIASES)

    missing = {"tenor", "rate"} - set(out.columns)
    if missing:
        raise ValueError(f"Quote table missing required columns: {sorted(missing)}")

    out = out.copy()
    out["tenor"] = out["tenor"].astype(str).str.strip().str.upper()
    out["rate"] = pd.to_numeric(out["rate"], errors="raise")

    if "days" not in out.columns:
        out["days"] = pd.NA
    derived = out["days"].isna()
    if derived.any():
        logger.debug("Deriving day offsets from tenor for %d quotes", int(derived.sum()))
        out.loc[derived, "days"] = out.loc[derived, "tenor"].map(DateUtils.tenor_to_days)
    out["days"] = out["days"].astype(int)

    return out[["tenor", "rate", "days"]].sort_values("days").reset_index(drop=True)


def quotes_from_frame(df: pd.DataFrame) -> List[CurveQuote]:
    """Convert a quote table to CurveQuote objects."""
    normalized = normalize_curve_quotes(df)
    return [
        CurveQuote(tenor=row.tenor, rate=float(row.rate), days=int(row.days))
        for row in normalized.itertuples(index=False)
    ]


def quotes_from_records(records: Iterable[Mapping[str, Any]]) -> List[CurveQuote]:
    """Convert dict records (e.g. a JSON payload) to CurveQuote objects."""
    return quotes_from_frame(pd.DataFrame(list(records)))


def load_curve_quotes(filepath: Union[str, Path]) -> List[CurveQuote]:
    """
    Load curve quotes from CSV.

    Expected columns: tenor, rate[, days]. Lines starting with '#' are
    ignored.

    Args:
        filepath: Path to CSV file

    Returns:
        List of CurveQuote sorted by day offset
    """
    df = pd.read_csv(filepath, comment="#")
    quotes = quotes_from_frame(df)
    logger.info("Loaded %d quotes from %s", len(quotes), filepath)
    return quotes


__all__ = [
    "normalize_curve_quotes",
    "quotes_from_frame",
    "quotes_from_records",
    "load_curve_quotes",
]
