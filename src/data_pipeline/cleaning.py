"""Numeric coercion for exported view rows.

The database returns NUMERIC columns as decimal strings ("0.2360") and
integer columns as native numbers. All string-to-number conversion
happens here so the statistics library only ever sees floats and ints.
"""

import logging
import math
import numbers
from typing import Optional

import pandas as pd

from src.data_pipeline.config import NUMERIC_COLUMNS

logger = logging.getLogger(__name__)


def coerce_decimal(value) -> Optional[float]:
    """Convert a number or decimal string to float.

    Examples:
        "0.2360" -> 0.236
        " 12 "   -> 12.0
        7        -> 7.0
        None, "", "abc", NaN -> None
    """
    if value is None or value is pd.NA:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        value = float(value)
        return None if math.isnan(value) else value
    s = str(value).strip().strip('"')
    if s == "":
        return None
    try:
        result = float(s)
    except ValueError:
        return None
    return None if math.isnan(result) else result


class DataCleaner:
    """Coerces and filters exported view rows before validation."""

    def coerce_numeric_columns(
        self, df: pd.DataFrame, columns: list[str]
    ) -> pd.DataFrame:
        """Return a copy of *df* with *columns* converted to numbers.

        Values that cannot be parsed become NaN.
        """
        out = df.copy()
        for col in columns:
            if col in out.columns:
                out[col] = pd.to_numeric(
                    out[col].apply(coerce_decimal), errors="coerce"
                )
        return out

    def clean_view(self, view: str, df: pd.DataFrame) -> pd.DataFrame:
        """Coerce a view's numeric columns and drop rows missing any of them."""
        numeric_cols = [c for c in NUMERIC_COLUMNS[view] if c in df.columns]
        out = self.coerce_numeric_columns(df, numeric_cols)

        incomplete = out[numeric_cols].isna().any(axis=1)
        if incomplete.any():
            logger.warning(
                "Dropping %d %s rows with missing or non-numeric values",
                incomplete.sum(), view,
            )
            out = out[~incomplete].reset_index(drop=True)

        logger.info("Cleaned %s: %d rows", view, len(out))
        return out

    def clean_all(self, data: dict[str, pd.DataFrame]) -> dict[str, pd.DataFrame]:
        """Clean every DataFrame returned by ViewExportIngester.read_all()."""
        return {view: self.clean_view(view, df) for view, df in data.items()}
