"""Ingestion of exported view and RPC responses.

Each export is the JSON body returned by the hosted database's REST
layer: an array of row objects. Quirks handled here:
- Empty arrays still produce a DataFrame with the expected columns
- Decimal columns stay as-is (often strings); coercion happens in cleaning
- Extra columns are kept, missing expected columns are added as NaN
"""

import json
import logging
from pathlib import Path

import pandas as pd

from src.data_pipeline.config import EXPORT_FILES, VIEW_COLUMNS

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when an export cannot be read."""


class ViewExportIngester:
    """Reads view exports from a directory into pandas DataFrames."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _resolve_path(self, view: str) -> Path:
        """Build the full file path for a given view, raising if missing."""
        if view not in EXPORT_FILES:
            raise KeyError(f"Unknown view: {view!r}")
        filepath = self.data_dir / EXPORT_FILES[view]
        if not filepath.exists():
            raise FileNotFoundError(f"Expected file not found: {filepath}")
        return filepath

    def has_view(self, view: str) -> bool:
        return (self.data_dir / EXPORT_FILES[view]).exists()

    def read_view(self, view: str) -> pd.DataFrame:
        """Read one export.

        Raises:
            FileNotFoundError: if the export file is missing.
            IngestionError: if the file is not a JSON array of objects.
        """
        filepath = self._resolve_path(view)
        logger.info("Reading %s: %s", view, filepath.name)

        try:
            with open(filepath) as f:
                records = json.load(f)
        except json.JSONDecodeError as e:
            raise IngestionError(f"Invalid JSON in {filepath}: {e}") from e

        if not isinstance(records, list) or not all(
            isinstance(r, dict) for r in records
        ):
            raise IngestionError(
                f"{filepath.name} must contain a JSON array of row objects"
            )

        df = pd.DataFrame.from_records(records)
        for col in VIEW_COLUMNS[view]:
            if col not in df.columns:
                df[col] = pd.NA

        logger.info("Loaded %d %s rows", len(df), view)
        return df

    def read_all(self) -> dict[str, pd.DataFrame]:
        """Read every export present in the directory.

        Missing exports are skipped with a warning; the returned dict only
        holds the views that were found.

        Raises:
            IngestionError: if a present export cannot be parsed.
        """
        data = {}
        for view in EXPORT_FILES:
            if not self.has_view(view):
                logger.warning("Export for %s not found in %s", view, self.data_dir)
                continue
            data[view] = self.read_view(view)
        return data
