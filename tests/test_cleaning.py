"""Tests for the export cleaning module.

Fixture ``cleaner`` is provided by conftest.py.
"""

import math

import pandas as pd

from src.data_pipeline.cleaning import coerce_decimal
from tests.factories import SEAT_ROWS, SURVIVAL_ROWS, TRAP_ROWS


# ---------------------------------------------------------------------------
# Scalar coercion
# ---------------------------------------------------------------------------

class TestCoerceDecimal:
    def test_decimal_string(self):
        assert coerce_decimal("0.2360") == 0.236

    def test_padded_string(self):
        assert coerce_decimal("  12 ") == 12.0

    def test_quoted_string(self):
        assert coerce_decimal('"0.5"') == 0.5

    def test_negative_string(self):
        assert coerce_decimal("-0.0500") == -0.05

    def test_int(self):
        result = coerce_decimal(7)
        assert result == 7.0
        assert isinstance(result, float)

    def test_float_passthrough(self):
        assert coerce_decimal(0.25) == 0.25

    def test_none(self):
        assert coerce_decimal(None) is None

    def test_pd_na(self):
        assert coerce_decimal(pd.NA) is None

    def test_nan(self):
        assert coerce_decimal(float("nan")) is None

    def test_blank(self):
        assert coerce_decimal("") is None
        assert coerce_decimal("   ") is None

    def test_garbage(self):
        assert coerce_decimal("abc") is None

    def test_bool_rejected(self):
        assert coerce_decimal(True) is None


# ---------------------------------------------------------------------------
# DataFrame-level cleaning
# ---------------------------------------------------------------------------

class TestCoerceNumericColumns:
    def test_strings_become_floats(self, cleaner):
        df = pd.DataFrame(SURVIVAL_ROWS)
        out = cleaner.coerce_numeric_columns(df, ["survival_rate", "cumulative_survival"])
        assert pd.api.types.is_float_dtype(out["cumulative_survival"])
        assert out["cumulative_survival"].tolist() == [0.8, 0.48, 0.24]

    def test_original_untouched(self, cleaner):
        df = pd.DataFrame(SURVIVAL_ROWS)
        cleaner.coerce_numeric_columns(df, ["survival_rate"])
        assert df["survival_rate"].iloc[0] == "0.8000"

    def test_unknown_column_ignored(self, cleaner):
        df = pd.DataFrame(SURVIVAL_ROWS)
        out = cleaner.coerce_numeric_columns(df, ["not_a_column"])
        assert list(out.columns) == list(df.columns)

    def test_unparseable_becomes_nan(self, cleaner):
        df = pd.DataFrame({"x": ["1.5", "n/a", None]})
        out = cleaner.coerce_numeric_columns(df, ["x"])
        assert out["x"].iloc[0] == 1.5
        assert math.isnan(out["x"].iloc[1])
        assert math.isnan(out["x"].iloc[2])


class TestCleanView:
    def test_native_numbers_kept(self, cleaner):
        out = cleaner.clean_view("seat_position_stats", pd.DataFrame(SEAT_ROWS))
        assert len(out) == 4
        assert out["wins"].tolist() == [236, 200, 180, 132]

    def test_decimal_strings_coerced(self, cleaner):
        out = cleaner.clean_view("trap_cards_report", pd.DataFrame(TRAP_ROWS))
        assert out["inclusion_rate"].iloc[0] == 0.45
        assert out["win_rate_delta"].iloc[0] == -0.05
        # text columns are left alone
        assert out["card_name"].iloc[0] == "Cyclonic Rift"

    def test_rows_with_bad_numbers_dropped(self, cleaner):
        rows = [dict(r) for r in SURVIVAL_ROWS]
        rows[1]["cumulative_survival"] = "not-a-number"
        out = cleaner.clean_view("survival_curve", pd.DataFrame(rows))
        assert out["round_number"].tolist() == [1, 3]

    def test_empty_frame(self, cleaner):
        df = pd.DataFrame(columns=["round_number", "players_at_risk",
                                   "players_survived", "survival_rate",
                                   "cumulative_survival"])
        out = cleaner.clean_view("survival_curve", df)
        assert out.empty


class TestCleanAll:
    def test_cleans_each_view(self, cleaner):
        data = {
            "seat_position_stats": pd.DataFrame(SEAT_ROWS),
            "survival_curve": pd.DataFrame(SURVIVAL_ROWS),
        }
        cleaned = cleaner.clean_all(data)
        assert set(cleaned) == {"seat_position_stats", "survival_curve"}
        assert cleaned["survival_curve"]["survival_rate"].iloc[0] == 0.8
