"""Shared fixtures for the statistics and report test suites."""

import pytest

from src.data_pipeline.cleaning import DataCleaner
from src.data_pipeline.report_builder import DashboardReportBuilder
from tests.factories import ALL_EXPORTS, write_exports


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def cleaner():
    return DataCleaner()


@pytest.fixture(scope="module")
def builder():
    return DashboardReportBuilder()


# ------------------------------------------------------------------
# Export fixtures – write JSON into a temp directory
# ------------------------------------------------------------------

@pytest.fixture
def export_dir(tmp_path):
    """Temporary directory holding every view export."""
    return write_exports(tmp_path, ALL_EXPORTS)
