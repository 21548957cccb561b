"""Build the dashboard statistics report from exported views.

Usage:
    python -m src.data_pipeline.run_report [data_dir] [output_dir]

Examples:
    python -m src.data_pipeline.run_report
    python -m src.data_pipeline.run_report /path/to/exports
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from src.data_pipeline.cleaning import DataCleaner
from src.data_pipeline.config import (
    LATEST_LINK_NAME,
    OUTPUT_FILENAME,
    PROCESSED_DATA_DIR,
    RAW_DATA_DIR,
)
from src.data_pipeline.ingestion import ViewExportIngester
from src.data_pipeline.report_builder import DashboardReportBuilder
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def run_report(
    data_dir: Path | None = None,
    output_dir: Path | None = None,
) -> Path:
    """Run ingestion, cleaning and report building end to end.

    Args:
        data_dir: Directory containing the view exports.
            Defaults to ``data/raw/``.
        output_dir: Directory for JSON output.
            Defaults to ``data/processed/``.

    Returns:
        Path to the generated JSON file.

    Raises:
        FileNotFoundError: If the data directory doesn't exist.
    """
    if data_dir is None:
        data_dir = RAW_DATA_DIR
    if output_dir is None:
        output_dir = PROCESSED_DATA_DIR

    data_dir = Path(data_dir)
    output_dir = Path(output_dir)
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")

    logger.info("Starting report build (data: %s)", data_dir)

    # 1. Ingest
    logger.info("Step 1/4: Reading view exports...")
    raw = ViewExportIngester(data_dir).read_all()

    # 2. Clean
    logger.info("Step 2/4: Coercing numeric columns...")
    cleaned = DataCleaner().clean_all(raw)

    # 3. Build sections
    logger.info("Step 3/4: Computing statistics...")
    builder = DashboardReportBuilder()

    turn_order = None
    if "seat_position_stats" in cleaned:
        turn_order = builder.build_turn_order(
            cleaned["seat_position_stats"],
            cleaned.get("commander_seat_stats"),
        )

    commanders = None
    if "commander_stats" in cleaned:
        commanders = builder.build_commanders(cleaned["commander_stats"])

    survival = None
    if "survival_curve" in cleaned or "survival_curves_by_seat" in cleaned:
        survival = builder.build_survival(
            cleaned.get("survival_curve"),
            cleaned.get("survival_curves_by_seat"),
        )

    card_tiers = None
    if "card_frequencies_global" in cleaned:
        card_tiers = builder.build_card_tiers(cleaned["card_frequencies_global"])

    trap_spice = None
    if "trap_cards_report" in cleaned or "spice_cards_report" in cleaned:
        trap_spice = builder.build_trap_spice(
            cleaned.get("trap_cards_report"),
            cleaned.get("spice_cards_report"),
        )

    card_performance = None
    if "card_performance_by_commander" in cleaned:
        card_performance = builder.build_card_performance(
            cleaned["card_performance_by_commander"]
        )

    # 4. Output JSON
    logger.info("Step 4/4: Writing JSON output...")
    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "views": sorted(raw.keys()),
        },
        "turn_order": turn_order,
        "commanders": commanders,
        "survival": survival,
        "card_tiers": card_tiers,
        "trap_spice": trap_spice,
        "card_performance": card_performance,
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / OUTPUT_FILENAME

    with open(output_file, "w") as f:
        json.dump(output_data, f, indent=2)

    # Update latest symlink
    latest_link = output_dir / LATEST_LINK_NAME
    if latest_link.exists() or latest_link.is_symlink():
        latest_link.unlink()
    latest_link.symlink_to(output_file.name)

    logger.info("Report complete! Output: %s", output_file)
    logger.info("  Views read: %s", ", ".join(sorted(raw.keys())) or "none")

    return output_file


if __name__ == "__main__":
    setup_logging()

    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        output = run_report(data_dir, output_dir)
        print(f"Report complete: {output}")
    except Exception:
        logger.exception("Report build failed")
        sys.exit(1)
