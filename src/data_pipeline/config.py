from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
PROCESSED_DATA_DIR = DATA_DIR / "processed"
LOGS_DIR = PROJECT_ROOT / "logs"

# Exported view / RPC responses (JSON arrays of row objects)
EXPORT_FILES = {
    "seat_position_stats": "seat_position_stats.json",
    "survival_curve": "survival_curve.json",
    "survival_curves_by_seat": "survival_curves_by_seat.json",
    "card_frequencies_global": "card_frequencies_global.json",
    "trap_cards_report": "trap_cards_report.json",
    "spice_cards_report": "spice_cards_report.json",
    "card_performance_by_commander": "card_performance_by_commander.json",
    "commander_seat_stats": "commander_seat_stats.json",
    "commander_stats": "commander_stats.json",
}

# Columns expected in each export (used for empty exports too)
VIEW_COLUMNS = {
    "seat_position_stats": [
        "seat_position", "total_games", "wins", "losses", "draws",
    ],
    "survival_curve": [
        "round_number", "players_at_risk", "players_survived",
        "survival_rate", "cumulative_survival",
    ],
    "survival_curves_by_seat": [
        "seat_position", "round_number", "players_at_risk",
        "players_survived", "survival_rate", "cumulative_survival",
    ],
    "card_frequencies_global": [
        "card_name", "deck_count", "total_decks", "inclusion_rate",
        "commander_count", "tier",
    ],
    "trap_cards_report": [
        "card_name", "deck_count", "inclusion_rate", "avg_win_rate",
        "baseline_win_rate", "win_rate_delta", "top_16_rate",
        "commander_count", "trap_score",
    ],
    "spice_cards_report": [
        "card_name", "deck_count", "inclusion_rate", "avg_win_rate",
        "baseline_win_rate", "win_rate_delta", "top_16_rate",
        "commander_count",
    ],
    "card_performance_by_commander": [
        "commander_id", "commander", "card_name", "deck_count",
        "total_decks", "inclusion_rate", "avg_win_rate",
        "baseline_win_rate", "win_rate_delta", "std_win_rate",
        "top_16_count", "top_16_rate", "performance_tier",
    ],
    "commander_seat_stats": [
        "commander_id", "commander_name", "seat_position", "games",
        "wins", "losses", "draws",
    ],
    "commander_stats": [
        "commander_id", "commander_name", "total_entries",
        "tournaments_played", "total_wins", "total_losses", "total_draws",
        "avg_win_rate", "top_16_count", "conversion_rate_top_16",
        "top_cut_count", "conversion_rate_top_cut",
    ],
}

# Columns holding numbers; decimals may arrive as strings ("0.2360")
NUMERIC_COLUMNS = {
    "seat_position_stats": VIEW_COLUMNS["seat_position_stats"],
    "survival_curve": VIEW_COLUMNS["survival_curve"],
    "survival_curves_by_seat": VIEW_COLUMNS["survival_curves_by_seat"],
    "card_frequencies_global": [
        "deck_count", "total_decks", "inclusion_rate", "commander_count",
    ],
    "trap_cards_report": [
        "deck_count", "inclusion_rate", "avg_win_rate", "baseline_win_rate",
        "win_rate_delta", "top_16_rate", "commander_count", "trap_score",
    ],
    "spice_cards_report": [
        "deck_count", "inclusion_rate", "avg_win_rate", "baseline_win_rate",
        "win_rate_delta", "top_16_rate", "commander_count",
    ],
    "card_performance_by_commander": [
        "deck_count", "total_decks", "inclusion_rate", "avg_win_rate",
        "baseline_win_rate", "win_rate_delta", "std_win_rate",
        "top_16_count", "top_16_rate",
    ],
    "commander_seat_stats": [
        "seat_position", "games", "wins", "losses", "draws",
    ],
    "commander_stats": VIEW_COLUMNS["commander_stats"][2:],
}

# Report filters
MIN_CARD_DECK_COUNT = 3  # card performance rows need at least this many decks
TOP_CARDS_LIMIT = 20
REPORT_LIMIT = 100
MIN_COMMANDER_SEAT_GAMES = 20  # inclusive
COMMANDER_SEAT_LIMIT = 15  # per seat
MIN_COMMANDER_ENTRIES = 5  # exclusive

OUTPUT_FILENAME = "dashboard_stats.json"
LATEST_LINK_NAME = "dashboard_stats_latest.json"
