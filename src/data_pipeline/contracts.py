"""Row contracts for the views and RPC functions the dashboard reads.

A contract fails when the backend changes a response shape, so the
mismatch surfaces at ingestion instead of as a wrong statistic.
Decimal fields accept either numbers or decimal strings.
"""

import logging
from typing import Annotated, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)

logger = logging.getLogger(__name__)

Rate = Annotated[float, Field(ge=0.0, le=1.0)]
Count = Annotated[int, Field(ge=0)]


class ContractViolation(Exception):
    """Raised when exported rows do not match their contract."""


class _Row(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False, frozen=True)


# ============================================
# Seat position stats view: seat_position_stats
# ============================================
class SeatPositionStatRow(_Row):
    seat_position: int = Field(ge=0, le=3)
    total_games: Count
    wins: Count
    losses: Count
    draws: Count

    @model_validator(mode="after")
    def _outcomes_fit_games(self):
        if self.wins + self.losses + self.draws != self.total_games:
            raise ValueError(
                "wins + losses + draws must equal total_games "
                f"(seat {self.seat_position})"
            )
        return self


# ============================================
# Survival curve RPC: get_survival_curve
# ============================================
class SurvivalPointRow(_Row):
    round_number: int = Field(ge=1)
    players_at_risk: Count
    players_survived: Count
    survival_rate: Rate
    cumulative_survival: Rate

    @model_validator(mode="after")
    def _survivors_within_risk_set(self):
        if self.players_survived > self.players_at_risk:
            raise ValueError(
                f"players_survived exceeds players_at_risk "
                f"(round {self.round_number})"
            )
        return self


# ============================================
# Survival curves by seat view: survival_curves_by_seat
# ============================================
class SeatSurvivalPointRow(SurvivalPointRow):
    seat_position: int = Field(ge=0, le=3)


# ============================================
# Commander stats view: commander_stats
# ============================================
class CommanderStatsRow(_Row):
    commander_id: str
    commander_name: str
    total_entries: Count
    tournaments_played: Count
    total_wins: Count
    total_losses: Count
    total_draws: Count
    avg_win_rate: Rate
    top_16_count: Count
    conversion_rate_top_16: Rate
    top_cut_count: Count
    conversion_rate_top_cut: Rate


# ============================================
# Commander seat stats view: commander_seat_stats
# ============================================
class CommanderSeatStatRow(_Row):
    commander_id: str
    commander_name: str
    seat_position: int = Field(ge=0, le=3)
    games: Count
    wins: Count
    losses: Count
    draws: Count

    @model_validator(mode="after")
    def _outcomes_fit_games(self):
        if self.wins + self.losses + self.draws != self.games:
            raise ValueError(
                "wins + losses + draws must equal games "
                f"({self.commander_name}, seat {self.seat_position})"
            )
        return self


# ============================================
# Global card frequencies view: card_frequencies_global
# ============================================
class GlobalCardFrequencyRow(_Row):
    card_name: str
    deck_count: Count
    total_decks: int = Field(gt=0)
    inclusion_rate: Rate
    commander_count: Count
    tier: Literal["core", "essential", "common", "flex", "spice"]


# ============================================
# Spice cards report view: spice_cards_report
# ============================================
class SpiceCardRow(_Row):
    card_name: str
    deck_count: Count
    inclusion_rate: Rate
    avg_win_rate: Rate
    baseline_win_rate: Rate
    win_rate_delta: float
    top_16_rate: Rate
    commander_count: Count


# ============================================
# Trap cards report view: trap_cards_report
# ============================================
class TrapCardRow(SpiceCardRow):
    trap_score: float


# ============================================
# Card performance view: card_performance_by_commander
# ============================================
class CardPerformanceRow(_Row):
    commander_id: str
    commander: str
    card_name: str
    deck_count: int = Field(gt=0)
    total_decks: int = Field(gt=0)
    inclusion_rate: Rate
    avg_win_rate: Rate
    baseline_win_rate: Rate
    win_rate_delta: float
    std_win_rate: float = Field(ge=0.0)
    top_16_count: Count
    top_16_rate: Rate
    performance_tier: str


CONTRACTS = {
    "seat_position_stats": SeatPositionStatRow,
    "survival_curve": SurvivalPointRow,
    "survival_curves_by_seat": SeatSurvivalPointRow,
    "card_frequencies_global": GlobalCardFrequencyRow,
    "trap_cards_report": TrapCardRow,
    "spice_cards_report": SpiceCardRow,
    "card_performance_by_commander": CardPerformanceRow,
    "commander_seat_stats": CommanderSeatStatRow,
    "commander_stats": CommanderStatsRow,
}


def validate_rows(model: type[_Row], rows: list[dict], context: str) -> list:
    """Validate *rows* against *model* and return the parsed rows.

    Raises:
        ContractViolation: if any row does not match the contract.
    """
    try:
        return TypeAdapter(list[model]).validate_python(rows)
    except ValidationError as e:
        logger.error("[Contract Violation] %s: %s", context, e)
        raise ContractViolation(
            f"API contract violation in {context}: {e}"
        ) from e


def safe_validate_rows(
    model: type[_Row], rows: list[dict], context: str
) -> Optional[list]:
    """Like :func:`validate_rows` but returns None instead of raising."""
    try:
        return TypeAdapter(list[model]).validate_python(rows)
    except ValidationError as e:
        logger.warning("[Contract Warning] %s: %s", context, e)
        return None
