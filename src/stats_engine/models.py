"""Value shapes consumed and produced by the statistics library."""

from dataclasses import dataclass
from typing import Optional

from src.stats_engine.errors import OutOfRangeInput


@dataclass(frozen=True)
class SeatOutcome:
    """Aggregated results for one seat position."""

    seat_position: int  # 0..3
    total_games: int
    wins: int
    losses: int = 0
    draws: int = 0

    def __post_init__(self):
        if not 0 <= self.seat_position <= 3:
            raise OutOfRangeInput(
                f"seat_position must be 0..3, got {self.seat_position}"
            )
        for name in ("total_games", "wins", "losses", "draws"):
            if getattr(self, name) < 0:
                raise OutOfRangeInput(
                    f"{name} must be non-negative, got {getattr(self, name)}"
                )
        if self.wins + self.losses + self.draws != self.total_games:
            raise OutOfRangeInput(
                f"Seat {self.seat_position}: wins + losses + draws "
                f"({self.wins} + {self.losses} + {self.draws}) "
                f"!= total_games ({self.total_games})"
            )


@dataclass(frozen=True)
class SurvivalPoint:
    """One round of a cumulative survival series."""

    round_number: int
    players_at_risk: int
    players_survived: int
    survival_rate: float
    cumulative_survival: float

    def __post_init__(self):
        if self.round_number < 1:
            raise OutOfRangeInput(
                f"round_number must be positive, got {self.round_number}"
            )
        if not 0 <= self.players_survived <= self.players_at_risk:
            raise OutOfRangeInput(
                f"Round {self.round_number}: players_survived "
                f"({self.players_survived}) must be within "
                f"0..players_at_risk ({self.players_at_risk})"
            )
        for name in ("survival_rate", "cumulative_survival"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise OutOfRangeInput(
                    f"Round {self.round_number}: {name} must be in [0, 1], "
                    f"got {value}"
                )


@dataclass(frozen=True)
class CardWinRateSample:
    """Input to the card win-rate significance test (fractions, not percent)."""

    delta_fraction: float
    std_dev_fraction: float
    sample_size: int


@dataclass
class SeatFairnessResult:
    """Chi-square goodness-of-fit result for seat position win counts."""

    chi_square: float
    degrees_of_freedom: int
    cohens_w: float
    effect_size: str  # "small" | "medium" | "large"
    total_wins: int
    expected_wins_per_seat: float
    is_significant: bool


@dataclass
class SeatRates:
    """Derived rates for a single seat position."""

    seat_position: int
    total_games: int
    win_rate: float
    draw_rate: float
    win_plus_draw_rate: float
    delta_vs_expected: float


@dataclass
class SurvivalSummary:
    """Milestones derived from one cumulative survival series."""

    median_round: Optional[int]
    percentile_75_round: Optional[int]
    first_round_survival: Optional[float]
    max_round: Optional[int]
