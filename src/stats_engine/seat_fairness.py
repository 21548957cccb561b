"""Seat position fairness: chi-square goodness of fit against a uniform
25% win share per seat, with Cohen's w as the effect size.
"""

import logging
import math
from typing import List, Sequence

from src.stats_engine.config import (
    CHI_SQUARE_CRITICAL_DF3,
    EFFECT_SIZE_DEFAULT,
    EFFECT_SIZE_THRESHOLDS,
    EXPECTED_SEAT_WIN_RATE,
    NUM_SEATS,
    SEAT_DEGREES_OF_FREEDOM,
)
from src.stats_engine.errors import DegenerateDenominator, InvalidInputCardinality
from src.stats_engine.models import SeatFairnessResult, SeatOutcome, SeatRates
from src.stats_engine.validation import require_finite

logger = logging.getLogger(__name__)


def classify_effect_size(cohens_w: float) -> str:
    """Map Cohen's w onto small / medium / large.

    Each band includes its lower bound: 0.1 is medium, 0.3 is large.
    """
    require_finite("cohens_w", cohens_w)
    for label, threshold in EFFECT_SIZE_THRESHOLDS:
        if cohens_w >= threshold:
            return label
    return EFFECT_SIZE_DEFAULT


def compute_seat_fairness(seat_outcomes: Sequence[SeatOutcome]) -> SeatFairnessResult:
    """Test whether seat position affects win probability.

    Args:
        seat_outcomes: Exactly four seat aggregates, one per seat.

    Returns:
        :class:`SeatFairnessResult` with chi-square (df fixed at 3),
        Cohen's w and its effect-size band.

    Raises:
        InvalidInputCardinality: if there are not exactly four seats, or
            a seat position is repeated or missing.
        DegenerateDenominator: if no seat recorded a win.
    """
    if len(seat_outcomes) != NUM_SEATS:
        raise InvalidInputCardinality(
            f"Seat fairness needs exactly {NUM_SEATS} seats, "
            f"got {len(seat_outcomes)}"
        )
    positions = sorted(s.seat_position for s in seat_outcomes)
    if positions != list(range(NUM_SEATS)):
        raise InvalidInputCardinality(
            f"Seat fairness needs one outcome per seat 0-{NUM_SEATS - 1}, "
            f"got positions {positions}"
        )

    total_wins = sum(s.wins for s in seat_outcomes)
    if total_wins == 0:
        raise DegenerateDenominator(
            "Total wins is zero; expected wins per seat would be zero"
        )

    expected = total_wins / NUM_SEATS
    chi_square = 0.0
    for seat in seat_outcomes:
        diff = seat.wins - expected
        chi_square += (diff * diff) / expected

    cohens_w = math.sqrt(chi_square / total_wins)
    effect_size = classify_effect_size(cohens_w)

    logger.debug(
        "Seat fairness: chi2=%.4f w=%.4f (%s) over %d wins",
        chi_square, cohens_w, effect_size, total_wins,
    )

    return SeatFairnessResult(
        chi_square=chi_square,
        degrees_of_freedom=SEAT_DEGREES_OF_FREEDOM,
        cohens_w=cohens_w,
        effect_size=effect_size,
        total_wins=total_wins,
        expected_wins_per_seat=expected,
        is_significant=chi_square > CHI_SQUARE_CRITICAL_DF3,
    )


def compute_seat_rates(seat_outcomes: Sequence[SeatOutcome]) -> List[SeatRates]:
    """Per-seat win, draw and win-or-draw rates, ordered by seat position.

    A seat with no games gets rates of 0.0.
    """
    rates = []
    for seat in sorted(seat_outcomes, key=lambda s: s.seat_position):
        if seat.total_games == 0:
            win_rate = draw_rate = win_plus_draw_rate = 0.0
        else:
            win_rate = seat.wins / seat.total_games
            draw_rate = seat.draws / seat.total_games
            win_plus_draw_rate = (seat.wins + seat.draws) / seat.total_games
        rates.append(
            SeatRates(
                seat_position=seat.seat_position,
                total_games=seat.total_games,
                win_rate=win_rate,
                draw_rate=draw_rate,
                win_plus_draw_rate=win_plus_draw_rate,
                delta_vs_expected=win_rate - EXPECTED_SEAT_WIN_RATE,
            )
        )
    return rates
