"""Tests for src.stats_engine.seat_fairness."""

import math

import pytest

from src.stats_engine import (
    DegenerateDenominator,
    InvalidInputCardinality,
    OutOfRangeInput,
    SeatOutcome,
    classify_effect_size,
    compute_seat_fairness,
    compute_seat_rates,
)
from src.stats_engine.config import CHI_SQUARE_CRITICAL_DF3
from tests.factories import make_seat


def _seats(*wins, total_games=1000):
    return [make_seat(i, w, total_games=total_games) for i, w in enumerate(wins)]


# ── Effect size bands ─────────────────────────────────────────────────


class TestClassifyEffectSize:
    def test_zero_is_small(self):
        assert classify_effect_size(0.0) == "small"

    def test_just_below_medium(self):
        assert classify_effect_size(0.0999) == "small"

    def test_medium_lower_bound_inclusive(self):
        assert classify_effect_size(0.1) == "medium"

    def test_just_below_large(self):
        assert classify_effect_size(0.2999) == "medium"

    def test_large_lower_bound_inclusive(self):
        assert classify_effect_size(0.3) == "large"

    def test_very_large(self):
        assert classify_effect_size(1.5) == "large"

    def test_nan_rejected(self):
        with pytest.raises(OutOfRangeInput):
            classify_effect_size(float("nan"))


# ── Chi-square / Cohen's w ────────────────────────────────────────────


class TestComputeSeatFairness:
    def test_documented_turn_order_skew(self):
        """23.6% / 20.0% / 18.0% / 13.2% win shares across 748 wins."""
        result = compute_seat_fairness(_seats(236, 200, 180, 132))

        assert result.total_wins == 748
        assert result.expected_wins_per_seat == 187
        # (49² + 13² + 7² + 55²) / 187
        assert result.chi_square == pytest.approx(5644 / 187)
        assert result.cohens_w == pytest.approx(math.sqrt(5644 / 187 / 748))
        assert result.cohens_w == pytest.approx(0.2009, abs=1e-4)
        assert result.effect_size == "medium"
        assert result.is_significant is True

    def test_degrees_of_freedom_fixed(self):
        result = compute_seat_fairness(_seats(10, 20, 30, 40))
        assert result.degrees_of_freedom == 3

    def test_uniform_wins(self):
        result = compute_seat_fairness(_seats(250, 250, 250, 250))
        assert result.chi_square == 0.0
        assert result.cohens_w == 0.0
        assert result.effect_size == "small"
        assert result.is_significant is False

    def test_all_wins_in_one_seat_is_large(self):
        # chi2 = 3N, w = sqrt(3)
        result = compute_seat_fairness(_seats(100, 0, 0, 0, total_games=100))
        assert result.chi_square == pytest.approx(300.0)
        assert result.cohens_w == pytest.approx(math.sqrt(3))
        assert result.effect_size == "large"

    def test_statistics_non_negative(self):
        for wins in [(1, 0, 0, 0), (5, 5, 5, 6), (300, 10, 10, 10)]:
            result = compute_seat_fairness(_seats(*wins))
            assert result.chi_square >= 0
            assert result.cohens_w >= 0

    def test_seat_order_does_not_matter(self):
        forward = compute_seat_fairness(_seats(236, 200, 180, 132))
        backward = compute_seat_fairness(list(reversed(_seats(236, 200, 180, 132))))
        assert forward.chi_square == pytest.approx(backward.chi_square)

    def test_significance_threshold(self):
        # chi2 just under and over 7.815 with 400 total wins (expected 100)
        below = compute_seat_fairness(_seats(114, 100, 100, 86))  # 3.92
        above = compute_seat_fairness(_seats(120, 100, 100, 80))  # 8.0
        assert below.is_significant is False
        assert above.is_significant is True

    def test_critical_value_is_upper_5_percent_point(self):
        # chi-square survival function for df=3 in closed form
        x = CHI_SQUARE_CRITICAL_DF3
        tail = (
            math.erfc(math.sqrt(x / 2))
            + math.sqrt(2 * x / math.pi) * math.exp(-x / 2)
        )
        assert tail == pytest.approx(0.05, abs=1e-4)

    def test_three_seats_rejected(self):
        with pytest.raises(InvalidInputCardinality):
            compute_seat_fairness(_seats(10, 20, 30))

    def test_five_seats_rejected(self):
        seats = _seats(10, 20, 30, 40) + [make_seat(0, 5)]
        with pytest.raises(InvalidInputCardinality):
            compute_seat_fairness(seats)

    def test_empty_rejected(self):
        with pytest.raises(InvalidInputCardinality):
            compute_seat_fairness([])

    def test_duplicate_seat_rejected(self):
        with pytest.raises(InvalidInputCardinality):
            compute_seat_fairness([make_seat(0, 100)] * 4)

    def test_missing_seat_rejected(self):
        seats = _seats(10, 20, 30) + [make_seat(1, 40)]
        with pytest.raises(InvalidInputCardinality):
            compute_seat_fairness(seats)

    def test_zero_total_wins(self):
        with pytest.raises(DegenerateDenominator):
            compute_seat_fairness(_seats(0, 0, 0, 0))


# ── Per-seat rates ────────────────────────────────────────────────────


class TestComputeSeatRates:
    def test_rates(self):
        seats = [
            make_seat(0, 236, draws=20),
            make_seat(1, 200, draws=40),
            make_seat(2, 180),
            make_seat(3, 132),
        ]
        rates = compute_seat_rates(seats)

        assert [r.seat_position for r in rates] == [0, 1, 2, 3]
        assert rates[0].win_rate == pytest.approx(0.236)
        assert rates[0].draw_rate == pytest.approx(0.02)
        assert rates[0].win_plus_draw_rate == pytest.approx(0.256)
        assert rates[0].delta_vs_expected == pytest.approx(-0.014)
        assert rates[3].delta_vs_expected == pytest.approx(-0.118)
        assert rates[1].win_plus_draw_rate == pytest.approx(0.24)

    def test_sorted_by_seat(self):
        seats = [make_seat(3, 1), make_seat(0, 4), make_seat(2, 2), make_seat(1, 3)]
        assert [r.seat_position for r in compute_seat_rates(seats)] == [0, 1, 2, 3]

    def test_zero_games(self):
        rates = compute_seat_rates([SeatOutcome(0, 0, 0, 0, 0)])
        assert rates[0].win_rate == 0.0
        assert rates[0].draw_rate == 0.0
        assert rates[0].win_plus_draw_rate == 0.0
        assert rates[0].delta_vs_expected == pytest.approx(-0.25)


# ── SeatOutcome validation ────────────────────────────────────────────


class TestSeatOutcome:
    def test_counts_must_add_up(self):
        with pytest.raises(OutOfRangeInput):
            SeatOutcome(seat_position=0, total_games=10, wins=5, losses=4, draws=0)

    def test_seat_position_range(self):
        with pytest.raises(OutOfRangeInput):
            SeatOutcome(seat_position=4, total_games=1, wins=1)

    def test_negative_wins(self):
        with pytest.raises(OutOfRangeInput):
            SeatOutcome(seat_position=0, total_games=0, wins=-1, losses=1)

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            SeatOutcome(seat_position=-1, total_games=0, wins=0)
