"""Builds the dashboard report sections from cleaned view exports.

Each ``build_*`` method validates the rows against their contract,
adapts them into the statistics library's value types and returns a
JSON-ready dict. All arithmetic lives in ``src.stats_engine``.
"""

import logging
from collections import defaultdict
from dataclasses import asdict
from typing import Dict, List, Optional

import pandas as pd

from src.data_pipeline.config import (
    COMMANDER_SEAT_LIMIT,
    MIN_CARD_DECK_COUNT,
    MIN_COMMANDER_ENTRIES,
    MIN_COMMANDER_SEAT_GAMES,
    REPORT_LIMIT,
    TOP_CARDS_LIMIT,
)
from src.data_pipeline.contracts import CONTRACTS, safe_validate_rows, validate_rows
from src.stats_engine import (
    SeatOutcome,
    StatisticsError,
    SurvivalPoint,
    classify_tier,
    compute_p_value,
    compute_seat_fairness,
    compute_seat_rates,
    count_tiers,
    exceeds_confidence_interval,
    format_p_value,
    is_significant,
    rank_trap_cards,
    select_spice_cards,
    split_card_performance,
    summarize_by_partition,
    summarize_survival,
)
from src.stats_engine.config import NUM_SEATS

logger = logging.getLogger(__name__)


def _validated(view: str, df: pd.DataFrame) -> list:
    return validate_rows(CONTRACTS[view], df.to_dict("records"), context=view)


def _to_survival_point(row) -> SurvivalPoint:
    return SurvivalPoint(
        round_number=row.round_number,
        players_at_risk=row.players_at_risk,
        players_survived=row.players_survived,
        survival_rate=row.survival_rate,
        cumulative_survival=row.cumulative_survival,
    )


class DashboardReportBuilder:
    """Turns cleaned view exports into report sections."""

    # ------------------------------------------------------------------
    # Turn order
    # ------------------------------------------------------------------
    def build_turn_order(
        self,
        seat_df: pd.DataFrame,
        commander_seat_df: Optional[pd.DataFrame] = None,
    ) -> Dict:
        """Seat win rates plus the chi-square fairness test.

        ``fairness`` is None when the test cannot be computed (wrong
        number of seats, or no wins recorded). ``commanders_by_seat`` is
        filled from *commander_seat_df* when it is given.
        """
        rows = _validated("seat_position_stats", seat_df)
        outcomes = [
            SeatOutcome(
                seat_position=r.seat_position,
                total_games=r.total_games,
                wins=r.wins,
                losses=r.losses,
                draws=r.draws,
            )
            for r in sorted(rows, key=lambda r: r.seat_position)
        ]

        fairness: Optional[Dict] = None
        try:
            fairness = asdict(compute_seat_fairness(outcomes))
        except StatisticsError as e:
            logger.warning("Seat fairness not computed: %s", e)

        commanders_by_seat = None
        if commander_seat_df is not None:
            commanders_by_seat = self._commanders_by_seat(commander_seat_df)

        return {
            "seats": [asdict(r) for r in compute_seat_rates(outcomes)],
            "fairness": fairness,
            "commanders_by_seat": commanders_by_seat,
        }

    def _commanders_by_seat(self, df: pd.DataFrame) -> Optional[Dict]:
        """Per-seat commander win rates for commanders with enough games.

        Keeps commanders with at least MIN_COMMANDER_SEAT_GAMES games in a
        seat, most played first, COMMANDER_SEAT_LIMIT per seat. Returns
        None when the rows break their contract.
        """
        rows = safe_validate_rows(
            CONTRACTS["commander_seat_stats"],
            df.to_dict("records"),
            context="commander_seat_stats",
        )
        if rows is None:
            return None

        eligible = [r for r in rows if r.games >= MIN_COMMANDER_SEAT_GAMES]
        logger.debug(
            "%d of %d commander seat rows have %d+ games",
            len(eligible), len(rows), MIN_COMMANDER_SEAT_GAMES,
        )

        by_seat: Dict[str, List[Dict]] = {}
        for seat in range(NUM_SEATS):
            seat_rows = sorted(
                (r for r in eligible if r.seat_position == seat),
                key=lambda r: r.games,
                reverse=True,
            )[:COMMANDER_SEAT_LIMIT]
            entries = []
            for r in seat_rows:
                (rates,) = compute_seat_rates([
                    SeatOutcome(
                        seat_position=r.seat_position,
                        total_games=r.games,
                        wins=r.wins,
                        losses=r.losses,
                        draws=r.draws,
                    )
                ])
                entries.append({
                    "commander_id": r.commander_id,
                    "commander_name": r.commander_name,
                    **asdict(rates),
                })
            by_seat[str(seat)] = entries
        return by_seat

    # ------------------------------------------------------------------
    # Commanders
    # ------------------------------------------------------------------
    def build_commanders(self, stats_df: pd.DataFrame) -> Optional[List[Dict]]:
        """Commanders with more than MIN_COMMANDER_ENTRIES entries, most
        entered first. None when the rows break their contract."""
        rows = safe_validate_rows(
            CONTRACTS["commander_stats"],
            stats_df.to_dict("records"),
            context="commander_stats",
        )
        if rows is None:
            return None

        rows = sorted(
            (r for r in rows if r.total_entries > MIN_COMMANDER_ENTRIES),
            key=lambda r: r.total_entries,
            reverse=True,
        )
        return [r.model_dump() for r in rows[:REPORT_LIMIT]]

    # ------------------------------------------------------------------
    # Survival
    # ------------------------------------------------------------------
    def build_survival(
        self,
        global_df: Optional[pd.DataFrame] = None,
        seat_df: Optional[pd.DataFrame] = None,
    ) -> Dict:
        """Median and 75th percentile drop rounds, globally and per seat."""
        section: Dict = {"global": None, "by_seat": None}

        if global_df is not None:
            rows = _validated("survival_curve", global_df)
            series = [
                _to_survival_point(r)
                for r in sorted(rows, key=lambda r: r.round_number)
            ]
            section["global"] = asdict(summarize_survival(series))

        if seat_df is not None:
            rows = _validated("survival_curves_by_seat", seat_df)
            partitions: Dict[int, List[SurvivalPoint]] = defaultdict(list)
            for r in sorted(rows, key=lambda r: (r.seat_position, r.round_number)):
                partitions[r.seat_position].append(_to_survival_point(r))
            section["by_seat"] = {
                str(seat): asdict(summary)
                for seat, summary in summarize_by_partition(partitions).items()
            }

        return section

    # ------------------------------------------------------------------
    # Card tiers
    # ------------------------------------------------------------------
    def build_card_tiers(self, freq_df: pd.DataFrame) -> Dict:
        """Tier counts derived from inclusion rates.

        The view ships its own ``tier`` column; disagreements with the
        locally computed tier are logged and counted.
        """
        rows = _validated("card_frequencies_global", freq_df)

        mismatches = 0
        for r in rows:
            tier = classify_tier(r.inclusion_rate)
            if tier != r.tier:
                mismatches += 1
                logger.debug(
                    "Tier mismatch for %s: view=%s computed=%s",
                    r.card_name, r.tier, tier,
                )
        if mismatches:
            logger.warning(
                "%d of %d cards have a view tier that disagrees with "
                "their inclusion rate", mismatches, len(rows),
            )

        return {
            "total_cards": len(rows),
            "tier_counts": count_tiers(r.inclusion_rate for r in rows),
            "tier_mismatches": mismatches,
        }

    # ------------------------------------------------------------------
    # Trap / spice
    # ------------------------------------------------------------------
    def build_trap_spice(
        self,
        trap_df: Optional[pd.DataFrame] = None,
        spice_df: Optional[pd.DataFrame] = None,
    ) -> Dict:
        """Ranked trap cards and spice candidates, at most REPORT_LIMIT each."""
        section: Dict = {"traps": None, "spice": None}

        if trap_df is not None:
            rows = _validated("trap_cards_report", trap_df)
            cards = [r.model_dump(exclude={"trap_score"}) for r in rows]
            section["traps"] = rank_trap_cards(cards)[:REPORT_LIMIT]

        if spice_df is not None:
            rows = _validated("spice_cards_report", spice_df)
            cards = [r.model_dump() for r in rows]
            section["spice"] = select_spice_cards(cards)[:REPORT_LIMIT]

        return section

    # ------------------------------------------------------------------
    # Card performance
    # ------------------------------------------------------------------
    def build_card_performance(self, perf_df: pd.DataFrame) -> Dict:
        """Per-commander top and underperforming cards with p-values.

        Rows with fewer than MIN_CARD_DECK_COUNT decks are left out.

        ``is_significant`` comes from the p-value (``1 - erf(|z|) < 0.05``,
        roughly ``|z| > 1.39``) while ``exceeds_confidence_interval`` uses
        ``|z| > 1.96``. Cards with ``1.39 < |z| <= 1.96`` carry
        ``is_significant=True`` and ``exceeds_confidence_interval=False``.
        """
        rows = _validated("card_performance_by_commander", perf_df)

        by_commander: Dict[str, List[Dict]] = defaultdict(list)
        skipped = 0
        for r in rows:
            if r.deck_count < MIN_CARD_DECK_COUNT:
                skipped += 1
                continue
            p_value = compute_p_value(r.win_rate_delta, r.std_win_rate, r.deck_count)
            by_commander[r.commander_id].append({
                **r.model_dump(),
                "p_value": p_value,
                "p_value_display": format_p_value(p_value),
                "is_significant": is_significant(p_value),
                "exceeds_confidence_interval": exceeds_confidence_interval(
                    r.win_rate_delta, r.std_win_rate, r.deck_count
                ),
            })

        if skipped:
            logger.info(
                "Skipped %d card performance rows under %d decks",
                skipped, MIN_CARD_DECK_COUNT,
            )

        report = {}
        for commander_id, cards in by_commander.items():
            cards.sort(key=lambda c: c["win_rate_delta"], reverse=True)
            top, under = split_card_performance(cards, limit=TOP_CARDS_LIMIT)
            report[commander_id] = {
                "commander": cards[0]["commander"],
                "cards_with_data": len(cards),
                "top_performing": top,
                "underperforming": under,
            }
        return report
