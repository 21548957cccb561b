"""Card inclusion tiers and trap / spice classification.

Card rows are plain dicts as produced by the data pipeline, with rates
already coerced to fractions:

    {"card_name": ..., "inclusion_rate": 0.45, "avg_win_rate": 0.20,
     "baseline_win_rate": 0.25, "win_rate_delta": -0.05, ...}
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from src.stats_engine.config import (
    CARD_TIERS,
    SPICE_MAX_INCLUSION,
    TIER_DEFAULT,
    TIER_THRESHOLDS,
)
from src.stats_engine.validation import require_finite, require_unit_interval

logger = logging.getLogger(__name__)


def classify_tier(inclusion_rate: float) -> str:
    """Map an inclusion rate onto core / essential / common / flex / spice.

    Each threshold is inclusive on the upper tier: 0.80 is core,
    0.10 is flex.
    """
    require_unit_interval("inclusion_rate", inclusion_rate)
    for tier, threshold in TIER_THRESHOLDS:
        if inclusion_rate >= threshold:
            return tier
    return TIER_DEFAULT


def compute_trap_score(
    inclusion_rate: float, card_win_rate: float, baseline_win_rate: float
) -> Optional[float]:
    """Score a popular underperformer: ``inclusion * (baseline - card)``.

    Returns None when the card does not underperform the baseline; such
    cards are not traps and take no part in trap ranking.
    """
    require_unit_interval("inclusion_rate", inclusion_rate)
    require_unit_interval("card_win_rate", card_win_rate)
    require_unit_interval("baseline_win_rate", baseline_win_rate)
    if card_win_rate >= baseline_win_rate:
        return None
    return inclusion_rate * abs(baseline_win_rate - card_win_rate)


def is_spice_candidate(inclusion_rate: float, win_rate_delta: float) -> bool:
    """Rarely played card with a positive win-rate delta.

    Only the sign of the delta is checked, there is no significance gate,
    so small-sample cards can show up here.
    """
    require_unit_interval("inclusion_rate", inclusion_rate)
    require_finite("win_rate_delta", win_rate_delta)
    return inclusion_rate < SPICE_MAX_INCLUSION and win_rate_delta > 0


def count_tiers(inclusion_rates: Iterable[float]) -> Dict[str, int]:
    """Count cards per tier. Every tier key is present, even when zero."""
    counts = {tier: 0 for tier in CARD_TIERS}
    for rate in inclusion_rates:
        counts[classify_tier(rate)] += 1
    return counts


def rank_trap_cards(cards: Iterable[Dict]) -> List[Dict]:
    """Score trap cards and return them sorted by trap score, highest first.

    Cards at or above their baseline are dropped. The input dicts are not
    modified; each returned dict is a copy with ``trap_score`` set.
    """
    ranked = []
    skipped = 0
    for card in cards:
        score = compute_trap_score(
            card["inclusion_rate"],
            card["avg_win_rate"],
            card["baseline_win_rate"],
        )
        if score is None:
            skipped += 1
            continue
        ranked.append({**card, "trap_score": score})

    if skipped:
        logger.debug("Excluded %d non-trap cards from trap ranking", skipped)

    ranked.sort(key=lambda c: c["trap_score"], reverse=True)
    return ranked


def select_spice_cards(cards: Iterable[Dict]) -> List[Dict]:
    """Spice candidates sorted by win-rate delta, highest first."""
    spice = [
        card for card in cards
        if is_spice_candidate(card["inclusion_rate"], card["win_rate_delta"])
    ]
    spice.sort(key=lambda c: c["win_rate_delta"], reverse=True)
    return spice


def split_card_performance(
    cards: List[Dict], limit: int = 20
) -> Tuple[List[Dict], List[Dict]]:
    """Split card performance rows into top and under performers.

    Top performers keep the incoming order (the view is ordered by delta
    descending). Underperformers are re-sorted by delta ascending so the
    worst card comes first.

    Returns:
        (top_performers, underperformers), each at most *limit* long.
    """
    top = [c for c in cards if c["win_rate_delta"] > 0][:limit]
    under = sorted(
        (c for c in cards if c["win_rate_delta"] < 0),
        key=lambda c: c["win_rate_delta"],
    )[:limit]
    return top, under
