"""Milestones over a precomputed cumulative survival series.

Series arrive sorted by round ascending with ``cumulative_survival``
already filled in upstream. Lookups are forward scans where the first
match wins; the series is not required to be strictly decreasing.
"""

import logging
from typing import Dict, Iterable, Optional, Sequence

from src.stats_engine.config import (
    MEDIAN_SURVIVAL_THRESHOLD,
    PERCENTILE_75_DROP_THRESHOLD,
)
from src.stats_engine.models import SurvivalPoint, SurvivalSummary
from src.stats_engine.validation import require_unit_interval

logger = logging.getLogger(__name__)


def find_percentile_round(
    series: Iterable[SurvivalPoint], threshold: float
) -> Optional[int]:
    """Return the first round whose cumulative survival is <= *threshold*.

    Returns None when the series is empty or never drops that far.
    """
    require_unit_interval("threshold", threshold)
    for point in series:
        if point.cumulative_survival <= threshold:
            return point.round_number
    return None


def find_median_survival_round(series: Iterable[SurvivalPoint]) -> Optional[int]:
    """First round at which half the field has been eliminated."""
    return find_percentile_round(series, MEDIAN_SURVIVAL_THRESHOLD)


def find_75th_percentile_round(series: Iterable[SurvivalPoint]) -> Optional[int]:
    """First round at which 75% of the field has been eliminated."""
    return find_percentile_round(series, PERCENTILE_75_DROP_THRESHOLD)


def summarize_survival(series: Sequence[SurvivalPoint]) -> SurvivalSummary:
    """Collect the milestones shown for a single survival curve."""
    if not series:
        return SurvivalSummary(None, None, None, None)

    return SurvivalSummary(
        median_round=find_median_survival_round(series),
        percentile_75_round=find_75th_percentile_round(series),
        first_round_survival=series[0].survival_rate,
        max_round=max(p.round_number for p in series),
    )


def summarize_by_partition(
    partitions: Dict[int, Sequence[SurvivalPoint]],
) -> Dict[int, SurvivalSummary]:
    """Summarize several series keyed by partition (e.g. seat position)."""
    summaries = {
        key: summarize_survival(series)
        for key, series in sorted(partitions.items())
    }
    logger.debug("Summarized %d survival partitions", len(summaries))
    return summaries
