from src.stats_engine.cards import (
    classify_tier,
    compute_trap_score,
    count_tiers,
    is_spice_candidate,
    rank_trap_cards,
    select_spice_cards,
    split_card_performance,
)
from src.stats_engine.errors import (
    DegenerateDenominator,
    InvalidInputCardinality,
    OutOfRangeInput,
    StatisticsError,
)
from src.stats_engine.models import (
    CardWinRateSample,
    SeatFairnessResult,
    SeatOutcome,
    SeatRates,
    SurvivalPoint,
    SurvivalSummary,
)
from src.stats_engine.seat_fairness import (
    classify_effect_size,
    compute_seat_fairness,
    compute_seat_rates,
)
from src.stats_engine.significance import (
    compute_p_value,
    compute_sample_p_value,
    erf,
    exceeds_confidence_interval,
    format_p_value,
    is_significant,
    normal_cdf,
)
from src.stats_engine.survival import (
    find_75th_percentile_round,
    find_median_survival_round,
    find_percentile_round,
    summarize_by_partition,
    summarize_survival,
)

__all__ = [
    "CardWinRateSample",
    "DegenerateDenominator",
    "InvalidInputCardinality",
    "OutOfRangeInput",
    "SeatFairnessResult",
    "SeatOutcome",
    "SeatRates",
    "StatisticsError",
    "SurvivalPoint",
    "SurvivalSummary",
    "classify_effect_size",
    "classify_tier",
    "compute_p_value",
    "compute_sample_p_value",
    "compute_seat_fairness",
    "compute_seat_rates",
    "compute_trap_score",
    "count_tiers",
    "erf",
    "exceeds_confidence_interval",
    "find_75th_percentile_round",
    "find_median_survival_round",
    "find_percentile_round",
    "format_p_value",
    "is_significant",
    "is_spice_candidate",
    "normal_cdf",
    "rank_trap_cards",
    "select_spice_cards",
    "split_card_performance",
    "summarize_by_partition",
    "summarize_survival",
]
