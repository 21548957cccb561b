"""Two-sided significance test for a card's win-rate delta.

Uses a normal approximation regardless of sample size, with the
Abramowitz-Stegun rational approximation of the error function.
This understates uncertainty for small deck counts.

``normal_cdf`` feeds ``|x|`` straight into ``erf`` without the usual
``1/sqrt(2)`` scaling, so it is not the textbook standard normal CDF.
The resulting two-sided p-value is ``1 - erf(|z|)``; downstream
dashboards compare against values produced this way.
"""

import logging
import math

from src.stats_engine.config import (
    ERF_COEFFICIENTS,
    ERF_P,
    SIGNIFICANCE_LEVEL,
    Z_CRITICAL_95,
)
from src.stats_engine.errors import OutOfRangeInput
from src.stats_engine.models import CardWinRateSample
from src.stats_engine.validation import require_finite, require_unit_interval

logger = logging.getLogger(__name__)


def _sign(x: float) -> int:
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0


def erf(x: float) -> float:
    """Abramowitz-Stegun 7.1.26 approximation of erf(x) (max error ~1.5e-7)."""
    a1, a2, a3, a4, a5 = ERF_COEFFICIENTS
    ax = abs(x)
    t = 1.0 / (1.0 + ERF_P * ax)
    poly = ((((a5 * t + a4) * t + a3) * t + a2) * t + a1) * t
    return _sign(x) * (1.0 - poly * math.exp(-ax * ax))


def normal_cdf(x: float) -> float:
    """``0.5 * (1 + erf(x))`` with the sign pulled out of :func:`erf`.

    No ``1/sqrt(2)`` scaling is applied, so ``normal_cdf(1.96)`` is about
    0.9972 rather than the textbook 0.9750.
    """
    return 0.5 * (1.0 + _sign(x) * erf(abs(x)))


def _validate_sample(delta_fraction, std_dev_fraction, sample_size):
    require_finite("delta_fraction", delta_fraction)
    require_finite("std_dev_fraction", std_dev_fraction)
    if std_dev_fraction < 0:
        raise OutOfRangeInput(
            f"std_dev_fraction must be non-negative, got {std_dev_fraction}"
        )
    if sample_size < 1:
        raise OutOfRangeInput(f"sample_size must be positive, got {sample_size}")


def compute_p_value(
    delta_fraction: float, std_dev_fraction: float, sample_size: int
) -> float:
    """Two-sided p-value for a win-rate delta being different from zero.

    ``SE = std / sqrt(n)``, ``z = delta / SE``,
    ``p = 2 * (1 - normal_cdf(|z|))`` clamped to [0, 1].

    With zero standard deviation the z-score is undefined: a nonzero delta
    yields exactly 0.0, a zero delta yields exactly 1.0.

    Raises:
        OutOfRangeInput: on non-finite values, a negative standard
            deviation, or a non-positive sample size.
    """
    _validate_sample(delta_fraction, std_dev_fraction, sample_size)

    standard_error = std_dev_fraction / math.sqrt(sample_size)
    if standard_error == 0:
        return 1.0 if delta_fraction == 0 else 0.0

    z = delta_fraction / standard_error
    p = 2.0 * (1.0 - normal_cdf(abs(z)))
    return min(1.0, max(0.0, p))


def compute_sample_p_value(sample: CardWinRateSample) -> float:
    """:func:`compute_p_value` for a :class:`CardWinRateSample`."""
    return compute_p_value(
        sample.delta_fraction, sample.std_dev_fraction, sample.sample_size
    )


def is_significant(p_value: float, alpha: float = SIGNIFICANCE_LEVEL) -> bool:
    """True when *p_value* is strictly below *alpha*."""
    require_unit_interval("p_value", p_value)
    return p_value < alpha


def exceeds_confidence_interval(
    delta_fraction: float, std_dev_fraction: float, sample_size: int
) -> bool:
    """Quick check used by the card performance list.

    True when ``|delta| > 1.96 * std / sqrt(n)``, i.e. the delta falls
    outside a 95% normal interval around zero.

    This is not the same test as ``is_significant(compute_p_value(...))``.
    The p-value path rejects once ``1 - erf(|z|) < 0.05``, which happens
    near ``|z| > 1.39``, while this check needs ``|z| > 1.96``. A card with
    ``1.39 < |z| <= 1.96`` is reported significant but inside the interval.
    """
    _validate_sample(delta_fraction, std_dev_fraction, sample_size)
    margin = (std_dev_fraction / math.sqrt(sample_size)) * Z_CRITICAL_95
    return abs(delta_fraction) > margin


def format_p_value(p_value: float) -> str:
    """Display form of a p-value: "<0.001", "<0.01", or three decimals."""
    require_unit_interval("p_value", p_value)
    if p_value < 0.001:
        return "<0.001"
    if p_value < 0.01:
        return "<0.01"
    return f"{p_value:.3f}"
