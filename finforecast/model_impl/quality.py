# PURPOSE: Heuristic 0-100 confidence score for a forecast.
# CONTEXT: A rubric over data volume and income volatility, not a statistical interval.

from __future__ import annotations
from typing import Sequence

from finforecast.model_impl.bands import population_std
from finforecast.model_interface.types import DailyBucket, ForecastPoint

MIN_HISTORY_DAYS = 7
LOW_CONFIDENCE_SCORE = 30
VOLUME_CAP = 70
POINTS_PER_DAY = 3

# (coefficient of variation upper bound, bonus), checked in order.
CONSISTENCY_BONUSES = ((0.5, 15), (1.0, 8))


def quality_score(historical: Sequence[DailyBucket], predicted: Sequence[ForecastPoint]) -> int:
    """
    Score a forecast from the size and steadiness of its history.

    parameters:
    - historical: sequence of DailyBucket – the aggregated history.
    - predicted: sequence of ForecastPoint – first projected days; only checked for presence.

    returns:
    - int – 0..100

    rubric:
    - under 7 days of history (or nothing predicted): 30.
    - otherwise min(70, days x 3) plus +15 when income CoV < 0.5, +8 when < 1.0.
    """
    if len(historical) < MIN_HISTORY_DAYS or len(predicted) == 0:
        return LOW_CONFIDENCE_SCORE

    score = min(VOLUME_CAP, len(historical) * POINTS_PER_DAY)

    incomes = [b.income_total for b in historical]
    mean = sum(incomes) / len(incomes)
    cov = population_std(incomes) / (mean or 1)
    for bound, bonus in CONSISTENCY_BONUSES:
        if cov < bound:
            score += bonus
            break

    return min(100, max(0, round(score)))
