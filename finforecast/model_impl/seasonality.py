# PURPOSE: Weekly income pattern and the dampened multiplier used on projected income.
# CONTEXT: Expense projections are trend-only; this profile touches income alone.

from __future__ import annotations
from datetime import date
from typing import List, Sequence

from finforecast.model_interface.types import DailyBucket


def weekday_index(d: date) -> int:
    """Day number with 0=Sunday .. 6=Saturday."""
    return d.isoweekday() % 7


def weekday_profile(buckets: Sequence[DailyBucket]) -> List[float]:
    """
    Average income per weekday.

    returns:
    - list[float] – 7 values indexed by weekday_index; 0.0 for weekdays never observed.
    """
    per_day: List[List[float]] = [[] for _ in range(7)]
    for b in buckets:
        per_day[weekday_index(b.date)].append(b.income_total)
    return [sum(v) / len(v) if v else 0.0 for v in per_day]


def seasonal_multiplier(weekday_avg: float, avg_income: float) -> float:
    """
    Multiplier (1 + factor) * 0.5 with factor = weekday_avg / avg_income.

    A weekday with no positive average leaves the projection unchanged.
    """
    if weekday_avg <= 0:
        return 1.0
    factor = weekday_avg / (avg_income or 1)
    if factor <= 0:
        return 1.0
    return (1 + factor) * 0.5
