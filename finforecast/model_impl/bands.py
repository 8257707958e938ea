# PURPOSE: Fixed-width dispersion envelope around each projected day.
# CONTEXT: Width comes from the population std of the history; it does not widen with the horizon.

from __future__ import annotations
import math
from datetime import date
from typing import Sequence, Tuple

import numpy as np

from finforecast.model_interface.types import ForecastPoint
from finforecast.utils.rounding import round_money

# Envelope half-width in standard deviations.
BAND_SIGMA = 1.5


def population_std(values: Sequence[float]) -> float:
    """
    Population standard deviation (ddof=0); 0.0 for an empty sequence.

    When squaring overflows, the values are rescaled by their largest magnitude
    and measured again. A result that is still not finite counts as 0.
    """
    if len(values) == 0:
        return 0.0
    arr = np.asarray(values, dtype=float)
    with np.errstate(over="ignore", invalid="ignore"):
        std = float(np.std(arr))
        if not math.isfinite(std):
            scale = float(np.max(np.abs(arr)))
            std = float(np.std(arr / scale)) * scale if math.isfinite(scale) else 0.0
    return std if math.isfinite(std) else 0.0


def band_points(
    point_date: date,
    income: float,
    expense: float,
    income_std: float,
    expense_std: float,
) -> Tuple[ForecastPoint, ForecastPoint]:
    """
    Upper and lower points for one projected day.

    parameters:
    - income, expense: float – scenario-adjusted, unrounded projections.
    - income_std, expense_std: float – historical dispersion.

    returns:
    - (upper, lower): tuple[ForecastPoint, ForecastPoint]

    behaviour:
    - income/expense move by BAND_SIGMA x their own std.
    - profit moves by BAND_SIGMA x (income_std + expense_std).
    - every lower field is clamped at 0, including profit.
    """
    profit = income - expense
    income_off = income_std * BAND_SIGMA
    expense_off = expense_std * BAND_SIGMA
    profit_off = (income_std + expense_std) * BAND_SIGMA

    upper = ForecastPoint(
        date=point_date,
        income=round_money(income + income_off),
        expense=round_money(expense + expense_off),
        profit=round_money(profit + profit_off),
    )
    lower = ForecastPoint(
        date=point_date,
        income=round_money(max(0.0, income - income_off)),
        expense=round_money(max(0.0, expense - expense_off)),
        profit=round_money(max(0.0, profit - profit_off)),
    )
    return upper, lower
