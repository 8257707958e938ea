# PURPOSE: Cash-flow forecast engine: sequences aggregation, trend, seasonality,
#          scenario, bands, quality and narrative into one ForecastResult.
# CONTEXT: Pure function of (events, horizon, scenario, as_of). No I/O, no clock reads;
#          the caller injects as_of so identical inputs give identical output.

from __future__ import annotations
import math
from datetime import date, timedelta
from typing import Iterable, List, Union

from finforecast.constants.scenarios import FORECAST_HORIZONS, Scenario
from finforecast.model_impl.aggregator import aggregate_daily
from finforecast.model_impl.bands import band_points, population_std
from finforecast.model_impl.narrative import EMPTY_HISTORY_TEXT, build_explanation
from finforecast.model_impl.quality import quality_score
from finforecast.model_impl.scenario import apply_scenario
from finforecast.model_impl.seasonality import seasonal_multiplier, weekday_index, weekday_profile
from finforecast.model_impl.trend import linear_trend
from finforecast.model_interface.types import (
    Event,
    ForecastBands,
    ForecastPoint,
    ForecastResult,
    ForecastSummary,
    Trend,
)
from finforecast.utils.rounding import round_money

# Income slope must exceed this share of average daily income to count as a trend.
TREND_THRESHOLD = 0.01
QUALITY_WINDOW_DAYS = 7


def _check_contract(horizon: int, scenario: Union[Scenario, str]) -> Scenario:
    if horizon not in FORECAST_HORIZONS:
        raise ValueError(f"Unsupported horizon: {horizon} (allowed: {FORECAST_HORIZONS})")
    return Scenario(scenario)


def _classify_trend(slope: float, avg_income: float) -> Trend:
    if slope > avg_income * TREND_THRESHOLD:
        return Trend.UP
    if slope < -avg_income * TREND_THRESHOLD:
        return Trend.DOWN
    return Trend.STABLE


def empty_forecast(horizon: int, scenario: Scenario, as_of: date) -> ForecastResult:
    """
    All-zero forecast for users with no usable history.

    Dates still run as_of+1 .. as_of+horizon so callers can chart the result as-is.
    """
    series, upper, lower = [], [], []
    for i in range(1, horizon + 1):
        d = as_of + timedelta(days=i)
        series.append(ForecastPoint(d, 0, 0, 0))
        upper.append(ForecastPoint(d, 0, 0, 0))
        lower.append(ForecastPoint(d, 0, 0, 0))
    return ForecastResult(
        horizon=horizon,
        scenario=scenario,
        series=series,
        bands=ForecastBands(upper=upper, lower=lower),
        quality=0,
        explanation=EMPTY_HISTORY_TEXT,
        trend=Trend.STABLE,
        avg_daily_income=0,
        avg_daily_expense=0,
        avg_daily_profit=0,
    )


def generate_forecast(
    events: Iterable[Event],
    horizon: int,
    scenario: Union[Scenario, str],
    as_of: date,
) -> ForecastResult:
    """
    Project daily income, expense and profit for the next `horizon` days.

    parameters:
    - events: iterable of Event – validated history for one account, any order.
    - horizon: int – one of FORECAST_HORIZONS.
    - scenario: Scenario | str – base / optimistic / pessimistic.
    - as_of: date – last historical day; projections start the day after.

    returns:
    - ForecastResult

    raises:
    - ValueError – horizon or scenario outside the allowed sets.

    steps:
    1) Aggregate events into a gap-free daily series ending at as_of.
    2) Fit OLS trends to income and expense; measure their population std.
    3) Build the weekday income profile and classify the trend direction.
    4) For each future day: trend value, weekday multiplier on income,
       clamp at 0, scenario shift, round, then bands.
    5) Score quality on the first week and compose the explanation.
    """
    scenario = _check_contract(horizon, scenario)
    history = aggregate_daily(events, as_of)
    if not history:
        return empty_forecast(horizon, scenario, as_of)

    incomes = [b.income_total for b in history]
    expenses = [b.expense_total for b in history]
    n = len(history)
    avg_income = sum(incomes) / n
    avg_expense = sum(expenses) / n

    income_slope, income_intercept = linear_trend(incomes)
    expense_slope, expense_intercept = linear_trend(expenses)
    income_std = population_std(incomes)
    expense_std = population_std(expenses)
    weekly = weekday_profile(history)
    trend = _classify_trend(income_slope, avg_income)
    adjustment = scenario.adjustment

    last_day = history[-1].date
    series: List[ForecastPoint] = []
    bands = ForecastBands()
    for i in range(1, horizon + 1):
        day = last_day + timedelta(days=i)
        day_index = n + i - 1

        income = income_intercept + income_slope * day_index
        expense = expense_intercept + expense_slope * day_index
        income *= seasonal_multiplier(weekly[weekday_index(day)], avg_income)
        # overflowed trends project as a flat zero day
        income = income if math.isfinite(income) else 0.0
        expense = expense if math.isfinite(expense) else 0.0

        income, expense = apply_scenario(max(0.0, income), max(0.0, expense), adjustment)

        series.append(ForecastPoint(
            date=day,
            income=round_money(income),
            expense=round_money(expense),
            profit=round_money(income - expense),
        ))
        upper, lower = band_points(day, income, expense, income_std, expense_std)
        bands.upper.append(upper)
        bands.lower.append(lower)

    quality = quality_score(history, series[:QUALITY_WINDOW_DAYS])
    return ForecastResult(
        horizon=horizon,
        scenario=scenario,
        series=series,
        bands=bands,
        quality=quality,
        explanation=build_explanation(trend, quality, n, scenario),
        trend=trend,
        avg_daily_income=round_money(avg_income),
        avg_daily_expense=round_money(avg_expense),
        avg_daily_profit=round_money(avg_income - avg_expense),
    )


def summarize(result: ForecastResult) -> ForecastSummary:
    """
    Totals, average profit and best/worst day from a forecast's series.

    notes:
    - Ties keep the earliest day.
    - best_day/worst_day are None only for an empty series.
    """
    series = result.series
    total_income = sum(p.income for p in series)
    total_expense = sum(p.expense for p in series)
    total_profit = sum(p.profit for p in series)

    best = worst = None
    for point in series:
        if best is None or point.profit > best.profit:
            best = point
        if worst is None or point.profit < worst.profit:
            worst = point

    return ForecastSummary(
        total_income=total_income,
        total_expense=total_expense,
        total_profit=total_profit,
        avg_profit=total_profit / len(series) if series else 0.0,
        best_day=best,
        worst_day=worst,
    )
