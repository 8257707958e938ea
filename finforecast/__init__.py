"""
finforecast: cash-flow forecasting for small-business bookkeeping.

Public entry points:
- generate_forecast(events, horizon, scenario, as_of) -> ForecastResult
- summarize(result) -> ForecastSummary
"""

from finforecast.constants.scenarios import FORECAST_HORIZONS, Scenario, ScenarioAdjustment
from finforecast.model_impl.engine import generate_forecast, summarize
from finforecast.model_interface.types import (
    DailyBucket,
    Event,
    ForecastBands,
    ForecastPoint,
    ForecastResult,
    ForecastSummary,
    Trend,
)

__version__ = "0.1.0"

__all__ = [
    "FORECAST_HORIZONS",
    "Scenario",
    "ScenarioAdjustment",
    "generate_forecast",
    "summarize",
    "DailyBucket",
    "Event",
    "ForecastBands",
    "ForecastPoint",
    "ForecastResult",
    "ForecastSummary",
    "Trend",
]
