from __future__ import annotations

from finforecast.constants.scenarios import Scenario
from finforecast.model_interface.types import Trend

TREND_PHRASES = {
    Trend.UP: "positive dynamic",
    Trend.DOWN: "negative dynamic",
    Trend.STABLE: "stable situation",
}

SCENARIO_PHRASES = {
    Scenario.BASE: "in the base scenario",
    Scenario.OPTIMISTIC: "in the optimistic scenario",
    Scenario.PESSIMISTIC: "in the pessimistic scenario",
}

LOW_DATA_DAYS = 30
LOW_DATA_NOTE = " Not enough data for an accurate forecast."
EMPTY_HISTORY_TEXT = "Not enough data to forecast. Add transactions to get a forecast."


def quality_tier(quality: int) -> str:
    if quality > 70:
        return "high"
    if quality > 40:
        return "medium"
    return "low"


def build_explanation(trend: Trend, quality: int, history_days: int, scenario: Scenario) -> str:
    """
    Short human-readable explanation, e.g.
    'Forecast in the base scenario: stable situation. Forecast quality: medium.'
    """
    text = f"Forecast {SCENARIO_PHRASES[scenario]}: {TREND_PHRASES[trend]}."
    if history_days < LOW_DATA_DAYS:
        text += LOW_DATA_NOTE
    text += f" Forecast quality: {quality_tier(quality)}."
    return text
