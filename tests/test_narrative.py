from finforecast.constants.scenarios import Scenario
from finforecast.model_impl.narrative import build_explanation, quality_tier
from finforecast.model_interface.types import Trend


def test_low_data_explanation():
    text = build_explanation(Trend.STABLE, 45, 10, Scenario.BASE)
    assert text == (
        "Forecast in the base scenario: stable situation."
        " Not enough data for an accurate forecast."
        " Forecast quality: medium."
    )


def test_enough_data_has_no_caveat():
    text = build_explanation(Trend.UP, 85, 60, Scenario.OPTIMISTIC)
    assert text == "Forecast in the optimistic scenario: positive dynamic. Forecast quality: high."


def test_down_trend_pessimistic():
    text = build_explanation(Trend.DOWN, 30, 29, Scenario.PESSIMISTIC)
    assert "in the pessimistic scenario: negative dynamic." in text
    assert "Not enough data" in text
    assert text.endswith("Forecast quality: low.")


def test_quality_tier_boundaries():
    assert quality_tier(71) == "high"
    assert quality_tier(70) == "medium"
    assert quality_tier(41) == "medium"
    assert quality_tier(40) == "low"
    assert quality_tier(0) == "low"
