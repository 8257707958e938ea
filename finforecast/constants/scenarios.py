# PURPOSE: Fixed scenario table and the set of allowed forecast horizons.
# CONTEXT: Read by the orchestrator; the adjuster receives one ScenarioAdjustment by value.

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

# Allowed projection lengths in days.
FORECAST_HORIZONS = (30, 60, 90)


class Scenario(str, Enum):
    BASE = "base"
    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"

    @property
    def adjustment(self) -> "ScenarioAdjustment":
        return SCENARIO_ADJUSTMENTS[self]


@dataclass(frozen=True)
class ScenarioAdjustment:
    """
    Percentage shift applied to a projected day.

    attributes:
    - income_delta_pct: float – e.g. 0.2 means +20% income
    - expense_delta_pct: float – e.g. -0.1 means -10% expense
    """
    income_delta_pct: float
    expense_delta_pct: float


SCENARIO_ADJUSTMENTS: Mapping[Scenario, ScenarioAdjustment] = MappingProxyType({
    Scenario.BASE:        ScenarioAdjustment(0.0, 0.0),
    Scenario.OPTIMISTIC:  ScenarioAdjustment(0.2, -0.1),
    Scenario.PESSIMISTIC: ScenarioAdjustment(-0.2, 0.1),
})
