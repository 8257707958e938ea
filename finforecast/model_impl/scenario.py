from __future__ import annotations
from typing import Tuple

from finforecast.constants.scenarios import ScenarioAdjustment


def apply_scenario(income: float, expense: float, adjustment: ScenarioAdjustment) -> Tuple[float, float]:
    """Scale a projected (income, expense) pair by the scenario's percentage deltas."""
    return (
        income * (1 + adjustment.income_delta_pct),
        expense * (1 + adjustment.expense_delta_pct),
    )
