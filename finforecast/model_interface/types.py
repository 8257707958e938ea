from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from finforecast.constants.scenarios import Scenario

EventKind = Literal["income", "expense"]


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class Event:
    occurred_on: date
    kind: EventKind
    amount: Decimal
    category_id: Optional[str] = None
    category_name: Optional[str] = None


@dataclass(frozen=True)
class DailyBucket:
    date: date
    income_total: float = 0.0
    expense_total: float = 0.0


@dataclass(frozen=True)
class ForecastPoint:
    date: date
    income: int
    expense: int
    profit: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "income": self.income,
            "expense": self.expense,
            "profit": self.profit,
        }


@dataclass
class ForecastBands:
    upper: List[ForecastPoint] = field(default_factory=list)
    lower: List[ForecastPoint] = field(default_factory=list)


@dataclass
class ForecastResult:
    horizon: int
    scenario: Scenario
    series: List[ForecastPoint]
    bands: ForecastBands
    quality: int
    explanation: str
    trend: Trend
    avg_daily_income: int
    avg_daily_expense: int
    avg_daily_profit: int

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready rendering (ISO dates, enum values)."""
        return {
            "horizon": self.horizon,
            "scenario": self.scenario.value,
            "series": [p.to_dict() for p in self.series],
            "bands": {
                "upper": [p.to_dict() for p in self.bands.upper],
                "lower": [p.to_dict() for p in self.bands.lower],
            },
            "quality": self.quality,
            "explanation": self.explanation,
            "trend": self.trend.value,
            "avg_daily_income": self.avg_daily_income,
            "avg_daily_expense": self.avg_daily_expense,
            "avg_daily_profit": self.avg_daily_profit,
        }


@dataclass(frozen=True)
class ForecastSummary:
    total_income: int
    total_expense: int
    total_profit: int
    avg_profit: float
    best_day: Optional[ForecastPoint]
    worst_day: Optional[ForecastPoint]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "total_profit": self.total_profit,
            "avg_profit": self.avg_profit,
            "best_day": self.best_day.to_dict() if self.best_day else None,
            "worst_day": self.worst_day.to_dict() if self.worst_day else None,
        }
