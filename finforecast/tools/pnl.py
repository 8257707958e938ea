# PURPOSE: Profit & loss reporting over the same event list the forecast consumes.
# CONTEXT: Period summaries, category breakdowns, daily/monthly P&L and period comparison.
#          Amounts stay Decimal; callers convert for display or JSON.

from __future__ import annotations
import calendar
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Tuple

from finforecast.model_interface.types import Event, EventKind

UNCATEGORIZED_ID = "uncategorized"
UNCATEGORIZED_NAME = "Uncategorized"


@dataclass(frozen=True)
class PeriodSummary:
    income: Decimal
    expense: Decimal
    profit: Decimal
    transaction_count: int
    avg_transaction: Decimal
    start: date
    end: date


@dataclass(frozen=True)
class CategoryTotal:
    category_id: str
    category_name: str
    total: Decimal
    count: int
    percentage: float


@dataclass(frozen=True)
class PeriodTotal:
    period: str
    income: Decimal
    expense: Decimal
    profit: Decimal


@dataclass(frozen=True)
class PeriodComparison:
    income_change: Decimal
    expense_change: Decimal
    profit_change: Decimal
    income_percent: float
    expense_percent: float
    profit_percent: float


def _totals(events: Iterable[Event]) -> Tuple[Decimal, Decimal]:
    income = expense = Decimal(0)
    for ev in events:
        if ev.kind == "income":
            income += ev.amount
        else:
            expense += ev.amount
    return income, expense


def period_summary(events: Iterable[Event], start: date, end: date) -> PeriodSummary:
    """
    Income, expense and profit for events dated within [start, end].

    returns:
    - PeriodSummary – avg_transaction is (income + expense) / count, 0 with no events.
    """
    inside = [ev for ev in events if start <= ev.occurred_on <= end]
    income, expense = _totals(inside)
    count = len(inside)
    return PeriodSummary(
        income=income,
        expense=expense,
        profit=income - expense,
        transaction_count=count,
        avg_transaction=(income + expense) / count if count else Decimal(0),
        start=start,
        end=end,
    )


def category_breakdown(events: Iterable[Event], kind: EventKind) -> List[CategoryTotal]:
    """
    Totals per category for one event kind, largest first.

    notes:
    - Events without a category are grouped under 'uncategorized'.
    - The first name seen for a category id is kept.
    """
    groups: Dict[str, List] = {}
    for ev in events:
        if ev.kind != kind:
            continue
        cat_id = ev.category_id or UNCATEGORIZED_ID
        name = ev.category_name or UNCATEGORIZED_NAME
        entry = groups.setdefault(cat_id, [name, Decimal(0), 0])
        entry[1] += ev.amount
        entry[2] += 1

    grand_total = sum((g[1] for g in groups.values()), Decimal(0))
    out = [
        CategoryTotal(
            category_id=cat_id,
            category_name=name,
            total=total,
            count=count,
            percentage=float(total / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for cat_id, (name, total, count) in groups.items()
    ]
    return sorted(out, key=lambda c: c.total, reverse=True)


def _pnl_by(events: Iterable[Event], key: Callable[[date], str]) -> List[PeriodTotal]:
    by_period: Dict[str, List[Event]] = {}
    for ev in events:
        by_period.setdefault(key(ev.occurred_on), []).append(ev)
    out = []
    for period in sorted(by_period):
        income, expense = _totals(by_period[period])
        out.append(PeriodTotal(period=period, income=income, expense=expense, profit=income - expense))
    return out


def daily_pnl(events: Iterable[Event]) -> List[PeriodTotal]:
    """P&L per day that has events, keyed 'YYYY-MM-DD'."""
    return _pnl_by(events, lambda d: d.isoformat())


def monthly_pnl(events: Iterable[Event]) -> List[PeriodTotal]:
    """P&L per month that has events, keyed 'YYYY-MM'."""
    return _pnl_by(events, lambda d: f"{d.year:04d}-{d.month:02d}")


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def current_month(events: Iterable[Event], today: date) -> PeriodSummary:
    return period_summary(events, date(today.year, today.month, 1), _month_end(today.year, today.month))


def current_quarter(events: Iterable[Event], today: date) -> PeriodSummary:
    first_month = (today.month - 1) // 3 * 3 + 1
    return period_summary(
        events,
        date(today.year, first_month, 1),
        _month_end(today.year, first_month + 2),
    )


def current_year(events: Iterable[Event], today: date) -> PeriodSummary:
    return period_summary(events, date(today.year, 1, 1), date(today.year, 12, 31))


def _percent(change: Decimal, previous: Decimal) -> float:
    return float(change / previous * 100) if previous > 0 else 0.0


def compare_periods(current: PeriodSummary, previous: PeriodSummary) -> PeriodComparison:
    """
    Absolute and relative change between two period summaries.

    notes:
    - Percentages are 0.0 when the previous value is zero or negative.
    """
    income_change = current.income - previous.income
    expense_change = current.expense - previous.expense
    profit_change = current.profit - previous.profit
    return PeriodComparison(
        income_change=income_change,
        expense_change=expense_change,
        profit_change=profit_change,
        income_percent=_percent(income_change, previous.income),
        expense_percent=_percent(expense_change, previous.expense),
        profit_percent=_percent(profit_change, previous.profit),
    )


def format_percent(value: float) -> str:
    """Signed percentage with one decimal, e.g. '+12.5%' or '-3.0%'."""
    return f"{'+' if value >= 0 else ''}{value:.1f}%"
