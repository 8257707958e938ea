# PURPOSE: Collapse dated income/expense events into one bucket per calendar day.
# CONTEXT: First step of the forecast; the output is a gap-free daily series ending at as_of.

from __future__ import annotations
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from finforecast.model_interface.types import DailyBucket, Event


def group_by_date(events: Iterable[Event]) -> Dict[date, Tuple[Decimal, Decimal]]:
    """
    Sum income and expense per calendar day.

    returns:
    - dict – {date: (income_total, expense_total)}, only for days that have events.
    """
    grouped: Dict[date, Tuple[Decimal, Decimal]] = {}
    for ev in events:
        income, expense = grouped.get(ev.occurred_on, (Decimal(0), Decimal(0)))
        if ev.kind == "income":
            income += Decimal(ev.amount)
        else:
            expense += Decimal(ev.amount)
        grouped[ev.occurred_on] = (income, expense)
    return grouped


def aggregate_daily(events: Iterable[Event], as_of: date) -> List[DailyBucket]:
    """
    Build the daily series from the earliest event date to as_of inclusive.

    parameters:
    - events: iterable of Event – any order, may be empty.
    - as_of: date – last historical day ("today"), injected by the caller.

    returns:
    - list[DailyBucket] – ascending, one per day, zero buckets for quiet days.
      Empty when there are no events on or before as_of.

    notes:
    - Events dated after as_of are outside the walk and do not contribute.
    """
    grouped = group_by_date(events)
    if not grouped:
        return []

    day = min(grouped)
    buckets: List[DailyBucket] = []
    while day <= as_of:
        income, expense = grouped.get(day, (Decimal(0), Decimal(0)))
        buckets.append(DailyBucket(date=day, income_total=float(income), expense_total=float(expense)))
        day += timedelta(days=1)
    return buckets
