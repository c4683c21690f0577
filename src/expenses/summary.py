"""
Expense summary report.

Recomputed from the caller's full expense set on every request. Weeks start on
Sunday; "local" means the time zone of the ``now`` passed in (the server's zone
when ``now`` is naive).

Note: category totals cover every expense, while the weekly and monthly totals
are scoped to the current week and month.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Dict, List, Optional, Sequence

from .models import Expense, as_local


@dataclass(slots=True)
class DailyTotal:
    date: str
    total: float
    count: int


@dataclass(slots=True)
class WeekBucket:
    week: int
    start_date: str
    end_date: str
    total: float
    count: int


@dataclass(slots=True)
class ExpenseSummary:
    total_expenses: float
    weekly_total: float
    monthly_total: float
    category_totals: Dict[str, float]
    weekly_breakdown: List[DailyTotal]
    monthly_breakdown: List[WeekBucket]
    total_count: int
    weekly_count: int
    monthly_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape (camelCase keys)."""
        return {
            "totalExpenses": self.total_expenses,
            "weeklyTotal": self.weekly_total,
            "monthlyTotal": self.monthly_total,
            "categoryTotals": dict(self.category_totals),
            "weeklyBreakdown": [
                {"date": day.date, "total": day.total, "count": day.count}
                for day in self.weekly_breakdown
            ],
            "monthlyBreakdown": [
                {
                    "week": bucket.week,
                    "startDate": bucket.start_date,
                    "endDate": bucket.end_date,
                    "total": bucket.total,
                    "count": bucket.count,
                }
                for bucket in self.monthly_breakdown
            ],
            "totalCount": self.total_count,
            "weeklyCount": self.weekly_count,
            "monthlyCount": self.monthly_count,
        }


def round_money(value: float) -> float:
    """Round to cents, half away from zero, on ``value * 100``."""
    scaled = value * 100
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / 100


def _days_since_sunday(day: date) -> int:
    # date.weekday() counts from Monday.
    return (day.weekday() + 1) % 7


def _midnight(day: date, zone: Optional[tzinfo]) -> datetime:
    """Local midnight of ``day`` with the UTC offset that applies on that day."""
    if zone is None:
        # Naive local time; astimezone() looks up the system zone for this date.
        return datetime.combine(day, time()).astimezone()
    return datetime.combine(day, time(), tzinfo=zone)


def _sum(expenses: Sequence[Expense]) -> float:
    return round_money(sum(expense.amount for expense in expenses))


def summarize(expenses: Sequence[Expense], now: datetime) -> ExpenseSummary:
    """
    Build the summary for ``expenses`` as seen at ``now``.

    A naive ``now`` means server local time. Week and month boundaries are
    calendar days in that zone, so a DST change inside the week does not move
    Sunday's midnight.
    """
    zone = now.tzinfo
    today = as_local(now, zone).date()
    week_start_day = today - timedelta(days=_days_since_sunday(today))
    month_start_day = today.replace(day=1)
    start_of_week = _midnight(week_start_day, zone)
    start_of_month = _midnight(month_start_day, zone)

    dated = [(expense, as_local(expense.date, zone)) for expense in expenses]
    weekly = [(expense, moment) for expense, moment in dated if moment >= start_of_week]
    monthly = [(expense, moment) for expense, moment in dated if moment >= start_of_month]

    category_totals: Dict[str, float] = {}
    for expense, _ in dated:
        category_totals[expense.category] = category_totals.get(expense.category, 0.0) + expense.amount

    weekly_breakdown: List[DailyTotal] = []
    for offset in range(7):
        day = week_start_day + timedelta(days=offset)
        matches = [expense for expense, moment in weekly if moment.date() == day]
        weekly_breakdown.append(
            DailyTotal(date=day.isoformat(), total=_sum(matches), count=len(matches))
        )

    lead_days = _days_since_sunday(month_start_day)
    weeks_in_month = math.ceil((today.day + lead_days) / 7)
    monthly_breakdown: List[WeekBucket] = []
    for week in range(weeks_in_month):
        week_start = month_start_day + timedelta(days=week * 7 - lead_days)
        week_end = week_start + timedelta(days=6)
        matches = [
            expense for expense, moment in monthly if week_start <= moment.date() <= week_end
        ]
        monthly_breakdown.append(
            WeekBucket(
                week=week + 1,
                start_date=week_start.isoformat(),
                end_date=week_end.isoformat(),
                total=_sum(matches),
                count=len(matches),
            )
        )

    return ExpenseSummary(
        total_expenses=_sum([expense for expense, _ in dated]),
        weekly_total=_sum([expense for expense, _ in weekly]),
        monthly_total=_sum([expense for expense, _ in monthly]),
        category_totals={name: round_money(total) for name, total in category_totals.items()},
        weekly_breakdown=weekly_breakdown,
        monthly_breakdown=monthly_breakdown,
        total_count=len(dated),
        weekly_count=len(weekly),
        monthly_count=len(monthly),
    )
