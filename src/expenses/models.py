from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union


class ExpenseCategory(str, Enum):
    """Fixed set of expense categories."""

    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    HEALTHCARE = "Healthcare"
    OFFICE = "Office"
    TRAVEL = "Travel"
    OTHER = "Other"


def parse_datetime(value: Union[str, date, datetime]) -> datetime:
    """Parse an ISO-8601 date or datetime. A trailing ``Z`` means UTC."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def as_local(value: Union[str, date, datetime], tz: Optional[tzinfo] = None) -> datetime:
    """
    Express a timestamp in ``tz``; None means the server's local zone.

    Naive values are taken to already be in that zone.
    """
    moment = parse_datetime(value)
    if tz is None:
        return moment.astimezone()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


@dataclass(slots=True)
class Expense:
    """An expense owned by exactly one user. ``date`` is an ISO-8601 string."""

    id: str
    title: str
    amount: float
    category: str
    date: str
    description: str
    user_id: str
    created_at: str
    updated_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Expense":
        return cls(
            id=str(record["id"]),
            title=record.get("title", ""),
            amount=float(record.get("amount") or 0.0),
            category=record.get("category", ""),
            date=record.get("date") or record.get("created_at", ""),
            description=record.get("description") or "",
            user_id=record.get("user_id", ""),
            created_at=record.get("created_at", ""),
            updated_at=record.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "amount": self.amount,
            "category": self.category,
            "date": self.date,
            "description": self.description,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
