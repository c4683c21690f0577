"""Expense operations scoped to the requesting user, plus the summary report."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from src.daybook.errors import InvalidArgumentError, NotFoundError
from src.records import EXPENSES, RecordStore

from .models import Expense, ExpenseCategory, as_local, parse_datetime
from .summary import ExpenseSummary, summarize

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "amount", "category", "date", "description")


def parse_amount(value: Any) -> float:
    """Parse a positive, finite amount from a number or numeric string."""
    if isinstance(value, bool):
        raise InvalidArgumentError("Amount must be a positive number")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError("Amount must be a positive number") from None
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidArgumentError("Amount must be a positive number")
    return amount


def parse_category(value: Any) -> str:
    try:
        return ExpenseCategory(value).value
    except ValueError:
        allowed = ", ".join(c.value for c in ExpenseCategory)
        raise InvalidArgumentError(f"Category must be one of {allowed}") from None


def parse_expense_date(value: Any) -> str:
    if not isinstance(value, (str, date)):
        raise InvalidArgumentError("Invalid date")
    try:
        return parse_datetime(value).isoformat()
    except ValueError:
        raise InvalidArgumentError("Invalid date") from None


def _parse_bound(value: str, name: str) -> Union[date, datetime]:
    """A bare YYYY-MM-DD bound compares by calendar day; anything else by instant."""
    try:
        if len(value) == 10:
            return date.fromisoformat(value)
        return parse_datetime(value)
    except ValueError:
        raise InvalidArgumentError(f"Invalid {name}") from None


class ExpenseService:
    """CRUD over the expense collection. Every call is filtered by ``user_id``."""

    def __init__(self, store: RecordStore, clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            store: record store holding the ``expenses`` collection
            clock: returns "now"; defaults to naive server local time
        """
        self.store = store
        self.clock = clock or datetime.now

    def _all(self, user_id: str, category: Optional[str] = None) -> List[Expense]:
        where = {"category": category} if category else None
        return [Expense.from_record(r) for r in self.store.list(EXPENSES, user_id, where)]

    def list(
        self,
        user_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Expense]:
        """Owned expenses, optionally filtered, newest first by date."""
        expenses = self._all(user_id, category)
        tz = self.clock().tzinfo
        dated = [(expense, as_local(expense.date, tz)) for expense in expenses]

        for raw, name in ((start_date, "startDate"), (end_date, "endDate")):
            if not raw:
                continue
            bound = _parse_bound(raw, name)
            if isinstance(bound, datetime):
                bound = as_local(bound, tz)
                if name == "startDate":
                    dated = [(e, m) for e, m in dated if m >= bound]
                else:
                    dated = [(e, m) for e, m in dated if m <= bound]
            elif name == "startDate":
                dated = [(e, m) for e, m in dated if m.date() >= bound]
            else:
                dated = [(e, m) for e, m in dated if m.date() <= bound]

        dated.sort(key=lambda pair: pair[1], reverse=True)
        return [expense for expense, _ in dated]

    def create(
        self,
        user_id: str,
        title: Optional[str],
        amount: Any,
        category: Optional[str],
        date: Any = None,
        description: Optional[str] = None,
    ) -> Expense:
        if not title or not str(title).strip() or amount is None or amount == "" or not category:
            raise InvalidArgumentError("Title, amount, and category are required")

        fields: Dict[str, Any] = {
            "title": str(title).strip(),
            "amount": parse_amount(amount),
            "category": parse_category(category),
            "date": parse_expense_date(date) if date else datetime.now(timezone.utc).isoformat(),
            "description": description or "",
        }
        record = self.store.insert(EXPENSES, user_id, fields)
        logger.info("Created expense %s for %s", record["id"], user_id)
        return Expense.from_record(record)

    def update(self, user_id: str, expense_id: str, changes: Mapping[str, Any]) -> Expense:
        """
        Partially update an expense. Only keys present (and not None) are applied.

        Raises:
            InvalidArgumentError: bad amount, category, date or an empty title
            NotFoundError: the caller owns no expense with this id
        """
        fields: Dict[str, Any] = {}
        for key in UPDATABLE_FIELDS:
            if key not in changes or changes[key] is None:
                continue
            value = changes[key]
            if key == "title":
                if not isinstance(value, str) or not value.strip():
                    raise InvalidArgumentError("Title cannot be empty")
                value = value.strip()
            elif key == "amount":
                value = parse_amount(value)
            elif key == "category":
                value = parse_category(value)
            elif key == "date":
                value = parse_expense_date(value)
            elif key == "description":
                if not isinstance(value, str):
                    raise InvalidArgumentError("Description must be a string")
            fields[key] = value

        try:
            record = self.store.update(EXPENSES, user_id, expense_id, fields)
        except NotFoundError:
            raise NotFoundError("Expense not found") from None
        return Expense.from_record(record)

    def delete(self, user_id: str, expense_id: str) -> None:
        try:
            self.store.delete(EXPENSES, user_id, expense_id)
        except NotFoundError:
            raise NotFoundError("Expense not found") from None
        logger.info("Deleted expense %s for %s", expense_id, user_id)

    def summary(self, user_id: str) -> ExpenseSummary:
        return summarize(self._all(user_id), self.clock())
