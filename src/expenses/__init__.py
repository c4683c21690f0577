"""Expense ledger: models, the per-user service and the summary report."""

from .models import Expense, ExpenseCategory
from .service import ExpenseService
from .summary import DailyTotal, ExpenseSummary, WeekBucket, round_money, summarize

__all__ = [
    "Expense",
    "ExpenseCategory",
    "ExpenseService",
    "ExpenseSummary",
    "DailyTotal",
    "WeekBucket",
    "round_money",
    "summarize",
]
