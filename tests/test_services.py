from datetime import datetime, timezone

import pytest

from src.daybook.errors import InvalidArgumentError, NotFoundError
from src.expenses import ExpenseService
from src.expenses.service import parse_amount
from src.records import MemoryRecordStore
from src.todo import TodoService

FIXED_NOW = datetime(2025, 10, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return MemoryRecordStore()


@pytest.fixture
def todos(store):
    return TodoService(store)


@pytest.fixture
def expenses(store):
    return ExpenseService(store, clock=lambda: FIXED_NOW)


def test_todo_create_defaults(todos):
    todo = todos.create("user_a", "  Water plants  ")
    assert todo.title == "Water plants"
    assert todo.description == ""
    assert todo.completed is False
    assert todo.priority == "medium"


def test_todo_update_skips_none_values(todos):
    todo = todos.create("user_a", "Read", description="Chapter 3", priority="low")

    updated = todos.update("user_a", todo.id, {"description": None, "completed": True})

    assert updated.description == "Chapter 3"
    assert updated.completed is True
    assert updated.priority == "low"


def test_todo_update_rejects_non_boolean_completed(todos):
    todo = todos.create("user_a", "Read")
    with pytest.raises(InvalidArgumentError):
        todos.update("user_a", todo.id, {"completed": "yes"})


def test_todo_delete_other_users_todo(todos):
    todo = todos.create("user_a", "Read")
    with pytest.raises(NotFoundError) as exc_info:
        todos.delete("user_b", todo.id)
    assert exc_info.value.message == "Todo not found"


def test_todo_stats(todos):
    first = todos.create("user_a", "One")
    todos.create("user_a", "Two")
    todos.update("user_a", first.id, {"completed": True})

    stats = TodoService.stats(todos.list("user_a"))

    assert (stats.total, stats.completed, stats.pending) == (2, 1, 1)


@pytest.mark.parametrize("value", ["12.5", 12.5, 3])
def test_parse_amount_accepts_positive_numbers(value):
    assert parse_amount(value) == float(value)


@pytest.mark.parametrize("value", [0, -1, "abc", "nan", "inf", True, None])
def test_parse_amount_rejects(value):
    with pytest.raises(InvalidArgumentError):
        parse_amount(value)


def test_expense_create_normalizes_fields(expenses):
    expense = expenses.create("user_a", " Taxi ", "18", "Transportation", date="2025-10-14T08:30:00Z")

    assert expense.title == "Taxi"
    assert expense.amount == 18.0
    assert expense.date == "2025-10-14T08:30:00+00:00"
    assert expense.description == ""


def test_expense_create_rejects_bad_date(expenses):
    with pytest.raises(InvalidArgumentError) as exc_info:
        expenses.create("user_a", "Taxi", 18, "Transportation", date="next tuesday")
    assert exc_info.value.message == "Invalid date"


def test_expense_list_with_datetime_bounds(expenses):
    expenses.create("user_a", "Early", 1, "Food", date="2025-10-14T08:00:00Z")
    expenses.create("user_a", "Late", 1, "Food", date="2025-10-14T20:00:00Z")

    found = expenses.list("user_a", start_date="2025-10-14T12:00:00Z")

    assert [e.title for e in found] == ["Late"]


def test_expense_update_changes_category(expenses):
    expense = expenses.create("user_a", "Gift", 30, "Other", date="2025-10-10")

    updated = expenses.update("user_a", expense.id, {"category": "Shopping"})

    assert updated.category == "Shopping"
    assert updated.amount == 30.0
    with pytest.raises(InvalidArgumentError):
        expenses.update("user_a", expense.id, {"category": "Toys"})


def test_expense_summary_uses_clock(expenses):
    expenses.create("user_a", "Lunch", 25.5, "Food", date="2025-10-13T10:00:00Z")
    expenses.create("user_a", "Cab", 45, "Transportation", date="2025-10-14T09:00:00Z")
    expenses.create("user_b", "Other user", 99, "Food", date="2025-10-14T09:00:00Z")

    summary = expenses.summary("user_a")

    assert summary.total_expenses == 70.5
    assert summary.weekly_total == 70.5
    assert summary.weekly_breakdown[0].date == "2025-10-12"
    assert len(summary.monthly_breakdown) == 3
