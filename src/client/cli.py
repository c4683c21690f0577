#!/usr/bin/env python3
"""
Daybook terminal client.

Usage:
    python -m src.client register --first-name A --last-name B --email a@b.c --password x
    python -m src.client login --email a@b.c --password x
    python -m src.client dashboard
    python -m src.client todos list [--filter all|pending|completed]
    python -m src.client todos add --title "Title" [--description "..."] [--priority low|medium|high]
    python -m src.client todos done --id ID [--undo]
    python -m src.client expenses add --title "Lunch" --amount 12.5 --category Food
    python -m src.client expenses summary [--view weekly|monthly|categories]
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from src.todo import Todo, TodoService

from .api import DEFAULT_BASE_URL, ApiError, DaybookApiClient
from .session import AuthSession

CATEGORIES = [
    "Food", "Transportation", "Entertainment", "Shopping",
    "Bills", "Healthcare", "Office", "Travel", "Other",
]
PRIORITIES = ["low", "medium", "high"]


def format_todo_text(todo: Dict[str, Any]) -> str:
    mark = "x" if todo.get("completed") else " "
    description = (todo.get("description") or "").strip()
    line = f"[{mark}] {todo['id']} | {todo.get('priority', 'medium'):<6} | {todo['title']}"
    return f"{line} | {description}" if description else line


def format_expense_text(expense: Dict[str, Any]) -> str:
    day = (expense.get("date") or "")[:10]
    return (
        f"{expense['id']} | {day} | {expense['amount']:>10.2f} | "
        f"{expense['category']:<14} | {expense['title']}"
    )


def _emit(payload: Any, output_format: str, text: Callable[[], List[str]]) -> None:
    if output_format == "json":
        print(json.dumps(payload, ensure_ascii=False))
    else:
        for line in text():
            print(line)


def cmd_register(session: AuthSession, args: argparse.Namespace) -> int:
    try:
        state = session.register(args.first_name, args.last_name, args.email, args.password)
    except ApiError as exc:
        print(f"Error: {exc.error}", file=sys.stderr)
        return 1
    if state.is_authenticated:
        print(f"Registered and signed in as {state.user['email_id']}")
    else:
        print("Registration initiated. Please check your email to confirm.")
    return 0


def cmd_login(session: AuthSession, args: argparse.Namespace) -> int:
    try:
        state = session.login(args.email, args.password)
    except ApiError as exc:
        print(f"Error: {exc.error}", file=sys.stderr)
        return 1
    print(f"Signed in as {state.user['email_id']}")
    return 0


def cmd_logout(session: AuthSession, args: argparse.Namespace) -> int:
    session.logout()
    print("Signed out")
    return 0


def cmd_whoami(session: AuthSession, args: argparse.Namespace) -> int:
    state = session.restore()
    if not state.is_authenticated:
        print(f"Error: {state.error or 'Not signed in'}", file=sys.stderr)
        return 1
    user = state.user
    _emit(
        user,
        args.format,
        lambda: [f"{user['first_name']} {user['last_name']} <{user['email_id']}> ({user['id']})"],
    )
    return 0


def cmd_dashboard(session: AuthSession, args: argparse.Namespace) -> int:
    todos = session.api.list_todos()["todos"]
    summary = session.api.expense_summary()["summary"]
    counts = TodoService.stats(Todo.from_record(todo) for todo in todos)
    stats = {
        "todos": {"total": counts.total, "completed": counts.completed, "pending": counts.pending},
        "expenses": {
            "total": summary.get("totalExpenses", 0),
            "weeklyTotal": summary.get("weeklyTotal", 0),
            "monthlyTotal": summary.get("monthlyTotal", 0),
        },
    }
    _emit(
        stats,
        args.format,
        lambda: [
            f"Todos:    {stats['todos']['total']} total, "
            f"{stats['todos']['completed']} completed, {stats['todos']['pending']} pending",
            f"Expenses: {stats['expenses']['total']:.2f} total, "
            f"{stats['expenses']['weeklyTotal']:.2f} this week, "
            f"{stats['expenses']['monthlyTotal']:.2f} this month",
        ],
    )
    return 0


def cmd_todos(session: AuthSession, args: argparse.Namespace) -> int:
    api = session.api
    if args.action == "list":
        todos = api.list_todos()["todos"]
        if args.filter == "pending":
            todos = [todo for todo in todos if not todo.get("completed")]
        elif args.filter == "completed":
            todos = [todo for todo in todos if todo.get("completed")]
        _emit(
            todos,
            args.format,
            lambda: [format_todo_text(todo) for todo in todos] or ["No todos."],
        )
        return 0

    if args.action == "add":
        result = api.create_todo(args.title, args.description, args.priority)
    elif args.action == "update":
        changes = {
            key: value
            for key, value in (
                ("title", args.title),
                ("description", args.description),
                ("priority", args.priority),
            )
            if value is not None
        }
        result = api.update_todo(args.id, **changes)
    elif args.action == "done":
        result = api.update_todo(args.id, completed=not args.undo)
    else:
        result = api.delete_todo(args.id)
        _emit(result, args.format, lambda: [f"Deleted todo {args.id}"])
        return 0

    todo = result["todo"]
    _emit(todo, args.format, lambda: [format_todo_text(todo)])
    return 0


def cmd_expenses(session: AuthSession, args: argparse.Namespace) -> int:
    api = session.api
    if args.action == "list":
        expenses = api.list_expenses(args.start_date, args.end_date, args.category)["expenses"]
        _emit(
            expenses,
            args.format,
            lambda: [format_expense_text(e) for e in expenses] or ["No expenses."],
        )
        return 0

    if args.action == "summary":
        summary = api.expense_summary()["summary"]
        _emit(summary, args.format, lambda: _summary_lines(summary, args.view))
        return 0

    if args.action == "add":
        result = api.create_expense(
            args.title, args.amount, args.category, args.date, args.description
        )
    elif args.action == "update":
        changes = {
            key: value
            for key, value in (
                ("title", args.title),
                ("amount", args.amount),
                ("category", args.category),
                ("date", args.date),
                ("description", args.description),
            )
            if value is not None
        }
        result = api.update_expense(args.id, **changes)
    else:
        result = api.delete_expense(args.id)
        _emit(result, args.format, lambda: [f"Deleted expense {args.id}"])
        return 0

    expense = result["expense"]
    _emit(expense, args.format, lambda: [format_expense_text(expense)])
    return 0


def _summary_lines(summary: Dict[str, Any], view: str) -> List[str]:
    lines = [
        f"Total:      {summary['totalExpenses']:.2f} ({summary['totalCount']})",
        f"This week:  {summary['weeklyTotal']:.2f} ({summary['weeklyCount']})",
        f"This month: {summary['monthlyTotal']:.2f} ({summary['monthlyCount']})",
    ]
    if view == "weekly":
        lines += [
            f"  {day['date']}  {day['total']:>10.2f}  ({day['count']})"
            for day in summary["weeklyBreakdown"]
        ]
    elif view == "monthly":
        lines += [
            f"  week {bucket['week']}: {bucket['startDate']} .. {bucket['endDate']}  "
            f"{bucket['total']:>10.2f}  ({bucket['count']})"
            for bucket in summary["monthlyBreakdown"]
        ]
    else:
        ranked = sorted(summary["categoryTotals"].items(), key=lambda item: item[1], reverse=True)
        lines += [f"  {name:<14} {total:>10.2f}" for name, total in ranked]
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Daybook terminal client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--base-url",
        default=os.getenv("DAYBOOK_API_URL", DEFAULT_BASE_URL),
        help=f"API root (default: $DAYBOOK_API_URL or {DEFAULT_BASE_URL})",
    )
    parser.add_argument("--token-file", type=Path, help="where the session token is kept")
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="output format (default: text)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    register = commands.add_parser("register", help="create an account")
    register.add_argument("--first-name", required=True)
    register.add_argument("--last-name", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--password", required=True)

    login = commands.add_parser("login", help="sign in")
    login.add_argument("--email", required=True)
    login.add_argument("--password", required=True)

    commands.add_parser("logout", help="sign out and forget the token")
    commands.add_parser("whoami", help="show the signed-in user")
    commands.add_parser("dashboard", help="todo counts and expense totals")

    todos = commands.add_parser("todos", help="manage todos")
    todo_actions = todos.add_subparsers(dest="action", required=True)
    todo_list = todo_actions.add_parser("list")
    todo_list.add_argument("--filter", choices=["all", "pending", "completed"], default="all")
    todo_add = todo_actions.add_parser("add")
    todo_add.add_argument("--title", required=True)
    todo_add.add_argument("--description")
    todo_add.add_argument("--priority", choices=PRIORITIES)
    todo_update = todo_actions.add_parser("update")
    todo_update.add_argument("--id", required=True)
    todo_update.add_argument("--title")
    todo_update.add_argument("--description")
    todo_update.add_argument("--priority", choices=PRIORITIES)
    todo_done = todo_actions.add_parser("done", help="mark completed")
    todo_done.add_argument("--id", required=True)
    todo_done.add_argument("--undo", action="store_true", help="mark pending again")
    todo_delete = todo_actions.add_parser("delete")
    todo_delete.add_argument("--id", required=True)

    expenses = commands.add_parser("expenses", help="manage expenses")
    expense_actions = expenses.add_subparsers(dest="action", required=True)
    expense_list = expense_actions.add_parser("list")
    expense_list.add_argument("--category", choices=CATEGORIES)
    expense_list.add_argument("--start-date", help="YYYY-MM-DD")
    expense_list.add_argument("--end-date", help="YYYY-MM-DD")
    expense_add = expense_actions.add_parser("add")
    expense_add.add_argument("--title", required=True)
    expense_add.add_argument("--amount", required=True)
    expense_add.add_argument("--category", required=True, choices=CATEGORIES)
    expense_add.add_argument("--date", help="YYYY-MM-DD (default: now)")
    expense_add.add_argument("--description")
    expense_update = expense_actions.add_parser("update")
    expense_update.add_argument("--id", required=True)
    expense_update.add_argument("--title")
    expense_update.add_argument("--amount")
    expense_update.add_argument("--category", choices=CATEGORIES)
    expense_update.add_argument("--date")
    expense_update.add_argument("--description")
    expense_delete = expense_actions.add_parser("delete")
    expense_delete.add_argument("--id", required=True)
    expense_summary = expense_actions.add_parser("summary")
    expense_summary.add_argument(
        "--view", choices=["weekly", "monthly", "categories"], default="categories"
    )

    return parser


AUTH_COMMANDS: Dict[str, Callable[[AuthSession, argparse.Namespace], int]] = {
    "register": cmd_register,
    "login": cmd_login,
    "logout": cmd_logout,
    "whoami": cmd_whoami,
}
RESOURCE_COMMANDS: Dict[str, Callable[[AuthSession, argparse.Namespace], int]] = {
    "dashboard": cmd_dashboard,
    "todos": cmd_todos,
    "expenses": cmd_expenses,
}


def main(argv: Optional[List[str]] = None, api: Optional[DaybookApiClient] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    session = AuthSession(api or DaybookApiClient(args.base_url), token_path=args.token_file)

    if args.command in AUTH_COMMANDS:
        return AUTH_COMMANDS[args.command](session, args)

    if not session.state.token:
        print("Error: not signed in. Run `login` first.", file=sys.stderr)
        return 1
    try:
        return RESOURCE_COMMANDS[args.command](session, args)
    except ApiError as exc:
        if exc.status_code == 401:
            session.expire()
            print("Error: Session expired. Please sign in again.", file=sys.stderr)
            return 1
        message = f"Error: {exc.error}"
        if exc.details:
            message += f" ({exc.details})"
        print(message, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
