"""Route registration helpers."""

from .auth import register_auth_routes
from .expenses import register_expense_routes
from .health import register_health_routes
from .todo import register_todo_routes

__all__ = [
    "register_auth_routes",
    "register_expense_routes",
    "register_health_routes",
    "register_todo_routes",
]
