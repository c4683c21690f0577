"""Todo list: models and the per-user service."""

from .models import Todo, TodoPriority, TodoStats
from .service import TodoService

__all__ = ["Todo", "TodoPriority", "TodoStats", "TodoService"]
