"""Todo operations scoped to the requesting user."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from src.daybook.errors import InvalidArgumentError, NotFoundError
from src.records import TODOS, RecordStore

from .models import Todo, TodoPriority, TodoStats

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "completed", "priority")


def parse_priority(value: Any) -> TodoPriority:
    try:
        return TodoPriority(value)
    except ValueError:
        allowed = ", ".join(p.value for p in TodoPriority)
        raise InvalidArgumentError(f"Priority must be one of {allowed}") from None


def _clean_title(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(message)
    return value.strip()


class TodoService:
    """CRUD over the todo collection. Every call is filtered by ``user_id``."""

    def __init__(self, store: RecordStore):
        self.store = store

    def list(self, user_id: str) -> List[Todo]:
        return [Todo.from_record(record) for record in self.store.list(TODOS, user_id)]

    def create(
        self,
        user_id: str,
        title: Optional[str],
        description: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> Todo:
        clean_title = _clean_title(title, "Title is required")
        record = self.store.insert(
            TODOS,
            user_id,
            {
                "title": clean_title,
                "description": description or "",
                "completed": False,
                "priority": parse_priority(priority or TodoPriority.MEDIUM.value).value,
            },
        )
        logger.info("Created todo %s for %s", record["id"], user_id)
        return Todo.from_record(record)

    def update(self, user_id: str, todo_id: str, changes: Mapping[str, Any]) -> Todo:
        """
        Partially update a todo. Only keys present (and not None) are applied.

        Raises:
            InvalidArgumentError: empty title, non-boolean completed, unknown priority
            NotFoundError: the caller owns no todo with this id
        """
        fields: Dict[str, Any] = {}
        for key in UPDATABLE_FIELDS:
            if key not in changes or changes[key] is None:
                continue
            value = changes[key]
            if key == "title":
                value = _clean_title(value, "Title cannot be empty")
            elif key == "description":
                if not isinstance(value, str):
                    raise InvalidArgumentError("Description must be a string")
            elif key == "completed":
                if not isinstance(value, bool):
                    raise InvalidArgumentError("Completed must be true or false")
            elif key == "priority":
                value = parse_priority(value).value
            fields[key] = value

        try:
            record = self.store.update(TODOS, user_id, todo_id, fields)
        except NotFoundError:
            raise NotFoundError("Todo not found") from None
        return Todo.from_record(record)

    def delete(self, user_id: str, todo_id: str) -> None:
        try:
            self.store.delete(TODOS, user_id, todo_id)
        except NotFoundError:
            raise NotFoundError("Todo not found") from None
        logger.info("Deleted todo %s for %s", todo_id, user_id)

    @staticmethod
    def stats(todos: Iterable[Todo]) -> TodoStats:
        items = list(todos)
        completed = sum(1 for todo in items if todo.completed)
        return TodoStats(total=len(items), completed=completed, pending=len(items) - completed)
