from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class TodoPriority(str, Enum):
    """Todo priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(slots=True)
class Todo:
    """A todo owned by exactly one user."""

    id: str
    title: str
    description: str
    completed: bool
    priority: TodoPriority
    user_id: str
    created_at: str
    updated_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Todo":
        return cls(
            id=str(record["id"]),
            title=record.get("title", ""),
            description=record.get("description") or "",
            completed=bool(record.get("completed", False)),
            priority=TodoPriority(record.get("priority") or TodoPriority.MEDIUM.value),
            user_id=record.get("user_id", ""),
            created_at=record.get("created_at", ""),
            updated_at=record.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority.value,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(slots=True)
class TodoStats:
    """Dashboard counts."""

    total: int
    completed: int
    pending: int
