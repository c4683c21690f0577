"""
Record store interface.

Controllers talk to this interface only, so the in-memory, SQLite and hosted
implementations are interchangeable. Every operation is scoped by owner id:
a record owned by another user behaves exactly like a missing one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

Record = Dict[str, Any]

# Keys managed by the store; callers cannot overwrite them through update().
MANAGED_KEYS = frozenset({"id", "user_id", "created_at", "updated_at"})


class RecordStore(ABC):
    """Insert/list/update/delete over named collections of dict records."""

    @abstractmethod
    def insert(self, collection: str, owner_id: str, fields: Mapping[str, Any]) -> Record:
        """
        Store a new record.

        Returns:
            The stored record including ``id``, ``user_id``, ``created_at``
            and ``updated_at``.
        """

    @abstractmethod
    def list(
        self,
        collection: str,
        owner_id: str,
        where: Optional[Mapping[str, Any]] = None,
    ) -> List[Record]:
        """
        Return the owner's records in storage order.

        Args:
            where: optional equality filter applied field by field
        """

    @abstractmethod
    def update(
        self,
        collection: str,
        owner_id: str,
        record_id: str,
        changes: Mapping[str, Any],
    ) -> Record:
        """
        Apply only the keys present in ``changes``; other fields keep their values.

        Raises:
            NotFoundError: no record matches both id and owner
        """

    @abstractmethod
    def delete(self, collection: str, owner_id: str, record_id: str) -> None:
        """
        Remove a record.

        Raises:
            NotFoundError: no record matches both id and owner
        """

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _matches(record: Mapping[str, Any], where: Optional[Mapping[str, Any]]) -> bool:
        if not where:
            return True
        return all(record.get(key) == value for key, value in where.items())

    @staticmethod
    def _writable(changes: Mapping[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in changes.items() if key not in MANAGED_KEYS}
