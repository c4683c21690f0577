from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional

from src.daybook.errors import NotFoundError

from .base import Record, RecordStore

logger = logging.getLogger(__name__)


class MemoryRecordStore(RecordStore):
    """
    Process-local store for development and tests.

    Each collection is an ordered list scanned linearly. There is no locking;
    concurrent writers to the same collection race.
    """

    def __init__(self) -> None:
        self._collections: Dict[str, List[Record]] = {}

    def _rows(self, collection: str) -> List[Record]:
        return self._collections.setdefault(collection, [])

    def _find(self, collection: str, owner_id: str, record_id: str) -> Record:
        for row in self._rows(collection):
            if row["id"] == record_id and row["user_id"] == owner_id:
                return row
        raise NotFoundError(f"Record {record_id} not found in {collection}")

    def insert(self, collection: str, owner_id: str, fields: Mapping[str, Any]) -> Record:
        now = self._now()
        record: Record = {
            **self._writable(fields),
            "id": str(uuid.uuid4()),
            "user_id": owner_id,
            "created_at": now,
            "updated_at": now,
        }
        self._rows(collection).append(record)
        logger.debug("Inserted %s/%s", collection, record["id"])
        return dict(record)

    def list(
        self,
        collection: str,
        owner_id: str,
        where: Optional[Mapping[str, Any]] = None,
    ) -> List[Record]:
        return [
            dict(row)
            for row in self._rows(collection)
            if row["user_id"] == owner_id and self._matches(row, where)
        ]

    def update(
        self,
        collection: str,
        owner_id: str,
        record_id: str,
        changes: Mapping[str, Any],
    ) -> Record:
        row = self._find(collection, owner_id, record_id)
        row.update(self._writable(changes))
        row["updated_at"] = self._now()
        return dict(row)

    def delete(self, collection: str, owner_id: str, record_id: str) -> None:
        row = self._find(collection, owner_id, record_id)
        self._rows(collection).remove(row)
        logger.debug("Deleted %s/%s", collection, record_id)
