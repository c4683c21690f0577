from __future__ import annotations

import json
import logging
import re
import sqlite3
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from src.daybook.errors import NotFoundError

from .base import Record, RecordStore

logger = logging.getLogger(__name__)

_COLLECTION_NAME = re.compile(r"^[a-z][a-z0-9_]*$")


class SqliteRecordStore(RecordStore):
    """SQLite-backed store for local persistence. One table per collection, fields as JSON."""

    def __init__(self, db_path: Path, collections: Iterable[str] = ("todos", "expenses")):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.collections = tuple(collections)
        for name in self.collections:
            if not _COLLECTION_NAME.match(name):
                raise ValueError(f"Invalid collection name: {name!r}")
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize(self) -> None:
        with self._connect() as conn:
            for name in self.collections:
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {name} (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        user_id TEXT NOT NULL,
                        fields_json TEXT NOT NULL DEFAULT '{{}}',
                        created_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                    """
                )
                conn.execute(
                    f"CREATE INDEX IF NOT EXISTS idx_{name}_user ON {name}(user_id)"
                )
            conn.commit()

    def _table(self, collection: str) -> str:
        if collection not in self.collections:
            raise ValueError(f"Unknown collection: {collection}")
        return collection

    @staticmethod
    def _row_id(record_id: str) -> Optional[int]:
        try:
            return int(record_id)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> Record:
        record: Record = json.loads(row["fields_json"])
        record.update(
            id=str(row["id"]),
            user_id=row["user_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
        return record

    def _fetch(
        self, conn: sqlite3.Connection, table: str, owner_id: str, record_id: str
    ) -> sqlite3.Row:
        row_id = self._row_id(record_id)
        row = None
        if row_id is not None:
            row = conn.execute(
                f"SELECT * FROM {table} WHERE id = ? AND user_id = ?", (row_id, owner_id)
            ).fetchone()
        if row is None:
            raise NotFoundError(f"Record {record_id} not found in {table}")
        return row

    def insert(self, collection: str, owner_id: str, fields: Mapping[str, Any]) -> Record:
        table = self._table(collection)
        now = self._now()
        with self._connect() as conn:
            cursor = conn.execute(
                f"""
                INSERT INTO {table} (user_id, fields_json, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                (owner_id, json.dumps(self._writable(fields), ensure_ascii=False), now, now),
            )
            conn.commit()
            row = conn.execute(
                f"SELECT * FROM {table} WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
        logger.debug("Inserted %s/%s", table, row["id"])
        return self._row_to_record(row)

    def list(
        self,
        collection: str,
        owner_id: str,
        where: Optional[Mapping[str, Any]] = None,
    ) -> List[Record]:
        table = self._table(collection)
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT * FROM {table} WHERE user_id = ? ORDER BY id ASC", (owner_id,)
            ).fetchall()
        records = [self._row_to_record(row) for row in rows]
        return [record for record in records if self._matches(record, where)]

    def update(
        self,
        collection: str,
        owner_id: str,
        record_id: str,
        changes: Mapping[str, Any],
    ) -> Record:
        table = self._table(collection)
        with self._connect() as conn:
            row = self._fetch(conn, table, owner_id, record_id)
            fields = json.loads(row["fields_json"])
            fields.update(self._writable(changes))
            conn.execute(
                f"UPDATE {table} SET fields_json = ?, updated_at = ? WHERE id = ?",
                (json.dumps(fields, ensure_ascii=False), self._now(), row["id"]),
            )
            conn.commit()
            row = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (row["id"],)).fetchone()
        return self._row_to_record(row)

    def delete(self, collection: str, owner_id: str, record_id: str) -> None:
        table = self._table(collection)
        with self._connect() as conn:
            row = self._fetch(conn, table, owner_id, record_id)
            conn.execute(f"DELETE FROM {table} WHERE id = ?", (row["id"],))
            conn.commit()
        logger.debug("Deleted %s/%s", table, record_id)
