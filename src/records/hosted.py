from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from src.catalyst_client import CatalystClient
from src.daybook.errors import NotFoundError

from .base import Record, RecordStore

logger = logging.getLogger(__name__)

# Columns the platform adds to every row.
SYSTEM_COLUMNS = frozenset({"ROWID", "CREATORID", "CREATEDTIME", "MODIFIEDTIME"})


class HostedRecordStore(RecordStore):
    """
    Record store over the hosted tabular datastore.

    The platform ROWID is the record id. Tables are shared between users, so
    ownership is enforced by filtering on the ``user_id`` column after fetch.
    """

    def __init__(
        self,
        client: CatalystClient,
        tables: Mapping[str, str],
        page_size: int = 100,
    ):
        """
        Args:
            client: hosted platform client
            tables: collection name -> platform table name
            page_size: rows per page when listing
        """
        self.client = client
        self.tables = dict(tables)
        self.page_size = page_size

    def _table(self, collection: str) -> str:
        try:
            return self.tables[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}") from None

    @staticmethod
    def _from_row(row: Mapping[str, Any]) -> Record:
        record: Record = {k: v for k, v in row.items() if k not in SYSTEM_COLUMNS}
        record["id"] = str(row.get("ROWID"))
        for key, column in (("created_at", "CREATEDTIME"), ("updated_at", "MODIFIEDTIME")):
            if key not in record and row.get(column):
                record[key] = row[column]
        return record

    def _owned(self, collection: str, owner_id: str, record_id: str) -> Record:
        for record in self.list(collection, owner_id):
            if record["id"] == str(record_id):
                return record
        raise NotFoundError(f"Record {record_id} not found in {collection}")

    def insert(self, collection: str, owner_id: str, fields: Mapping[str, Any]) -> Record:
        now = self._now()
        row = {
            **self._writable(fields),
            "user_id": owner_id,
            "created_at": now,
            "updated_at": now,
        }
        created = self._from_row(self.client.insert_row(self._table(collection), row))
        logger.info("Inserted %s row %s", collection, created["id"])
        return created

    def list(
        self,
        collection: str,
        owner_id: str,
        where: Optional[Mapping[str, Any]] = None,
    ) -> List[Record]:
        rows = self.client.list_rows(self._table(collection), page_size=self.page_size)
        records = [self._from_row(row) for row in rows if str(row.get("user_id")) == owner_id]
        return [record for record in records if self._matches(record, where)]

    def update(
        self,
        collection: str,
        owner_id: str,
        record_id: str,
        changes: Mapping[str, Any],
    ) -> Record:
        existing = self._owned(collection, owner_id, record_id)
        row = {**self._writable(changes), "ROWID": record_id, "updated_at": self._now()}
        updated = self.client.update_row(self._table(collection), row)
        logger.info("Updated %s row %s", collection, record_id)
        return {**existing, **self._writable(changes), **self._from_row(updated)}

    def delete(self, collection: str, owner_id: str, record_id: str) -> None:
        self._owned(collection, owner_id, record_id)
        self.client.delete_row(self._table(collection), record_id)
        logger.info("Deleted %s row %s", collection, record_id)
