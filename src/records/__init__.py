"""Record store adapters shared by the todo and expense services."""

from .base import Record, RecordStore
from .factory import EXPENSES, TODOS, create_catalyst_client, create_record_store
from .hosted import HostedRecordStore
from .memory import MemoryRecordStore
from .sqlite import SqliteRecordStore

__all__ = [
    "Record",
    "RecordStore",
    "MemoryRecordStore",
    "SqliteRecordStore",
    "HostedRecordStore",
    "create_record_store",
    "create_catalyst_client",
    "TODOS",
    "EXPENSES",
]
