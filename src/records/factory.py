from __future__ import annotations

from pathlib import Path

from src.catalyst_client import CatalystClient
from src.daybook.config import Config

from .base import RecordStore
from .hosted import HostedRecordStore
from .memory import MemoryRecordStore
from .sqlite import SqliteRecordStore

TODOS = "todos"
EXPENSES = "expenses"


def create_catalyst_client(config: Config) -> CatalystClient:
    hosted = config.hosted
    return CatalystClient(
        api_url=hosted.api_url,
        project_id=hosted.project_id,
        access_token=hosted.access_token,
        timeout=hosted.timeout_seconds,
    )


def create_record_store(config: Config) -> RecordStore:
    """Build the record store selected by ``datastore.backend``."""
    backend = config.datastore.backend
    if backend == "memory":
        return MemoryRecordStore()
    if backend == "sqlite":
        return SqliteRecordStore(Path(config.datastore.sqlite_path), collections=(TODOS, EXPENSES))
    if backend == "hosted":
        return HostedRecordStore(
            create_catalyst_client(config),
            tables={TODOS: config.hosted.todos_table, EXPENSES: config.hosted.expenses_table},
            page_size=config.hosted.page_size,
        )
    raise ValueError(f"Unknown datastore backend: {backend}")
