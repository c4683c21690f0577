import pytest

from src.daybook.errors import NotFoundError
from src.records import MemoryRecordStore, SqliteRecordStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryRecordStore()
    return SqliteRecordStore(tmp_path / "records.db")


def test_insert_assigns_managed_fields(store):
    record = store.insert("todos", "user_a", {"title": "Write tests", "completed": False})

    assert record["id"]
    assert record["user_id"] == "user_a"
    assert record["title"] == "Write tests"
    assert record["completed"] is False
    assert record["created_at"]
    assert record["updated_at"]


def test_insert_ignores_managed_keys_in_fields(store):
    record = store.insert("todos", "user_a", {"title": "x", "user_id": "user_b", "id": "forged"})
    assert record["user_id"] == "user_a"
    assert record["id"] != "forged"


def test_list_is_scoped_and_ordered(store):
    store.insert("todos", "user_a", {"title": "one"})
    store.insert("todos", "user_b", {"title": "other"})
    store.insert("todos", "user_a", {"title": "two"})

    assert [r["title"] for r in store.list("todos", "user_a")] == ["one", "two"]
    assert [r["title"] for r in store.list("todos", "user_b")] == ["other"]
    assert store.list("expenses", "user_a") == []


def test_list_with_where(store):
    store.insert("expenses", "user_a", {"title": "bus", "category": "Transportation"})
    store.insert("expenses", "user_a", {"title": "pizza", "category": "Food"})

    records = store.list("expenses", "user_a", where={"category": "Food"})
    assert [r["title"] for r in records] == ["pizza"]


def test_update_applies_only_given_keys(store):
    record = store.insert("todos", "user_a", {"title": "draft", "priority": "low"})

    updated = store.update("todos", "user_a", record["id"], {"priority": "high"})
    assert updated["title"] == "draft"
    assert updated["priority"] == "high"
    assert updated["created_at"] == record["created_at"]

    listed = store.list("todos", "user_a")[0]
    assert listed["priority"] == "high"


def test_update_and_delete_respect_ownership(store):
    record = store.insert("todos", "user_a", {"title": "mine"})

    with pytest.raises(NotFoundError):
        store.update("todos", "user_b", record["id"], {"title": "theirs"})
    with pytest.raises(NotFoundError):
        store.delete("todos", "user_b", record["id"])

    assert store.list("todos", "user_a")[0]["title"] == "mine"


def test_delete_removes_record(store):
    record = store.insert("todos", "user_a", {"title": "gone"})
    store.delete("todos", "user_a", record["id"])

    assert store.list("todos", "user_a") == []
    with pytest.raises(NotFoundError):
        store.delete("todos", "user_a", record["id"])


def test_unknown_id_is_not_found(store):
    with pytest.raises(NotFoundError):
        store.update("todos", "user_a", "no-such-id", {"title": "x"})


def test_returned_records_are_copies(store):
    record = store.insert("todos", "user_a", {"title": "original"})
    record["title"] = "mutated"
    assert store.list("todos", "user_a")[0]["title"] == "original"


def test_sqlite_persists_across_instances(tmp_path):
    db_path = tmp_path / "records.db"
    SqliteRecordStore(db_path).insert("todos", "user_a", {"title": "durable"})

    reopened = SqliteRecordStore(db_path)
    assert [r["title"] for r in reopened.list("todos", "user_a")] == ["durable"]


def test_sqlite_rejects_bad_collection_names(tmp_path):
    with pytest.raises(ValueError):
        SqliteRecordStore(tmp_path / "records.db", collections=("todos; DROP TABLE x",))
