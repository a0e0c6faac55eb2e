"""DocumentStore / Collection の単体テスト"""

import pytest

from src.todo import DocumentStore, StoreError


@pytest.fixture
def store(tmp_path):
    """接続済みのテスト用ストア"""
    document_store = DocumentStore(tmp_path / "nested" / "store.db")
    document_store.connect()
    yield document_store
    document_store.close()


def test_connect_creates_database_file(store):
    assert store.is_connected
    store.collection("todos").insert_one({"title": "a"})
    assert store.db_path.exists()


def test_insert_assigns_opaque_id(store):
    todos = store.collection("todos")
    first = todos.insert_one({"title": "a"})
    second = todos.insert_one({"title": "b"})

    assert isinstance(first, str) and first
    assert first != second
    assert todos.find_one({"_id": first}) == {"_id": first, "title": "a"}


def test_insert_keeps_given_id(store):
    todos = store.collection("todos")
    assert todos.insert_one({"_id": "fixed", "title": "a"}) == "fixed"
    assert todos.find_one({"_id": "fixed"})["title"] == "a"


def test_find_filters_by_field(store):
    todos = store.collection("todos")
    todos.insert_one({"title": "a", "owner": "me"})
    todos.insert_one({"title": "b", "owner": "you"})
    todos.insert_one({"title": "c", "owner": "me"})

    assert [doc["title"] for doc in todos.find({"owner": "me"})] == ["a", "c"]
    assert [doc["title"] for doc in todos.find()] == ["a", "b", "c"]
    assert todos.find({"owner": "nobody"}) == []


def test_update_one_with_set(store):
    todos = store.collection("todos")
    doc_id = todos.insert_one({"title": "a", "note": "keep"})

    updated = todos.update_one({"_id": doc_id}, {"$set": {"title": "b"}})
    assert updated == {"_id": doc_id, "title": "b", "note": "keep"}
    assert todos.find_one({"_id": doc_id}) == updated


def test_update_one_with_plain_fields(store):
    todos = store.collection("todos")
    doc_id = todos.insert_one({"title": "a"})

    assert todos.update_one({"_id": doc_id}, {"title": "c"})["title"] == "c"


def test_update_one_missing_returns_none(store):
    assert store.collection("todos").update_one({"_id": "420"}, {"$set": {"title": "x"}}) is None


@pytest.mark.parametrize(
    "changes",
    [
        {"$inc": {"count": 1}},
        {"$set": {"title": "x"}, "title": "y"},
        {"$set": {"_id": "other"}},
    ],
)
def test_update_one_rejects_unsupported_changes(store, changes):
    todos = store.collection("todos")
    doc_id = todos.insert_one({"title": "a"})

    with pytest.raises(StoreError):
        todos.update_one({"_id": doc_id}, changes)


def test_delete_many(store):
    todos = store.collection("todos")
    todos.insert_one({"title": "a", "done": "yes"})
    todos.insert_one({"title": "b", "done": "yes"})
    todos.insert_one({"title": "c", "done": "no"})

    assert todos.delete_many({"done": "yes"}).deleted_count == 2
    assert todos.delete_many({"done": "yes"}).deleted_count == 0
    assert [doc["title"] for doc in todos.find()] == ["c"]


def test_collections_are_isolated(store):
    store.collection("todos").insert_one({"title": "a"})
    assert store.collection("archive").find() == []


def test_invalid_names_are_rejected(store):
    with pytest.raises(StoreError):
        store.collection("todos; DROP TABLE todos")
    with pytest.raises(StoreError):
        store.collection("todos").find({"title') OR 1=1 --": "x"})


def test_closed_store_raises(tmp_path):
    document_store = DocumentStore(tmp_path / "closed.db")
    todos = document_store.collection("todos")

    with pytest.raises(StoreError):
        todos.find()

    document_store.connect()
    todos.insert_one({"title": "a"})
    document_store.close()

    with pytest.raises(StoreError):
        todos.find()


def test_data_survives_reconnect(tmp_path):
    db_path = tmp_path / "persist.db"
    first = DocumentStore(db_path)
    first.connect()
    doc_id = first.collection("todos").insert_one({"title": "persisted"})
    first.close()

    second = DocumentStore(db_path)
    second.connect()
    assert second.collection("todos").find_one({"_id": doc_id})["title"] == "persisted"
