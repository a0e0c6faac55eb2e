from src.todo import Todo


def test_new_todo_has_no_id():
    todo = Todo(title="This is my title")
    assert todo.id is None
    assert todo.to_document() == {"title": "This is my title"}


def test_serialize_exposes_only_id_and_title():
    todo = Todo.from_document({"_id": "abc123", "title": "Stored"})

    serialized = todo.serialize()
    assert serialized == {"id": "abc123", "title": "Stored"}
    assert "_id" not in serialized
    assert todo.serialize() == serialized


def test_document_round_trip_keeps_storage_key():
    todo = Todo(title="Stored", id="abc123")
    assert todo.to_document() == {"_id": "abc123", "title": "Stored"}
    assert Todo.from_document(todo.to_document()) == todo
