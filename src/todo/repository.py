from __future__ import annotations

from typing import Any, Dict, List, Optional

from .models import Todo
from .store import DeleteResult, DocumentStore

COLLECTION_NAME = "todos"


class TodoRepository:
    """ドキュメントストア上のTODO永続化ゲートウェイ。"""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.collection = store.collection(COLLECTION_NAME)

    def save(self, todo: Todo) -> Todo:
        """Todoを保存し、採番済みidを持つTodoを返す"""
        doc_id = self.collection.insert_one(todo.to_document())
        return Todo(title=todo.title, id=doc_id)

    def find_one(self, filter: Dict[str, Any]) -> Optional[Todo]:
        document = self.collection.find_one(filter)
        return Todo.from_document(document) if document else None

    def get_all(self) -> List[Todo]:
        return [Todo.from_document(document) for document in self.collection.find()]

    def update(self, filter: Dict[str, Any], changes: Dict[str, Any]) -> Optional[Todo]:
        """一致したTodoを更新（changesは`{"$set": {...}}`形式も可）"""
        document = self.collection.update_one(filter, changes)
        return Todo.from_document(document) if document else None

    def delete_many(self, filter: Dict[str, Any]) -> DeleteResult:
        return self.collection.delete_many(filter)
