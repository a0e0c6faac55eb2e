"""Document Store

SQLite上にJSONドキュメントのコレクションを構築する軽量ドキュメントストア。
各ドキュメントは不透明な文字列キー`_id`で識別され、挿入順を保持する。

Related Classes: TodoRepository (repository.py)
"""

from __future__ import annotations

import json
import logging
import re
import sqlite3
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import StoreError

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class DeleteResult:
    """delete_manyの結果"""

    deleted_count: int


class DocumentStore:
    """SQLiteベースのドキュメントストア。

    接続はconnect()で開始し、close()以降の操作はStoreErrorになる。
    SQLite接続自体は操作ごとに開閉するため、スレッドをまたいで利用できる。
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self._connected = False
        self._collections: Dict[str, "Collection"] = {}

    @property
    def is_connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        """DBファイルを用意し、登録済みコレクションのテーブルを作成"""
        if self._connected:
            return
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connected = True
        for collection in self._collections.values():
            collection._initialize()
        logger.info("Document store connected: %s", self.db_path)

    def close(self) -> None:
        if self._connected:
            self._connected = False
            logger.info("Document store closed: %s", self.db_path)

    def collection(self, name: str) -> "Collection":
        """名前付きコレクションを取得（なければ作成）"""
        if not _NAME_PATTERN.match(name):
            raise StoreError(f"Invalid collection name: {name!r}")
        if name not in self._collections:
            collection = Collection(self, name)
            if self._connected:
                collection._initialize()
            self._collections[name] = collection
        return self._collections[name]

    def _connect(self) -> sqlite3.Connection:
        if not self._connected:
            raise StoreError("Document store is not connected")
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn


class Collection:
    """JSONドキュメントのコレクション（1コレクション = 1テーブル）"""

    def __init__(self, store: DocumentStore, name: str):
        self.store = store
        self.name = name

    def _initialize(self) -> None:
        with self.store._connect() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self.name} (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    _id TEXT NOT NULL UNIQUE,
                    document TEXT NOT NULL
                )
                """
            )
            conn.commit()

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def _row_to_document(row: sqlite3.Row) -> Dict[str, Any]:
        document = json.loads(row["document"])
        document["_id"] = row["_id"]
        return document

    @staticmethod
    def _build_where(filter: Optional[Dict[str, Any]]) -> Tuple[str, List[Any]]:
        """等価フィルタをWHERE句に変換

        `_id`はキー列、それ以外はトップレベルのフィールドとして比較する。
        """
        if not filter:
            return "", []

        clauses: List[str] = []
        params: List[Any] = []
        for key, value in filter.items():
            if key == "_id":
                column = "_id"
            elif _NAME_PATTERN.match(key):
                column = "json_extract(document, ?)"
                params.append(f"$.{key}")
            else:
                raise StoreError(f"Unsupported filter field: {key!r}")

            if value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column} = ?")
                params.append(value)
        return " WHERE " + " AND ".join(clauses), params

    @staticmethod
    def _normalize_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
        """更新内容を$set相当のフィールド辞書に正規化"""
        operators = [key for key in changes if key.startswith("$")]
        if operators:
            unsupported = [key for key in operators if key != "$set"]
            if unsupported or len(operators) != len(changes):
                raise StoreError(f"Unsupported update operators: {sorted(changes)}")
            fields = dict(changes["$set"])
        else:
            fields = dict(changes)

        if "_id" in fields:
            raise StoreError("_id cannot be modified")
        return fields

    def insert_one(self, document: Dict[str, Any]) -> str:
        """ドキュメントを追加し、採番した`_id`を返す"""
        body = dict(document)
        doc_id = str(body.pop("_id", None) or self._new_id())
        with self.store._connect() as conn:
            conn.execute(
                f"INSERT INTO {self.name} (_id, document) VALUES (?, ?)",
                (doc_id, json.dumps(body, ensure_ascii=False)),
            )
            conn.commit()
        return doc_id

    def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        where, params = self._build_where(filter)
        with self.store._connect() as conn:
            row = conn.execute(
                f"SELECT _id, document FROM {self.name}{where} ORDER BY seq LIMIT 1",
                params,
            ).fetchone()
        return self._row_to_document(row) if row else None

    def find(self, filter: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        where, params = self._build_where(filter)
        with self.store._connect() as conn:
            rows = conn.execute(
                f"SELECT _id, document FROM {self.name}{where} ORDER BY seq",
                params,
            ).fetchall()
        return [self._row_to_document(row) for row in rows]

    def update_one(
        self, filter: Dict[str, Any], changes: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """最初に一致したドキュメントを更新し、更新後のドキュメントを返す"""
        fields = self._normalize_changes(changes)
        where, params = self._build_where(filter)
        with self.store._connect() as conn:
            row = conn.execute(
                f"SELECT seq, _id, document FROM {self.name}{where} ORDER BY seq LIMIT 1",
                params,
            ).fetchone()
            if row is None:
                return None

            body = json.loads(row["document"])
            body.update(fields)
            conn.execute(
                f"UPDATE {self.name} SET document = ? WHERE seq = ?",
                (json.dumps(body, ensure_ascii=False), row["seq"]),
            )
            conn.commit()

        body["_id"] = row["_id"]
        return body

    def delete_many(self, filter: Dict[str, Any]) -> DeleteResult:
        where, params = self._build_where(filter)
        with self.store._connect() as conn:
            cursor = conn.execute(f"DELETE FROM {self.name}{where}", params)
            conn.commit()
            return DeleteResult(deleted_count=cursor.rowcount)
