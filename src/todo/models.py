from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(slots=True)
class Todo:
    """Todoアイテムの表現。

    idは永続化時にストア側で採番される。タイトルの検証はここでは行わない
    （リクエスト検証層の責務）。
    """

    title: str
    id: Optional[str] = None

    def serialize(self) -> Dict[str, Any]:
        """API応答用の辞書に変換（ストア内部の`_id`は露出しない）"""
        return {"id": self.id, "title": self.title}

    def to_document(self) -> Dict[str, Any]:
        """ストア保存用のドキュメントに変換"""
        document: Dict[str, Any] = {"title": self.title}
        if self.id is not None:
            document["_id"] = self.id
        return document

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Todo":
        return cls(title=document["title"], id=document["_id"])
