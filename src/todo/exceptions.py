"""Todo APIのカスタム例外定義

リクエスト検証エラー・未検出エラー・ドキュメントストアのエラーを定義します。
HTTPステータスへの変換は src.server.error_handlers が担当します。
"""

from typing import Any, Optional


class TodoApiError(Exception):
    """Todo API基底例外"""

    pass


class ValidationError(TodoApiError):
    """リクエストエラー（HTTP 400として応答される）

    Args:
        message: ローカライズ済みのエラーメッセージ
        detail: ValidationFailureのリスト、または包んだ元の例外
    """

    def __init__(self, message: str, detail: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFoundError(TodoApiError):
    """リソース未検出（HTTP 404として応答される）"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TodoNotFoundError(NotFoundError):
    """指定IDのTodoが存在しない"""

    def __init__(self, todo_id: str) -> None:
        super().__init__(f"todo not found: {todo_id}")
        self.todo_id = todo_id


class StoreError(TodoApiError):
    """ドキュメントストアの操作エラー"""

    pass
