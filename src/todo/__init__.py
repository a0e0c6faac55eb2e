"""Todo resource: entity, document store and repository."""

from .exceptions import (
    NotFoundError,
    StoreError,
    TodoApiError,
    TodoNotFoundError,
    ValidationError,
)
from .models import Todo
from .repository import TodoRepository
from .store import Collection, DeleteResult, DocumentStore

__all__ = [
    "Collection",
    "DeleteResult",
    "DocumentStore",
    "NotFoundError",
    "StoreError",
    "Todo",
    "TodoApiError",
    "TodoNotFoundError",
    "TodoRepository",
    "ValidationError",
]
