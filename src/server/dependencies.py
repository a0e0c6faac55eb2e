"""Dependency wiring shared across FastAPI routes.

An ``AppContext`` is built once at startup and handed to every route
registration function; routes never reach for module-level singletons.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import Request

from src.todo import DocumentStore, TodoRepository
from src.todo_api.config import Config
from src.todo_api.i18n import Translator


@dataclass
class AppContext:
    """Collaborators used by the route handlers."""

    config: Config
    store: DocumentStore
    todo_repository: TodoRepository
    translator: Translator

    def locale_for(self, request: Request) -> str:
        """Pick the response locale from the request's Accept-Language header."""
        return self.translator.negotiate(request.headers.get("accept-language"))

    def message(self, request: Request, key: str) -> str:
        """Translate a message key for the request's locale."""
        return self.translator.translate(key, self.locale_for(request))


def build_app_context(
    config: Optional[Config] = None,
    db_path: Optional[Path] = None,
) -> AppContext:
    """Create the application context. The store is connected on app startup."""
    if config is None:
        config = Config.from_yaml()
    store = DocumentStore(db_path or config.store.db_path)
    return AppContext(
        config=config,
        store=store,
        todo_repository=TodoRepository(store),
        translator=Translator(default_locale=config.default_locale),
    )
