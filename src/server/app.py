"""FastAPI application bootstrap."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .dependencies import AppContext, build_app_context
from .error_handlers import register_error_handlers
from .routes import register_health_routes, register_todo_routes

logger = logging.getLogger(__name__)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The document store is connected when the app starts up and closed on
    shutdown.
    """
    ctx = context if context is not None else build_app_context()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        ctx.store.connect()
        try:
            yield
        finally:
            ctx.store.close()

    app = FastAPI(title="Todo API", version="1.0.0", lifespan=lifespan)
    app.state.context = ctx

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_health_routes(app)
    register_todo_routes(app, ctx)
    register_error_handlers(app)

    return app
