"""Global exception handlers turning todo errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.todo import NotFoundError, ValidationError

from .schemas import ErrorResponse, NotFoundResponse
from .validation import ValidationFailure

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register handlers for ValidationError (400) and NotFoundError (404)."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        failures = []
        if isinstance(exc.detail, list):
            failures = [
                failure.to_dict()
                for failure in exc.detail
                if isinstance(failure, ValidationFailure)
            ]
        elif exc.detail is not None:
            # Wrapped errors are logged, never echoed to the client.
            logger.warning(
                "%s %s rejected: %s (%r)", request.method, request.url.path, exc.message, exc.detail
            )
        body = ErrorResponse(message=exc.message, failures=failures)
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        body = NotFoundResponse(message=exc.message)
        return JSONResponse(status_code=404, content=body.model_dump())
