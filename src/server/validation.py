"""Request validation run ahead of the todo handlers.

Validators are FastAPI dependencies. Each one records its failures on
``request.state`` and never rejects the request itself; handlers read the
outcome with :func:`extract_validation_errors` and decide how to fail.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Awaitable, Callable, Dict, List

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from .dependencies import AppContext
from .schemas import TodoWriteRequest

FIELD_MESSAGE_KEYS: Dict[str, str] = {
    "title": "VALIDATION_ERRORS.INVALID_TITLE",
    "id": "VALIDATION_ERRORS.INVALID_ID",
    "body": "DEFAULT_ERRORS.INVALID_REQUEST",
}

Validator = Callable[[Request], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """One field-level validation problem."""

    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def _record(request: Request, failures: List[ValidationFailure]) -> None:
    existing = getattr(request.state, "validation_failures", [])
    request.state.validation_failures = [*existing, *failures]


def extract_validation_errors(request: Request) -> List[ValidationFailure]:
    """Return the failures recorded by the validators for this request."""
    return list(getattr(request.state, "validation_failures", []))


def _message_for(ctx: AppContext, request: Request, field: str) -> str:
    key = FIELD_MESSAGE_KEYS.get(field, "DEFAULT_ERRORS.VALIDATION_FAILED")
    return ctx.message(request, key)


def create_todo_validator(ctx: AppContext) -> Validator:
    """Validate a JSON body carrying a non-empty string ``title``.

    The parsed body is kept on ``request.state.body`` for the handler.
    """

    async def validate_todo_body(request: Request) -> None:
        try:
            payload: Any = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = None

        failures: List[ValidationFailure] = []
        if not isinstance(payload, dict):
            failures.append(ValidationFailure("body", _message_for(ctx, request, "body")))
            request.state.body = {}
        else:
            request.state.body = payload
            try:
                TodoWriteRequest.model_validate(payload)
            except PydanticValidationError as exc:
                for error in exc.errors():
                    field = ".".join(str(part) for part in error["loc"]) or "body"
                    failures.append(
                        ValidationFailure(field, _message_for(ctx, request, field))
                    )
        _record(request, failures)

    return validate_todo_body


def todo_id_validator(ctx: AppContext) -> Validator:
    """Validate that the ``todo_id`` path parameter is not blank."""

    async def validate_todo_id(request: Request) -> None:
        todo_id = request.path_params.get("todo_id", "")
        failures: List[ValidationFailure] = []
        if not str(todo_id).strip():
            failures.append(ValidationFailure("id", _message_for(ctx, request, "id")))
        _record(request, failures)

    return validate_todo_id
