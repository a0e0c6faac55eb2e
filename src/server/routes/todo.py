"""Todo endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Union

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from src.todo import NotFoundError, Todo, TodoNotFoundError, ValidationError

from ..dependencies import AppContext
from ..schemas import ErrorResponse, NotFoundResponse, TodoResponse
from ..validation import create_todo_validator, extract_validation_errors, todo_id_validator

logger = logging.getLogger(__name__)

BASE_PATH = "/todos"

ERROR_RESPONSES: Dict[Union[int, str], Dict[str, Any]] = {400: {"model": ErrorResponse}}


def _ensure_valid(ctx: AppContext, request: Request, message_key: str) -> None:
    """Raise ValidationError if any validator recorded a failure."""
    failures = extract_validation_errors(request)
    if failures:
        raise ValidationError(ctx.message(request, message_key), failures)


def register_todo_routes(app: FastAPI, ctx: AppContext) -> None:
    """Register todo CRUD endpoints."""
    repo = ctx.todo_repository

    @app.post(
        BASE_PATH,
        status_code=201,
        response_model=TodoResponse,
        responses=ERROR_RESPONSES,
        dependencies=[Depends(create_todo_validator(ctx))],
    )
    async def create_todo(request: Request) -> Dict[str, Any]:
        """Create a new todo."""
        _ensure_valid(ctx, request, "VALIDATION_ERRORS.INVALID_TITLE")

        title = request.state.body["title"]
        todo = await asyncio.to_thread(repo.save, Todo(title=title))
        logger.info("Created todo %s", todo.id)
        return todo.serialize()

    @app.delete(
        f"{BASE_PATH}/{{todo_id}}",
        status_code=204,
        response_class=Response,
        responses=ERROR_RESPONSES,
        dependencies=[Depends(todo_id_validator(ctx))],
    )
    async def delete_todo(todo_id: str, request: Request) -> Response:
        """Delete a todo. A missing id is reported as an invalid request."""
        try:
            _ensure_valid(ctx, request, "DEFAULT_ERRORS.VALIDATION_FAILED")
            result = await asyncio.to_thread(repo.delete_many, {"_id": todo_id})
            if result.deleted_count == 0:
                raise TodoNotFoundError(todo_id)
            logger.info("Deleted todo %s", todo_id)
            return Response(status_code=204)
        except ValidationError:
            raise
        except TodoNotFoundError as exc:
            logger.info("Delete rejected: %s", exc)
            raise ValidationError(ctx.message(request, "DEFAULT_ERRORS.INVALID_REQUEST"), exc) from exc
        except Exception as exc:
            logger.exception("Failed to delete todo %s: %s", todo_id, exc)
            raise ValidationError(ctx.message(request, "DEFAULT_ERRORS.INVALID_REQUEST"), exc) from exc

    @app.get(
        f"{BASE_PATH}/{{todo_id}}",
        response_model=TodoResponse,
        responses={**ERROR_RESPONSES, 404: {"model": NotFoundResponse}},
        dependencies=[Depends(todo_id_validator(ctx))],
    )
    async def get_todo(todo_id: str, request: Request) -> Dict[str, Any]:
        """Fetch a single todo by id."""
        _ensure_valid(ctx, request, "DEFAULT_ERRORS.VALIDATION_FAILED")
        try:
            todo = await asyncio.to_thread(repo.find_one, {"_id": todo_id})
        except Exception as exc:
            logger.exception("Failed to get todo %s: %s", todo_id, exc)
            raise ValidationError(ctx.message(request, "DEFAULT_ERRORS.INVALID_REQUEST"), exc) from exc

        if todo is None:
            raise NotFoundError(ctx.message(request, "DEFAULT_ERRORS.RESOURCE_NOT_FOUND"))
        return todo.serialize()

    @app.get(BASE_PATH, response_model=List[TodoResponse], responses=ERROR_RESPONSES)
    async def list_todos(request: Request) -> List[Dict[str, Any]]:
        """List all todos in insertion order."""
        _ensure_valid(ctx, request, "DEFAULT_ERRORS.VALIDATION_FAILED")
        try:
            todos = await asyncio.to_thread(repo.get_all)
        except Exception as exc:
            logger.exception("Failed to list todos: %s", exc)
            raise ValidationError(ctx.message(request, "DEFAULT_ERRORS.RESOURCE_NOT_FOUND"), exc) from exc
        return [todo.serialize() for todo in todos]

    @app.put(
        f"{BASE_PATH}/{{todo_id}}",
        response_model=TodoResponse,
        responses={**ERROR_RESPONSES, 404: {"model": NotFoundResponse}},
        dependencies=[Depends(todo_id_validator(ctx)), Depends(create_todo_validator(ctx))],
    )
    async def update_todo(todo_id: str, request: Request) -> Any:
        """Replace the title of an existing todo."""
        _ensure_valid(ctx, request, "VALIDATION_ERRORS.INVALID_TITLE")

        title = request.state.body["title"]
        todo = await asyncio.to_thread(
            repo.update, {"_id": todo_id}, {"$set": {"title": title}}
        )
        if todo is None:
            return JSONResponse(
                status_code=404,
                content={"message": ctx.message(request, "DEFAULT_ERRORS.RESOURCE_NOT_FOUND")},
            )
        logger.info("Updated todo %s", todo.id)
        return todo.serialize()
