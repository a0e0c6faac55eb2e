"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class TodoResponse(BaseModel):
    """Serialized todo item."""

    id: str
    title: str


class TodoWriteRequest(BaseModel):
    """Request body rules for creating or updating a todo."""

    title: str = Field(..., min_length=1)


class ValidationFailureModel(BaseModel):
    """Single field-level validation failure."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body returned for rejected requests."""

    message: str
    failures: List[ValidationFailureModel] = Field(default_factory=list)


class NotFoundResponse(BaseModel):
    """Body returned when the requested todo does not exist."""

    message: str
