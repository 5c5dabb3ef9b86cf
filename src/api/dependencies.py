"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services, infrastructure adapters and validated
request payloads into routes.
"""

from typing import TypeVar

import pydantic
from fastapi import Request
from psycopg_pool import ConnectionPool

from src.api.models import PayloadModel, TodoPayload, UserPayload
from src.api.validation import validation_error_from
from src.config.settings import get_settings
from src.domain.ports import DocumentRepository
from src.domain.resources import ResourceService

PayloadT = TypeVar("PayloadT", bound=PayloadModel)


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> DocumentRepository:
    """
    Get the repository constructed at startup.

    The lifespan stores one repository instance on app.state; tests may
    replace it with any object satisfying DocumentRepository.
    """
    return request.app.state.repository


def get_resource_service(request: Request) -> ResourceService:
    """Create the resource service around the application's repository."""
    return ResourceService(repository=get_repository(request))


async def _parse_body(request: Request, model: type[PayloadT]) -> PayloadT:
    """
    Decode the raw request body as JSON and validate it against a payload model.

    The Content-Type header is not consulted: any body that decodes as a
    JSON object is accepted.

    Raises:
        ValidationError: Undecodable JSON, a non-object body or a schema violation
    """
    body = await request.body()
    try:
        return model.model_validate_json(body)
    except pydantic.ValidationError as e:
        raise validation_error_from(e.errors(), get_settings().validation_error_status) from e


async def get_user_payload(request: Request) -> UserPayload:
    return await _parse_body(request, UserPayload)


async def get_todo_payload(request: Request) -> TodoPayload:
    return await _parse_body(request, TodoPayload)
