"""
API routes - users and todo endpoints.

The route table, in match order:
- GET / - greeting
- GET /users, POST /users, GET /users/{user_id}
- GET /todo, POST /todo, DELETE /todo/{todo_id}
- OPTIONS on any path - empty 204

Identifiers are single path segments passed through to the service
untouched; deeper paths match nothing and fall through to 404.
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_resource_service, get_todo_payload, get_user_payload
from src.api.models import (
    ErrorResponse,
    MessageResponse,
    PayloadModel,
    TodoCreatedResponse,
    TodoPayload,
    TodoRecord,
    UserCreatedResponse,
    UserPayload,
    UserRecord,
)
from src.domain.ports import ID_FIELD, Document, Resource
from src.domain.resources import ResourceService

logger = logging.getLogger(__name__)

router = APIRouter()

_not_found = {404: {"model": ErrorResponse, "description": "Record not found"}}
_invalid = {500: {"model": ErrorResponse, "description": "Validation or server error"}}


def _json_body(model: type[PayloadModel]) -> dict:
    """Document a payload model as the JSON request body of an operation."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


@router.get("/", response_model=MessageResponse, summary="Greeting", tags=["root"])
def root() -> MessageResponse:
    return MessageResponse(message="Hello World!")


@router.get(
    "/users",
    response_model=list[UserRecord],
    response_model_exclude_none=True,
    summary="List users",
    tags=["users"],
)
def list_users(service: ResourceService = Depends(get_resource_service)) -> list[Document]:
    users = service.list_all(Resource.USERS)
    logger.info(f"API response GET /users: {len(users)} user(s)")
    return users


@router.post(
    "/users",
    response_model=UserCreatedResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses=_invalid,
    openapi_extra=_json_body(UserPayload),
    summary="Create a user",
    tags=["users"],
)
def create_user(
    payload: UserPayload = Depends(get_user_payload),
    service: ResourceService = Depends(get_resource_service),
) -> UserCreatedResponse:
    """
    Create a user from a validated payload.

    - **name**: non-empty display name
    - **email**: optional e-mail address
    """
    user = service.create(Resource.USERS, payload.model_dump(exclude_none=True))
    logger.info(f"API response POST /users: created {user[ID_FIELD]}")
    return UserCreatedResponse(message="User created successfully!", user=user)


@router.get(
    "/users/{user_id}",
    response_model=UserRecord,
    response_model_exclude_none=True,
    responses=_not_found,
    summary="Get a user by id",
    tags=["users"],
)
def get_user(
    user_id: str,
    service: ResourceService = Depends(get_resource_service),
) -> Document:
    user = service.get(Resource.USERS, user_id)
    logger.info(f"API response GET /users/{user_id}")
    return user


@router.get("/todo", response_model=list[TodoRecord], summary="List todos", tags=["todo"])
def list_todos(service: ResourceService = Depends(get_resource_service)) -> list[Document]:
    todos = service.list_all(Resource.TODOS)
    logger.info(f"API response GET /todo: {len(todos)} todo(s)")
    return todos


@router.post(
    "/todo",
    response_model=TodoCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_invalid,
    openapi_extra=_json_body(TodoPayload),
    summary="Create a todo",
    tags=["todo"],
)
def create_todo(
    payload: TodoPayload = Depends(get_todo_payload),
    service: ResourceService = Depends(get_resource_service),
) -> TodoCreatedResponse:
    todo = service.create(Resource.TODOS, payload.model_dump())
    logger.info(f"API response POST /todo: created {todo[ID_FIELD]}")
    return TodoCreatedResponse(message="OK", todo=todo)


@router.delete(
    "/todo/{todo_id}",
    response_model=TodoRecord,
    responses=_not_found,
    summary="Delete a todo by id",
    tags=["todo"],
)
def delete_todo(
    todo_id: str,
    service: ResourceService = Depends(get_resource_service),
) -> Document:
    todo = service.delete(Resource.TODOS, todo_id)
    logger.info(f"API response DELETE /todo/{todo_id}")
    return todo


@router.options(
    "/{path:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    include_in_schema=False,
)
def preflight(path: str) -> Response:
    """Any OPTIONS request: empty body, CORS headers come from middleware."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)
