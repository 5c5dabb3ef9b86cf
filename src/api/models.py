"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
The payload models are the resource schemas: undeclared fields are dropped,
strings are trimmed, and nothing is coerced into a string field.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.domain.ports import ID_FIELD


class PayloadModel(BaseModel):
    """Base for request bodies."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class UserPayload(PayloadModel):
    """Request model for user creation."""

    name: str = Field(..., min_length=1, description="Display name identifying the user")
    email: EmailStr | None = Field(default=None, description="Optional contact address")


class TodoPayload(PayloadModel):
    """Request model for todo creation."""

    message: str = Field(..., min_length=1, description="Todo text")


class RecordModel(BaseModel):
    """Base for stored records; the identifier is serialized as "_id"."""

    model_config = ConfigDict(populate_by_name=True)


class UserRecord(RecordModel):
    """A stored user."""

    name: str
    email: str | None = None
    id: str = Field(..., alias=ID_FIELD)


class TodoRecord(RecordModel):
    """A stored todo."""

    message: str
    id: str = Field(..., alias=ID_FIELD)


class MessageResponse(BaseModel):
    """Response model carrying a single message."""

    message: str


class UserCreatedResponse(BaseModel):
    """Response model for successful user creation."""

    message: str
    user: UserRecord


class TodoCreatedResponse(BaseModel):
    """Response model for successful todo creation."""

    message: str
    todo: TodoRecord


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    message: str
    details: list[dict] | None = None
