"""
Domain layer - Pure business logic with zero framework imports.

This package contains the resource service, the repository port it
depends on, and the error values the API layer turns into responses.
"""

from .exceptions import (
    ApiError,
    InternalError,
    NotFoundError,
    RepositoryError,
    TransportError,
    ValidationError,
)
from .ports import ID_FIELD, Document, DocumentRepository, Resource
from .resources import ResourceService

__all__ = [
    "ApiError",
    "Document",
    "DocumentRepository",
    "ID_FIELD",
    "InternalError",
    "NotFoundError",
    "RepositoryError",
    "Resource",
    "ResourceService",
    "TransportError",
    "ValidationError",
]
