"""
Domain exceptions - Semantic error types for the resource API.

Each exception is a plain value carrying an HTTP status, a message and
optional details. Raising one never writes a response; the API layer's
exception handlers deliver exactly one error body per request.
"""

from typing import Any


class ApiError(Exception):
    """Base class for errors that end a request with an error envelope."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    @property
    def error(self) -> str:
        """Error name reported in the envelope."""
        return type(self).__name__


class ValidationError(ApiError):
    """Request body is not valid JSON or violates the resource schema."""

    status_code = 500


class NotFoundError(ApiError):
    """Requested record or route does not exist."""

    status_code = 404


class InternalError(ApiError):
    """Unexpected failure while serving the request."""

    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)


class RepositoryError(InternalError):
    """Document store operation failed."""

    pass


class TransportError(ApiError):
    """Raw request is missing its method or path."""

    pass
