"""
Schema violation reporting.

Request bodies are validated against the payload models in src.api.models,
and FastAPI validates path and query parameters; both report every
violation. The API reports only the first one, converted into the domain's
ValidationError.
"""

from collections.abc import Sequence
from typing import Any

from src.domain.exceptions import ValidationError

# Location prefix FastAPI puts on body errors.
_BODY_LOCATION = "body"


def _field_path(location: Sequence[Any]) -> str:
    parts = [str(part) for part in location]
    if parts and parts[0] == _BODY_LOCATION:
        parts = parts[1:]
    return ".".join(parts)


def first_violation(errors: Sequence[dict[str, Any]]) -> dict[str, Any]:
    """
    Reduce a pydantic/FastAPI error list to its first entry.

    Only JSON-safe keys are kept: the field path, the error type and the
    message. Raw input and exception contexts are dropped.
    """
    if not errors:
        return {"field": "", "type": "invalid", "message": "Invalid request body"}
    error = errors[0]
    return {
        "field": _field_path(error.get("loc", ())),
        "type": error.get("type", "invalid"),
        "message": error.get("msg", "Invalid value"),
    }


def validation_error_from(errors: Sequence[dict[str, Any]], status_code: int) -> ValidationError:
    """
    Build the ValidationError describing the first violated constraint.

    Args:
        errors: Error list from RequestValidationError.errors() or
            pydantic.ValidationError.errors()
        status_code: Status configured for validation failures
    """
    violation = first_violation(errors)
    if violation["field"]:
        message = f"{violation['field']}: {violation['message']}"
    else:
        message = violation["message"]
    return ValidationError(message, status_code=status_code, details=[violation])
