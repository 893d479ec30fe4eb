"""
Exception taxonomy shared by every service blueprint.

Handlers raise these instead of building error responses by hand; the
gateway registers a single error handler that renders them as
``{"error": <message>}`` with the matching status code.
"""

from typing import Any, Dict


class ApiError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(ApiError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid request payload"


class Unauthorized(ApiError):
    """Missing, invalid or expired token, or bad credentials."""

    status_code = 401
    default_message = "Unauthorized"


class Forbidden(ApiError):
    """Authenticated caller does not own the resource."""

    status_code = 403
    default_message = "Forbidden"


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found"


class Conflict(ApiError):
    status_code = 409
    default_message = "Conflict"


class InternalError(ApiError):
    """Storage or signing failure. The message never carries internal detail."""

    status_code = 500
