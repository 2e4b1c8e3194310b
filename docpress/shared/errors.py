"""
Error taxonomy.

Every error raised on purpose by DocPress derives from DocPressError and
knows its HTTP status, so the app-level exception handler can render a
consistent JSON body.
"""

from typing import Any


class DocPressError(Exception):
    """Base class for all service errors."""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DocPressError):
    """Malformed or missing request fields, detected before rendering."""

    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(self, errors: list[dict[str, Any]], message: str = "Invalid request"):
        super().__init__(message, details={"errors": errors})
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message, "type": "value_error"}])


class BackendUnavailableError(DocPressError):
    """The rendering backend could not be launched."""

    code = "BACKEND_UNAVAILABLE"
    http_status = 503


class RenderTimeoutError(DocPressError):
    """Content did not reach network idle within the settle window."""

    code = "RENDER_TIMEOUT"
    http_status = 504


class RenderFailureError(DocPressError):
    """The backend failed while producing PDF bytes."""

    code = "RENDER_FAILED"
    http_status = 500
