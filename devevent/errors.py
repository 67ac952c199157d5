"""Error taxonomy shared by services, controllers and the app factory.

Every error carries a stable ``code`` (used as the ``error`` key of JSON
responses), a user-safe ``message`` and the HTTP status it maps to.
Infrastructure errors always expose a generic message; the underlying cause is
chained (``raise ... from exc``) and logged where it is caught.
"""

from __future__ import annotations

from typing import Any, Optional


class DevEventError(Exception):
    """Base application error with code, user-safe message and HTTP status."""

    code = "error"
    status_code = 500
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, *, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict:
        body = {"ok": False, "error": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(DevEventError):
    """Required settings are missing. Raised while building the app, never served."""

    code = "configuration_error"
    default_message = "Invalid configuration"


class AuthenticationError(DevEventError):
    """Login credentials were rejected."""

    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid credentials"


class AuthorizationError(DevEventError):
    """A protected operation was called without an acceptable admin credential."""

    code = "unauthorized"
    status_code = 401
    default_message = "Unauthorized"


class UnauthorizedError(AuthorizationError):
    """No credential was presented."""


class ForbiddenError(AuthorizationError):
    """A credential was presented but is invalid, expired or lacks the admin role."""

    code = "forbidden"
    status_code = 403
    default_message = "Forbidden"


class ValidationError(DevEventError):
    """Malformed or incomplete input."""

    code = "validation_error"
    status_code = 400
    default_message = "Invalid input"


class ConflictError(ValidationError):
    """Input collides with an existing record (e.g. a slug already in use)."""

    code = "conflict"
    status_code = 409
    default_message = "Record already exists"


class NotFoundError(DevEventError):
    code = "not_found"
    status_code = 404
    default_message = "Not found"


class InfrastructureError(DevEventError):
    """Persistence or media failure; callers only ever see a generic message."""

    code = "server_error"
    status_code = 500
    default_message = "Something went wrong"

    def to_dict(self) -> dict:
        return {"ok": False, "error": self.code, "message": self.message}


class DatabaseUnavailableError(InfrastructureError):
    default_message = "Database unavailable"


class MediaUploadError(InfrastructureError):
    default_message = "Image upload failed"


__all__ = [
    "DevEventError",
    "ConfigurationError",
    "AuthenticationError",
    "AuthorizationError",
    "UnauthorizedError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "InfrastructureError",
    "DatabaseUnavailableError",
    "MediaUploadError",
]
