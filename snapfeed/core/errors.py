"""Error hierarchy for Snapfeed failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - Messages are user-facing: they are shown inline on the originating form
    - No internal details leak through to_response()
"""
from enum import Enum


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    AUTH = "auth"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class SnapfeedError(Exception):
    """Base exception for all Snapfeed domain errors."""

    def __init__(self, message: str, code: str, category: ErrorCategory, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
            }
        }


class ValidationError(SnapfeedError):
    """Bad input shape or length."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, "VALIDATION_ERROR", ErrorCategory.VALIDATION, 400)
        self.field = field


class AuthError(SnapfeedError):
    """Credential mismatch."""

    def __init__(self, message: str = "Wrong password"):
        super().__init__(message, "AUTH_ERROR", ErrorCategory.AUTH, 401)


class NotFoundError(SnapfeedError):
    """Dangling reference to a user or post."""

    def __init__(self, resource_type: str, resource_id: object | None = None):
        message = f"{resource_type} not found"
        super().__init__(message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(SnapfeedError):
    """Uniqueness violation."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", ErrorCategory.CONFLICT, 409)


class ServerError(SnapfeedError):
    """Unexpected failure surfaced with a generic message."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message, "INTERNAL_ERROR", ErrorCategory.INTERNAL, 500)


class LoginRequired(Exception):
    """Raised by auth dependencies; answered with a redirect to the login page."""

    def __init__(self, location: str = "/login"):
        super().__init__(location)
        self.location = location
