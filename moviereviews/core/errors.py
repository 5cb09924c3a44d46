"""
Error taxonomy shared by the persistence layer, handlers and API surface.

Every error carries a stable machine-readable ``code`` and a human-readable
message. ``extensions`` is picked up by graphql-core when a resolver raises,
so clients see the code under ``errors[].extensions.code``.
"""

from typing import Any, Dict


class ApiError(Exception):
    """Base class for all classified API failures."""

    code = "INTERNAL_SERVER_ERROR"
    default_message = "Internal server error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def extensions(self) -> Dict[str, Any]:
        return {"code": self.code}


class AuthenticationRequired(ApiError):
    code = "UNAUTHENTICATED"
    default_message = "You must be authenticated to perform this action."


class AuthorizationDenied(ApiError):
    code = "FORBIDDEN"
    default_message = "You are not authorized to perform this action."


class NotFound(ApiError):
    code = "NOT_FOUND"
    default_message = "Resource not found."


class ValidationFailed(ApiError):
    code = "BAD_USER_INPUT"
    default_message = "Invalid input."


class DuplicateEmail(ApiError):
    code = "DUPLICATE_EMAIL"
    default_message = "Email already exists."


class InvalidCredentials(ApiError):
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password."


class StorageFailure(ApiError):
    code = "STORAGE_FAILURE"
    default_message = "A storage error occurred."


class ConstraintViolation(StorageFailure):
    """A write was rejected by a storage constraint (unique, foreign key)."""
