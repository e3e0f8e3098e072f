"""
Application error taxonomy.

Every error except ProviderError is rendered at the HTTP boundary by the
handlers registered in main.py. ProviderError is raised by live generation
providers and absorbed by the generation orchestrator.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a stable HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, detail: str | None = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ExtractionError(ValidationError):
    default_message = "Error parsing file content. Please ensure the file is not corrupted."


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token required"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InvalidTransitionError(ConflictError):
    default_message = "Invalid resume status transition"


class QuotaExceededError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Monthly API limit exceeded"


class InternalError(AppError):
    pass


class ProviderError(Exception):
    """Generation provider unreachable or returned unusable output."""
