"""Domain exceptions raised by services and mapped to HTTP responses in app.main."""
from typing import Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""
    status_code = status.HTTP_400_BAD_REQUEST
    error = "validation_error"
    default_message = "Validation failed"


class ConflictError(AppError):
    """Uniqueness violation (duplicate email, duplicate tenant code)."""
    status_code = status.HTTP_400_BAD_REQUEST
    error = "conflict"
    default_message = "Resource already exists"


class ForbiddenError(AppError):
    """Principal lacks the required role or acts on another tenant."""
    status_code = status.HTTP_403_FORBIDDEN
    error = "forbidden"
    default_message = "Access denied"


class NotFoundError(AppError):
    """Resource absent, or outside the caller's tenant."""
    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"
    default_message = "Resource not found"


class InternalError(AppError):
    """Unexpected store failure."""


class UnauthorizedError(AppError):
    """Missing, invalid or expired credential."""
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "unauthorized"
    default_message = "Authentication required"


class TokenExpiredError(UnauthorizedError):
    error = "token_expired"
    default_message = "Token has expired"


class TokenMalformedError(UnauthorizedError):
    error = "token_invalid"
    default_message = "Invalid token"


class TokenIssuerMismatchError(UnauthorizedError):
    error = "token_issuer_mismatch"
    default_message = "Invalid token issuer"


class InvalidCredentialsError(UnauthorizedError):
    error = "invalid_credentials"
    default_message = "Invalid email or password"
