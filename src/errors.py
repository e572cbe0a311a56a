"""Domain errors raised by services and mapped to HTTP responses in ``src.main``."""

from fastapi import status


class AppError(Exception):
    """Base class for errors that carry an HTTP status and a client-facing message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(AppError):
    """Missing identity, or an identity that does not own the resource."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFound(AppError):
    """Referenced entity is absent or not owned by the caller."""

    status_code = status.HTTP_404_NOT_FOUND


class Conflict(AppError):
    """A uniqueness or version constraint was violated."""

    status_code = status.HTTP_409_CONFLICT


class StoreError(AppError):
    """Unexpected persistence failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
