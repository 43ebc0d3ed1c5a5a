"""Custom exceptions for the application."""
from typing import Any

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base exception for application errors."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str | None = None,
        headers: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND",
        )


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, detail: str = "Bad request", error_code: str = "BAD_REQUEST") -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code,
        )


class ValidationException(BadRequestException):
    """Input failed a shape or range check."""

    def __init__(self, detail: str = "Validation error") -> None:
        super().__init__(detail=detail, error_code="VALIDATION_ERROR")


class DuplicateResourceException(BadRequestException):
    """Email, username or feedback already exists."""

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(detail=detail, error_code="DUPLICATE_RESOURCE")


class ImageNotInNoteException(BadRequestException):
    """Image URL is not attached to the note."""

    def __init__(self, detail: str = "Image not found in this note") -> None:
        super().__init__(detail=detail, error_code="IMAGE_NOT_IN_NOTE")


class UnauthorizedException(AppException):
    """Unauthorized exception."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenException(AppException):
    """Authenticated, but not the owner of the resource."""

    def __init__(self, detail: str = "Access denied") -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="ACCESS_DENIED",
        )


class InsufficientAccessException(AppException):
    """Share link resolved, but its access level does not allow the write."""

    def __init__(self, detail: str = "No edit permission") -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="INSUFFICIENT_ACCESS",
        )


class UpstreamFailureException(AppException):
    """Media host unavailable or rejected the request."""

    def __init__(self, detail: str = "Upstream service failure") -> None:
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            error_code="UPSTREAM_FAILURE",
        )


class MediaStorageError(Exception):
    """Raised by media uploaders when the backing store fails."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
