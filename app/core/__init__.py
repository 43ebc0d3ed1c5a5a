"""Core module."""
from app.core.exceptions import (
    AppException,
    BadRequestException,
    DuplicateResourceException,
    ForbiddenException,
    ImageNotInNoteException,
    InsufficientAccessException,
    MediaStorageError,
    NotFoundException,
    UnauthorizedException,
    UpstreamFailureException,
    ValidationException,
)
from app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)

__all__ = [
    "AppException",
    "NotFoundException",
    "BadRequestException",
    "ValidationException",
    "DuplicateResourceException",
    "ImageNotInNoteException",
    "UnauthorizedException",
    "ForbiddenException",
    "InsufficientAccessException",
    "UpstreamFailureException",
    "MediaStorageError",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
