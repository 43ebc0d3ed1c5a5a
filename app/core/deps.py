"""Dependency injection utilities."""
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import UnauthorizedException
from app.core.security import decode_access_token
from app.database import get_db
from app.models.user import User
from app.services.account_service import AccountService
from app.services.feedback_service import FeedbackService
from app.services.media_uploader import MediaUploader, get_media_uploader
from app.services.note_service import NoteService
from app.services.share_service import ShareService
from app.services.stats_service import StatsService

# auto_error=False so a missing header yields our 401 instead of FastAPI's 403
security = HTTPBearer(auto_error=False)

DbDep = Annotated[AsyncSession, Depends(get_db)]
MediaUploaderDep = Annotated[MediaUploader, Depends(get_media_uploader)]


def get_account_service(db: DbDep) -> AccountService:
    return AccountService(db)


def get_note_service(db: DbDep, uploader: MediaUploaderDep) -> NoteService:
    return NoteService(db, uploader)


def get_share_service(notes: Annotated[NoteService, Depends(get_note_service)]) -> ShareService:
    return ShareService(notes)


def get_feedback_service(db: DbDep) -> FeedbackService:
    return FeedbackService(db)


def get_stats_service(
    db: DbDep,
    feedback: Annotated[FeedbackService, Depends(get_feedback_service)],
) -> StatsService:
    return StatsService(db, feedback)


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]
ShareServiceDep = Annotated[ShareService, Depends(get_share_service)]
FeedbackServiceDep = Annotated[FeedbackService, Depends(get_feedback_service)]
StatsServiceDep = Annotated[StatsService, Depends(get_stats_service)]


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    accounts: AccountServiceDep,
) -> User:
    """Get current authenticated user.

    The token signature and expiry are checked locally; the store is only
    hit to load the user row the token names.

    Raises:
        UnauthorizedException: If no token, an invalid token, or an unknown user
    """
    if credentials is None:
        raise UnauthorizedException("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None or not payload.get("sub"):
        raise UnauthorizedException("Could not validate credentials")

    user = await accounts.get_by_id(payload["sub"])
    if user is None:
        raise UnauthorizedException("Could not validate credentials")

    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]
