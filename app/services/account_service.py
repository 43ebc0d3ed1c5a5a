"""Account registration and authentication."""
import logging
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import DuplicateResourceException, UnauthorizedException
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models.user import User

logger = logging.getLogger(__name__)


class AccountService:
    """Service for user accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def register(self, username: str, email: str, password: str) -> User:
        """
        Create a new account.

        Raises:
            DuplicateResourceException: If the email or username is taken
        """
        if await self.find_by_email(email) is not None:
            raise DuplicateResourceException("Email already exists")

        result = await self.db.execute(select(User.id).where(User.username == username))
        if result.scalar_one_or_none() is not None:
            raise DuplicateResourceException("Username already exists")

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            await self.db.rollback()
            raise DuplicateResourceException("Email or username already exists")
        await self.db.refresh(user)

        logger.info("Registered user %s", user.id)
        return user

    async def authenticate(self, email: str, password: str) -> tuple[str, User]:
        """
        Check credentials and issue an access token.

        Returns:
            Tuple of (access_token, user)

        Raises:
            UnauthorizedException: If the email is unknown or the password is wrong
        """
        user = await self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise UnauthorizedException("Invalid credentials")

        token = create_access_token(
            subject=user.id,
            expires_delta=timedelta(minutes=settings.jwt_access_token_expire_minutes),
            claims={"email": user.email, "username": user.username},
        )
        return token, user
