"""Authentication API routes."""
from fastapi import APIRouter, status

from app.core.deps import AccountServiceDep, CurrentUserDep
from app.schemas.common import MessageResponse
from app.schemas.user import LoginResponse, User, UserCreate, UserLogin

router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, accounts: AccountServiceDep):
    """Register a new user."""
    await accounts.register(
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
    )
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(credentials: UserLogin, accounts: AccountServiceDep):
    """Login user."""
    token, user = await accounts.authenticate(credentials.email, credentials.password)
    return LoginResponse(token=token, username=user.username, email=user.email)


@router.get("/me", response_model=User)
async def get_current_user_info(current_user: CurrentUserDep):
    """Get current user information."""
    return User.model_validate(current_user)
