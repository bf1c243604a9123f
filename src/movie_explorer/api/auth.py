"""Authentication API endpoints."""

import logging

from fastapi import APIRouter, Depends

from movie_explorer.api.dependencies import CurrentUser, Users, get_local_strategy
from movie_explorer.exceptions import UserNotFoundError
from movie_explorer.schemas.user import (
    AuthResponse,
    AuthStatus,
    MessageResponse,
    Principal,
    UserCreate,
    UserLogin,
    UserPublic,
    UserUpdate,
)
from movie_explorer.services.auth import LocalCredentials, LocalCredentialStrategy
from movie_explorer.utils.security import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(user_data: UserCreate, users: Users) -> AuthResponse:
    """Register a new user and log them in.

    The password is hashed before storage.

    Raises:
        EmailAlreadyExistsError (409): If the email is already registered
    """
    user = await users.create(
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
    )
    principal = Principal(id=user.id, email=user.email, name=user.name)
    return AuthResponse(access_token=create_access_token(principal), user=principal)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    strategy: LocalCredentialStrategy = Depends(get_local_strategy),
) -> AuthResponse:
    """Authenticate with email and password and return a JWT token.

    Raises:
        AuthenticationError (401): If the credentials are invalid
    """
    principal = await strategy.verify(
        LocalCredentials(email=credentials.email, password=credentials.password)
    )
    return AuthResponse(access_token=create_access_token(principal), user=principal)


@router.post("/logout", response_model=MessageResponse)
async def logout() -> MessageResponse:
    """Log out.

    Tokens are stateless, so the client discards its token; nothing is revoked
    server-side.
    """
    return MessageResponse(message="Logout successful")


@router.get("/status", response_model=AuthStatus)
async def auth_status(current_user: CurrentUser) -> AuthStatus:
    """Report whether the supplied token is valid."""
    return AuthStatus(is_authenticated=True, user=current_user)


@router.get("/me", response_model=UserPublic)
async def get_current_user_info(current_user: CurrentUser, users: Users) -> UserPublic:
    """Get the current authenticated user's profile."""
    user = await users.find_by_id(current_user.id)
    if user is None:
        raise UserNotFoundError()
    return user


@router.patch("/me", response_model=UserPublic)
async def update_current_user(
    update: UserUpdate,
    current_user: CurrentUser,
    users: Users,
) -> UserPublic:
    """Update the current user's display name."""
    user = await users.update_profile(current_user.id, update.name)
    logger.info("User %s updated their profile", current_user.id)
    return user
