"""FastAPI dependencies shared by the routers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from movie_explorer.database import get_database, get_db
from movie_explorer.repositories.user import UserRepository
from movie_explorer.schemas.user import Principal
from movie_explorer.services.auth import LocalCredentialStrategy, TokenCredentialStrategy
from movie_explorer.services.base import APIError
from movie_explorer.services.cache import get_cache
from movie_explorer.services.media import MediaService
from movie_explorer.services.omdb import OMDBClient

# auto_error is off so a missing header reaches the strategy (or yields an
# anonymous request on public routes) instead of FastAPI's own 401.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_local_strategy(
    repository: UserRepository = Depends(get_user_repository),
) -> LocalCredentialStrategy:
    return LocalCredentialStrategy(repository)


async def _resolve_token(request: Request, token: str | None) -> Principal:
    # Bad tokens are rejected before any session is opened
    user_id = TokenCredentialStrategy.read_subject(token)
    async with get_database(request).session() as session:
        return await TokenCredentialStrategy(UserRepository(session)).resolve(user_id)


async def get_current_user(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Principal:
    """Resolve the bearer token to the authenticated user.

    Raises:
        AuthenticationError: If the token is missing, invalid, expired, or
            belongs to a user that no longer exists.
    """
    return await _resolve_token(request, token)


async def get_optional_user(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Principal | None:
    """Like :func:`get_current_user`, but an absent token yields None.

    A token that is present but invalid is still rejected.
    """
    if not token:
        return None
    return await _resolve_token(request, token)


async def get_media_service(request: Request) -> AsyncGenerator[MediaService]:
    """Provide a media service for one request and close its HTTP client afterwards."""
    try:
        client = OMDBClient()
    except ValueError as e:
        raise APIError("Media provider is not configured", status_code=503) from e

    service = MediaService(client, get_cache(request))
    try:
        yield service
    finally:
        await service.close()


# Type aliases for use in route signatures
CurrentUser = Annotated[Principal, Depends(get_current_user)]
OptionalUser = Annotated[Principal | None, Depends(get_optional_user)]
Users = Annotated[UserRepository, Depends(get_user_repository)]
Media = Annotated[MediaService, Depends(get_media_service)]
