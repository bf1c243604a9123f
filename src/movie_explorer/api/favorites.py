"""Favorites API endpoints.

Every route requires authentication and only ever touches the caller's own
favorites.
"""

from typing import Annotated

from fastapi import APIRouter, Path, Response

from movie_explorer.api.dependencies import CurrentUser, Users
from movie_explorer.exceptions import FavoriteNotFoundError
from movie_explorer.schemas.favorite import (
    IMDB_ID_PATTERN,
    FavoriteAdded,
    FavoriteCreate,
    FavoritesResponse,
    FavoriteStatus,
)

router = APIRouter(prefix="/favorites", tags=["favorites"])

MovieId = Annotated[str, Path(pattern=IMDB_ID_PATTERN, max_length=32, description="IMDB ID")]


@router.get("", response_model=FavoritesResponse)
async def list_favorites(current_user: CurrentUser, users: Users) -> FavoritesResponse:
    """List the current user's favorite movie IDs, oldest first."""
    favorites = await users.get_favorites(current_user.id)
    return FavoritesResponse(favorites=favorites)


@router.post("", response_model=FavoriteAdded, status_code=201)
async def add_favorite(
    favorite: FavoriteCreate,
    current_user: CurrentUser,
    users: Users,
) -> FavoriteAdded:
    """Add a movie to the current user's favorites.

    Accepts the ID as either ``movieId`` or ``movie_id``.

    Raises:
        FavoriteAlreadyExistsError (409): If the movie is already a favorite
    """
    await users.add_favorite(current_user.id, favorite.movie_id)
    return FavoriteAdded(movie_id=favorite.movie_id)


@router.get("/{movie_id}", response_model=FavoriteStatus)
async def get_favorite_status(
    movie_id: MovieId,
    current_user: CurrentUser,
    users: Users,
) -> FavoriteStatus:
    """Check whether a movie is in the current user's favorites."""
    is_favorite = await users.is_favorite(current_user.id, movie_id)
    return FavoriteStatus(movie_id=movie_id, is_favorite=is_favorite)


@router.delete("/{movie_id}", status_code=204)
async def remove_favorite(
    movie_id: MovieId,
    current_user: CurrentUser,
    users: Users,
) -> Response:
    """Remove a movie from the current user's favorites.

    Raises:
        FavoriteNotFoundError (404): If the movie is not a favorite
    """
    removed = await users.remove_favorite(current_user.id, movie_id)
    if not removed:
        raise FavoriteNotFoundError()
    return Response(status_code=204)
