"""Pydantic schemas for favorites API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

IMDB_ID_PATTERN = r"^tt\d+$"


class FavoriteCreate(BaseModel):
    """Request body for adding a favorite.

    Accepts ``movieId`` (as sent by the web client) or ``movie_id``.
    """

    model_config = ConfigDict(populate_by_name=True)

    movie_id: str = Field(
        alias="movieId",
        pattern=IMDB_ID_PATTERN,
        max_length=32,
        description="IMDB movie ID (e.g. tt1234567)",
    )


class FavoriteAdded(BaseModel):
    """Response after adding a favorite."""

    message: str = Field(default="Favorite added successfully", description="Status message")
    movie_id: str = Field(description="The movie that was added")


class FavoritesResponse(BaseModel):
    """The current user's favorite movie IDs."""

    favorites: list[str] = Field(default_factory=list, description="IMDB movie IDs")


class FavoriteStatus(BaseModel):
    """Whether a single movie is in the current user's favorites."""

    movie_id: str = Field(description="IMDB movie ID")
    is_favorite: bool = Field(description="Whether the movie is a favorite")
