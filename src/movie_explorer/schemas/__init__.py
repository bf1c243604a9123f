"""Pydantic schemas for request/response validation."""

from movie_explorer.schemas.external import (
    OMDBMediaDetails,
    OMDBRating,
    OMDBSearchItem,
    OMDBSearchResponse,
)
from movie_explorer.schemas.favorite import (
    FavoriteAdded,
    FavoriteCreate,
    FavoritesResponse,
    FavoriteStatus,
)
from movie_explorer.schemas.media import (
    MediaDetails,
    MediaRating,
    MediaSearchResponse,
    MediaSearchResult,
    MediaType,
)
from movie_explorer.schemas.user import (
    AuthResponse,
    AuthStatus,
    MessageResponse,
    Principal,
    TokenPayload,
    UserCreate,
    UserCredentials,
    UserLogin,
    UserPublic,
    UserUpdate,
)

__all__ = [
    # External API schemas
    "OMDBSearchItem",
    "OMDBSearchResponse",
    "OMDBRating",
    "OMDBMediaDetails",
    # Media schemas
    "MediaType",
    "MediaSearchResult",
    "MediaSearchResponse",
    "MediaRating",
    "MediaDetails",
    # Favorite schemas
    "FavoriteCreate",
    "FavoriteAdded",
    "FavoritesResponse",
    "FavoriteStatus",
    # User schemas
    "UserCreate",
    "UserLogin",
    "UserUpdate",
    "UserPublic",
    "UserCredentials",
    "Principal",
    "AuthResponse",
    "AuthStatus",
    "MessageResponse",
    "TokenPayload",
]
