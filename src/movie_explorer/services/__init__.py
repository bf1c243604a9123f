"""Business logic and external API clients."""

from movie_explorer.services.auth import (
    CredentialStrategy,
    LocalCredentials,
    LocalCredentialStrategy,
    TokenCredentialStrategy,
)
from movie_explorer.services.base import (
    APIError,
    BaseAPIClient,
    NotFoundError,
    RateLimitError,
)
from movie_explorer.services.cache import CacheClient, get_cache
from movie_explorer.services.media import MediaService
from movie_explorer.services.omdb import OMDBClient

__all__ = [
    "APIError",
    "BaseAPIClient",
    "NotFoundError",
    "RateLimitError",
    "CacheClient",
    "get_cache",
    "OMDBClient",
    "MediaService",
    "CredentialStrategy",
    "LocalCredentials",
    "LocalCredentialStrategy",
    "TokenCredentialStrategy",
]
