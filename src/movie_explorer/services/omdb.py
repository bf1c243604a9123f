"""OMDB (Open Movie Database) API client service."""

from typing import Any

from movie_explorer.config import get_settings
from movie_explorer.services.base import BaseAPIClient


class OMDBClient(BaseAPIClient):
    """Client for the OMDB API.

    OMDB has a single endpoint; the kind of lookup is chosen by query
    parameters (``s`` for search, ``i`` for an IMDB ID). The API key is sent
    as the ``apikey`` parameter. Methods return the raw JSON payload so it can
    be cached verbatim.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the OMDB client.

        Args:
            api_key: OMDB API key. If not provided, uses settings.
            base_url: OMDB base URL. If not provided, uses settings.
            timeout: Request timeout in seconds.
        """
        settings = get_settings()
        self._api_key = api_key or settings.omdb_api_key
        base = base_url or settings.omdb_base_url

        if not self._api_key:
            raise ValueError("OMDB API key is required")

        super().__init__(base_url=base, timeout=timeout)

    @property
    def default_params(self) -> dict[str, Any]:
        return {"apikey": self._api_key}

    async def search(
        self,
        query: str,
        media_type: str | None = None,
        year: str | None = None,
        page: int = 1,
    ) -> dict[str, Any]:
        """Search titles.

        Args:
            query: Title search string.
            media_type: Optional filter: movie, series or episode.
            year: Optional four-digit release year.
            page: Page number (1-based, 10 results per page).

        Returns:
            Raw OMDB search payload.
        """
        params: dict[str, Any] = {"s": query, "page": str(page)}
        if media_type:
            params["type"] = media_type
        if year:
            params["y"] = year
        return await self.get(params=params)

    async def get_by_id(self, imdb_id: str) -> dict[str, Any]:
        """Get full details for one title.

        Args:
            imdb_id: IMDB ID (e.g. "tt0111161").

        Returns:
            Raw OMDB details payload (may carry ``"Response": "False"``).
        """
        return await self.get(params={"i": imdb_id, "plot": "full"})
