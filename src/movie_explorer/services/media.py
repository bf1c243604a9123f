"""Media lookups with a cache-aside layer in front of OMDB."""

import logging
import math
import re
from datetime import UTC, datetime
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from movie_explorer.config import get_settings
from movie_explorer.exceptions import ValidationError
from movie_explorer.schemas.external import OMDBMediaDetails, OMDBSearchResponse
from movie_explorer.schemas.media import (
    MediaDetails,
    MediaRating,
    MediaSearchResponse,
    MediaSearchResult,
)
from movie_explorer.services.base import APIError, NotFoundError
from movie_explorer.services.cache import CacheClient
from movie_explorer.services.omdb import OMDBClient

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

IMDB_ID_RE = re.compile(r"^tt\d+$")
YEAR_RE = re.compile(r"^\d{4}$")
MIN_YEAR = 1900
OMDB_PAGE_SIZE = 10


def _is_true(value: Any) -> bool:
    return str(value).lower() == "true"


def validate_year(year: str) -> str:
    """Check a four-digit year between 1900 and five years from now."""
    max_year = datetime.now(UTC).year + 5
    if not YEAR_RE.match(year) or not MIN_YEAR <= int(year) <= max_year:
        raise ValidationError(
            f"Year must be a valid 4-digit year between {MIN_YEAR} and {max_year}"
        )
    return year


def search_cache_key(query: str, media_type: str | None, year: str | None, page: int) -> str:
    return f"search:{query.lower()}:{media_type or 'all'}:{year or 'all'}:{page}"


def details_cache_key(imdb_id: str) -> str:
    return f"media:{imdb_id}"


class MediaService:
    """Search and detail lookups, consulting the cache before OMDB.

    Search results are cached only when OMDB reports a match; detail lookups
    are cached on success. Cached payloads are the raw OMDB JSON.
    """

    def __init__(
        self,
        client: OMDBClient,
        cache: CacheClient,
        search_ttl: int | None = None,
        details_ttl: int | None = None,
    ) -> None:
        settings = get_settings()
        self.client = client
        self.cache = cache
        self.search_ttl = search_ttl if search_ttl is not None else settings.search_cache_ttl
        self.details_ttl = details_ttl if details_ttl is not None else settings.details_cache_ttl

    async def close(self) -> None:
        await self.client.close()

    async def _from_cache(self, key: str, model: type[ModelT]) -> ModelT | None:
        payload = await self.cache.get_json(key)
        if payload is None:
            return None
        try:
            parsed = model.model_validate(payload)
        except PydanticValidationError:
            logger.warning("Ignoring cached payload for %s that failed validation", key)
            return None
        logger.debug("Cache hit for %s", key)
        return parsed

    @staticmethod
    def _parse(model: type[ModelT], payload: dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            logger.error("Unexpected OMDB payload for %s: %s", model.__name__, e)
            raise APIError("Unexpected response from media provider", status_code=502) from e

    async def search_media(
        self,
        query: str,
        media_type: str | None = None,
        year: str | None = None,
        page: int = 1,
    ) -> MediaSearchResponse:
        """Search titles by name with optional type/year filters.

        Raises:
            ValidationError: If the query is blank, the page is not positive,
                or the year is out of range.
            APIError: If OMDB cannot be reached or answers with an error.
        """
        query = query.strip()
        if not query:
            raise ValidationError("Search query is required")
        if page < 1:
            raise ValidationError("Page must be a positive integer")
        if year is not None:
            validate_year(year)

        key = search_cache_key(query, media_type, year, page)
        cached = await self._from_cache(key, OMDBSearchResponse)
        if cached is not None:
            return self._to_search_response(cached, page, cached=True)

        payload = await self.client.search(query, media_type=media_type, year=year, page=page)
        result = self._parse(OMDBSearchResponse, payload)

        if result.response:
            await self.cache.set_json(key, payload, self.search_ttl)
        else:
            logger.info("OMDB search for %r returned no results: %s", query, result.error)

        return self._to_search_response(result, page, cached=False)

    async def get_media(self, imdb_id: str) -> MediaDetails:
        """Get full details for one title.

        Raises:
            ValidationError: If the ID is not an IMDB ID.
            NotFoundError: If OMDB does not know the title.
            APIError: If OMDB cannot be reached or answers with an error.
        """
        imdb_id = imdb_id.strip()
        if not IMDB_ID_RE.match(imdb_id):
            raise ValidationError("Invalid ID format. Must be a valid IMDB ID (e.g., tt1234567)")

        key = details_cache_key(imdb_id)
        cached = await self._from_cache(key, OMDBMediaDetails)
        if cached is not None:
            return self._to_details(cached, cached=True)

        payload = await self.client.get_by_id(imdb_id)
        if not _is_true(payload.get("Response", "True")):
            raise NotFoundError(payload.get("Error") or "Media not found")

        details = self._parse(OMDBMediaDetails, payload)
        await self.cache.set_json(key, payload, self.details_ttl)
        return self._to_details(details, cached=False)

    @staticmethod
    def _to_search_response(
        result: OMDBSearchResponse, page: int, cached: bool
    ) -> MediaSearchResponse:
        total = result.total_results if result.response else 0
        return MediaSearchResponse(
            page=page,
            total_pages=math.ceil(total / OMDB_PAGE_SIZE),
            total_results=total,
            results=[
                MediaSearchResult(
                    imdb_id=item.imdb_id,
                    title=item.title,
                    year=item.year,
                    type=item.type,
                    poster_url=item.poster,
                )
                for item in result.search
            ],
            error=None if result.response else result.error,
            cached=cached,
        )

    @staticmethod
    def _to_details(details: OMDBMediaDetails, cached: bool) -> MediaDetails:
        return MediaDetails(
            imdb_id=details.imdb_id,
            title=details.title,
            year=details.year,
            type=details.type,
            rated=details.rated,
            released=details.released,
            runtime=details.runtime,
            genre=details.genre,
            director=details.director,
            writer=details.writer,
            actors=details.actors,
            plot=details.plot,
            language=details.language,
            country=details.country,
            awards=details.awards,
            poster_url=details.poster,
            ratings=[MediaRating(source=r.source, value=r.value) for r in details.ratings],
            metascore=details.metascore,
            imdb_rating=details.imdb_rating,
            imdb_votes=details.imdb_votes,
            total_seasons=details.total_seasons,
            box_office=details.box_office,
            cached=cached,
        )
