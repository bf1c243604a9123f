"""Media search and details API endpoints (OMDB-backed)."""

from fastapi import APIRouter, Path, Query

from movie_explorer.api.dependencies import Media, OptionalUser
from movie_explorer.schemas.favorite import IMDB_ID_PATTERN
from movie_explorer.schemas.media import MediaDetails, MediaSearchResponse, MediaType

router = APIRouter(prefix="/media", tags=["media"])


@router.get("/search", response_model=MediaSearchResponse)
async def search_media(
    media: Media,
    current_user: OptionalUser,  # noqa: ARG001 - rejects invalid tokens
    query: str = Query(..., min_length=1, description="Search query"),
    media_type: MediaType | None = Query(None, alias="type", description="Filter by media type"),
    year: str | None = Query(None, pattern=r"^\d{4}$", description="Filter by release year"),
    page: int = Query(1, ge=1, description="Page number"),
) -> MediaSearchResponse:
    """Search movies, series and episodes by title.

    Public; results come from the cache when available.
    """
    return await media.search_media(
        query,
        media_type=media_type.value if media_type else None,
        year=year,
        page=page,
    )


@router.get("/{imdb_id}", response_model=MediaDetails)
async def get_media(
    media: Media,
    current_user: OptionalUser,  # noqa: ARG001 - rejects invalid tokens
    imdb_id: str = Path(..., pattern=IMDB_ID_PATTERN, description="IMDB ID"),
) -> MediaDetails:
    """Get full details for a title.

    Raises:
        NotFoundError (404): If OMDB does not know the title
    """
    return await media.get_media(imdb_id)
