"""Pydantic schemas for media API endpoints."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class MediaType(StrEnum):
    """Title types understood by OMDB."""

    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"


class MediaSearchResult(BaseModel):
    """A single search result for API response."""

    model_config = ConfigDict(extra="ignore")

    imdb_id: str = Field(description="IMDB ID")
    title: str = Field(description="Title")
    year: str | None = Field(default=None, description="Release year or year range")
    type: str | None = Field(default=None, description="movie, series or episode")
    poster_url: str | None = Field(default=None, description="Poster image URL")


class MediaSearchResponse(BaseModel):
    """Response for media search endpoint."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(description="Current page number")
    total_pages: int = Field(description="Total number of pages")
    total_results: int = Field(description="Total number of results")
    results: list[MediaSearchResult] = Field(default_factory=list, description="Results")
    error: str | None = Field(default=None, description="Upstream message when nothing matched")
    # Caching info
    cached: bool = Field(default=False, description="Whether this data is from cache")


class MediaRating(BaseModel):
    """A rating from one source."""

    source: str = Field(description="Rating source")
    value: str = Field(description="Rating value")


class MediaDetails(BaseModel):
    """Detailed media information for API response."""

    model_config = ConfigDict(extra="ignore")

    imdb_id: str = Field(description="IMDB ID")
    title: str = Field(description="Title")
    year: str | None = Field(default=None, description="Release year")
    type: str | None = Field(default=None, description="movie, series or episode")
    rated: str | None = Field(default=None, description="Content rating")
    released: str | None = Field(default=None, description="Release date")
    runtime: str | None = Field(default=None, description="Runtime")
    genre: str | None = Field(default=None, description="Genres")
    director: str | None = Field(default=None, description="Director(s)")
    writer: str | None = Field(default=None, description="Writer(s)")
    actors: str | None = Field(default=None, description="Main cast")
    plot: str | None = Field(default=None, description="Full plot")
    language: str | None = Field(default=None, description="Languages")
    country: str | None = Field(default=None, description="Countries")
    awards: str | None = Field(default=None, description="Awards summary")
    poster_url: str | None = Field(default=None, description="Poster image URL")
    ratings: list[MediaRating] = Field(default_factory=list, description="Ratings by source")
    metascore: str | None = Field(default=None, description="Metacritic score")
    imdb_rating: str | None = Field(default=None, description="IMDB rating")
    imdb_votes: str | None = Field(default=None, description="IMDB vote count")
    total_seasons: str | None = Field(default=None, description="Seasons (series only)")
    box_office: str | None = Field(default=None, description="Box office gross")
    # Caching info
    cached: bool = Field(default=False, description="Whether this data is from cache")
