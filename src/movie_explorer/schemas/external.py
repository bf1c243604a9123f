"""Pydantic schemas for external API responses (OMDB)."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# OMDB fills unknown values with "N/A"
OMDB_MISSING = ("N/A", "")


def _na_to_none(v: object) -> object:
    if isinstance(v, str) and v.strip() in OMDB_MISSING:
        return None
    return v


class OMDBSearchItem(BaseModel):
    """A single result from an OMDB search (``s=``) request."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    imdb_id: str = Field(alias="imdbID", description="IMDB ID")
    title: str = Field(alias="Title", description="Title")
    year: str | None = Field(default=None, alias="Year", description="Year or year range")
    type: str | None = Field(default=None, alias="Type", description="movie, series or episode")
    poster: str | None = Field(default=None, alias="Poster", description="Poster image URL")

    @field_validator("year", "type", "poster", mode="before")
    @classmethod
    def missing_to_none(cls, v: object) -> object:
        """Convert OMDB's "N/A" placeholders to None."""
        return _na_to_none(v)


class OMDBSearchResponse(BaseModel):
    """Response from an OMDB search request."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    response: bool = Field(alias="Response", description="Whether OMDB found anything")
    search: list[OMDBSearchItem] = Field(
        default_factory=list, alias="Search", description="Search results"
    )
    total_results: int = Field(default=0, alias="totalResults", description="Total matches")
    error: str | None = Field(default=None, alias="Error", description="OMDB error message")

    @field_validator("total_results", mode="before")
    @classmethod
    def parse_total_results(cls, v: object) -> object:
        """OMDB sends the total as a string; treat placeholders as zero."""
        if v is None or _na_to_none(v) is None:
            return 0
        return v


class OMDBRating(BaseModel):
    """A rating from one source (IMDB, Rotten Tomatoes, Metacritic)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    source: str = Field(alias="Source", description="Rating source")
    value: str = Field(alias="Value", description="Rating value as displayed")


class OMDBMediaDetails(BaseModel):
    """Detailed information for a single title (``i=`` request)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    imdb_id: str = Field(alias="imdbID", description="IMDB ID")
    title: str = Field(alias="Title", description="Title")
    year: str | None = Field(default=None, alias="Year")
    type: str | None = Field(default=None, alias="Type")
    rated: str | None = Field(default=None, alias="Rated")
    released: str | None = Field(default=None, alias="Released")
    runtime: str | None = Field(default=None, alias="Runtime")
    genre: str | None = Field(default=None, alias="Genre")
    director: str | None = Field(default=None, alias="Director")
    writer: str | None = Field(default=None, alias="Writer")
    actors: str | None = Field(default=None, alias="Actors")
    plot: str | None = Field(default=None, alias="Plot")
    language: str | None = Field(default=None, alias="Language")
    country: str | None = Field(default=None, alias="Country")
    awards: str | None = Field(default=None, alias="Awards")
    poster: str | None = Field(default=None, alias="Poster")
    ratings: list[OMDBRating] = Field(default_factory=list, alias="Ratings")
    metascore: str | None = Field(default=None, alias="Metascore")
    imdb_rating: str | None = Field(default=None, alias="imdbRating")
    imdb_votes: str | None = Field(default=None, alias="imdbVotes")
    total_seasons: str | None = Field(default=None, alias="totalSeasons")
    dvd: str | None = Field(default=None, alias="DVD")
    box_office: str | None = Field(default=None, alias="BoxOffice")
    production: str | None = Field(default=None, alias="Production")
    website: str | None = Field(default=None, alias="Website")

    @field_validator(
        "year",
        "type",
        "rated",
        "released",
        "runtime",
        "genre",
        "director",
        "writer",
        "actors",
        "plot",
        "language",
        "country",
        "awards",
        "poster",
        "metascore",
        "imdb_rating",
        "imdb_votes",
        "total_seasons",
        "dvd",
        "box_office",
        "production",
        "website",
        mode="before",
    )
    @classmethod
    def missing_to_none(cls, v: object) -> object:
        """Convert OMDB's "N/A" placeholders to None."""
        return _na_to_none(v)
