"""Pydantic schemas for movie data."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from movieapp.utils.dates import parse_release_date


class MovieBase(BaseModel):
    """Fields shared by stored movies and TMDb list results."""

    id: int
    title: str = ""
    overview: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: date | None = None
    vote_average: float = 0.0
    popularity: float = 0.0

    @field_validator("release_date", mode="before")
    @classmethod
    def _parse_release_date(cls, value: object) -> date | None:
        if value is None or isinstance(value, (str, date)):
            return parse_release_date(value)
        return None

    @field_validator("overview", mode="before")
    @classmethod
    def _overview_not_null(cls, value: object) -> object:
        return "" if value is None else value


class MovieResponse(MovieBase):
    """Stored movie with its genres and last sync time."""

    model_config = ConfigDict(from_attributes=True)

    genres: list[str] = Field(default_factory=list)
    synced_at: datetime


class MovieSummary(MovieBase):
    """A single movie in a TMDb list result (trending, popular, search)."""

    genre_ids: list[int] = Field(default_factory=list)


class MoviePage(BaseModel):
    """One page of a TMDb list endpoint."""

    page: int = 1
    results: list[MovieSummary] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0
