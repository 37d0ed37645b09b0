"""Unit tests for the MovieSyncEngine freshness policy."""

from datetime import date, datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from factories import NOW, make_movie

from movieapp.config import settings
from movieapp.errors import NotFoundError, ProviderUnavailableError, ValidationError
from movieapp.models.movie import Movie
from movieapp.schemas.movie import MoviePage, MovieSummary
from movieapp.services.movie_sync import MovieSyncEngine
from movieapp.services.tmdb_client import TMDbClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

DETAIL = {
    "id": 550,
    "title": "Fight Club",
    "overview": "An insomniac office worker crosses paths with a soap maker.",
    "poster_path": "/fight-club.jpg",
    "backdrop_path": "/fight-club-backdrop.jpg",
    "release_date": "1999-10-15",
    "vote_average": 8.4,
    "popularity": 61.4,
    "genres": [{"id": 18, "name": "Drama"}, {"id": 53, "name": "Thriller"}],
}

LIST_PAGE = MoviePage(
    page=1,
    results=[
        MovieSummary(id=101, title="New Release"),
        MovieSummary(id=102, title="Another One"),
    ],
    total_pages=1,
    total_results=2,
)


class InMemoryMovieRepository:
    """Dict-backed stand-in for MovieRepository."""

    def __init__(self, *movies: Movie) -> None:
        self.rows: dict[int, Movie] = {m.id: m for m in movies}
        self.upserts = 0

    async def get(self, movie_id: int) -> Movie | None:
        return self.rows.get(movie_id)

    async def upsert(self, movie_id: int, fields: dict[str, Any], synced_at: datetime) -> Movie:
        self.upserts += 1
        movie = self.rows.get(movie_id) or Movie(id=movie_id)
        for name, value in fields.items():
            setattr(movie, name, value)
        movie.synced_at = synced_at
        self.rows[movie_id] = movie
        return movie


def make_tmdb(detail: dict | None = None, error: Exception | None = None) -> MagicMock:
    tmdb = MagicMock(spec=TMDbClient)
    if error is not None:
        tmdb.fetch_movie_detail = AsyncMock(side_effect=error)
    else:
        tmdb.fetch_movie_detail = AsyncMock(return_value=detail or DETAIL)
    tmdb.fetch_trending = AsyncMock(return_value=LIST_PAGE)
    tmdb.fetch_popular = AsyncMock(return_value=LIST_PAGE)
    tmdb.fetch_search = AsyncMock(return_value=LIST_PAGE)
    tmdb.extract_genres = MagicMock(side_effect=TMDbClient(api_key="key").extract_genres)
    return tmdb


def make_engine(repo: InMemoryMovieRepository, tmdb: MagicMock) -> MovieSyncEngine:
    return MovieSyncEngine(repo, tmdb, freshness_window=timedelta(hours=24), clock=lambda: NOW)


# ---------------------------------------------------------------------------
# get_movie
# ---------------------------------------------------------------------------


class TestGetMovieFresh:
    async def test_fresh_movie_skips_provider(self) -> None:
        movie = make_movie(synced_at=NOW - timedelta(hours=23, minutes=59))
        repo = InMemoryMovieRepository(movie)
        tmdb = make_tmdb()

        result = await make_engine(repo, tmdb).get_movie(550)

        assert result is movie
        tmdb.fetch_movie_detail.assert_not_called()
        assert repo.upserts == 0

    async def test_just_synced_movie_skips_provider(self) -> None:
        repo = InMemoryMovieRepository(make_movie(synced_at=NOW))
        tmdb = make_tmdb()

        await make_engine(repo, tmdb).get_movie(550)

        tmdb.fetch_movie_detail.assert_not_called()

    async def test_movie_exactly_at_window_is_refreshed(self) -> None:
        repo = InMemoryMovieRepository(make_movie(synced_at=NOW - timedelta(hours=24)))
        tmdb = make_tmdb()

        await make_engine(repo, tmdb).get_movie(550)

        tmdb.fetch_movie_detail.assert_awaited_once_with(550)


class TestGetMovieRefresh:
    async def test_stale_movie_is_refreshed_once(self) -> None:
        repo = InMemoryMovieRepository(
            make_movie(title="Old Title", synced_at=NOW - timedelta(hours=25))
        )
        tmdb = make_tmdb()

        result = await make_engine(repo, tmdb).get_movie(550)

        tmdb.fetch_movie_detail.assert_awaited_once_with(550)
        assert result.title == "Fight Club"
        assert result.synced_at == NOW
        assert repo.upserts == 1

    async def test_refresh_uses_current_time(self) -> None:
        repo = InMemoryMovieRepository(make_movie(synced_at=datetime(2000, 1, 1, tzinfo=timezone.utc)))
        engine = MovieSyncEngine(repo, make_tmdb(), freshness_window=timedelta(hours=24))

        before = engine.clock()
        result = await engine.get_movie(550)
        after = engine.clock()

        assert before <= result.synced_at <= after

    async def test_missing_movie_is_created(self) -> None:
        repo = InMemoryMovieRepository()
        tmdb = make_tmdb()

        result = await make_engine(repo, tmdb).get_movie(550)

        assert result.id == 550
        assert result.genres == ["Drama", "Thriller"]
        assert result.release_date == date(1999, 10, 15)
        assert result.synced_at == NOW
        assert 550 in repo.rows


class TestGetMovieFallback:
    async def test_provider_failure_returns_stale_copy_unchanged(self) -> None:
        synced_at = NOW - timedelta(days=10)
        movie = make_movie(title="Cached Title", synced_at=synced_at)
        repo = InMemoryMovieRepository(movie)
        tmdb = make_tmdb(error=ProviderUnavailableError("TMDb request timed out"))

        result = await make_engine(repo, tmdb).get_movie(550)

        assert result is movie
        assert result.title == "Cached Title"
        assert result.synced_at == synced_at
        assert repo.upserts == 0

    async def test_provider_failure_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        repo = InMemoryMovieRepository(make_movie(synced_at=NOW - timedelta(days=2)))
        tmdb = make_tmdb(error=ProviderUnavailableError("TMDb request failed"))

        with caplog.at_level("WARNING", logger="movieapp.services.movie_sync"):
            await make_engine(repo, tmdb).get_movie(550)

        assert any(r.levelname == "WARNING" and "550" in r.getMessage() for r in caplog.records)

    async def test_provider_failure_without_local_copy_is_not_found(self) -> None:
        repo = InMemoryMovieRepository()
        tmdb = make_tmdb(error=ProviderUnavailableError("TMDb request failed"))

        with pytest.raises(NotFoundError):
            await make_engine(repo, tmdb).get_movie(550)
        assert repo.rows == {}

    @pytest.mark.parametrize(
        "garbled",
        [
            {**DETAIL, "genres": ["Drama"]},
            {**DETAIL, "vote_average": "n/a"},
            {**DETAIL, "genres": [{"id": 18}, None]},
        ],
    )
    async def test_malformed_detail_returns_stale_copy(self, garbled: dict) -> None:
        synced_at = NOW - timedelta(days=3)
        movie = make_movie(title="Cached Title", synced_at=synced_at)
        repo = InMemoryMovieRepository(movie)

        result = await make_engine(repo, make_tmdb(detail=garbled)).get_movie(550)

        assert result is movie
        assert result.title == "Cached Title"
        assert result.synced_at == synced_at
        assert repo.upserts == 0

    async def test_malformed_detail_without_local_copy_is_not_found(self) -> None:
        repo = InMemoryMovieRepository()
        tmdb = make_tmdb(detail={**DETAIL, "popularity": "very"})

        with pytest.raises(NotFoundError):
            await make_engine(repo, tmdb).get_movie(550)
        assert repo.rows == {}


class TestFreshnessWindow:
    def test_defaults_to_configured_hours(self) -> None:
        engine = MovieSyncEngine(InMemoryMovieRepository(), make_tmdb())
        assert engine.freshness_window == timedelta(hours=settings.movie_freshness_hours)

    async def test_zero_window_always_refreshes(self) -> None:
        repo = InMemoryMovieRepository(make_movie(synced_at=NOW))
        tmdb = make_tmdb()
        engine = MovieSyncEngine(repo, tmdb, freshness_window=timedelta(0), clock=lambda: NOW)

        assert engine.freshness_window == timedelta(0)
        await engine.get_movie(550)

        tmdb.fetch_movie_detail.assert_awaited_once_with(550)


# ---------------------------------------------------------------------------
# map_detail
# ---------------------------------------------------------------------------


class TestMapDetail:
    def setup_method(self) -> None:
        self.engine = make_engine(InMemoryMovieRepository(), make_tmdb())

    def test_maps_all_fields(self) -> None:
        fields = self.engine.map_detail(DETAIL)
        assert fields == {
            "title": "Fight Club",
            "overview": "An insomniac office worker crosses paths with a soap maker.",
            "poster_path": "/fight-club.jpg",
            "backdrop_path": "/fight-club-backdrop.jpg",
            "release_date": date(1999, 10, 15),
            "vote_average": 8.4,
            "popularity": 61.4,
            "genres": ["Drama", "Thriller"],
        }

    def test_blank_release_date_becomes_none(self) -> None:
        fields = self.engine.map_detail({**DETAIL, "release_date": ""})
        assert fields["release_date"] is None

    def test_unparseable_release_date_becomes_none(self) -> None:
        fields = self.engine.map_detail({**DETAIL, "release_date": "soon"})
        assert fields["release_date"] is None

    def test_missing_scores_default_to_zero(self) -> None:
        detail = {k: v for k, v in DETAIL.items() if k not in ("vote_average", "popularity")}
        fields = self.engine.map_detail(detail)
        assert fields["vote_average"] == 0
        assert fields["popularity"] == 0

    def test_missing_optional_fields(self) -> None:
        fields = self.engine.map_detail({"id": 1, "title": "Bare"})
        assert fields["overview"] == ""
        assert fields["poster_path"] is None
        assert fields["backdrop_path"] is None
        assert fields["genres"] == []

    def test_non_numeric_score_is_provider_error(self) -> None:
        with pytest.raises(ProviderUnavailableError):
            self.engine.map_detail({**DETAIL, "vote_average": "n/a"})


# ---------------------------------------------------------------------------
# List endpoints
# ---------------------------------------------------------------------------


class TestListEndpoints:
    async def test_trending_does_not_persist(self) -> None:
        repo = InMemoryMovieRepository()
        tmdb = make_tmdb()

        page = await make_engine(repo, tmdb).get_trending(1)

        assert [m.id for m in page.results] == [101, 102]
        assert repo.rows == {}
        assert repo.upserts == 0

    async def test_popular_does_not_persist(self) -> None:
        repo = InMemoryMovieRepository()
        tmdb = make_tmdb()

        await make_engine(repo, tmdb).get_popular(2)

        tmdb.fetch_popular.assert_awaited_once_with(2)
        assert repo.rows == {}

    async def test_search_does_not_persist(self) -> None:
        repo = InMemoryMovieRepository()
        tmdb = make_tmdb()

        await make_engine(repo, tmdb).search_movies("  new release ", 1)

        tmdb.fetch_search.assert_awaited_once_with("new release", 1)
        assert repo.rows == {}

    async def test_blank_search_is_rejected(self) -> None:
        tmdb = make_tmdb()
        with pytest.raises(ValidationError):
            await make_engine(InMemoryMovieRepository(), tmdb).search_movies("   ")
        tmdb.fetch_search.assert_not_called()

    async def test_page_below_one_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            await make_engine(InMemoryMovieRepository(), make_tmdb()).get_trending(0)

    async def test_provider_failure_propagates(self) -> None:
        tmdb = make_tmdb()
        tmdb.fetch_trending = AsyncMock(side_effect=ProviderUnavailableError("down"))
        with pytest.raises(ProviderUnavailableError):
            await make_engine(InMemoryMovieRepository(), tmdb).get_trending()
