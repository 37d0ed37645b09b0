"""Read-through cache of TMDb movie details with stale-on-error fallback."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from movieapp.config import settings
from movieapp.errors import NotFoundError, ProviderUnavailableError, ValidationError
from movieapp.models.movie import Movie
from movieapp.repositories.movie_repository import MovieRepository
from movieapp.schemas.movie import MoviePage
from movieapp.services.tmdb_client import TMDbClient
from movieapp.utils.dates import parse_release_date

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MovieSyncEngine:
    """
    Serves movie details from local storage while fresh, otherwise from TMDb.

    Lookup policy for a single movie:
    1. Stored and synced within the freshness window -> return it, no TMDb call
    2. Missing or stale -> fetch from TMDb, upsert, return the stored row
    3. TMDb fails and a stored copy exists -> return the stale copy unchanged
    4. TMDb fails and nothing is stored -> NotFoundError

    List endpoints (trending, popular, search) are passed straight through and
    never write to storage.
    """

    def __init__(
        self,
        movies: MovieRepository,
        tmdb_client: TMDbClient,
        freshness_window: timedelta | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Initialize the sync engine.

        Args:
            movies: Movie storage
            tmdb_client: Metadata provider
            freshness_window: Maximum age of a stored movie before a refresh
                is attempted (uses settings if not provided)
            clock: Returns the current time; replaced in tests
        """
        self.movies = movies
        self.tmdb_client = tmdb_client
        if freshness_window is None:
            freshness_window = timedelta(hours=settings.movie_freshness_hours)
        self.freshness_window = freshness_window
        self.clock = clock

    def is_fresh(self, movie: Movie) -> bool:
        return self.clock() - movie.synced_at < self.freshness_window

    async def get_movie(self, movie_id: int) -> Movie:
        """
        Get one movie, refreshing it from TMDb when missing or stale.

        Args:
            movie_id: TMDb movie id

        Returns:
            The stored (possibly just refreshed, possibly stale) movie

        Raises:
            NotFoundError: TMDb failed and there is no stored copy
        """
        stored = await self.movies.get(movie_id)
        if stored is not None and self.is_fresh(stored):
            return stored

        try:
            detail = await self.tmdb_client.fetch_movie_detail(movie_id)
            fields = self.map_detail(detail)
        except ProviderUnavailableError as e:
            if stored is not None:
                logger.warning(
                    f"TMDb refresh failed for movie {movie_id}, serving copy synced at "
                    f"{stored.synced_at.isoformat()}: {e}"
                )
                return stored
            raise NotFoundError(f"Movie {movie_id} not found") from e

        movie = await self.movies.upsert(movie_id, fields, synced_at=self.clock())
        logger.info(f"Synced movie {movie_id} ({movie.title!r}) from TMDb")
        return movie

    def map_detail(self, detail: dict[str, Any]) -> dict[str, Any]:
        """
        Map a TMDb detail payload onto Movie columns.

        Genre objects are flattened to their names; a blank or malformed
        release date becomes None; missing scores default to 0.

        Raises:
            ProviderUnavailableError: the payload does not have the detail shape
        """
        try:
            return {
                "title": detail.get("title") or "",
                "overview": detail.get("overview") or "",
                "poster_path": detail.get("poster_path"),
                "backdrop_path": detail.get("backdrop_path"),
                "release_date": parse_release_date(detail.get("release_date")),
                "vote_average": float(detail.get("vote_average") or 0),
                "popularity": float(detail.get("popularity") or 0),
                "genres": self.tmdb_client.extract_genres(detail),
            }
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"TMDb detail payload did not match the expected shape: {e}")
            raise ProviderUnavailableError("TMDb returned an unexpected movie detail") from e

    async def get_trending(self, page: int = 1) -> MoviePage:
        self._check_page(page)
        return await self.tmdb_client.fetch_trending(page)

    async def get_popular(self, page: int = 1) -> MoviePage:
        self._check_page(page)
        return await self.tmdb_client.fetch_popular(page)

    async def search_movies(self, query: str, page: int = 1) -> MoviePage:
        self._check_page(page)
        query = query.strip()
        if not query:
            raise ValidationError("Search query must not be blank")
        return await self.tmdb_client.fetch_search(query, page)

    def _check_page(self, page: int) -> None:
        if page < 1:
            raise ValidationError("page must be 1 or greater")
