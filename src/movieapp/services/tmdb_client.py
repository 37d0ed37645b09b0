"""TMDb API client for fetching movie metadata."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from movieapp.config import settings
from movieapp.errors import ProviderUnavailableError
from movieapp.schemas.movie import MoviePage

logger = logging.getLogger(__name__)


class TMDbClient:
    """
    Client for The Movie Database (TMDb) API.

    Every call is bounded by a timeout. Network errors, timeouts, non-success
    statuses and malformed bodies are all raised as ProviderUnavailableError.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        language: str | None = None,
    ) -> None:
        """
        Initialize TMDb client.

        Args:
            api_key: TMDb API key (uses settings if not provided)
            base_url: API root (uses settings if not provided)
            timeout: Per-request timeout in seconds (uses settings if not provided)
            language: Response language (uses settings if not provided)
        """
        self.api_key = api_key or settings.tmdb_api_key
        self.base_url = (base_url or settings.tmdb_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.tmdb_timeout
        self.language = language or settings.tmdb_language
        if not self.api_key:
            logger.warning("TMDb API key not configured")

    async def fetch_movie_detail(self, movie_id: int) -> dict[str, Any]:
        """
        Get detailed information for one movie.

        Args:
            movie_id: TMDb movie ID

        Returns:
            Raw TMDb movie detail payload
        """
        return await self._get(f"/movie/{movie_id}")

    async def fetch_trending(self, page: int = 1) -> MoviePage:
        """Movies trending this week."""
        data = await self._get("/trending/movie/week", {"page": page})
        return self._to_page(data)

    async def fetch_popular(self, page: int = 1) -> MoviePage:
        """Currently popular movies."""
        data = await self._get("/movie/popular", {"page": page})
        return self._to_page(data)

    async def fetch_search(self, query: str, page: int = 1) -> MoviePage:
        """
        Search movies by title.

        Args:
            query: Free-text title query
            page: 1-based result page
        """
        data = await self._get("/search/movie", {"query": query, "page": page})
        return self._to_page(data)

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self.api_key:
            raise ProviderUnavailableError("TMDb API key not configured")

        query: dict[str, Any] = {
            "api_key": self.api_key,
            "language": self.language,
            **(params or {}),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(f"{self.base_url}{path}", params=query)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"TMDb request timed out for {path}: {e}")
            raise ProviderUnavailableError(f"TMDb request timed out: {path}") from e
        except httpx.HTTPError as e:
            logger.error(f"TMDb request failed for {path}: {e}")
            raise ProviderUnavailableError(f"TMDb request failed: {path}") from e
        except ValueError as e:
            logger.error(f"TMDb returned invalid JSON for {path}: {e}")
            raise ProviderUnavailableError(f"TMDb returned an invalid response: {path}") from e

        if not isinstance(data, dict):
            raise ProviderUnavailableError(f"TMDb returned an unexpected payload: {path}")
        return data

    def _to_page(self, data: dict[str, Any]) -> MoviePage:
        try:
            return MoviePage.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"TMDb list payload did not match the expected shape: {e}")
            raise ProviderUnavailableError("TMDb returned an unexpected list payload") from e

    def extract_genres(self, detail: dict[str, Any]) -> list[str]:
        """
        Flatten TMDb genres to their names, preserving order.

        Args:
            detail: TMDb movie detail payload

        Returns:
            List of genre names
        """
        genres = detail.get("genres") or []
        return [genre["name"] for genre in genres if genre.get("name")]
