"""Movies API endpoints."""

from fastapi import APIRouter, Depends, Query

from movieapp.api.deps import get_movie_sync
from movieapp.schemas import MoviePage, MovieResponse
from movieapp.services.movie_sync import MovieSyncEngine

router = APIRouter()


@router.get("/movies/trending", response_model=MoviePage)
async def trending_movies(
    page: int = Query(1, ge=1, le=500),
    sync: MovieSyncEngine = Depends(get_movie_sync),
) -> MoviePage:
    """Movies trending on TMDb this week. Results are not stored."""
    return await sync.get_trending(page)


@router.get("/movies/popular", response_model=MoviePage)
async def popular_movies(
    page: int = Query(1, ge=1, le=500),
    sync: MovieSyncEngine = Depends(get_movie_sync),
) -> MoviePage:
    """Popular movies on TMDb. Results are not stored."""
    return await sync.get_popular(page)


@router.get("/movies/search", response_model=MoviePage)
async def search_movies(
    q: str = Query(..., min_length=1, description="Title search string"),
    page: int = Query(1, ge=1, le=500),
    sync: MovieSyncEngine = Depends(get_movie_sync),
) -> MoviePage:
    """Search TMDb by title. Results are not stored."""
    return await sync.search_movies(q, page)


@router.get("/movies/{movie_id}", response_model=MovieResponse)
async def get_movie(
    movie_id: int,
    sync: MovieSyncEngine = Depends(get_movie_sync),
) -> MovieResponse:
    """
    Movie details.

    Served from the local copy while it is fresh, otherwise refreshed from
    TMDb; a stale copy is returned if TMDb is unavailable.
    """
    movie = await sync.get_movie(movie_id)
    return MovieResponse.model_validate(movie)
