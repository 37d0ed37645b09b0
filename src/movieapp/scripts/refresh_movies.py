"""Refresh stored movies whose TMDb metadata is older than the freshness window.

Usage:
    python -m movieapp.scripts.refresh_movies [--limit N]
"""

import argparse
import asyncio
import logging
from dataclasses import dataclass

from movieapp.database import AsyncSessionLocal, session_scope
from movieapp.repositories.movie_repository import MovieRepository
from movieapp.services.movie_sync import MovieSyncEngine
from movieapp.services.tmdb_client import TMDbClient

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)


@dataclass
class RefreshReport:
    checked: int = 0
    refreshed: int = 0
    kept_stale: int = 0
    failed: int = 0


async def refresh_stale_movies(
    tmdb_client: TMDbClient | None = None,
    limit: int | None = None,
) -> RefreshReport:
    """
    Run every stale movie through MovieSyncEngine.get_movie.

    Each movie is refreshed in its own session so one failure does not roll
    back the others; a TMDb failure leaves the stored copy untouched, and any
    other error is logged and counted before moving on to the next movie.
    """
    tmdb = tmdb_client or TMDbClient()
    report = RefreshReport()

    async with AsyncSessionLocal() as db:
        movies = MovieRepository(db)
        sync = MovieSyncEngine(movies, tmdb)
        cutoff = sync.clock() - sync.freshness_window
        stale = await movies.list_synced_before(cutoff)
        movie_ids = [movie.id for movie in stale]

    if limit is not None:
        movie_ids = movie_ids[:limit]
    logger.info(f"Found {len(movie_ids)} movies synced before {cutoff.isoformat()}")

    for movie_id in movie_ids:
        report.checked += 1
        try:
            async with session_scope() as db:
                sync = MovieSyncEngine(MovieRepository(db), tmdb)
                movie = await sync.get_movie(movie_id)
                fresh = sync.is_fresh(movie)
        except Exception as e:
            logger.error(f"Could not refresh movie {movie_id}: {e}", exc_info=True)
            report.failed += 1
            continue

        if fresh:
            report.refreshed += 1
        else:
            report.kept_stale += 1

    logger.info(
        f"Refresh complete: {report.refreshed} refreshed, {report.kept_stale} kept stale, "
        f"{report.failed} failed, {report.checked} checked"
    )
    return report


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--limit", type=int, default=None, help="Refresh at most N movies")
    args = parser.parse_args()
    asyncio.run(refresh_stale_movies(limit=args.limit))


if __name__ == "__main__":
    main()
