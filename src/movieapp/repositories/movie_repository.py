"""Movie storage."""

from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from movieapp.models.movie import Movie


class MovieRepository:
    """Reads and atomically upserts locally cached movies."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, movie_id: int) -> Movie | None:
        return await self.db.get(Movie, movie_id)

    async def upsert(self, movie_id: int, fields: dict[str, Any], synced_at: datetime) -> Movie:
        """
        Insert the movie or overwrite every field of the existing row.

        Args:
            movie_id: TMDb movie id
            fields: Column values excluding id and synced_at
            synced_at: Refresh timestamp stored on both insert and update

        Returns:
            The stored Movie
        """
        values = {**fields, "synced_at": synced_at}
        stmt = (
            insert(Movie)
            .values(id=movie_id, **values)
            .on_conflict_do_update(
                index_elements=[Movie.id],
                set_={**values, "updated_at": func.now()},
            )
            .returning(Movie)
        )
        result = await self.db.execute(
            stmt, execution_options={"populate_existing": True}
        )
        return result.scalar_one()

    async def list_synced_before(self, cutoff: datetime) -> list[Movie]:
        """Movies whose last refresh is older than cutoff, oldest first."""
        stmt = select(Movie).where(Movie.synced_at < cutoff).order_by(Movie.synced_at)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
