"""Review storage."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from movieapp.models.review import Review


class ReviewRepository:
    """
    Review queries and mutations.

    Inserts run inside a SAVEPOINT so a unique-constraint violation only
    rolls back the failed insert; the IntegrityError is left to the caller.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, review_id: str) -> Review | None:
        return await self.db.get(Review, review_id)

    async def get_by_user_and_movie(self, user_id: str, movie_id: int) -> Review | None:
        stmt = select(Review).where(Review.user_id == user_id, Review.movie_id == movie_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_movie(self, movie_id: int, page: int, page_size: int) -> list[Review]:
        stmt = (
            select(Review)
            .where(Review.movie_id == movie_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_by_user(self, user_id: str, page: int, page_size: int) -> list[Review]:
        stmt = (
            select(Review)
            .where(Review.user_id == user_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, user_id: str, movie_id: int, rating: int, content: str | None) -> Review:
        review = Review(user_id=user_id, movie_id=movie_id, rating=rating, content=content)
        async with self.db.begin_nested():
            self.db.add(review)
            await self.db.flush()
        # Load server defaults (created_at, updated_at)
        await self.db.refresh(review)
        return review

    async def update(self, review: Review, fields: dict[str, Any]) -> Review:
        for name, value in fields.items():
            setattr(review, name, value)
        await self.db.flush()
        await self.db.refresh(review)
        return review

    async def delete(self, review: Review) -> Review:
        await self.db.delete(review)
        await self.db.flush()
        return review

    async def average_rating(self, movie_id: int) -> float | None:
        stmt = select(func.avg(Review.rating)).where(Review.movie_id == movie_id)
        result = await self.db.execute(stmt)
        average = result.scalar_one_or_none()
        return float(average) if average is not None else None
