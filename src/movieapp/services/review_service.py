"""Review rules: rating bounds, one review per user and movie, ownership."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError

from movieapp.errors import ForbiddenError, NotFoundError, ValidationError
from movieapp.models.review import MAX_RATING, MIN_RATING, Review
from movieapp.repositories.review_repository import ReviewRepository
from movieapp.schemas.review import ReviewCreate, ReviewUpdate

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass
class MovieReviews:
    reviews: list[Review]
    average_rating: float | None


def validate_rating(rating: Any) -> int:
    """
    Check that a rating is a whole number between 1 and 10 inclusive.

    Raises:
        ValidationError: for fractional, non-numeric or out-of-range values
    """
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(
            f"Rating must be a whole number between {MIN_RATING} and {MAX_RATING}"
        )
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return rating


def validate_pagination(page: int, page_size: int) -> None:
    if page < 1:
        raise ValidationError("page must be 1 or greater")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValidationError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")


class ReviewService:
    """
    Enforces review invariants on top of ReviewRepository.

    The duplicate check in create_review is racy on its own; the unique
    (user_id, movie_id) constraint rejects the loser of a concurrent create.
    """

    def __init__(self, reviews: ReviewRepository) -> None:
        self.reviews = reviews

    async def create_review(self, user_id: str, movie_id: int, data: ReviewCreate) -> Review:
        rating = validate_rating(data.rating)

        existing = await self.reviews.get_by_user_and_movie(user_id, movie_id)
        if existing is not None:
            raise ValidationError("You have already reviewed this movie")

        try:
            review = await self.reviews.create(
                user_id=user_id,
                movie_id=movie_id,
                rating=rating,
                content=data.content,
            )
        except IntegrityError as e:
            logger.info(f"Concurrent review create lost for user {user_id}, movie {movie_id}")
            raise ValidationError("You have already reviewed this movie") from e

        logger.info(f"User {user_id} reviewed movie {movie_id} ({rating}/{MAX_RATING})")
        return review

    async def update_review(self, review_id: str, user_id: str, data: ReviewUpdate) -> Review:
        """
        Apply a partial update to a review owned by user_id.

        Only fields present in the payload are written, so an omitted content
        is kept while an explicit null clears it.
        """
        review = await self._get_owned(review_id, user_id)

        fields = data.model_dump(include=data.model_fields_set)
        if "rating" in fields:
            fields["rating"] = validate_rating(fields["rating"])

        if not fields:
            return review
        return await self.reviews.update(review, fields)

    async def delete_review(self, review_id: str, user_id: str) -> Review:
        review = await self._get_owned(review_id, user_id)
        deleted = await self.reviews.delete(review)
        logger.info(f"User {user_id} deleted review {review_id}")
        return deleted

    async def get_movie_reviews(
        self,
        movie_id: int,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> MovieReviews:
        """
        One page of a movie's reviews, newest first, with the average rating.

        The average covers every review of the movie, not only this page, and
        is None when the movie has no reviews.
        """
        validate_pagination(page, page_size)
        reviews = await self.reviews.list_by_movie(movie_id, page, page_size)
        average = await self.reviews.average_rating(movie_id)
        return MovieReviews(reviews=reviews, average_rating=average)

    async def get_user_reviews(
        self,
        user_id: str,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[Review]:
        validate_pagination(page, page_size)
        return await self.reviews.list_by_user(user_id, page, page_size)

    async def _get_owned(self, review_id: str, user_id: str) -> Review:
        review = await self.reviews.get(review_id)
        if review is None:
            raise NotFoundError(f"Review {review_id} not found")
        if review.user_id != user_id:
            raise ForbiddenError("You can only modify your own reviews")
        return review
