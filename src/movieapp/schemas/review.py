"""Pydantic schemas for review requests and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ReviewCreate(BaseModel):
    """
    Payload for creating a review.

    rating accepts floats so the service can reject fractional values with a
    domain validation error instead of a schema error.
    """

    rating: int | float
    content: str | None = None


class ReviewUpdate(BaseModel):
    """
    Partial review update.

    Only fields present in the request are applied (see model_fields_set);
    an explicit null content clears it.
    """

    rating: int | float | None = None
    content: str | None = None


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    rating: int
    content: str | None = None
    user_id: str
    movie_id: int
    created_at: datetime
    updated_at: datetime


class MovieReviewsResponse(BaseModel):
    """A page of reviews for one movie plus the average over all of them."""

    reviews: list[ReviewResponse]
    average_rating: float | None = None
