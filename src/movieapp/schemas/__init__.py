"""Pydantic schemas for API requests and responses."""

from movieapp.schemas.movie import MoviePage, MovieResponse, MovieSummary
from movieapp.schemas.review import (
    MovieReviewsResponse,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
)
from movieapp.schemas.user import ProfileUpdate, UserResponse

__all__ = [
    "MoviePage",
    "MovieResponse",
    "MovieSummary",
    "MovieReviewsResponse",
    "ReviewCreate",
    "ReviewResponse",
    "ReviewUpdate",
    "ProfileUpdate",
    "UserResponse",
]
