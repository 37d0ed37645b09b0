"""Persistence for movies, reviews and users on top of an AsyncSession."""

from movieapp.repositories.movie_repository import MovieRepository
from movieapp.repositories.review_repository import ReviewRepository
from movieapp.repositories.user_repository import UserRepository

__all__ = ["MovieRepository", "ReviewRepository", "UserRepository"]
