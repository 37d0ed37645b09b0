"""SQLAlchemy ORM models."""

from movieapp.models.base import Base
from movieapp.models.movie import Movie
from movieapp.models.review import Review
from movieapp.models.user import User

__all__ = ["Base", "Movie", "Review", "User"]
