"""Movie model for locally cached TMDb metadata."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from movieapp.models.base import Base, TimestampMixin


class Movie(Base, TimestampMixin):
    """
    Movie model.

    The primary key is the TMDb id; rows are only ever created by a detail
    lookup and refreshed when older than the freshness window.
    """

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    overview: Mapped[str] = mapped_column(Text, nullable=False, default="")
    poster_path: Mapped[str | None] = mapped_column(String(200), nullable=True)
    backdrop_path: Mapped[str | None] = mapped_column(String(200), nullable=True)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    vote_average: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    popularity: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    genres: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)

    # Last successful refresh from TMDb
    synced_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Movie(id={self.id!r}, title={self.title!r}, synced_at={self.synced_at})>"
