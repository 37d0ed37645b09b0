"""Review model: one user's rating of one movie."""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movieapp.models.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from movieapp.models.user import User

MIN_RATING = 1
MAX_RATING = 10


class Review(Base, TimestampMixin):
    """
    Movie review model.

    movie_id has no foreign key: movies are synced lazily, so a review can
    exist for a movie that has never been stored locally.
    """

    __tablename__ = "movie_reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_review_user_movie"),
        CheckConstraint(
            f"rating BETWEEN {MIN_RATING} AND {MAX_RATING}",
            name="ck_review_rating_range",
        ),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)

    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    movie_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # Relationships
    user: Mapped["User"] = relationship(back_populates="reviews")

    def __repr__(self) -> str:
        return (
            f"<Review(id={self.id!r}, "
            f"user_id={self.user_id!r}, "
            f"movie_id={self.movie_id}, "
            f"rating={self.rating})>"
        )
