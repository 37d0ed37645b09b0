"""User model mapped from an external identity."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movieapp.models.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from movieapp.models.review import Review


class User(Base, TimestampMixin):
    """
    Local user record.

    Created lazily the first time an identity token is resolved; external_id
    holds the identity provider's subject claim.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    external_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    username: Mapped[str | None] = mapped_column(String(50), nullable=True, unique=True)
    avatar_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Relationships
    reviews: Mapped[list["Review"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, external_id={self.external_id!r}, email={self.email!r})>"
