"""User storage."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from movieapp.models.user import User


class UserRepository:
    """User lookups plus savepoint-guarded create and update."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, user_id: str) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_external_id(self, external_id: str) -> User | None:
        stmt = select(User).where(User.external_id == external_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, external_id: str, email: str) -> User:
        user = User(external_id=external_id, email=email)
        async with self.db.begin_nested():
            self.db.add(user)
            await self.db.flush()
        await self.db.refresh(user)
        return user

    async def update(self, user: User, fields: dict[str, Any]) -> User:
        async with self.db.begin_nested():
            for name, value in fields.items():
                setattr(user, name, value)
            await self.db.flush()
        await self.db.refresh(user)
        return user
