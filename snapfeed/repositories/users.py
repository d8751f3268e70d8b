"""User persistence."""
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.models.user import User


class UserRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UUID | None) -> User | None:
        if user_id is None:
            return None
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_many(self, user_ids: Iterable[UUID | None]) -> dict[UUID, User]:
        """Batch lookup; ids that no longer resolve are simply missing from the result."""
        ids = {i for i in user_ids if i is not None}
        if not ids:
            return {}
        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return {u.id: u for u in result.scalars().all()}

    async def find_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def search(self, query: str) -> list[User]:
        """Case-insensitive substring match on username, oldest account first.

        ILIKE on PostgreSQL. SQLite folds case for ASCII letters only.
        """
        result = await self.db.execute(
            select(User)
            .where(User.username.icontains(query, autoescape=True))
            .order_by(User.created_at)
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def add(self, user: User) -> User:
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user
