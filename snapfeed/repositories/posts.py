"""Post persistence."""
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.models.post import Post


class PostRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, post_id: UUID | None) -> Post | None:
        if post_id is None:
            return None
        result = await self.db.execute(select(Post).where(Post.id == post_id))
        return result.scalar_one_or_none()

    async def get_many(self, post_ids: Iterable[UUID | None]) -> dict[UUID, Post]:
        ids = {i for i in post_ids if i is not None}
        if not ids:
            return {}
        result = await self.db.execute(select(Post).where(Post.id.in_(ids)))
        return {p.id: p for p in result.scalars().all()}

    async def list_recent(self, skip: int = 0, limit: int | None = None) -> list[Post]:
        """All posts, newest first."""
        q = select(Post).order_by(desc(Post.created_at)).offset(skip)
        if limit is not None:
            q = q.limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def list_by_user(self, user_id: UUID) -> list[Post]:
        result = await self.db.execute(
            select(Post).where(Post.user_id == user_id).order_by(desc(Post.created_at))
        )
        return list(result.scalars().all())

    async def search_caption(self, query: str) -> list[Post]:
        result = await self.db.execute(
            select(Post)
            .where(Post.caption != "")
            .where(Post.caption.icontains(query, autoescape=True))
            .order_by(desc(Post.created_at))
        )
        return list(result.scalars().all())

    async def add(self, post: Post) -> Post:
        self.db.add(post)
        await self.db.flush()
        await self.db.refresh(post)
        return post

    async def remove(self, post: Post) -> None:
        await self.db.delete(post)
        await self.db.flush()
