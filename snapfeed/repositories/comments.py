"""Comment persistence."""
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.models.comment import Comment


class CommentRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, comment_id: UUID | None) -> Comment | None:
        if comment_id is None:
            return None
        result = await self.db.execute(select(Comment).where(Comment.id == comment_id))
        return result.scalar_one_or_none()

    async def list_for_posts(self, post_ids: Iterable[UUID]) -> dict[UUID, list[Comment]]:
        """Comments grouped by post, oldest first within each post."""
        ids = set(post_ids)
        if not ids:
            return {}
        result = await self.db.execute(
            select(Comment).where(Comment.post_id.in_(ids)).order_by(Comment.created_at)
        )
        grouped: dict[UUID, list[Comment]] = {}
        for c in result.scalars().all():
            grouped.setdefault(c.post_id, []).append(c)
        return grouped

    async def counts_for_posts(self, post_ids: Iterable[UUID]) -> dict[UUID, int]:
        ids = set(post_ids)
        if not ids:
            return {}
        result = await self.db.execute(
            select(Comment.post_id, func.count(Comment.id))
            .where(Comment.post_id.in_(ids))
            .group_by(Comment.post_id)
        )
        return {post_id: count for post_id, count in result.all()}

    async def add(self, comment: Comment) -> Comment:
        self.db.add(comment)
        await self.db.flush()
        await self.db.refresh(comment)
        return comment

    async def remove(self, comment: Comment) -> None:
        await self.db.delete(comment)
        await self.db.flush()

    async def remove_for_post(self, post_id: UUID) -> int:
        result = await self.db.execute(delete(Comment).where(Comment.post_id == post_id))
        return result.rowcount or 0
