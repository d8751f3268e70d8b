"""Like and Follow persistence."""
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.models.engagement import Follow, Like


class LikeRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, post_id: UUID, user_id: UUID) -> Like | None:
        result = await self.db.execute(
            select(Like).where(Like.post_id == post_id, Like.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def add(self, post_id: UUID, user_id: UUID) -> Like:
        like = Like(post_id=post_id, user_id=user_id)
        self.db.add(like)
        await self.db.flush()
        return like

    async def remove(self, like: Like) -> None:
        await self.db.delete(like)
        await self.db.flush()

    async def count_for_post(self, post_id: UUID) -> int:
        result = await self.db.execute(select(func.count(Like.id)).where(Like.post_id == post_id))
        return result.scalar() or 0

    async def counts_for_posts(self, post_ids: Iterable[UUID]) -> dict[UUID, int]:
        ids = set(post_ids)
        if not ids:
            return {}
        result = await self.db.execute(
            select(Like.post_id, func.count(Like.id)).where(Like.post_id.in_(ids)).group_by(Like.post_id)
        )
        return {post_id: count for post_id, count in result.all()}

    async def liked_post_ids(self, user_id: UUID, post_ids: Iterable[UUID]) -> set[UUID]:
        """Return set of post IDs that the user has liked."""
        ids = set(post_ids)
        if not ids:
            return set()
        result = await self.db.execute(
            select(Like.post_id).where(Like.user_id == user_id, Like.post_id.in_(ids))
        )
        return {row[0] for row in result.all()}

    async def remove_for_post(self, post_id: UUID) -> int:
        result = await self.db.execute(delete(Like).where(Like.post_id == post_id))
        return result.rowcount or 0


class FollowRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, follower_id: UUID, following_id: UUID) -> Follow | None:
        result = await self.db.execute(
            select(Follow).where(Follow.follower_id == follower_id, Follow.following_id == following_id)
        )
        return result.scalar_one_or_none()

    async def add(self, follower_id: UUID, following_id: UUID) -> Follow:
        follow = Follow(follower_id=follower_id, following_id=following_id)
        self.db.add(follow)
        await self.db.flush()
        return follow

    async def remove(self, follow: Follow) -> None:
        await self.db.delete(follow)
        await self.db.flush()

    async def follower_ids(self, user_id: UUID) -> list[UUID]:
        """Users following user_id, in the order the edges were created."""
        result = await self.db.execute(
            select(Follow.follower_id).where(Follow.following_id == user_id).order_by(Follow.created_at)
        )
        return [row[0] for row in result.all()]

    async def following_ids(self, user_id: UUID) -> list[UUID]:
        result = await self.db.execute(
            select(Follow.following_id).where(Follow.follower_id == user_id).order_by(Follow.created_at)
        )
        return [row[0] for row in result.all()]

    async def count_followers(self, user_id: UUID) -> int:
        result = await self.db.execute(select(func.count(Follow.id)).where(Follow.following_id == user_id))
        return result.scalar() or 0

    async def count_following(self, user_id: UUID) -> int:
        result = await self.db.execute(select(func.count(Follow.id)).where(Follow.follower_id == user_id))
        return result.scalar() or 0

    async def following_among(self, follower_id: UUID, user_ids: Iterable[UUID]) -> set[UUID]:
        """Return the subset of user_ids that follower_id follows."""
        ids = set(user_ids)
        if not ids:
            return set()
        result = await self.db.execute(
            select(Follow.following_id).where(
                Follow.follower_id == follower_id,
                Follow.following_id.in_(ids),
            )
        )
        return {row[0] for row in result.all()}
