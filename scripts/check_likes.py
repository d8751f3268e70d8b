import asyncio
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import func, select

from snapfeed.core.config import settings
from snapfeed.db.session import DatabaseSessionManager
from snapfeed.models.engagement import Like
from snapfeed.models.post import Post
from snapfeed.models.user import User


async def check_likes():
    manager = DatabaseSessionManager(settings.DATABASE_URL)
    try:
        async with manager.session() as db:
            total_likes = await db.scalar(select(func.count(Like.id)))
            print(f"Total likes in database: {total_likes}")

            # Likes whose post or user no longer exists
            dangling = await db.scalar(
                select(func.count(Like.id))
                .outerjoin(Post, Like.post_id == Post.id)
                .outerjoin(User, Like.user_id == User.id)
                .where((Post.id.is_(None)) | (User.id.is_(None)))
            )
            print(f"Dangling likes: {dangling}")

            result = await db.execute(
                select(Like, User.username, Post.caption)
                .outerjoin(User, Like.user_id == User.id)
                .outerjoin(Post, Like.post_id == Post.id)
                .order_by(Like.created_at.desc())
                .limit(10)
            )
            likes = result.all()
            if likes:
                print("\nRecent likes:")
                for like, username, caption in likes:
                    preview = (caption[:30] + "...") if caption and len(caption) > 30 else (caption or "N/A")
                    print(f"  - {username or '[deleted]'} liked: {preview}")
            else:
                print("\nNo likes found in database!")
    finally:
        await manager.dispose()


if __name__ == "__main__":
    asyncio.run(check_likes())
