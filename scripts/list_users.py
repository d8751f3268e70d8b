import asyncio
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from snapfeed.core.config import settings
from snapfeed.db.session import DatabaseSessionManager
from snapfeed.repositories import FollowRepo, PostRepo, UserRepo


async def list_users():
    manager = DatabaseSessionManager(settings.DATABASE_URL)
    try:
        async with manager.session() as session:
            users = await UserRepo(session).list_all()
            if not users:
                print("No users found in database.")
                return
            follows = FollowRepo(session)
            posts = PostRepo(session)
            print("Current Users:")
            for user in users:
                post_count = len(await posts.list_by_user(user.id))
                print(
                    f"- {user.username} ({user.id}) | posts: {post_count}"
                    f" | followers: {await follows.count_followers(user.id)}"
                    f" | following: {await follows.count_following(user.id)}"
                )
    finally:
        await manager.dispose()


if __name__ == "__main__":
    asyncio.run(list_users())
