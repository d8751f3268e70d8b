"""Router aggregation."""
from fastapi import APIRouter

from snapfeed.api.endpoints import auth, engagement, feed, notifications, posts, search, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(feed.router)
api_router.include_router(posts.router)
api_router.include_router(engagement.router)
api_router.include_router(users.router)
api_router.include_router(notifications.router)
api_router.include_router(search.router, tags=["search"])
