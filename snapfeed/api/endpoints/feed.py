"""Home feed and post detail pages."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.deps import get_current_user_optional, get_db
from snapfeed.models.user import User
from snapfeed.schemas.feed import FeedItem
from snapfeed.services.feed_service import build_feed, build_post_detail

router = APIRouter(tags=["feed"])


@router.get("/", response_model=list[FeedItem])
async def home(
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(get_current_user_optional),
):
    return await build_feed(db, current_user.id if current_user else None, skip=skip, limit=limit)


@router.get("/post/{post_id}", response_model=FeedItem)
async def post_detail(
    post_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(get_current_user_optional),
):
    return await build_post_detail(db, post_id, current_user.id if current_user else None)
