from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.deps import get_current_user_optional, get_db
from snapfeed.models.user import User
from snapfeed.schemas.feed import SearchResults
from snapfeed.services.feed_service import search

router = APIRouter()


@router.get("/search", response_model=SearchResults)
async def search_page(
    q: str | None = None,
    db: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(get_current_user_optional),
):
    return await search(db, q, current_user.id if current_user else None)
