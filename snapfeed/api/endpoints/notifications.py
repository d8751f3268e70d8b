"""Notification endpoints."""
from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.deps import get_current_user, get_db
from snapfeed.models.user import User
from snapfeed.schemas.notification import NotificationResponse, UnreadCountResponse
from snapfeed.services.notification_service import clear_all, list_for, mark_all_read, unread_count

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Newest first. Items carry their read state from before this visit marked them read."""
    notifications = await list_for(db, current_user.id)
    await mark_all_read(db, current_user.id)
    await db.commit()
    return notifications


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return UnreadCountResponse(count=await unread_count(db, current_user.id))


@router.post("/clear")
async def clear_notifications(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await clear_all(db, current_user.id)
    await db.commit()
    return RedirectResponse("/notifications", status_code=303)
