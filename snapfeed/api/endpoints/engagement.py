"""Like and comment endpoints.

Called asynchronously from the page, so every outcome is a JSON body; unexpected
failures are logged and answered with success=false.
"""
import logging

from fastapi import APIRouter, Depends, Form
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.deps import get_current_user, get_db
from snapfeed.models.user import User
from snapfeed.schemas.comment import AddCommentResponse, SuccessResponse
from snapfeed.schemas.post import ToggleLikeResponse
from snapfeed.services.engagement_service import add_comment, delete_comment, toggle_like

logger = logging.getLogger(__name__)

router = APIRouter(tags=["engagement"])


@router.post("/like/{post_id}", response_model=ToggleLikeResponse)
async def like(
    post_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        result = await toggle_like(db, post_id, current_user.id)
        await db.commit()
        return result
    except Exception:
        logger.exception("Like %s failed", post_id, extra={"post_id": post_id, "user_id": current_user.id})
        await db.rollback()
        return ToggleLikeResponse(success=False)


@router.post("/comment/{post_id}", response_model=AddCommentResponse)
async def comment(
    post_id: str,
    text: str | None = Form(None, alias="comment"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        result = await add_comment(db, post_id, current_user.id, text)
        await db.commit()
        return result
    except Exception:
        logger.exception("Comment on %s failed", post_id, extra={"post_id": post_id, "user_id": current_user.id})
        await db.rollback()
        return AddCommentResponse(success=False)


@router.post("/comment/delete/{comment_id}", response_model=SuccessResponse)
async def remove_comment(
    comment_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        deleted = await delete_comment(db, comment_id, current_user.id)
        await db.commit()
        return SuccessResponse(success=deleted)
    except Exception:
        logger.exception("Delete comment %s failed", comment_id)
        await db.rollback()
        return SuccessResponse(success=False)
