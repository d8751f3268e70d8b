"""User endpoints: follow toggle, profile view and edit, avatar."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.deps import (
    back_url,
    get_current_user,
    get_current_user_optional,
    get_db,
    get_settings,
    get_storage,
    is_ajax,
    read_upload,
)
from snapfeed.core.config import Settings
from snapfeed.core.errors import SnapfeedError, ValidationError
from snapfeed.models.user import User
from snapfeed.schemas.feed import ProfileBundle
from snapfeed.schemas.user import EditProfilePage, ToggleFollowResponse
from snapfeed.services.auth_service import remove_avatar, set_avatar, update_profile, user_to_response
from snapfeed.services.feed_service import build_profile
from snapfeed.services.follow_service import toggle_follow
from snapfeed.services.storage_service import StorageBackend

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.post("/follow/{user_id}")
async def follow(
    request: Request,
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Toggle following user_id. Ajax callers get JSON, page navigation goes back."""
    ajax = is_ajax(request)
    follower_id = current_user.id
    try:
        result = await toggle_follow(db, follower_id, user_id)
        await db.commit()
    except SnapfeedError as e:
        await db.rollback()
        logger.info("Follow %s -> %s rejected: %s", follower_id, user_id, e.message)
        if ajax:
            return JSONResponse(ToggleFollowResponse(success=False, message=e.message).model_dump())
        return RedirectResponse(back_url(request), status_code=303)
    except Exception:
        logger.exception("Follow %s -> %s failed", follower_id, user_id, extra={"user_id": follower_id})
        await db.rollback()
        if ajax:
            return JSONResponse(
                status_code=500,
                content=ToggleFollowResponse(success=False, message="Server error").model_dump(),
            )
        return RedirectResponse(back_url(request), status_code=303)

    if ajax:
        return JSONResponse(result.model_dump())
    return RedirectResponse(back_url(request), status_code=303)


@router.get("/profile/edit", response_model=EditProfilePage)
async def edit_profile_page(
    error: str | None = None,
    current_user: User = Depends(get_current_user),
):
    return EditProfilePage(user=user_to_response(current_user), error=error)


@router.post("/profile/edit")
async def edit_profile(
    bio: str | None = Form(None),
    current_password: str | None = Form(None),
    new_password: str | None = Form(None),
    confirm_password: str | None = Form(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_user),
):
    await update_profile(
        db,
        current_user,
        bio=bio,
        current_password=current_password,
        new_password=new_password,
        confirm_password=confirm_password,
        default_bio=settings.DEFAULT_BIO,
    )
    await db.commit()
    return RedirectResponse(f"/profile/{current_user.id}", status_code=303)


@router.post("/profile/avatar")
async def upload_avatar(
    avatar: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_user),
):
    user_id = current_user.id
    try:
        upload = await read_upload(avatar, settings.MAX_AVATAR_MB)
        if upload is None:
            return RedirectResponse("/profile/edit?error=no_file", status_code=303)
        await set_avatar(db, storage, current_user, upload)
        await db.commit()
    except ValidationError as e:
        logger.info("Avatar rejected for %s: %s", user_id, e.message)
        await db.rollback()
        return RedirectResponse("/profile/edit?error=invalid_file", status_code=303)
    except Exception:
        logger.exception("Avatar upload failed for %s", user_id, extra={"user_id": user_id})
        await db.rollback()
        return RedirectResponse("/profile/edit?error=upload_failed", status_code=303)
    return RedirectResponse(f"/profile/{user_id}", status_code=303)


@router.post("/profile/avatar/delete")
async def delete_avatar(
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    user_id = current_user.id
    try:
        await remove_avatar(db, storage, current_user)
        await db.commit()
    except Exception:
        logger.exception("Avatar delete failed for %s", user_id, extra={"user_id": user_id})
        await db.rollback()
        return RedirectResponse("/profile/edit?error=delete_failed", status_code=303)
    return RedirectResponse(f"/profile/{user_id}", status_code=303)


@router.get("/profile/{user_id}", response_model=ProfileBundle)
async def profile(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(get_current_user_optional),
):
    viewer_id: UUID | None = current_user.id if current_user else None
    return await build_profile(db, user_id, viewer_id)
