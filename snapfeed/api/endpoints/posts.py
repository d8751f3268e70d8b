"""Post endpoints: upload form, upload, delete."""
import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.deps import back_url, get_current_user, get_db, get_settings, get_storage, read_upload
from snapfeed.core.config import Settings
from snapfeed.models.user import User
from snapfeed.schemas.user import FormPage
from snapfeed.services.post_service import create_post, delete_post
from snapfeed.services.storage_service import StorageBackend

logger = logging.getLogger(__name__)

router = APIRouter(tags=["posts"])


@router.get("/upload", response_model=FormPage)
async def upload_page(current_user: User = Depends(get_current_user)):
    return FormPage()


@router.post("/upload")
async def upload(
    file: UploadFile | None = File(None),
    caption: str | None = Form(None),
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_user),
):
    media = await read_upload(file, settings.MAX_UPLOAD_MB)
    post = await create_post(db, storage, current_user.id, media, caption)
    media_url = post.media_url
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        storage.delete(media_url)
        raise
    return RedirectResponse(f"/profile/{current_user.id}", status_code=303)


@router.post("/post/delete/{post_id}")
async def remove_post(
    request: Request,
    post_id: str,
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    try:
        deleted = await delete_post(db, storage, post_id, current_user.id)
    except Exception:
        logger.exception("Delete post %s failed", post_id, extra={"post_id": post_id})
        await db.rollback()
        return RedirectResponse(back_url(request), status_code=303)
    if not deleted:
        return RedirectResponse(back_url(request), status_code=303)
    return RedirectResponse(f"/profile/{current_user.id}", status_code=303)
