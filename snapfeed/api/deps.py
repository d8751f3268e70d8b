"""API dependencies: db session, settings, storage, session-backed auth."""
import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.core.config import Settings
from snapfeed.core.errors import LoginRequired, ValidationError
from snapfeed.db.session import get_db
from snapfeed.models.user import User
from snapfeed.models.web_session import WebSession
from snapfeed.repositories import UserRepo
from snapfeed.services import session_service
from snapfeed.services.storage_service import MediaUpload, StorageBackend

logger = logging.getLogger(__name__)

SESSION_KEY = "sid"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> StorageBackend:
    return request.app.state.storage


async def get_web_session(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> WebSession | None:
    web_session = await session_service.load(db, request.session.get(SESSION_KEY))
    if web_session is None and SESSION_KEY in request.session:
        # Expired or unknown id: forget it so a fresh session gets issued
        request.session.pop(SESSION_KEY)
        await db.commit()
    return web_session


async def bind_session(
    request: Request,
    db: AsyncSession,
    web_session: WebSession | None,
    settings: Settings,
) -> WebSession:
    """Make sure the request has a persisted session and the cookie points at it."""
    web_session = await session_service.ensure(db, web_session, max_age_days=settings.SESSION_MAX_AGE_DAYS)
    request.session[SESSION_KEY] = str(web_session.id)
    return web_session


async def get_current_user_optional(
    request: Request,
    web_session: WebSession | None = Depends(get_web_session),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    if web_session is None or web_session.user_id is None:
        return None
    user = await UserRepo(db).get(web_session.user_id)
    if user is None:
        logger.warning("Session %s points at missing user %s", web_session.id, web_session.user_id)
        await session_service.destroy(db, web_session)
        request.session.clear()
        await db.commit()
        raise LoginRequired("/login?error=user_not_found")
    return user


async def get_current_user(
    request: Request,
    user: User | None = Depends(get_current_user_optional),
    web_session: WebSession | None = Depends(get_web_session),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    if user is not None:
        return user
    # Only GET targets can be replayed after login
    if request.method == "GET":
        web_session = await bind_session(request, db, web_session, settings)
        session_service.remember_return_to(web_session, _request_path(request))
        await db.commit()
    raise LoginRequired()


def _request_path(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path


def is_ajax(request: Request) -> bool:
    if request.headers.get("x-requested-with", "").lower() == "xmlhttprequest":
        return True
    return "application/json" in request.headers.get("accept", "")


def back_url(request: Request) -> str:
    """Referer, unless it is a follow toggle URL; otherwise the feed."""
    referer = request.headers.get("referer")
    if referer and "/follow/" not in referer:
        return referer
    return "/"


async def read_upload(file, max_mb: int) -> MediaUpload | None:
    """Read a multipart UploadFile into memory, rejecting anything over max_mb."""
    if file is None or not file.filename:
        return None
    data = await file.read()
    if len(data) > max_mb * 1024 * 1024:
        raise ValidationError(f"File is too large (max {max_mb} MB)", field="file")
    return MediaUpload(
        filename=file.filename,
        content_type=file.content_type or "application/octet-stream",
        data=data,
    )
