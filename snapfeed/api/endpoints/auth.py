"""Auth endpoints: login, register, logout."""
import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.deps import bind_session, get_current_user_optional, get_db, get_settings, get_web_session
from snapfeed.core.config import Settings
from snapfeed.models.user import User
from snapfeed.models.web_session import WebSession
from snapfeed.schemas.user import FormPage
from snapfeed.services import session_service
from snapfeed.services.auth_service import authenticate, register

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

LOGIN_ERRORS = {
    "user_not_found": "Your account could not be found, please sign in again",
    "session_expired": "Your session has expired, please sign in again",
}


@router.get("/login", response_model=FormPage)
async def login_page(
    error: str | None = None,
    current_user: User | None = Depends(get_current_user_optional),
):
    if current_user:
        return RedirectResponse("/", status_code=303)
    return FormPage(error=LOGIN_ERRORS.get(error) if error else None)


@router.post("/login")
async def login(
    request: Request,
    username: str | None = Form(None),
    password: str | None = Form(None),
    db: AsyncSession = Depends(get_db),
    web_session: WebSession | None = Depends(get_web_session),
    settings: Settings = Depends(get_settings),
):
    user = await authenticate(db, username, password)
    web_session = await bind_session(request, db, web_session, settings)
    destination = await session_service.sign_in(db, web_session, user.id)
    await db.commit()
    return RedirectResponse(destination, status_code=303)


@router.get("/register", response_model=FormPage)
async def register_page(current_user: User | None = Depends(get_current_user_optional)):
    if current_user:
        return RedirectResponse("/", status_code=303)
    return FormPage()


@router.post("/register")
async def register_submit(
    request: Request,
    username: str | None = Form(None),
    password: str | None = Form(None),
    confirm_password: str | None = Form(None),
    bio: str | None = Form(None),
    db: AsyncSession = Depends(get_db),
    web_session: WebSession | None = Depends(get_web_session),
    settings: Settings = Depends(get_settings),
):
    user = await register(db, username, password, confirm_password, bio, default_bio=settings.DEFAULT_BIO)
    web_session = await bind_session(request, db, web_session, settings)
    await session_service.sign_in(db, web_session, user.id)
    await db.commit()
    return RedirectResponse(f"/profile/{user.id}", status_code=303)


@router.get("/logout")
async def logout(
    request: Request,
    db: AsyncSession = Depends(get_db),
    web_session: WebSession | None = Depends(get_web_session),
):
    if web_session is not None:
        logger.info("Logout: %s", web_session.user_id)
    await session_service.destroy(db, web_session)
    request.session.clear()
    await db.commit()
    return RedirectResponse("/login", status_code=303)
