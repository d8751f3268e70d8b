"""Server-side web sessions.

The signed session cookie only carries the session id. Expiry is fixed at
issuance (created_at + max age) and is never extended by activity.
"""
import logging
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.db.session import parse_uuid
from snapfeed.models.web_session import WebSession
from snapfeed.repositories import WebSessionRepo

logger = logging.getLogger(__name__)


async def load(db: AsyncSession, session_id: str | None) -> WebSession | None:
    """Return the live session for the cookie value, discarding it if expired."""
    repo = WebSessionRepo(db)
    web_session = await repo.get(parse_uuid(session_id))
    if web_session is None:
        return None
    if web_session.expires_at <= datetime.utcnow():
        logger.info("Session %s expired", web_session.id)
        await repo.remove(web_session)
        return None
    return web_session


async def ensure(db: AsyncSession, web_session: WebSession | None, *, max_age_days: int) -> WebSession:
    if web_session is not None:
        return web_session
    now = datetime.utcnow()
    return await WebSessionRepo(db).add(
        WebSession(created_at=now, expires_at=now + timedelta(days=max_age_days))
    )


def remember_return_to(web_session: WebSession, path: str) -> None:
    web_session.return_to = path


async def sign_in(db: AsyncSession, web_session: WebSession, user_id: UUID) -> str:
    """Bind the session to user_id. Returns where to go next; a recorded return path is used once."""
    web_session.user_id = user_id
    destination = web_session.return_to or "/"
    web_session.return_to = None
    await db.flush()
    return destination


async def destroy(db: AsyncSession, web_session: WebSession | None) -> None:
    if web_session is not None:
        await WebSessionRepo(db).remove(web_session)
