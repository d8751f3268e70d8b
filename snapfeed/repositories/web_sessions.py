"""Web session persistence."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.models.web_session import WebSession


class WebSessionRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, session_id: UUID | None) -> WebSession | None:
        if session_id is None:
            return None
        result = await self.db.execute(select(WebSession).where(WebSession.id == session_id))
        return result.scalar_one_or_none()

    async def add(self, web_session: WebSession) -> WebSession:
        self.db.add(web_session)
        await self.db.flush()
        return web_session

    async def remove(self, web_session: WebSession) -> None:
        await self.db.delete(web_session)
        await self.db.flush()
