"""Server-side web session, referenced by id from the signed session cookie."""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Text, Uuid

from snapfeed.db.session import Base


class WebSession(Base):
    __tablename__ = "web_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=True, index=True)  # None while anonymous
    return_to = Column(Text, nullable=True)  # path to resume after login
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False)  # fixed at issuance, never extended
