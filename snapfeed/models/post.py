"""Post model: one uploaded media file with an optional caption."""
import uuid
from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime, String, Text, Uuid

from snapfeed.db.session import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    media_url = Column(Text, nullable=False)
    media_type = Column(String(10), nullable=False, default="other")  # image | video | audio | gif | other
    mime_type = Column(Text, nullable=False, default="application/octet-stream")
    caption = Column(Text, nullable=False, default="")
    size = Column(BigInteger, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
