"""Notification model for new posts, likes, comments and follows."""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, Uuid

from snapfeed.db.session import Base

NOTIFICATION_TYPES = ("new_post", "like", "comment", "follow")


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)  # recipient
    type = Column(String(20), nullable=False)  # new_post | like | comment | follow
    from_user_id = Column(Uuid, nullable=False)
    post_id = Column(Uuid, nullable=True)
    comment_id = Column(Uuid, nullable=True)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
