"""User model."""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text, Uuid

from snapfeed.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(50), unique=True, nullable=False, index=True)  # case-sensitive as stored
    password_hash = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False, default="")
    avatar = Column(Text, nullable=True)  # public path, e.g. /avatars/avatar-<id>.png
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
