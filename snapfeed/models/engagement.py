"""Engagement models: Follow edges and post Likes.

Both are toggled, never duplicated: presence of the row is the state.
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, UniqueConstraint, Uuid

from snapfeed.db.session import Base


class Follow(Base):
    __tablename__ = "follows"
    __table_args__ = (UniqueConstraint("follower_id", "following_id", name="uq_follows_follower_following"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    follower_id = Column(Uuid, nullable=False, index=True)
    following_id = Column(Uuid, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Like(Base):
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_likes_post_user"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id = Column(Uuid, nullable=False, index=True)
    user_id = Column(Uuid, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
