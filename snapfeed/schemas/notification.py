"""Pydantic schemas for Notification."""
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from snapfeed.schemas.post import PostResponse
from snapfeed.schemas.user import UserSummary

NotificationType = Literal["new_post", "like", "comment", "follow"]


class NotificationResponse(BaseModel):
    id: UUID
    user_id: UUID
    type: NotificationType
    from_user_id: UUID
    post_id: UUID | None = None
    comment_id: UUID | None = None
    read: bool = False
    created_at: datetime
    from_user: UserSummary
    post: PostResponse | None = None  # None when absent or deleted


class UnreadCountResponse(BaseModel):
    count: int
