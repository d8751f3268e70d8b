"""Pydantic schemas for Post."""
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from snapfeed.schemas.user import UserSummary

MediaType = Literal["image", "video", "audio", "gif", "other"]


class PostResponse(BaseModel):
    id: UUID
    user_id: UUID
    media_url: str
    media_type: MediaType
    mime_type: str
    caption: str = ""
    size: int = 0
    created_at: datetime

    model_config = {"from_attributes": True}


class ProfilePost(PostResponse):
    likes_count: int = 0
    comments_count: int = 0
    liked: bool = False


class SearchPost(PostResponse):
    user: UserSummary
    likes_count: int = 0
    comments_count: int = 0


class ToggleLikeResponse(BaseModel):
    success: bool
    liked: bool | None = None
    like_count: int | None = None
