"""Pydantic schemas for Comment."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from snapfeed.schemas.user import UserSummary


class CommentResponse(BaseModel):
    id: UUID
    post_id: UUID
    user_id: UUID
    text: str
    created_at: datetime
    user: UserSummary


class AddCommentResponse(BaseModel):
    success: bool
    comment: CommentResponse | None = None


class SuccessResponse(BaseModel):
    success: bool
