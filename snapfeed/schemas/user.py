"""Pydantic schemas for User."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

DELETED_USERNAME = "[deleted]"


class UserSummary(BaseModel):
    """Identity snapshot embedded in feed items, comments and notifications.

    A reference that no longer resolves renders as the placeholder from deleted().
    """
    id: UUID | None = None
    username: str
    avatar: str | None = None

    model_config = {"from_attributes": True}

    @classmethod
    def deleted(cls) -> "UserSummary":
        return cls(id=None, username=DELETED_USERNAME, avatar=None)

    @classmethod
    def of(cls, user) -> "UserSummary":
        return cls.model_validate(user) if user is not None else cls.deleted()


class UserResponse(BaseModel):
    id: UUID
    username: str
    bio: str = ""
    avatar: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserPublic(UserResponse):
    is_following: bool = False  # Set when viewer is authenticated


class FollowListEntry(BaseModel):
    id: UUID
    username: str
    avatar: str | None = None
    is_followed_by_viewer: bool = False  # independent of the list's own direction


class FormPage(BaseModel):
    error: str | None = None


class EditProfilePage(FormPage):
    user: UserResponse


class ToggleFollowResponse(BaseModel):
    success: bool
    following: bool | None = None
    followers_count: int | None = None  # of the target
    following_count: int | None = None  # of the acting user
    message: str | None = None
