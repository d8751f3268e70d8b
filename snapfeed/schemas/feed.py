"""View models produced by the aggregation layer: feed, post detail, profile, search."""
from pydantic import BaseModel

from snapfeed.schemas.comment import CommentResponse
from snapfeed.schemas.post import PostResponse, ProfilePost, SearchPost
from snapfeed.schemas.user import FollowListEntry, UserPublic, UserResponse, UserSummary


class FeedItem(PostResponse):
    user: UserSummary
    likes_count: int = 0
    liked: bool = False
    comments: list[CommentResponse] = []


class ProfileBundle(BaseModel):
    profile_user: UserResponse
    posts: list[ProfilePost]
    followers_count: int
    following_count: int
    followers: list[FollowListEntry]
    following: list[FollowListEntry]
    is_following: bool
    is_own_profile: bool


class SearchResults(BaseModel):
    query: str = ""
    users: list[UserPublic] = []
    posts: list[SearchPost] = []
