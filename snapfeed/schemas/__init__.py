from snapfeed.schemas.user import (
    UserSummary,
    UserResponse,
    UserPublic,
    FollowListEntry,
    ToggleFollowResponse,
)
from snapfeed.schemas.post import PostResponse, ProfilePost, SearchPost, ToggleLikeResponse
from snapfeed.schemas.comment import CommentResponse, AddCommentResponse, SuccessResponse
from snapfeed.schemas.notification import NotificationResponse, UnreadCountResponse
from snapfeed.schemas.feed import FeedItem, ProfileBundle, SearchResults
