"""Typed repositories, one per collection."""
from snapfeed.repositories.comments import CommentRepo
from snapfeed.repositories.engagement import FollowRepo, LikeRepo
from snapfeed.repositories.notifications import NotificationRepo
from snapfeed.repositories.posts import PostRepo
from snapfeed.repositories.users import UserRepo
from snapfeed.repositories.web_sessions import WebSessionRepo

__all__ = ["CommentRepo", "FollowRepo", "LikeRepo", "NotificationRepo", "PostRepo", "UserRepo", "WebSessionRepo"]
