from snapfeed.models.user import User
from snapfeed.models.post import Post
from snapfeed.models.comment import Comment
from snapfeed.models.engagement import Follow, Like
from snapfeed.models.notification import Notification
from snapfeed.models.web_session import WebSession

__all__ = ["User", "Post", "Comment", "Follow", "Like", "Notification", "WebSession"]
