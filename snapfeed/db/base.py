"""SQLAlchemy declarative base and model imports for Alembic."""
from snapfeed.db.session import Base  # noqa: F401
from snapfeed.models.user import User  # noqa: F401
from snapfeed.models.post import Post  # noqa: F401
from snapfeed.models.comment import Comment  # noqa: F401
from snapfeed.models.engagement import Follow, Like  # noqa: F401
from snapfeed.models.notification import Notification  # noqa: F401
from snapfeed.models.web_session import WebSession  # noqa: F401

__all__ = ["Base", "User", "Post", "Comment", "Follow", "Like", "Notification", "WebSession"]
