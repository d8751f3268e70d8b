"""Likes and comments on posts, with their notification side effects.

Failures here are signalled in the returned structure (success=False) rather than
raised, so asynchronous callers can degrade gracefully.
"""
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.db.session import parse_uuid
from snapfeed.models.comment import Comment
from snapfeed.models.user import User
from snapfeed.repositories import CommentRepo, LikeRepo, PostRepo, UserRepo
from snapfeed.schemas.comment import AddCommentResponse, CommentResponse
from snapfeed.schemas.post import ToggleLikeResponse
from snapfeed.schemas.user import UserSummary
from snapfeed.services.notification_service import notify

logger = logging.getLogger(__name__)


def comment_to_response(comment: Comment, author: User | None) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        user_id=comment.user_id,
        text=comment.text,
        created_at=comment.created_at,
        user=UserSummary.of(author),
    )


async def toggle_like(db: AsyncSession, post_id: str | UUID | None, user_id: UUID) -> ToggleLikeResponse:
    post = await PostRepo(db).get(parse_uuid(post_id))
    if post is None:
        return ToggleLikeResponse(success=False)

    likes = LikeRepo(db)
    existing = await likes.find(post.id, user_id)
    if existing:
        await likes.remove(existing)
    else:
        await likes.add(post.id, user_id)
        await notify(
            db,
            user_id=post.user_id,
            from_user_id=user_id,
            notification_type="like",
            post_id=post.id,
        )
    return ToggleLikeResponse(
        success=True,
        liked=existing is None,
        like_count=await likes.count_for_post(post.id),
    )


async def add_comment(
    db: AsyncSession,
    post_id: str | UUID | None,
    user_id: UUID,
    text: str | None,
) -> AddCommentResponse:
    text = (text or "").strip()
    if not text:
        return AddCommentResponse(success=False)
    post = await PostRepo(db).get(parse_uuid(post_id))
    if post is None:
        return AddCommentResponse(success=False)

    comment = await CommentRepo(db).add(Comment(post_id=post.id, user_id=user_id, text=text))
    await notify(
        db,
        user_id=post.user_id,
        from_user_id=user_id,
        notification_type="comment",
        post_id=post.id,
        comment_id=comment.id,
    )
    author = await UserRepo(db).get(user_id)
    return AddCommentResponse(success=True, comment=comment_to_response(comment, author))


async def delete_comment(db: AsyncSession, comment_id: str | UUID | None, requester_id: UUID) -> bool:
    """Allowed for the comment author or the owner of the parent post (if it still exists)."""
    comments = CommentRepo(db)
    comment = await comments.get(parse_uuid(comment_id))
    if comment is None:
        return False
    post = await PostRepo(db).get(comment.post_id)
    if comment.user_id != requester_id and (post is None or post.user_id != requester_id):
        return False
    await comments.remove(comment)
    return True
