"""Notification creation and queries."""
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.models.notification import NOTIFICATION_TYPES, Notification
from snapfeed.repositories import NotificationRepo, PostRepo, UserRepo
from snapfeed.schemas.notification import NotificationResponse
from snapfeed.schemas.post import PostResponse
from snapfeed.schemas.user import UserSummary


async def notify(
    db: AsyncSession,
    *,
    user_id: UUID,
    from_user_id: UUID,
    notification_type: str,
    post_id: UUID | None = None,
    comment_id: UUID | None = None,
) -> Notification | None:
    """Append a notification for user_id. Skips if sender is the recipient (no self-notify)."""
    if notification_type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type: {notification_type}")
    if user_id == from_user_id:
        return None
    return await NotificationRepo(db).add(
        Notification(
            user_id=user_id,
            type=notification_type,
            from_user_id=from_user_id,
            post_id=post_id,
            comment_id=comment_id,
            read=False,
        )
    )


async def list_for(db: AsyncSession, user_id: UUID) -> list[NotificationResponse]:
    """Notifications for user, most recent first, with sender and referenced post resolved."""
    notifications = await NotificationRepo(db).list_for(user_id)
    senders = await UserRepo(db).get_many(n.from_user_id for n in notifications)
    posts = await PostRepo(db).get_many(n.post_id for n in notifications)
    out = []
    for n in notifications:
        post = posts.get(n.post_id) if n.post_id else None
        out.append(
            NotificationResponse(
                id=n.id,
                user_id=n.user_id,
                type=n.type,
                from_user_id=n.from_user_id,
                post_id=n.post_id,
                comment_id=n.comment_id,
                read=n.read,
                created_at=n.created_at,
                from_user=UserSummary.of(senders.get(n.from_user_id)),
                post=PostResponse.model_validate(post) if post else None,
            )
        )
    return out


async def mark_all_read(db: AsyncSession, user_id: UUID) -> int:
    """Mark all unread notifications as read. Returns count updated."""
    return await NotificationRepo(db).mark_all_read(user_id)


async def clear_all(db: AsyncSession, user_id: UUID) -> int:
    """Remove every notification of the user. Returns count removed."""
    return await NotificationRepo(db).clear(user_id)


async def unread_count(db: AsyncSession, user_id: UUID) -> int:
    return await NotificationRepo(db).unread_count(user_id)
