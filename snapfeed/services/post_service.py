"""Post creation and deletion."""
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.core.errors import ValidationError
from snapfeed.db.session import parse_uuid
from snapfeed.models.post import Post
from snapfeed.repositories import CommentRepo, FollowRepo, LikeRepo, PostRepo
from snapfeed.services.notification_service import notify
from snapfeed.services.storage_service import MediaUpload, StorageBackend

logger = logging.getLogger(__name__)


def classify_media_type(content_type: str | None) -> str:
    """Map a declared content type onto image | video | audio | gif | other."""
    content_type = (content_type or "").lower()
    if content_type == "image/gif":
        return "gif"
    if content_type.startswith("image/"):
        return "image"
    if content_type.startswith("video/"):
        return "video"
    if content_type.startswith("audio/"):
        return "audio"
    return "other"


async def create_post(
    db: AsyncSession,
    storage: StorageBackend,
    user_id: UUID,
    upload: MediaUpload | None,
    caption: str | None = None,
) -> Post:
    """Store the media file and the post, then fan out new_post notifications to current followers."""
    if upload is None or not upload.filename:
        raise ValidationError("Choose a file first", field="file")
    media_url = storage.save_media(upload.data, upload.ext)
    try:
        post = await PostRepo(db).add(
            Post(
                user_id=user_id,
                media_url=media_url,
                media_type=classify_media_type(upload.content_type),
                mime_type=upload.content_type or "application/octet-stream",
                caption=caption or "",
                size=upload.size,
            )
        )
        follower_ids = await FollowRepo(db).follower_ids(user_id)
        for follower_id in follower_ids:
            await notify(
                db,
                user_id=follower_id,
                from_user_id=user_id,
                notification_type="new_post",
                post_id=post.id,
            )
    except Exception:
        logger.warning("Post insert failed for %s, removing %s", user_id, media_url)
        storage.delete(media_url)
        raise
    logger.info("Post created: %s by %s (%s, %d followers notified)", post.id, user_id, post.media_type, len(follower_ids))
    return post


async def delete_post(
    db: AsyncSession,
    storage: StorageBackend,
    post_id: str | UUID | None,
    requester_id: UUID,
) -> bool:
    """Delete a post with its likes and comments. Absent post or non-owner is a silent no-op (False).

    Unlike the other services this one commits: the media file may only be removed
    once the row deletions are durable, so no committed post points at a removed file.
    Callers must not hold other pending changes on the session.
    """
    posts = PostRepo(db)
    post = await posts.get(parse_uuid(post_id))
    if post is None or post.user_id != requester_id:
        return False
    media_url = post.media_url
    likes_removed = await LikeRepo(db).remove_for_post(post.id)
    comments_removed = await CommentRepo(db).remove_for_post(post.id)
    await posts.remove(post)
    await db.commit()
    if media_url:
        storage.delete(media_url)
    logger.info(
        "Post deleted: %s by %s (%d likes, %d comments)", post_id, requester_id, likes_removed, comments_removed
    )
    return True
