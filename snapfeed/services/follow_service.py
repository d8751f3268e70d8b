"""Follow graph: toggle edges, derived counts and enriched follower/following lists."""
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.core.errors import NotFoundError, ValidationError
from snapfeed.db.session import parse_uuid
from snapfeed.repositories import FollowRepo, UserRepo
from snapfeed.schemas.user import FollowListEntry, ToggleFollowResponse
from snapfeed.services.notification_service import notify

logger = logging.getLogger(__name__)

# Values a broken client-side link can put in the path instead of an id
_BOGUS_TARGETS = {"back", "undefined", "null"}


async def toggle_follow(db: AsyncSession, follower_id: UUID, target: str | UUID | None) -> ToggleFollowResponse:
    """Follow target if not yet followed, unfollow otherwise.

    Counts are re-read after the mutation: followers_count belongs to the target,
    following_count to the acting user.
    """
    if isinstance(target, str) and target.strip() in _BOGUS_TARGETS:
        raise ValidationError("Invalid user ID", field="user_id")
    target_id = parse_uuid(target)
    if target_id is None:
        raise ValidationError("Invalid user ID", field="user_id")
    if target_id == follower_id:
        raise ValidationError("Cannot follow yourself", field="user_id")
    if not await UserRepo(db).get(target_id):
        raise NotFoundError("User", target_id)

    follows = FollowRepo(db)
    existing = await follows.find(follower_id, target_id)
    if existing:
        await follows.remove(existing)
        logger.info("Unfollow: %s -> %s", follower_id, target_id)
    else:
        await follows.add(follower_id, target_id)
        await notify(db, user_id=target_id, from_user_id=follower_id, notification_type="follow")
        logger.info("Follow: %s -> %s", follower_id, target_id)

    return ToggleFollowResponse(
        success=True,
        following=existing is None,
        followers_count=await follows.count_followers(target_id),
        following_count=await follows.count_following(follower_id),
    )


async def is_following(db: AsyncSession, follower_id: UUID | None, following_id: UUID) -> bool:
    if follower_id is None:
        return False
    return await FollowRepo(db).find(follower_id, following_id) is not None


async def _enrich(db: AsyncSession, user_ids: list[UUID], viewer_id: UUID | None) -> list[FollowListEntry]:
    users = await UserRepo(db).get_many(user_ids)
    followed = await FollowRepo(db).following_among(viewer_id, users.keys()) if viewer_id else set()
    out = []
    for uid in user_ids:
        user = users.get(uid)
        if user is None:
            continue  # dangling edge
        out.append(
            FollowListEntry(
                id=user.id,
                username=user.username,
                avatar=user.avatar,
                is_followed_by_viewer=user.id in followed,
            )
        )
    return out


async def followers_of(db: AsyncSession, user_id: UUID, viewer_id: UUID | None = None) -> list[FollowListEntry]:
    """Users who follow user_id, each flagged with whether the viewer follows them."""
    return await _enrich(db, await FollowRepo(db).follower_ids(user_id), viewer_id)


async def following_of(db: AsyncSession, user_id: UUID, viewer_id: UUID | None = None) -> list[FollowListEntry]:
    """Users that user_id follows, each flagged with whether the viewer follows them."""
    return await _enrich(db, await FollowRepo(db).following_ids(user_id), viewer_id)
