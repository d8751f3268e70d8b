"""Aggregation layer: joins posts, users, likes, comments and follows into view models.

Invariants:
    - Any user/post reference may dangle; it renders as a placeholder, never an error
    - Sub-reads are independent queries, with no cross-table read isolation
    - Anonymous viewers (viewer_id None) never see liked/following flags set
"""
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.core.errors import NotFoundError
from snapfeed.db.session import parse_uuid
from snapfeed.models.post import Post
from snapfeed.repositories import CommentRepo, FollowRepo, LikeRepo, PostRepo, UserRepo
from snapfeed.schemas.feed import FeedItem, ProfileBundle, SearchResults
from snapfeed.schemas.post import PostResponse, ProfilePost, SearchPost
from snapfeed.schemas.user import UserPublic, UserResponse, UserSummary
from snapfeed.services.engagement_service import comment_to_response
from snapfeed.services.follow_service import followers_of, following_of, is_following


def _post_fields(post: Post) -> dict:
    return PostResponse.model_validate(post).model_dump()


async def _feed_items(db: AsyncSession, posts: Sequence[Post], viewer_id: UUID | None) -> list[FeedItem]:
    post_ids = [p.id for p in posts]
    likes = LikeRepo(db)
    like_counts = await likes.counts_for_posts(post_ids)
    liked_ids = await likes.liked_post_ids(viewer_id, post_ids) if viewer_id else set()
    comments = await CommentRepo(db).list_for_posts(post_ids)
    user_ids = {p.user_id for p in posts}
    user_ids.update(c.user_id for post_comments in comments.values() for c in post_comments)
    users = await UserRepo(db).get_many(user_ids)

    return [
        FeedItem(
            **_post_fields(p),
            user=UserSummary.of(users.get(p.user_id)),
            likes_count=like_counts.get(p.id, 0),
            liked=p.id in liked_ids,
            comments=[comment_to_response(c, users.get(c.user_id)) for c in comments.get(p.id, [])],
        )
        for p in posts
    ]


async def build_feed(
    db: AsyncSession,
    viewer_id: UUID | None = None,
    *,
    skip: int = 0,
    limit: int | None = None,
) -> list[FeedItem]:
    """All posts, newest first, each with owner, like count, viewer's like state and comments."""
    posts = await PostRepo(db).list_recent(skip=skip, limit=limit)
    return await _feed_items(db, posts, viewer_id)


async def build_post_detail(db: AsyncSession, post_id: str | UUID | None, viewer_id: UUID | None = None) -> FeedItem:
    post = await PostRepo(db).get(parse_uuid(post_id))
    if post is None:
        raise NotFoundError("Post", post_id)
    items = await _feed_items(db, [post], viewer_id)
    return items[0]


async def build_profile(
    db: AsyncSession,
    profile_user_id: str | UUID | None,
    viewer_id: UUID | None = None,
) -> ProfileBundle:
    user = await UserRepo(db).get(parse_uuid(profile_user_id))
    if user is None:
        raise NotFoundError("User", profile_user_id)

    posts = await PostRepo(db).list_by_user(user.id)
    post_ids = [p.id for p in posts]
    likes = LikeRepo(db)
    like_counts = await likes.counts_for_posts(post_ids)
    comment_counts = await CommentRepo(db).counts_for_posts(post_ids)
    liked_ids = await likes.liked_post_ids(viewer_id, post_ids) if viewer_id else set()

    follows = FollowRepo(db)
    return ProfileBundle(
        profile_user=UserResponse.model_validate(user),
        posts=[
            ProfilePost(
                **_post_fields(p),
                likes_count=like_counts.get(p.id, 0),
                comments_count=comment_counts.get(p.id, 0),
                liked=p.id in liked_ids,
            )
            for p in posts
        ],
        followers_count=await follows.count_followers(user.id),
        following_count=await follows.count_following(user.id),
        followers=await followers_of(db, user.id, viewer_id),
        following=await following_of(db, user.id, viewer_id),
        is_following=await is_following(db, viewer_id, user.id),
        is_own_profile=viewer_id is not None and viewer_id == user.id,
    )


async def search(db: AsyncSession, query: str | None, viewer_id: UUID | None = None) -> SearchResults:
    """Case-insensitive substring search: users by username, posts by caption. Blank query -> empty."""
    q = (query or "").strip()
    if not q:
        return SearchResults(query=query or "")

    users = await UserRepo(db).search(q)
    followed = await FollowRepo(db).following_among(viewer_id, [u.id for u in users]) if viewer_id else set()
    user_results = [
        UserPublic(**UserResponse.model_validate(u).model_dump(), is_following=u.id in followed)
        for u in users
    ]

    posts = await PostRepo(db).search_caption(q)
    post_ids = [p.id for p in posts]
    owners = await UserRepo(db).get_many(p.user_id for p in posts)
    like_counts = await LikeRepo(db).counts_for_posts(post_ids)
    comment_counts = await CommentRepo(db).counts_for_posts(post_ids)
    post_results = [
        SearchPost(
            **_post_fields(p),
            user=UserSummary.of(owners.get(p.user_id)),
            likes_count=like_counts.get(p.id, 0),
            comments_count=comment_counts.get(p.id, 0),
        )
        for p in posts
    ]
    return SearchResults(query=q, users=user_results, posts=post_results)
