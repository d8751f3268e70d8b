"""Tests: follow toggling, counts, notifications and enriched lists."""
import uuid

import pytest

from snapfeed.core.errors import NotFoundError, ValidationError
from snapfeed.models.engagement import Follow
from snapfeed.repositories import FollowRepo, NotificationRepo
from snapfeed.services import follow_service


async def test_follow_then_unfollow(test_db, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")

    result = await follow_service.toggle_follow(test_db, alice.id, str(bob.id))
    assert result.success and result.following
    assert result.followers_count == 1  # bob's followers
    assert result.following_count == 1  # alice's following
    assert await follow_service.is_following(test_db, alice.id, bob.id)

    result = await follow_service.toggle_follow(test_db, alice.id, str(bob.id))
    assert result.following is False
    assert result.followers_count == 0
    assert result.following_count == 0
    assert not await follow_service.is_following(test_db, alice.id, bob.id)


async def test_follow_notifies_target_once(test_db, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await follow_service.toggle_follow(test_db, alice.id, bob.id)
    await follow_service.toggle_follow(test_db, alice.id, bob.id)  # unfollow: no notification

    notifications = await NotificationRepo(test_db).list_for(bob.id)
    assert [(n.type, n.from_user_id) for n in notifications] == [("follow", alice.id)]


async def test_cannot_follow_self(test_db, make_user):
    alice = await make_user("alice")
    with pytest.raises(ValidationError):
        await follow_service.toggle_follow(test_db, alice.id, str(alice.id))


@pytest.mark.parametrize("target", ["", "back", "undefined", "null", "not-a-uuid", None])
async def test_bogus_target_ids_rejected(test_db, make_user, target):
    alice = await make_user("alice")
    with pytest.raises(ValidationError):
        await follow_service.toggle_follow(test_db, alice.id, target)


async def test_follow_missing_user(test_db, make_user):
    alice = await make_user("alice")
    with pytest.raises(NotFoundError):
        await follow_service.toggle_follow(test_db, alice.id, str(uuid.uuid4()))


async def test_is_following_anonymous_viewer(test_db, make_user):
    bob = await make_user("bob")
    assert await follow_service.is_following(test_db, None, bob.id) is False


async def test_lists_enriched_with_viewer_state(test_db, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    carol = await make_user("carol")
    await follow_service.toggle_follow(test_db, bob.id, alice.id)
    await follow_service.toggle_follow(test_db, carol.id, alice.id)
    await follow_service.toggle_follow(test_db, alice.id, bob.id)  # alice follows bob back

    followers = await follow_service.followers_of(test_db, alice.id, viewer_id=alice.id)
    flags = {entry.username: entry.is_followed_by_viewer for entry in followers}
    assert flags == {"bob": True, "carol": False}

    following = await follow_service.following_of(test_db, carol.id, viewer_id=None)
    assert [(e.username, e.is_followed_by_viewer) for e in following] == [("alice", False)]


async def test_lists_skip_dangling_edges(test_db, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await follow_service.toggle_follow(test_db, bob.id, alice.id)
    test_db.add(Follow(follower_id=uuid.uuid4(), following_id=alice.id))
    await test_db.commit()

    followers = await follow_service.followers_of(test_db, alice.id)
    assert [e.username for e in followers] == ["bob"]
    # Counts still include the dangling edge
    assert await FollowRepo(test_db).count_followers(alice.id) == 2
