"""HTTP tests: follow, like, comment, notifications, posts, profile and search."""
import uuid

from snapfeed.repositories import PostRepo

from tests.helpers import AJAX, PNG_BYTES


async def test_follow_ajax_returns_counts(client, make_user, login):
    alice = await make_user("alice")
    await make_user("bob")
    await login("bob")

    followed = await client.post(f"/follow/{alice.id}", headers=AJAX)
    assert followed.status_code == 200
    assert followed.json() == {
        "success": True,
        "following": True,
        "followers_count": 1,
        "following_count": 1,
        "message": None,
    }

    unfollowed = await client.post(f"/follow/{alice.id}", headers={"Accept": "application/json"})
    body = unfollowed.json()
    assert (body["following"], body["followers_count"], body["following_count"]) == (False, 0, 0)


async def test_follow_ajax_failures_are_json(client, make_user, login):
    bob = await make_user("bob")
    await login("bob")

    own = await client.post(f"/follow/{bob.id}", headers=AJAX)
    assert own.json()["success"] is False
    assert own.json()["message"] == "Cannot follow yourself"

    bogus = await client.post("/follow/undefined", headers=AJAX)
    assert bogus.json()["success"] is False

    missing = await client.post(f"/follow/{uuid.uuid4()}", headers=AJAX)
    assert missing.json() == {
        "success": False,
        "following": None,
        "followers_count": None,
        "following_count": None,
        "message": "User not found",
    }


async def test_follow_page_navigation_goes_back(client, make_user, login):
    alice = await make_user("alice")
    await make_user("bob")
    await login("bob")

    referer = f"http://testserver/profile/{alice.id}"
    response = await client.post(f"/follow/{alice.id}", headers={"Referer": referer})
    assert response.status_code == 303
    assert response.headers["location"] == referer

    # A follow URL is never used as the way back
    response = await client.post(f"/follow/{alice.id}", headers={"Referer": f"http://testserver/follow/{alice.id}"})
    assert response.headers["location"] == "/"


async def test_like_and_comment_json(client, make_user, make_post, login):
    alice = await make_user("alice")
    await make_user("bob")
    post = await make_post(alice, "hi")
    await login("bob")

    liked = await client.post(f"/like/{post.id}")
    assert liked.json() == {"success": True, "liked": True, "like_count": 1}

    missing = await client.post(f"/like/{uuid.uuid4()}")
    assert missing.json()["success"] is False

    commented = await client.post(f"/comment/{post.id}", data={"comment": "  lovely "})
    body = commented.json()
    assert body["success"] is True
    assert body["comment"]["text"] == "lovely"
    assert body["comment"]["user"]["username"] == "bob"

    blank = await client.post(f"/comment/{post.id}", data={"comment": "   "})
    assert blank.json() == {"success": False, "comment": None}

    removed = await client.post(f"/comment/delete/{body['comment']['id']}")
    assert removed.json() == {"success": True}


async def test_notifications_list_then_marked_read(client, make_user, make_post, login):
    alice = await make_user("alice")
    await make_user("bob")
    post = await make_post(alice, "hi")
    await login("bob")
    await client.post(f"/like/{post.id}")
    await client.get("/logout")

    await login("alice")
    assert (await client.get("/notifications/unread-count")).json() == {"count": 1}

    listing = await client.get("/notifications")
    [item] = listing.json()
    assert item["type"] == "like"
    assert item["read"] is False
    assert item["from_user"]["username"] == "bob"
    assert item["post"]["id"] == str(post.id)

    assert (await client.get("/notifications/unread-count")).json() == {"count": 0}
    assert (await client.get("/notifications")).json()[0]["read"] is True

    cleared = await client.post("/notifications/clear")
    assert cleared.headers["location"] == "/notifications"
    assert (await client.get("/notifications")).json() == []


async def test_upload_then_feed_and_media(client, make_user, login):
    alice = await make_user("alice")
    await login("alice")

    assert (await client.get("/upload")).json() == {"error": None}
    response = await client.post(
        "/upload",
        files={"file": ("cat.png", PNG_BYTES, "image/png")},
        data={"caption": "my cat"},
    )
    assert response.status_code == 303
    assert response.headers["location"] == f"/profile/{alice.id}"

    [item] = (await client.get("/")).json()
    assert item["caption"] == "my cat"
    assert item["media_type"] == "image"
    assert item["user"]["username"] == "alice"

    media = await client.get(item["media_url"])
    assert media.status_code == 200
    assert media.content == PNG_BYTES


async def test_upload_without_file(client, make_user, login):
    await make_user("alice")
    await login("alice")
    response = await client.post("/upload", data={"caption": "nothing"})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Choose a file first"


async def test_delete_post_owner_and_stranger(client, test_db, make_user, make_post, login):
    alice = await make_user("alice")
    await make_user("bob")
    post = await make_post(alice, "mine")

    await login("bob")
    denied = await client.post(f"/post/delete/{post.id}")
    assert denied.status_code == 303
    assert denied.headers["location"] == "/"
    assert await PostRepo(test_db).get(post.id) is not None
    await client.get("/logout")

    await login("alice")
    deleted = await client.post(f"/post/delete/{post.id}")
    assert deleted.headers["location"] == f"/profile/{alice.id}"
    assert (await client.get(f"/post/{post.id}")).status_code == 404


async def test_post_detail_and_profile_not_found(client):
    assert (await client.get(f"/post/{uuid.uuid4()}")).status_code == 404
    response = await client.get("/profile/not-a-uuid")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_edit_profile(client, make_user, login):
    alice = await make_user("alice")
    await login("alice")

    page = await client.get("/profile/edit", params={"error": "no_file"})
    assert page.json()["user"]["username"] == "alice"
    assert page.json()["error"] == "no_file"

    saved = await client.post("/profile/edit", data={"bio": "street photographer"})
    assert saved.headers["location"] == f"/profile/{alice.id}"
    profile = (await client.get(f"/profile/{alice.id}")).json()
    assert profile["profile_user"]["bio"] == "street photographer"

    rejected = await client.post(
        "/profile/edit",
        data={"bio": "x", "current_password": "wrong12", "new_password": "better1", "confirm_password": "better1"},
    )
    assert rejected.status_code == 401
    profile = (await client.get(f"/profile/{alice.id}")).json()
    assert profile["profile_user"]["bio"] == "street photographer"


async def test_avatar_upload_and_delete(client, make_user, login):
    alice = await make_user("alice")
    await login("alice")

    no_file = await client.post("/profile/avatar")
    assert no_file.headers["location"] == "/profile/edit?error=no_file"

    not_image = await client.post("/profile/avatar", files={"avatar": ("clip.mp4", b"video", "video/mp4")})
    assert not_image.headers["location"] == "/profile/edit?error=invalid_file"

    uploaded = await client.post("/profile/avatar", files={"avatar": ("me.png", PNG_BYTES, "image/png")})
    assert uploaded.headers["location"] == f"/profile/{alice.id}"
    avatar_url = (await client.get(f"/profile/{alice.id}")).json()["profile_user"]["avatar"]
    assert avatar_url == f"/avatars/avatar-{alice.id}.png"
    assert (await client.get(avatar_url)).content == PNG_BYTES

    removed = await client.post("/profile/avatar/delete")
    assert removed.headers["location"] == f"/profile/{alice.id}"
    assert (await client.get(f"/profile/{alice.id}")).json()["profile_user"]["avatar"] is None


async def test_avatar_is_stored_under_its_image_extension(client, make_user, login):
    alice = await make_user("alice")
    await login("alice")

    script = b"<script>alert(document.cookie)</script>"
    uploaded = await client.post("/profile/avatar", files={"avatar": ("me.html", script, "image/png")})
    assert uploaded.headers["location"] == f"/profile/{alice.id}"

    avatar_url = (await client.get(f"/profile/{alice.id}")).json()["profile_user"]["avatar"]
    assert avatar_url == f"/avatars/avatar-{alice.id}.png"
    served = await client.get(avatar_url)
    assert served.headers["content-type"] == "image/png"

    svg = await client.post("/profile/avatar", files={"avatar": ("x.svg", b"<svg/>", "image/svg+xml")})
    assert svg.headers["location"] == "/profile/edit?error=invalid_file"


async def test_search_route(client, make_user, make_post, login):
    alice = await make_user("alice")
    await make_user("bob")
    await make_post(alice, "Sunset at the pier")
    await login("bob")
    await client.post(f"/follow/{alice.id}", headers=AJAX)

    results = (await client.get("/search", params={"q": "ALI"})).json()
    assert [(u["username"], u["is_following"]) for u in results["users"]] == [("alice", True)]

    results = (await client.get("/search", params={"q": "sunset"})).json()
    assert [p["caption"] for p in results["posts"]] == ["Sunset at the pier"]

    assert (await client.get("/search")).json() == {"query": "", "users": [], "posts": []}


async def test_health(client):
    assert (await client.get("/health")).json() == {"status": "ok"}
