"""HTTP tests: register, login, logout and the session flow."""
from datetime import datetime, timedelta

from sqlalchemy import select

from snapfeed.models.web_session import WebSession


async def test_register_signs_in_and_redirects_to_profile(client):
    response = await client.post(
        "/register",
        data={"username": "alice", "password": "secret1", "confirm_password": "secret1", "bio": ""},
    )
    assert response.status_code == 303
    assert response.headers["location"].startswith("/profile/")

    profile = await client.get(response.headers["location"])
    assert profile.status_code == 200
    body = profile.json()
    assert body["profile_user"]["username"] == "alice"
    assert body["profile_user"]["bio"] == "Hi! I'm new here 👋"
    assert body["is_own_profile"] is True

    # Already signed in: auth pages bounce to the feed
    assert (await client.get("/login")).headers["location"] == "/"
    assert (await client.get("/register")).headers["location"] == "/"


async def test_register_duplicate_username(client, make_user):
    await make_user("alice")
    response = await client.post(
        "/register",
        data={"username": "alice", "password": "another1", "confirm_password": "another1"},
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


async def test_register_password_mismatch(client):
    response = await client.post(
        "/register",
        data={"username": "alice", "password": "secret1", "confirm_password": "secret2"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["category"] == "validation"


async def test_register_overlong_username(client):
    response = await client.post(
        "/register",
        data={"username": "x" * 51, "password": "secret1", "confirm_password": "secret1"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["category"] == "validation"


async def test_login_errors(client, make_user):
    await make_user("alice")
    wrong = await client.post("/login", data={"username": "alice", "password": "nope123"})
    assert wrong.status_code == 401
    assert wrong.json()["error"]["message"] == "Wrong password"

    unknown = await client.post("/login", data={"username": "ghost", "password": "secret1"})
    assert unknown.status_code == 404

    missing = await client.post("/login", data={"username": "alice"})
    assert missing.status_code == 400


async def test_login_page_maps_error_codes(client):
    response = await client.get("/login", params={"error": "user_not_found"})
    assert response.status_code == 200
    assert response.json()["error"]
    assert (await client.get("/login")).json() == {"error": None}


async def test_protected_page_returns_after_login_once(client, make_user, login):
    await make_user("alice")

    anonymous = await client.get("/notifications")
    assert anonymous.status_code == 303
    assert anonymous.headers["location"] == "/login"

    first = await login("alice")
    assert first.headers["location"] == "/notifications"

    await client.get("/logout")
    second = await login("alice")
    assert second.headers["location"] == "/"


async def test_protected_post_redirects_to_login(client):
    response = await client.post("/like/whatever")
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


async def test_logout_ends_session(client, make_user, login):
    await make_user("alice")
    await login("alice")
    assert (await client.get("/notifications")).status_code == 200

    response = await client.get("/logout")
    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    assert (await client.get("/notifications")).status_code == 303


async def test_vanished_user_session_is_destroyed(client, test_db, make_user, login):
    alice = await make_user("alice")
    await login("alice")
    await test_db.delete(alice)
    await test_db.commit()

    response = await client.get("/")
    assert response.status_code == 303
    assert response.headers["location"] == "/login?error=user_not_found"

    rows = (await test_db.execute(select(WebSession).where(WebSession.user_id == alice.id))).scalars().all()
    assert rows == []
    # Now anonymous: the feed renders again
    assert (await client.get("/")).status_code == 200


async def test_expired_session_is_anonymous(client, test_db, make_user, login):
    alice = await make_user("alice")
    await login("alice")
    web_session = (
        await test_db.execute(select(WebSession).where(WebSession.user_id == alice.id))
    ).scalar_one()
    assert web_session.expires_at - web_session.created_at == timedelta(days=7)
    web_session.expires_at = datetime.utcnow() - timedelta(seconds=1)
    await test_db.commit()

    response = await client.get("/notifications")
    assert response.status_code == 303
    assert response.headers["location"] == "/login"
