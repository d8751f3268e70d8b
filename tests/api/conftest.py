"""HTTP test fixtures: app built by the factory, get_db overridden to the test database.

Invariants:
    - The client keeps cookies, so a login persists across requests like a browser
    - Redirects are not followed; tests assert on status and Location
"""
import pytest
from httpx import ASGITransport, AsyncClient

from snapfeed.core.config import Settings
from snapfeed.db.session import get_db
from snapfeed.main import create_app


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        SESSION_SECRET_KEY="test-session-secret",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        AVATAR_DIR=str(tmp_path / "avatars"),
    )


@pytest.fixture
async def app(test_settings, test_session_factory):
    app = create_app(test_settings)

    async def override_get_db():
        async with test_session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()
    await app.state.db_manager.dispose()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c


@pytest.fixture
def login(client):
    async def _login(username: str, password: str = "secret1"):
        response = await client.post("/login", data={"username": username, "password": password})
        assert response.status_code == 303, response.text
        return response

    return _login
