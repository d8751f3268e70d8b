"""Root conftest: test environment, database and factories.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Media and avatars are written under tmp_path, never into the project tree
    - bcrypt cost is lowered so registration-heavy tests stay fast
"""
import os
import tempfile

# Must be set before snapfeed.core.config builds the module-level settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
_media_root = tempfile.mkdtemp(prefix="snapfeed-test-")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_media_root, "uploads"))
os.environ.setdefault("AVATAR_DIR", os.path.join(_media_root, "avatars"))

from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from snapfeed.core.security import pwd_context  # noqa: E402
from snapfeed.db.base import Base  # noqa: E402
from snapfeed.services import auth_service, post_service  # noqa: E402
from snapfeed.services.storage_service import LocalStorage, MediaUpload  # noqa: E402
from tests.helpers import DEFAULT_BIO, PNG_BYTES  # noqa: E402

pwd_context.update(bcrypt__rounds=4)


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "uploads", tmp_path / "avatars")


@pytest.fixture
def make_user(test_db):
    """Register and commit a user: await make_user("alice")."""
    async def _make(username: str, password: str = "secret1", bio: str | None = None):
        user = await auth_service.register(test_db, username, password, password, bio, default_bio=DEFAULT_BIO)
        await test_db.commit()
        return user

    return _make


@pytest.fixture
def make_post(test_db, storage):
    """Create and commit a post; `age` pushes created_at into the past for ordering tests."""
    async def _make(
        user,
        caption: str = "",
        *,
        filename: str = "photo.png",
        content_type: str = "image/png",
        data: bytes = PNG_BYTES,
        age: timedelta | None = None,
    ):
        upload = MediaUpload(filename=filename, content_type=content_type, data=data)
        post = await post_service.create_post(test_db, storage, user.id, upload, caption)
        if age is not None:
            post.created_at = datetime.utcnow() - age
        await test_db.commit()
        return post

    return _make
