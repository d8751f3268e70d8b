"""Registration, login and profile edit business logic."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from snapfeed.core.security import MIN_PASSWORD_LENGTH, get_password_hash, verify_password
from snapfeed.models.user import User
from snapfeed.repositories import UserRepo
from snapfeed.schemas.user import UserResponse
from snapfeed.services.storage_service import AVATAR_TYPES, MediaUpload, StorageBackend

logger = logging.getLogger(__name__)

USERNAME_MAX_LENGTH = 50


async def register(
    db: AsyncSession,
    username: str | None,
    password: str | None,
    confirm_password: str | None,
    bio: str | None,
    *,
    default_bio: str,
) -> User:
    if not username or not password:
        raise ValidationError("Username and password are required")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters", field="username")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password")
    if password != confirm_password:
        raise ValidationError("Password confirmation does not match", field="confirm_password")
    users = UserRepo(db)
    if await users.find_by_username(username):
        raise ConflictError("Username already taken")
    user = await users.add(
        User(
            username=username,
            password_hash=get_password_hash(password),
            bio=bio or default_bio,
            avatar=None,
        )
    )
    logger.info("User registered: %s (%s)", user.username, user.id)
    return user


async def authenticate(db: AsyncSession, username: str | None, password: str | None) -> User:
    if not username or not password:
        raise ValidationError("Username and password are required")
    user = await UserRepo(db).find_by_username(username)
    if not user:
        logger.info("Login failed: unknown username %s", username)
        raise NotFoundError("Username")
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: wrong password for %s", username)
        raise AuthError("Wrong password")
    logger.info("Login success: %s (%s)", user.username, user.id)
    return user


async def update_profile(
    db: AsyncSession,
    user: User,
    *,
    bio: str | None = None,
    current_password: str | None = None,
    new_password: str | None = None,
    confirm_password: str | None = None,
    default_bio: str,
) -> User:
    """Apply a profile edit. Every check runs before any field is written."""
    new_hash = None
    if current_password and new_password:
        if not verify_password(current_password, user.password_hash):
            raise AuthError("Current password is incorrect")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters", field="new_password"
            )
        if new_password != confirm_password:
            raise ValidationError("Password confirmation does not match", field="confirm_password")
        new_hash = get_password_hash(new_password)

    if bio is not None:
        user.bio = bio or default_bio
    if new_hash is not None:
        user.password_hash = new_hash
    await db.flush()
    return user


async def set_avatar(db: AsyncSession, storage: StorageBackend, user: User, upload: MediaUpload) -> User:
    if (upload.content_type or "").lower() not in AVATAR_TYPES:
        raise ValidationError("Only JPEG, PNG, WebP or GIF images are allowed", field="avatar")
    user.avatar = storage.save_avatar(user.id, upload.data, upload.ext)
    await db.flush()
    return user


async def remove_avatar(db: AsyncSession, storage: StorageBackend, user: User) -> User:
    if user.avatar:
        storage.delete(user.avatar)
        user.avatar = None
        await db.flush()
    return user


def user_to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)
