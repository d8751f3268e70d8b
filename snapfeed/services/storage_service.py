"""Storage service for media files.

Uses local disk behind the StorageBackend protocol so an object store can be swapped in.
Post media: <UPLOAD_DIR>/<uuid4><ext>, served at /uploads/...
Avatars:    <AVATAR_DIR>/avatar-<user_id><ext>, served at /avatars/...
"""
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol
from uuid import UUID

logger = logging.getLogger(__name__)

MEDIA_URL_PREFIX = "/uploads/"
AVATAR_URL_PREFIX = "/avatars/"

EXT_MAP = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
    "video/mp4": ".mp4",
    "video/quicktime": ".mov",
    "video/webm": ".webm",
    "audio/mpeg": ".mp3",
    "audio/ogg": ".ogg",
    "audio/wav": ".wav",
}
AVATAR_TYPES = {ct for ct in EXT_MAP if ct.startswith("image/")}
# Extensions a client filename may contribute when the content type is not mapped
KNOWN_EXTS = set(EXT_MAP.values()) | {".jpeg"}


@dataclass
class MediaUpload:
    """An uploaded file, already read into memory."""
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def ext(self) -> str:
        """Extension for the stored file, taken from the content type where it is known.

        Otherwise the filename suffix is kept only if it is a known media extension,
        else .bin.
        """
        mapped = EXT_MAP.get((self.content_type or "").lower())
        if mapped:
            return mapped
        suffix = PurePosixPath(self.filename or "").suffix.lower()
        return suffix if suffix in KNOWN_EXTS else ".bin"


class StorageBackend(Protocol):
    def save_media(self, data: bytes, ext: str) -> str:
        """Save post media under a generated unique name and return its public URL."""
        ...

    def save_avatar(self, user_id: UUID, data: bytes, ext: str) -> str:
        """Save (or replace) a user's avatar and return its public URL."""
        ...

    def delete(self, url: str) -> bool:
        """Delete file by URL. Returns True if a file was removed."""
        ...


class LocalStorage:
    def __init__(self, upload_dir: str | Path, avatar_dir: str | Path):
        self.upload_dir = Path(upload_dir).resolve()
        self.avatar_dir = Path(avatar_dir).resolve()
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.avatar_dir.mkdir(parents=True, exist_ok=True)

    def save_media(self, data: bytes, ext: str) -> str:
        filename = f"{uuid.uuid4().hex}{ext}"
        (self.upload_dir / filename).write_bytes(data)
        return f"{MEDIA_URL_PREFIX}{filename}"

    def save_avatar(self, user_id: UUID, data: bytes, ext: str) -> str:
        stem = f"avatar-{user_id}"
        # An earlier avatar may have had another extension
        for old in self.avatar_dir.glob(f"{stem}.*"):
            old.unlink(missing_ok=True)
        filename = f"{stem}{ext}"
        (self.avatar_dir / filename).write_bytes(data)
        return f"{AVATAR_URL_PREFIX}{filename}"

    def delete(self, url: str) -> bool:
        filepath = self._resolve(url)
        if filepath is None:
            return False
        try:
            filepath.unlink()
        except FileNotFoundError:
            return False
        return True

    def _resolve(self, url: str) -> Path | None:
        if url.startswith(MEDIA_URL_PREFIX):
            base, rel = self.upload_dir, url[len(MEDIA_URL_PREFIX):]
        elif url.startswith(AVATAR_URL_PREFIX):
            base, rel = self.avatar_dir, url[len(AVATAR_URL_PREFIX):]
        else:
            return None
        filepath = (base / rel).resolve()
        if base not in filepath.parents:
            logger.warning("Refusing to delete outside storage root: %s", url)
            return None
        return filepath
