"""Tests: local media storage and upload helpers."""
from snapfeed.services.storage_service import LocalStorage, MediaUpload


def test_media_upload_extension():
    assert MediaUpload("Photo.JPG", "image/jpeg", b"x").ext == ".jpg"
    assert MediaUpload("blob", "video/mp4", b"x").ext == ".mp4"
    assert MediaUpload("blob", "application/x-unknown", b"x").ext == ".bin"
    assert MediaUpload("clip.MOV", "application/octet-stream", b"x").ext == ".mov"


def test_media_upload_extension_ignores_untrusted_suffix():
    assert MediaUpload("me.html", "image/png", b"x").ext == ".png"
    assert MediaUpload("page.html", "text/html", b"x").ext == ".bin"
    assert MediaUpload("drawing.svg", "image/svg+xml", b"x").ext == ".bin"
    assert MediaUpload("a.png", "image/png", b"1234").size == 4


def test_save_media_uses_unique_names(tmp_path):
    storage = LocalStorage(tmp_path / "u", tmp_path / "a")
    first = storage.save_media(b"one", ".png")
    second = storage.save_media(b"two", ".png")
    assert first != second
    assert first.startswith("/uploads/")
    assert (tmp_path / "u" / first.removeprefix("/uploads/")).read_bytes() == b"one"


def test_delete_reports_missing_and_refuses_escape(tmp_path):
    storage = LocalStorage(tmp_path / "u", tmp_path / "a")
    url = storage.save_media(b"data", ".bin")
    assert storage.delete(url) is True
    assert storage.delete(url) is False

    outside = tmp_path / "secret.txt"
    outside.write_text("keep")
    assert storage.delete("/uploads/../secret.txt") is False
    assert outside.exists()
    assert storage.delete("/elsewhere/file.png") is False
