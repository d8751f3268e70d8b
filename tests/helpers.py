"""Shared constants for tests."""
DEFAULT_BIO = "Hi! I'm new here 👋"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
AJAX = {"X-Requested-With": "XMLHttpRequest"}
