"""Structured logging: JSON in production, human-readable in development."""
import json
import logging
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("user_id", "post_id", "error_code", "path"):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = str(val)
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "plain") -> None:
    """Configure the root logger once; repeated calls are no-ops."""
    root = logging.getLogger()
    if any(getattr(h, "_snapfeed", False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler._snapfeed = True  # type: ignore[attr-defined]
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def mask_database_url(url: str) -> str:
    """Hide credentials, keep host/db part."""
    return "...@" + url.split("@")[-1].split("?")[0] if "@" in url else url
