"""Logging setup for the gallery API.

One stdout handler, JSON lines by default or plain text for local work.
Every record carries the current request id (set by the request context
middleware), and folder passwords, password hashes and login tokens are
scrubbed before anything is written.
"""

import contextvars
import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any, Optional


request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")

REDACTED = "***REDACTED***"

# ``extra`` keys whose values are dropped outright.
SENSITIVE_KEYS = frozenset({
    "password", "secret", "secret_hash", "password_hash", "token", "authorization",
})

_SECRET_PATTERNS = [
    # Login tokens: three base64url segments, JSON header first.
    (re.compile(r'eyJ[\w-]*\.[\w-]+\.[\w-]+'), REDACTED),
    (re.compile(r'\$2[aby]?\$\d{2}\$[./A-Za-z0-9]{53}'), REDACTED),
    (re.compile(r'(?i)\b(bearer\s+)\S+'), r'\1' + REDACTED),
    # password=..., secret: ..., "password": "..."
    (re.compile(r'(?i)("?(?:password|secret|token)"?\s*[=:]\s*"?)[^\s,"\'}]+'), r'\1' + REDACTED),
]

# Attributes every LogRecord has; anything else on a record came from ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "request_id"}


def redact(text: str) -> str:
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}


class _ContextFilter(logging.Filter):
    """Stamp the request id and scrub secrets from the message and extras."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"

        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Mismatched %-args; leave it for the handler's own error reporting.
            return True
        record.msg = redact(message)
        record.args = None

        for key, value in _extra_fields(record).items():
            if key.lower() in SENSITIVE_KEYS:
                setattr(record, key, REDACTED)
            elif isinstance(value, str):
                setattr(record, key, redact(value))
        return True


class _JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` fields land at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if getattr(record, "request_id", "-") != "-":
            payload["request_id"] = record.request_id
        for key, value in _extra_fields(record).items():
            payload.setdefault(key, value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)

    def formatException(self, ei) -> str:
        return redact(super().formatException(ei))


class _TextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def formatException(self, ei) -> str:
        return redact(super().formatException(ei))


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Replace the root handlers with a single scrubbed stdout handler.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to INFO.
        log_format: ``"json"`` (default) or ``"text"``.
    """
    level = (log_level or "INFO").upper()
    fmt = (log_format or "json").lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_ContextFilter())
    handler.setFormatter(_JsonFormatter() if fmt == "json" else _TextFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # uvicorn's access log duplicates the request context middleware's line.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    # passlib warns about the bcrypt backend version on first hash.
    logging.getLogger("passlib").setLevel(logging.ERROR)
