"""JSON logging formatter used by provider logging setup.

``JsonFormatter`` serializes the standard record fields, hoists keys out of
JSON-encoded messages, and masks credential-looking keys so an API key can
never reach a log sink even if a call site passes one by mistake.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"
REDACTED = "***"

_SECRET_KEYS = frozenset({"api_key", "apikey", "authorization", "x-api-key", "x-goog-api-key", "token", "secret"})

_RECORD_INTERNALS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


def redact(value: Any) -> Any:
    """Return ``value`` with credential-looking mapping keys masked (recursive)."""
    if isinstance(value, dict):
        return {
            k: (REDACTED if isinstance(k, str) and k.lower() in _SECRET_KEYS else redact(v))
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [redact(v) for v in value]
    return value


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        parsed: Any = None
        if msg_text.startswith("{"):
            try:
                parsed = json.loads(msg_text)
            except ValueError:
                parsed = None
        if isinstance(parsed, dict):
            # hoist to avoid double-encoded JSON in the emitted line
            base.update(redact(parsed))
        else:
            base["msg"] = msg_text
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RECORD_INTERNALS:
                continue
            if k not in base:
                base[k] = REDACTED if k.lower() in _SECRET_KEYS else v
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO", "redact"]
