"""Auxiliary logging helpers (formatters, context) used by base.logging."""

from .json_formatter import JsonFormatter, ISO, redact
from .logging_context import LogContext

__all__ = ["JsonFormatter", "ISO", "LogContext", "redact"]
