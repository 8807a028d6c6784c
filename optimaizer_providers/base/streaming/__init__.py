"""Streaming decode package (line buffering, framing families, stream driver)."""

from .decoding import (
    DATA_PREFIX,
    DONE_SENTINEL,
    NO_RESPONSE_BODY,
    Framing,
    LineBuffer,
    LineKind,
    ParsedLine,
    Translator,
    parse_event_line,
    parse_ndjson_line,
    run_event_stream,
)

__all__ = [
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "NO_RESPONSE_BODY",
    "Framing",
    "LineBuffer",
    "LineKind",
    "ParsedLine",
    "Translator",
    "parse_event_line",
    "parse_ndjson_line",
    "run_event_stream",
]
