"""Shared formatting and normalization helpers."""

from .messages import (
    TURN_SEPARATOR,
    Turn,
    build_messages_with_system,
    format_alternating_turns,
    format_model_role_contents,
    resolve_system_instruction,
)
from .params import clamp_temperature, normalize_reasoning_effort, resolve_max_tokens, resolve_temperature

__all__ = [
    "TURN_SEPARATOR",
    "Turn",
    "build_messages_with_system",
    "format_alternating_turns",
    "format_model_role_contents",
    "resolve_system_instruction",
    "clamp_temperature",
    "normalize_reasoning_effort",
    "resolve_max_tokens",
    "resolve_temperature",
]
