"""Tool-schema translation and tool-call extraction."""

from .schema import (
    gemini_type,
    to_function_tool,
    to_function_tools,
    to_gemini_function_declarations,
    to_gemini_schema,
    to_input_schema_tool,
    to_input_schema_tools,
)
from .calls import (
    extract_anthropic_content,
    extract_function_tool_calls,
    extract_gemini_content,
    function_message_result,
    gemini_parts,
    join_text_segments,
    parse_tool_arguments,
)

__all__ = [
    "gemini_type",
    "to_function_tool",
    "to_function_tools",
    "to_gemini_function_declarations",
    "to_gemini_schema",
    "to_input_schema_tool",
    "to_input_schema_tools",
    "extract_anthropic_content",
    "extract_function_tool_calls",
    "extract_gemini_content",
    "function_message_result",
    "gemini_parts",
    "join_text_segments",
    "parse_tool_arguments",
]
