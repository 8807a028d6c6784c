"""
Tool-schema translators: generic JSON-Schema -> vendor tool declarations.

Purpose
-------
Render caller-declared ``NativeFunctionTool`` objects in each vendor dialect:

- function-call style (OpenAI, Groq, OpenRouter, Ollama, LM Studio):
  ``{"type": "function", "function": {name, description, parameters}}``
- Anthropic: ``{name, description, input_schema}``
- Gemini: ``functionDeclarations`` with the uppercase typed schema dialect

Design
------
``to_gemini_schema`` is a pure recursive function over a small tagged schema
(object / array / primitive). It never mutates its input and is idempotent:
translating an already translated schema returns an equal mapping.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from ..models import NativeFunctionTool

_GEMINI_TYPES = {
    "object": "OBJECT",
    "array": "ARRAY",
    "number": "NUMBER",
    "integer": "INTEGER",
    "boolean": "BOOLEAN",
    "string": "STRING",
}


def to_function_tool(tool: NativeFunctionTool) -> Dict[str, Any]:
    """OpenAI-style ``function`` wrapper; ``parameters`` passes through unchanged."""
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": tool.parameters,
        },
    }


def to_function_tools(tools: Sequence[NativeFunctionTool]) -> List[Dict[str, Any]]:
    return [to_function_tool(t) for t in tools]


def to_input_schema_tool(tool: NativeFunctionTool) -> Dict[str, Any]:
    """Anthropic declaration: same fields, schema under ``input_schema``."""
    return {"name": tool.name, "description": tool.description, "input_schema": tool.parameters}


def to_input_schema_tools(tools: Sequence[NativeFunctionTool]) -> List[Dict[str, Any]]:
    return [to_input_schema_tool(t) for t in tools]


def gemini_type(value: Any) -> str:
    """Map a JSON-Schema ``type`` to the Gemini token; unknown/absent -> ``STRING``."""
    lowered = str(value or "").strip().lower()
    return _GEMINI_TYPES.get(lowered, "STRING")


def to_gemini_schema(schema: Any) -> Dict[str, Any]:
    """Translate a JSON-Schema-like node into Gemini's typed dialect.

    Keeps ``description``, the string members of ``enum`` and, on object
    nodes, the string members of ``required``. Recurses into ``properties``
    and ``items``. A non-mapping node becomes an empty object schema.
    """
    if not isinstance(schema, Mapping):
        return {"type": "OBJECT", "properties": {}}

    node_type = gemini_type(schema.get("type"))
    out: Dict[str, Any] = {"type": node_type}

    description = schema.get("description")
    if isinstance(description, str):
        out["description"] = description

    enum = schema.get("enum")
    if isinstance(enum, (list, tuple)):
        out["enum"] = [item for item in enum if isinstance(item, str)]

    if node_type == "OBJECT":
        raw_properties = schema.get("properties")
        properties: Dict[str, Any] = {}
        if isinstance(raw_properties, Mapping):
            for key, value in raw_properties.items():
                properties[key] = to_gemini_schema(value)
        out["properties"] = properties
        required = schema.get("required")
        if isinstance(required, (list, tuple)):
            out["required"] = [item for item in required if isinstance(item, str)]

    if node_type == "ARRAY" and isinstance(schema.get("items"), Mapping):
        out["items"] = to_gemini_schema(schema["items"])

    return out


def to_gemini_function_declarations(tools: Sequence[NativeFunctionTool]) -> List[Dict[str, Any]]:
    """Return the Gemini ``tools`` list (one ``functionDeclarations`` entry, or empty)."""
    if not tools:
        return []
    return [
        {
            "functionDeclarations": [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": to_gemini_schema(tool.parameters),
                }
                for tool in tools
            ]
        }
    ]


__all__ = [
    "to_function_tool",
    "to_function_tools",
    "to_input_schema_tool",
    "to_input_schema_tools",
    "gemini_type",
    "to_gemini_schema",
    "to_gemini_function_declarations",
]
