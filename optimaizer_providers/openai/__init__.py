"""
OpenAI provider package.

Exports:
- OpenAIProvider: Chat Completions adapter for api.openai.com
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
