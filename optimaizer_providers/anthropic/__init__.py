"""Anthropic provider package."""

from .client import AnthropicProvider
from .helpers import should_enable_prompt_caching

__all__ = ["AnthropicProvider", "should_enable_prompt_caching"]
