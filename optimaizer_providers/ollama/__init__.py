"""Ollama (local) provider package."""

from .client import OllamaProvider

__all__ = ["OllamaProvider"]
