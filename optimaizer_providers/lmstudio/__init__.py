"""LM Studio (local) provider package."""

from .client import LMStudioProvider

__all__ = ["LMStudioProvider"]
