"""Resilience helpers (one-shot feature downgrade)."""

from .fallback import is_feature_rejection, send_with_feature_fallback

__all__ = ["is_feature_rejection", "send_with_feature_fallback"]
