"""Parameter normalization shared by the adapters."""
from __future__ import annotations

import math
from numbers import Real
from typing import Any, Optional


def _finite_number(value: Any) -> Optional[float]:
    # bool is an int subclass; True must not become max_tokens=1
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def resolve_max_tokens(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Floor a usable ``max_tokens``; non-numeric, non-finite or ``<= 0`` -> ``default``."""
    number = _finite_number(value)
    if number is None or number <= 0:
        return default
    floored = math.floor(number)
    return floored if floored > 0 else default


def resolve_temperature(value: Any, default: Optional[float] = None) -> Optional[float]:
    """Return ``value`` when it is a finite number, else ``default``."""
    number = _finite_number(value)
    return default if number is None else number


def clamp_temperature(value: Any, low: float, high: float) -> Optional[float]:
    """Clamp a finite temperature into ``[low, high]``; anything else -> ``None``."""
    number = _finite_number(value)
    if number is None:
        return None
    return max(low, min(high, number))


def normalize_reasoning_effort(effort: Optional[str]) -> Optional[str]:
    """Map the app-level ``xhigh`` onto the highest vendor value (``high``)."""
    if not effort:
        return None
    return "high" if effort == "xhigh" else effort


__all__ = [
    "resolve_max_tokens",
    "resolve_temperature",
    "clamp_temperature",
    "normalize_reasoning_effort",
]
