"""Model catalog entries.

``ModelInfo`` is one listing row; ``ModelCatalogResult`` is what the catalog
returns for a provider, including whether the list is live or the built-in
fallback and a readable reason when it is not live.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional

CatalogSource = Literal["live", "fallback"]


@dataclass(frozen=True)
class ModelInfo:
    """A single model listing entry.

    Attributes:
        id: Model identifier as sent in ``ChatParams.model``.
        name: Human-friendly display name (defaults to ``id``).
        vendor: Model author (``"openai"``, ``"meta-llama"``, ``"local"``...).
        description: Optional vendor-supplied description.
        context_length: Optional input window size in tokens.
    """

    id: str
    name: str
    vendor: Optional[str] = None
    description: Optional[str] = None
    context_length: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


@dataclass(frozen=True)
class ModelCatalogResult:
    """Catalog answer for one provider."""

    provider: str
    models: List[ModelInfo] = field(default_factory=list)
    source: CatalogSource = "fallback"
    fetched_at: float = 0.0
    requires_api_key: bool = True
    configured: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.error is None:
            data.pop("error")
        return data


__all__ = ["CatalogSource", "ModelInfo", "ModelCatalogResult"]
