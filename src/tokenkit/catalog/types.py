"""Model catalog types."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelInfo:
    """Metadata about a model known to the catalog."""

    id: str
    """Catalog identifier (e.g., "gpt-4o"). Matched case-insensitively."""

    provider: str
    """Grouping label, usually the vendor name."""

    max_tokens: int
    """Token budget of the model."""

    input_price_per_1k: float | None = None
    """USD per 1K input tokens."""

    output_price_per_1k: float | None = None
    """USD per 1K output tokens."""

    encoding: str | None = None
    """Tokenizer encoding hint (e.g., "cl100k_base")."""

    @property
    def key(self) -> str:
        """Identity used for catalog matching."""
        return model_key(self.id)

    @property
    def has_pricing(self) -> bool:
        return self.input_price_per_1k is not None and self.output_price_per_1k is not None


def model_key(model_id: str) -> str:
    """Normalize a model id for case-insensitive comparison."""
    return model_id.casefold()
