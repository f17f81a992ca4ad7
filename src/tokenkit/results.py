"""Analyze and validate results."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AnalyzeResult:
    model_id: str
    engine_used: str
    token_count: int
    max_tokens: int
    character_count: int
    tokens: tuple[str, ...] | None = None
    estimated_input_cost: float | None = None  # USD, None when unpriced
    estimated_output_cost: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "modelId": self.model_id,
            "engineUsed": self.engine_used,
            "tokenCount": self.token_count,
            "maxTokens": self.max_tokens,
            "characterCount": self.character_count,
        }
        if self.tokens is not None:
            data["tokens"] = list(self.tokens)
        if self.estimated_input_cost is not None:
            data["estimatedInputCost"] = self.estimated_input_cost
        if self.estimated_output_cost is not None:
            data["estimatedOutputCost"] = self.estimated_output_cost
        return data


@dataclass(frozen=True)
class ValidateResult:
    model_id: str
    engine_used: str
    token_count: int
    max_tokens: int

    @property
    def within_limit(self) -> bool:
        return self.token_count <= self.max_tokens

    @property
    def remaining_tokens(self) -> int:
        return self.max_tokens - self.token_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "modelId": self.model_id,
            "engineUsed": self.engine_used,
            "tokenCount": self.token_count,
            "maxTokens": self.max_tokens,
            "withinLimit": self.within_limit,
            "remainingTokens": self.remaining_tokens,
        }
