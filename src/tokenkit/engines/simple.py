"""Dependency-free engines."""
from __future__ import annotations

import math
import re

from tokenkit.catalog.types import ModelInfo
from tokenkit.engines.base import TokenizationEngine, TokenizationResult

# Letter runs (with inner apostrophes), digit runs, or any single other
# non-space character.
_TOKEN_RE = re.compile(r"[^\W\d_]+(?:'[^\W\d_]+)*|\d+|[^\w\s]|_")


class SimpleEngine(TokenizationEngine):
    """Splits text into words, numbers and punctuation marks."""

    name = "simple"

    def tokenize(self, text: str, model: ModelInfo | None = None) -> TokenizationResult:
        tokens = tuple(_TOKEN_RE.findall(text))
        return TokenizationResult(token_count=len(tokens), tokens=tokens)


class ApproximateEngine(TokenizationEngine):
    """Estimates one token per ``chars_per_token`` characters.

    Roughly 4 characters per token for English text. No token breakdown.
    """

    name = "approximate"

    def __init__(self, chars_per_token: float = 4.0) -> None:
        if chars_per_token <= 0:
            raise ValueError("chars_per_token must be positive")
        self.chars_per_token = chars_per_token

    def tokenize(self, text: str, model: ModelInfo | None = None) -> TokenizationResult:
        return TokenizationResult(token_count=math.ceil(len(text) / self.chars_per_token))
