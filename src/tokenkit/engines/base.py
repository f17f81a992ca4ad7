"""Tokenization engine interface."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from tokenkit.catalog.types import ModelInfo


@dataclass(frozen=True)
class TokenizationResult:
    """Outcome of tokenizing one piece of text."""

    token_count: int
    tokens: tuple[str, ...] | None = None


class TokenizationEngine(ABC):
    """Turns text into tokens for a given model.

    Implementations must be stateless with respect to calls: the same engine
    instance is shared by every concurrent request.
    """

    name: str

    @abstractmethod
    def tokenize(self, text: str, model: ModelInfo | None = None) -> TokenizationResult:
        """Tokenize ``text``. ``model`` carries hints such as the encoding."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
