"""TokenKit: model catalog and pluggable token counting."""
from __future__ import annotations

from tokenkit.catalog import CatalogStore, ModelInfo
from tokenkit.config import TokenKitConfig
from tokenkit.engines import EngineRegistry, TokenizationEngine, create_default_registry
from tokenkit.errors import (
    DuplicateEngineError,
    EngineConfigurationError,
    MalformedCatalogInputError,
    ModelNotFoundError,
    PersistenceError,
    TokenizationError,
    TokenKitError,
)
from tokenkit.results import AnalyzeResult, ValidateResult
from tokenkit.service import TokenKitService

__all__ = [
    "TokenKitConfig",
    "TokenKitService",
    "CatalogStore",
    "ModelInfo",
    "EngineRegistry",
    "TokenizationEngine",
    "create_default_registry",
    "AnalyzeResult",
    "ValidateResult",
    "TokenKitError",
    "ModelNotFoundError",
    "MalformedCatalogInputError",
    "PersistenceError",
    "DuplicateEngineError",
    "EngineConfigurationError",
    "TokenizationError",
]
