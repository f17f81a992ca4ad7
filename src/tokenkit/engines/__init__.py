"""Tokenization engines and the registry that dispatches to them."""
from __future__ import annotations

from tokenkit.engines.base import TokenizationEngine, TokenizationResult
from tokenkit.engines.registry import DEFAULT_ENGINE, EngineRegistry
from tokenkit.engines.simple import ApproximateEngine, SimpleEngine
from tokenkit.engines.tiktoken_engine import TiktokenEngine

__all__ = [
    "TokenizationEngine",
    "TokenizationResult",
    "EngineRegistry",
    "SimpleEngine",
    "ApproximateEngine",
    "TiktokenEngine",
    "DEFAULT_ENGINE",
    "create_default_registry",
]


def create_default_registry(
    *,
    default: str = DEFAULT_ENGINE,
    extra: list[TokenizationEngine] | None = None,
) -> EngineRegistry:
    """Create an EngineRegistry with the built-in engines registered.

    Args:
        default: Name of the engine used for empty or unknown names.
        extra: Additional engines to register after the built-ins.

    Returns:
        A fully configured EngineRegistry.

    Raises:
        DuplicateEngineError: If an extra engine reuses a registered name.
        EngineConfigurationError: If ``default`` names no registered engine.
    """
    registry = EngineRegistry(default_name=default)

    registry.register(SimpleEngine())
    registry.register(ApproximateEngine())
    registry.register(TiktokenEngine())

    for engine in extra or ():
        registry.register(engine)

    # Fail at startup rather than on the first request
    registry.resolve()
    return registry
