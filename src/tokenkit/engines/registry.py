from __future__ import annotations

from tokenkit.engines.base import TokenizationEngine
from tokenkit.errors import DuplicateEngineError, EngineConfigurationError

DEFAULT_ENGINE = "simple"


class EngineRegistry:
    """Maps engine names to tokenization engines.

    Populated once at startup. Lookups of unknown or empty names fall back to
    the engine registered under ``default_name``.
    """

    def __init__(self, default_name: str = DEFAULT_ENGINE) -> None:
        self._engines: dict[str, TokenizationEngine] = {}
        self.default_name = default_name

    def register(self, engine: TokenizationEngine, name: str | None = None) -> None:
        """Register an engine under ``name`` (defaults to ``engine.name``)."""
        key = name or engine.name
        if key in self._engines:
            raise DuplicateEngineError(key)
        self._engines[key] = engine

    def resolve(self, name: str | None = None) -> TokenizationEngine:
        """Return the engine for ``name``, or the default engine.

        Resolution order:
        1. Exact name match
        2. Default engine
        """
        if name and name in self._engines:
            return self._engines[name]
        return self.default

    def resolve_name(self, name: str | None = None) -> str:
        """Return the registered name :meth:`resolve` would pick."""
        if name and name in self._engines:
            return name
        return self.default_name

    @property
    def default(self) -> TokenizationEngine:
        try:
            return self._engines[self.default_name]
        except KeyError:
            raise EngineConfigurationError(
                f"Default engine '{self.default_name}' is not registered"
            ) from None

    def list_names(self) -> list[str]:
        """Registered engine names in registration order."""
        return list(self._engines)

    def __contains__(self, name: object) -> bool:
        return name in self._engines

    def __len__(self) -> int:
        return len(self._engines)
