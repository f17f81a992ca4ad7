"""Analyze/validate pipeline over the catalog and the engine registry.

Each call runs ``resolve model -> resolve engine -> tokenize -> derive``
independently; the service holds no per-request state.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from tokenkit.catalog.codec import parse_models
from tokenkit.catalog.store import CatalogStore
from tokenkit.catalog.types import ModelInfo
from tokenkit.engines import create_default_registry
from tokenkit.engines.base import TokenizationResult
from tokenkit.engines.registry import EngineRegistry
from tokenkit.errors import ModelNotFoundError, TokenizationError
from tokenkit.results import AnalyzeResult, ValidateResult

log = logging.getLogger("tokenkit.service")


class TokenKitService:
    """Entry points used by the API and the CLI."""

    def __init__(
        self,
        store: CatalogStore,
        engines: EngineRegistry | None = None,
        input_root: str | Path | None = None,
    ) -> None:
        self.store = store
        self.engines = engines or create_default_registry()
        self.input_root = Path(input_root).resolve() if input_root is not None else None

    # --- catalog ------------------------------------------------------------

    def get_models(
        self, provider: str | None = None, contains: str | None = None
    ) -> list[ModelInfo]:
        """List models, optionally filtered.

        ``provider`` matches any model whose provider contains it and
        ``contains`` matches against ``"<id> <provider>"``. Both ignore case.
        """
        models = list(self.store.get_all())
        if provider and provider.strip():
            needle = provider.strip().casefold()
            models = [m for m in models if needle in m.provider.casefold()]
        if contains and contains.strip():
            needle = contains.strip().casefold()
            models = [m for m in models if needle in f"{m.id} {m.provider}".casefold()]
        return models

    def get_model(self, model_id: str) -> ModelInfo:
        model = self.store.get_by_id(model_id or "")
        if model is None:
            raise ModelNotFoundError(model_id)
        return model

    def import_models(self, payload: str | bytes | list[Any], *, replace: bool = False) -> int:
        """Parse a catalog payload and replace or merge it into the store.

        Returns the number of records in the payload.
        """
        models = parse_models(payload)
        if replace:
            self.store.replace_all(models)
        else:
            self.store.merge(models)
        return len(models)

    def list_engines(self) -> list[str]:
        return self.engines.list_names()

    # --- pipeline -----------------------------------------------------------

    def analyze(self, text: str, model_id: str, engine: str | None = None) -> AnalyzeResult:
        """Count tokens in ``text`` and estimate its cost for ``model_id``.

        Cost estimates are present only when the model has both prices.

        Raises:
            ModelNotFoundError: If ``model_id`` is not in the catalog.
            TokenizationError: If the engine fails.
        """
        model = self.get_model(model_id)
        engine_name, result = self._tokenize(text, model, engine)

        input_cost = output_cost = None
        if model.has_pricing:
            input_cost = _cost(result.token_count, model.input_price_per_1k)
            output_cost = _cost(result.token_count, model.output_price_per_1k)

        return AnalyzeResult(
            model_id=model.id,
            engine_used=engine_name,
            token_count=result.token_count,
            max_tokens=model.max_tokens,
            character_count=len(text),
            tokens=result.tokens,
            estimated_input_cost=input_cost,
            estimated_output_cost=output_cost,
        )

    def validate(self, text: str, model_id: str, engine: str | None = None) -> ValidateResult:
        """Check whether ``text`` fits in the token budget of ``model_id``.

        Raises:
            ModelNotFoundError: If ``model_id`` is not in the catalog.
            TokenizationError: If the engine fails.
        """
        model = self.get_model(model_id)
        engine_name, result = self._tokenize(text, model, engine)
        verdict = ValidateResult(
            model_id=model.id,
            engine_used=engine_name,
            token_count=result.token_count,
            max_tokens=model.max_tokens,
        )
        if not verdict.within_limit:
            log.info(
                "Input exceeds %s budget: %d > %d tokens",
                model.id,
                verdict.token_count,
                verdict.max_tokens,
            )
        return verdict

    def resolve_input(self, value: str, from_file: bool = False) -> str:
        """Return the literal text for a request input.

        With ``from_file``, ``value`` is treated as a path relative to the
        input root and the file's content is returned when it exists there.
        Otherwise ``value`` is the text itself.
        """
        if not from_file:
            return value
        if self.input_root is None:
            log.warning("File input requested but no input root is configured")
            return value
        try:
            candidate = (self.input_root / value).resolve()
            if not candidate.is_relative_to(self.input_root) or not candidate.is_file():
                return value
            return candidate.read_text(encoding="utf-8", errors="replace")
        except (OSError, ValueError):
            # Not usable as a path (too long, NUL bytes, unreadable)
            return value

    def _tokenize(
        self, text: str, model: ModelInfo, engine: str | None
    ) -> tuple[str, TokenizationResult]:
        engine_name = self.engines.resolve_name(engine)
        if engine and engine_name != engine:
            log.info("Unknown engine %r, falling back to %r", engine, engine_name)
        impl = self.engines.resolve(engine_name)
        try:
            result = impl.tokenize(text or "", model)
        except Exception as exc:
            log.exception("Engine %s failed on model %s", engine_name, model.id)
            raise TokenizationError(engine_name, cause=exc) from exc
        log.debug("model=%s engine=%s tokens=%d", model.id, engine_name, result.token_count)
        return engine_name, result


def _cost(tokens: int, price_per_1k: float | None) -> float:
    return tokens / 1000 * (price_per_1k or 0.0)
