"""Error hierarchy for TokenKit."""
from __future__ import annotations


class TokenKitError(Exception):
    """Base error for all tokenkit errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


# ---------------------------------------------------------------------------
# Request errors
# ---------------------------------------------------------------------------


class ModelNotFoundError(TokenKitError):
    """The requested model id is not in the catalog."""

    def __init__(self, model_id: str) -> None:
        super().__init__(f"Model '{model_id}' not found")
        self.model_id = model_id


class MalformedCatalogInputError(TokenKitError):
    """A catalog payload could not be parsed into model records.

    ``index`` is the position of the offending record in the payload and
    ``field`` the offending field name, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        field: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message, cause=cause)
        self.index = index
        self.field = field


class TokenizationError(TokenKitError):
    """A tokenization engine raised while processing input."""

    def __init__(self, engine: str, *, cause: Exception | None = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Engine '{engine}' failed{detail}", cause=cause)
        self.engine = engine


# ---------------------------------------------------------------------------
# System errors
# ---------------------------------------------------------------------------


class PersistenceError(TokenKitError):
    """Writing the catalog file failed; the in-memory catalog is unchanged."""


class DuplicateEngineError(TokenKitError):
    """An engine name was registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Engine '{name}' is already registered")
        self.name = name


class EngineConfigurationError(TokenKitError):
    """The engine registry has no engine under its default name."""
