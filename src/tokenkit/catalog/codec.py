"""JSON encoding of catalog records.

The durable and wire form of a model is a camelCase object::

    {"id": "gpt-4o", "provider": "OpenAI", "maxTokens": 128000,
     "inputPricePer1K": 0.0025, "outputPricePer1K": 0.01,
     "encoding": "o200k_base"}

Field names are matched case-insensitively on read. Optional fields are
omitted on write when unset. Unknown fields are ignored.
"""
from __future__ import annotations

import json
from typing import Any, Iterable

from tokenkit.catalog.types import ModelInfo
from tokenkit.errors import MalformedCatalogInputError

_FIELDS = {
    "id": "id",
    "provider": "provider",
    "maxtokens": "max_tokens",
    "inputpriceper1k": "input_price_per_1k",
    "outputpriceper1k": "output_price_per_1k",
    "encoding": "encoding",
}


def model_to_dict(model: ModelInfo) -> dict[str, Any]:
    """Serialize a model to its camelCase JSON object."""
    data: dict[str, Any] = {
        "id": model.id,
        "provider": model.provider,
        "maxTokens": model.max_tokens,
    }
    if model.input_price_per_1k is not None:
        data["inputPricePer1K"] = model.input_price_per_1k
    if model.output_price_per_1k is not None:
        data["outputPricePer1K"] = model.output_price_per_1k
    if model.encoding is not None:
        data["encoding"] = model.encoding
    return data


def dumps_models(models: Iterable[ModelInfo]) -> str:
    """Serialize a sequence of models to indented JSON."""
    return json.dumps([model_to_dict(m) for m in models], indent=2) + "\n"


def parse_models(payload: str | bytes | list[Any]) -> list[ModelInfo]:
    """Parse a JSON document (or already-decoded list) into models.

    Raises:
        MalformedCatalogInputError: If the payload is not a JSON array of
            valid model objects. The error names the offending record.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedCatalogInputError(f"invalid JSON: {exc}", cause=exc) from exc
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise MalformedCatalogInputError(
            f"expected a JSON array of models, got {type(payload).__name__}"
        )
    return [model_from_dict(item, index=i) for i, item in enumerate(payload)]


def model_from_dict(data: Any, *, index: int | None = None) -> ModelInfo:
    """Build a ModelInfo from a decoded JSON object."""
    if not isinstance(data, dict):
        raise MalformedCatalogInputError(
            f"expected an object, got {type(data).__name__}", index=index
        )

    values: dict[str, Any] = {}
    for key, value in data.items():
        name = _FIELDS.get(str(key).casefold())
        if name is not None:
            values[name] = value

    model_id = values.get("id")
    if not isinstance(model_id, str) or not model_id.strip():
        raise MalformedCatalogInputError(
            "'id' must be a non-empty string", index=index, field="id"
        )

    provider = values.get("provider")
    if provider is None:
        provider = ""
    if not isinstance(provider, str):
        raise MalformedCatalogInputError(
            "'provider' must be a string", index=index, field="provider"
        )

    max_tokens = values.get("max_tokens")
    if isinstance(max_tokens, float) and max_tokens.is_integer():
        max_tokens = int(max_tokens)
    if isinstance(max_tokens, bool) or not isinstance(max_tokens, int) or max_tokens <= 0:
        raise MalformedCatalogInputError(
            "'maxTokens' must be a positive integer", index=index, field="maxTokens"
        )

    encoding = values.get("encoding")
    if encoding is not None and not isinstance(encoding, str):
        raise MalformedCatalogInputError(
            "'encoding' must be a string", index=index, field="encoding"
        )

    return ModelInfo(
        id=model_id,
        provider=provider,
        max_tokens=max_tokens,
        input_price_per_1k=_price(values, "input_price_per_1k", "inputPricePer1K", index),
        output_price_per_1k=_price(values, "output_price_per_1k", "outputPricePer1K", index),
        encoding=encoding or None,
    )


def validate_model(model: ModelInfo, *, index: int | None = None) -> ModelInfo:
    """Check a constructed model against the rules applied on decode.

    Returns the model as it would be read back from the catalog file.

    Raises:
        MalformedCatalogInputError: If a field is out of range.
    """
    return model_from_dict(model_to_dict(model), index=index)


def _price(values: dict[str, Any], name: str, label: str, index: int | None) -> float | None:
    value = values.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise MalformedCatalogInputError(
            f"'{label}' must be a non-negative number", index=index, field=label
        )
    return float(value)
