"""Model catalog: types, JSON codec and the file-backed store."""
from __future__ import annotations

from tokenkit.catalog.codec import dumps_models, model_from_dict, model_to_dict, parse_models
from tokenkit.catalog.store import CatalogStore, merge_models
from tokenkit.catalog.types import ModelInfo, model_key

__all__ = [
    "ModelInfo",
    "CatalogStore",
    "merge_models",
    "model_key",
    "parse_models",
    "model_from_dict",
    "model_to_dict",
    "dumps_models",
]
