from __future__ import annotations

import pytest

from tokenkit.catalog.store import CatalogStore
from tokenkit.catalog.types import ModelInfo
from tokenkit.engines import create_default_registry
from tokenkit.service import TokenKitService


@pytest.fixture
def catalog_path(tmp_path):
    """Path to a catalog file that does not exist yet."""
    return tmp_path / "registry" / "models.data.json"


@pytest.fixture
def acme_models() -> list[ModelInfo]:
    return [
        ModelInfo(id="m1", provider="Acme", max_tokens=100),
        ModelInfo(
            id="priced",
            provider="Globex",
            max_tokens=1000,
            input_price_per_1k=0.5,
            output_price_per_1k=1.5,
        ),
    ]


@pytest.fixture
def store(catalog_path, acme_models):
    """A file-backed store seeded with the Acme and Globex models."""
    catalog = CatalogStore(catalog_path)
    catalog.replace_all(acme_models)
    return catalog


@pytest.fixture
def service(store, tmp_path):
    """A service over the seeded store; FromFile inputs resolve under tmp_path."""
    return TokenKitService(store, engines=create_default_registry(), input_root=tmp_path)
