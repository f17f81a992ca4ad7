"""File-backed model catalog."""
from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Iterable

from tokenkit.catalog.codec import dumps_models, parse_models, validate_model
from tokenkit.catalog.types import ModelInfo, model_key
from tokenkit.errors import PersistenceError

log = logging.getLogger("tokenkit.catalog")


def merge_models(
    current: Iterable[ModelInfo],
    incoming: Iterable[ModelInfo],
    *,
    preserve_ids: bool = True,
) -> tuple[ModelInfo, ...]:
    """Upsert ``incoming`` into ``current`` by case-insensitive id.

    A matching entry is overwritten in place, anything else is appended.
    With ``preserve_ids`` the overwritten entry keeps the id spelling it
    already had; otherwise the incoming record replaces it verbatim.
    """
    merged = list(current)
    index = {m.key: i for i, m in enumerate(merged)}
    for model in incoming:
        pos = index.get(model.key)
        if pos is None:
            index[model.key] = len(merged)
            merged.append(model)
            continue
        existing = merged[pos]
        if preserve_ids and existing.id != model.id:
            model = ModelInfo(
                id=existing.id,
                provider=model.provider,
                max_tokens=model.max_tokens,
                input_price_per_1k=model.input_price_per_1k,
                output_price_per_1k=model.output_price_per_1k,
                encoding=model.encoding,
            )
        merged[pos] = model
    return tuple(merged)


def _validated(models: Iterable[ModelInfo]) -> list[ModelInfo]:
    return [validate_model(m, index=i) for i, m in enumerate(models)]


class CatalogStore:
    """Model catalog persisted as a JSON file.

    The snapshot is an immutable tuple swapped atomically, so readers never
    lock. Writers serialize on a lock and write the file before the swap; a
    failed write leaves both the file and the snapshot untouched.

    ``path=None`` keeps the catalog in memory only.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._models: tuple[ModelInfo, ...] = ()
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def open(cls, path: str | os.PathLike[str] | None) -> CatalogStore:
        """Create a store and load its snapshot from ``path``."""
        store = cls(path)
        store.load()
        return store

    @property
    def path(self) -> Path | None:
        return self._path

    # --- reads --------------------------------------------------------------

    def get_all(self) -> tuple[ModelInfo, ...]:
        """Return the current snapshot."""
        return self._models

    def get_by_id(self, model_id: str) -> ModelInfo | None:
        """Look up a model by id, ignoring case. Returns ``None`` if absent."""
        key = model_key(model_id)
        for model in self._models:
            if model.key == key:
                return model
        return None

    def __len__(self) -> int:
        return len(self._models)

    # --- writes -------------------------------------------------------------

    def load(self) -> None:
        """Load the snapshot from disk. A missing file is an empty catalog."""
        if self._path is None:
            models: tuple[ModelInfo, ...] = ()
        elif not self._path.exists():
            log.info("Catalog file %s not found, starting empty", self._path)
            models = ()
        else:
            try:
                raw = self._path.read_text(encoding="utf-8")
            except OSError as exc:
                raise PersistenceError(f"Cannot read catalog {self._path}: {exc}", cause=exc) from exc
            models = merge_models((), parse_models(raw) if raw.strip() else [], preserve_ids=False)
            log.info("Loaded %d models from %s", len(models), self._path)
        with self._lock:
            self._models = models

    def replace_all(self, models: Iterable[ModelInfo]) -> int:
        """Replace the catalog. Duplicate ids keep their last occurrence.

        Returns the size of the new catalog.

        Raises:
            MalformedCatalogInputError: If any record is invalid. The catalog
                is left unchanged.
        """
        models = _validated(models)
        with self._lock:
            new = merge_models((), models, preserve_ids=False)
            self._commit(new)
        log.info("Catalog replaced: %d models", len(new))
        return len(new)

    def merge(self, incoming: Iterable[ModelInfo]) -> int:
        """Upsert ``incoming`` into the catalog.

        Returns the number of records processed from ``incoming``.
        """
        incoming = _validated(incoming)
        with self._lock:
            new = merge_models(self._models, incoming)
            self._commit(new)
        log.info("Catalog merged: %d records, %d models total", len(incoming), len(new))
        return len(incoming)

    def flush(self) -> None:
        """Write the current snapshot to disk."""
        with self._lock:
            self._write(self._models)

    def close(self) -> None:
        """Flush and refuse further writes."""
        with self._lock:
            if self._closed:
                return
            self._write(self._models)
            self._closed = True

    def _commit(self, models: tuple[ModelInfo, ...]) -> None:
        if self._closed:
            raise PersistenceError("Catalog store is closed")
        self._write(models)
        self._models = models

    def _write(self, models: tuple[ModelInfo, ...]) -> None:
        if self._path is None:
            return
        data = dumps_models(models)
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                fh.write(data)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            log.error("Failed to write catalog %s: %s", self._path, exc)
            raise PersistenceError(f"Cannot write catalog {self._path}: {exc}", cause=exc) from exc
