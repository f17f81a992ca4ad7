from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TokenKitConfig:
    catalog_path: str = "models.data.json"
    default_engine: str = "simple"
    input_root: str | None = None  # directory FromFile inputs may be read from
    host: str = "127.0.0.1"
    port: int = 5000
    max_upload_bytes: int = 50 * 1024 * 1024
