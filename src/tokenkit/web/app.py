from __future__ import annotations

from flask import Flask

from tokenkit.catalog.store import CatalogStore
from tokenkit.config import TokenKitConfig
from tokenkit.engines import create_default_registry
from tokenkit.service import TokenKitService


def create_app(
    service: TokenKitService | None = None,
    config: TokenKitConfig | None = None,
) -> Flask:
    """Create and configure the Flask app."""
    app = Flask(__name__)
    config = config or TokenKitConfig()
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes

    # Without an explicit service the catalog lives in memory only
    if service is None:
        service = TokenKitService(
            CatalogStore(None),
            engines=create_default_registry(default=config.default_engine),
            input_root=config.input_root,
        )

    app.extensions["tokenkit"] = service
    app.extensions["tokenkit_config"] = config

    from tokenkit.web.routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    return app
