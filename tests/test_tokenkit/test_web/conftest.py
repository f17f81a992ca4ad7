from __future__ import annotations

import pytest

from tokenkit.config import TokenKitConfig
from tokenkit.web.app import create_app


@pytest.fixture
def app(service):
    """Create a Flask app over the seeded file-backed service."""
    application = create_app(service=service, config=TokenKitConfig(max_upload_bytes=64 * 1024))
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()
