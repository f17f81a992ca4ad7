from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from flask import Blueprint, current_app, jsonify, request

from tokenkit.catalog.codec import model_to_dict
from tokenkit.errors import (
    MalformedCatalogInputError,
    ModelNotFoundError,
    PersistenceError,
    TokenizationError,
)
from tokenkit.service import TokenKitService

log = logging.getLogger("tokenkit.web")

api_bp = Blueprint("api", __name__)


def _service() -> TokenKitService:
    return current_app.extensions["tokenkit"]


def _field(data: dict[str, Any], name: str, default: Any = None) -> Any:
    """Read a request field, ignoring the case of its name."""
    wanted = name.casefold()
    for key, value in data.items():
        if str(key).casefold() == wanted:
            return value
    return default


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _error(message: str, status: int):
    return jsonify({"error": message}), status


@api_bp.after_request
def add_cors_headers(response):
    """Allow cross-origin requests to the API."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response


@api_bp.errorhandler(ModelNotFoundError)
def model_not_found(exc: ModelNotFoundError):
    return _error(str(exc), 404)


@api_bp.errorhandler(MalformedCatalogInputError)
def malformed_catalog(exc: MalformedCatalogInputError):
    return _error(str(exc), 400)


@api_bp.errorhandler(PersistenceError)
def persistence_failed(exc: PersistenceError):
    return _error(str(exc), 500)


@api_bp.errorhandler(TokenizationError)
def tokenization_failed(exc: TokenizationError):
    return _error(str(exc), 500)


@api_bp.route("/health")
def health():
    """Liveness check."""
    return jsonify({
        "ok": True,
        "name": "TokenKit",
        "time": datetime.now(timezone.utc).isoformat(),
    })


@api_bp.route("/models")
def list_models():
    """List models, filtered by ``provider`` and ``contains`` query args."""
    models = _service().get_models(
        provider=request.args.get("provider"),
        contains=request.args.get("contains"),
    )
    return jsonify([model_to_dict(m) for m in models])


@api_bp.route("/models/upload", methods=["POST"])
def upload_models():
    """Replace or merge the catalog from an uploaded JSON file."""
    if request.mimetype != "multipart/form-data":
        return _error("multipart/form-data required", 400)
    upload = next(iter(request.files.values()), None)
    if upload is None:
        return _error("No file provided", 400)
    payload = upload.read()
    if not payload:
        return _error("No file provided", 400)

    replace = _flag(request.args.get("replace", "false"))
    count = _service().import_models(payload, replace=replace)
    log.info("Catalog upload %r: %d records (replace=%s)", upload.filename, count, replace)
    return jsonify({"count": count, "replace": replace})


@api_bp.route("/models/merge", methods=["POST"])
def merge_models():
    """Merge models posted as a JSON array."""
    data = request.get_json(silent=True)
    if data is None:
        return _error("JSON array of models required", 400)
    count = _service().import_models(data, replace=False)
    return jsonify({"count": count, "replace": False})


@api_bp.route("/analyze", methods=["POST"])
def analyze():
    """Tokenize input for a model and estimate its cost."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("JSON object required", 400)
    text, model_id = _field(data, "input"), _field(data, "model")
    if not isinstance(text, str) or not isinstance(model_id, str):
        return _error("Input and Model required", 400)

    service = _service()
    text = service.resolve_input(text, from_file=_flag(_field(data, "fromFile", False)))
    result = service.analyze(text, model_id, _field(data, "engine"))
    return jsonify(result.to_dict())


@api_bp.route("/validate", methods=["POST"])
def validate():
    """Check input against a model's token budget."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("JSON object required", 400)
    text, model_id = _field(data, "input"), _field(data, "model")
    if not isinstance(text, str) or not isinstance(model_id, str):
        return _error("Input and Model required", 400)

    result = _service().validate(text, model_id, _field(data, "engine"))
    return jsonify(result.to_dict())


@api_bp.route("/engines")
def list_engines():
    """List registered tokenization engines."""
    service = _service()
    default = service.engines.default_name
    return jsonify([
        {"name": name, "default": name == default} for name in service.list_engines()
    ])
