"""
api/__init__.py
App Factory do JsonBridge (Flask).

Uso:
    from api import create_app
    app = create_app()
"""

from __future__ import annotations

from typing import Optional

from flask import Flask, redirect, url_for

from api.blueprints.entities import entities_bp
from api.blueprints.health import health_bp
from api.config import DevelopmentConfig, build_serialization_config
from api.errors import register_error_handlers
from api.json_provider import BridgeJSONProvider
from api.negotiation import EXTENSION_KEY
from core.provider import JsonProvider


def create_app(
    config_class=DevelopmentConfig,
    provider: Optional[JsonProvider] = None,
) -> Flask:
    """Cria e configura a instância Flask.

    Args:
        config_class: classe de configuração (chaves JSON_*).
        provider: JsonProvider pronto; se None, é montado a
            partir da configuração do app.
    """

    app = Flask(__name__)
    app.config.from_object(config_class)

    # ── Adaptador JSON ────────────────────────────────
    if provider is None:
        provider = JsonProvider(
            config=build_serialization_config(app.config),
            # Allow-list vazia na config significa "sem restrição".
            allowed_types=app.config.get("JSON_ALLOWED_TYPES") or None,
        )
    app.extensions[EXTENSION_KEY] = provider
    app.json = BridgeJSONProvider(app, provider)

    register_error_handlers(app)

    # ── Blueprints ────────────────────────────────────
    app.register_blueprint(
        health_bp, url_prefix="/health"
    )
    app.register_blueprint(
        entities_bp, url_prefix="/entities"
    )

    # ── Rota raiz ─────────────────────────────────────
    @app.get("/")
    def index():
        return redirect(url_for("health.ping"))

    return app
