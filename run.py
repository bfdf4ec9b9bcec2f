"""
run.py — Servidor de desenvolvimento do JsonBridge.

Uso:
    python run.py                                  # DevelopmentConfig
    FLASK_ENV=production python run.py             # ProductionConfig
    JSON_SERIALIZER_FEATURES=pretty_format,sort_field python run.py

As chaves JSON_* são lidas do ambiente por ``api.config``; o servidor
registra no startup a configuração de serialização efetiva.
"""

from __future__ import annotations

import os
from typing import Optional

from flask import Flask

from api import create_app
from api.config import DevelopmentConfig, ProductionConfig, TestingConfig
from api.negotiation import EXTENSION_KEY
from internalloggin.logger import setup_logger

logger = setup_logger("JsonBridgeRunner")

CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "dev":         DevelopmentConfig,
    "production":  ProductionConfig,
    "prod":        ProductionConfig,
    "testing":     TestingConfig,
    "test":        TestingConfig,
}


def build_app(env: Optional[str] = None) -> Flask:
    """Cria o app para ``env`` (default: ``FLASK_ENV``).

    Raises:
        ValueError: ambiente desconhecido.
    """
    env = (env or os.getenv("FLASK_ENV", "development")).lower()
    config_class = CONFIG_BY_ENV.get(env)
    if config_class is None:
        raise ValueError(
            f"FLASK_ENV desconhecido: {env!r} "
            f"(use um de: {', '.join(sorted(CONFIG_BY_ENV))})"
        )

    app = create_app(config_class=config_class)
    snapshot = app.extensions[EXTENSION_KEY].config
    logger.info(
        "JsonBridge [%s] charset=%s serializer=[%s] parser=[%s] max_depth=%d",
        env,
        snapshot.charset,
        ",".join(f.value for f in snapshot.serializer_features),
        ",".join(f.value for f in snapshot.parser_features),
        snapshot.max_depth,
    )
    return app


if __name__ == "__main__":
    app = build_app()
    app.run(
        host=os.getenv("FLASK_HOST", "127.0.0.1"),
        port=int(os.getenv("FLASK_PORT", 5000)),
        debug=bool(app.config.get("DEBUG", False)),
    )
