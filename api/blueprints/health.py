"""
api/blueprints/health.py
Blueprint de saúde e introspecção do adaptador.

Endpoints:
    GET /health/ping   — liveness check
    GET /health/config — snapshot da configuração JSON ativa
"""

from __future__ import annotations

from flask import Blueprint, jsonify

from api.negotiation import current_json_provider

health_bp = Blueprint("health", __name__)


# ── Rotas ────────────────────────────────────────────


@health_bp.get("/ping")
def ping():
    """Liveness check da aplicação."""
    return jsonify({"status": "ok"})


@health_bp.get("/config")
def config():
    """Configuração de serialização em uso (sem filtros)."""
    provider = current_json_provider()
    snapshot = provider.config
    return jsonify(
        {
            "charset": snapshot.charset,
            "serializer_features": [
                f.value for f in snapshot.serializer_features
            ],
            "parser_features": [
                f.value for f in snapshot.parser_features
            ],
            "date_format": snapshot.date_format,
            "max_depth": snapshot.max_depth,
            "filters": len(snapshot.serialize_filters),
            "restricted": provider.gate.restricted,
            "allowed_types": [
                t.__name__ for t in provider.gate.allowed_types
            ],
            "engine": type(provider.engine).__name__,
        }
    )
