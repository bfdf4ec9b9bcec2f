"""
api/config.py
Classes de configuração Flask por ambiente.

As chaves ``JSON_*`` alimentam o ``SerializationConfig`` do JsonProvider
via ``build_serialization_config()``.
"""

from __future__ import annotations

import os
from typing import Any, Mapping

from core.constants import DEFAULT_CHARSET, DEFAULT_MAX_DEPTH
from core.schemas import (
    ParserFeature,
    SerializationConfig,
    SerializerFeature,
    parse_features,
)


def _split_env(name: str, default: str = "") -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item for item in raw.split(",") if item.strip())


class BaseConfig:
    SECRET_KEY: str = os.getenv(
        "FLASK_SECRET_KEY", "dev-secret-change-in-prod"
    )

    # ── Serialização JSON ─────────────────────────────
    JSON_CHARSET: str = os.getenv("JSON_CHARSET", DEFAULT_CHARSET)
    JSON_SERIALIZER_FEATURES: tuple[str, ...] = _split_env(
        "JSON_SERIALIZER_FEATURES", "write_map_null_value"
    )
    JSON_PARSER_FEATURES: tuple[str, ...] = _split_env(
        "JSON_PARSER_FEATURES", "use_big_decimal"
    )
    JSON_DATE_FORMAT: str | None = os.getenv("JSON_DATE_FORMAT") or None
    JSON_MAX_DEPTH: int = int(
        os.getenv("JSON_MAX_DEPTH", DEFAULT_MAX_DEPTH)
    )
    # Allow-list por identidade exata; vazio = sem allow-list.
    JSON_ALLOWED_TYPES: tuple[type, ...] = ()


class DevelopmentConfig(BaseConfig):
    DEBUG: bool = True
    TESTING: bool = False


class ProductionConfig(BaseConfig):
    DEBUG: bool = False
    TESTING: bool = False


class TestingConfig(BaseConfig):
    TESTING: bool = True
    JSON_SERIALIZER_FEATURES: tuple[str, ...] = (
        "write_map_null_value",
    )
    JSON_PARSER_FEATURES: tuple[str, ...] = ("use_big_decimal",)
    JSON_DATE_FORMAT: str | None = None


def build_serialization_config(
    settings: Mapping[str, Any],
) -> SerializationConfig:
    """Monta o SerializationConfig a partir das chaves JSON_* do Flask.

    Raises:
        ValueError: feature ou charset desconhecido.
    """
    return SerializationConfig(
        charset=settings.get("JSON_CHARSET", DEFAULT_CHARSET),
        serializer_features=parse_features(
            settings.get("JSON_SERIALIZER_FEATURES", ()),
            SerializerFeature,
        ),
        parser_features=parse_features(
            settings.get("JSON_PARSER_FEATURES", ()),
            ParserFeature,
        ),
        date_format=settings.get("JSON_DATE_FORMAT"),
        max_depth=settings.get(
            "JSON_MAX_DEPTH", DEFAULT_MAX_DEPTH
        ),
    )
