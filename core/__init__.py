"""
core/
Núcleo do JsonBridge_FLS, agnóstico ao framework web.

Contém:
- media_type.py   : Media type negociado (type/subtype; params).
- eligibility.py  : Portão de elegibilidade (allow-list + regra de subtype).
- schemas.py      : Features do engine e SerializationConfig (imutável).
- filters.py      : Filtros de propriedade/nome/valor do encode.
- type_mapping.py : Mapeamento de tipos Python ↔ JSON (SerializeConfig/ParserConfig).
- engine.py       : Contrato JsonEngine, engine padrão e exceções.
- provider.py     : JsonProvider — negociação e delegação ao engine.
"""

from .eligibility import EligibilityGate, has_matching_media_type
from .engine import (
    EncodeError,
    JsonBridgeError,
    JsonEngine,
    ParseError,
    StandardJsonEngine,
    TypeMismatchError,
)
from .media_type import MediaType
from .provider import JsonProvider
from .schemas import (
    DEFAULT_GENERATE_FEATURES,
    ParserFeature,
    SerializationConfig,
    SerializerFeature,
)

__all__ = [
    "DEFAULT_GENERATE_FEATURES",
    "EligibilityGate",
    "EncodeError",
    "JsonBridgeError",
    "JsonEngine",
    "JsonProvider",
    "MediaType",
    "ParseError",
    "ParserFeature",
    "SerializationConfig",
    "SerializerFeature",
    "StandardJsonEngine",
    "TypeMismatchError",
    "has_matching_media_type",
]
