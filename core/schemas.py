"""
core/schemas.py
───────────────
Define as flags de features do engine e o ``SerializationConfig`` — o
contrato de configuração compartilhado por todas as requisições de um
``JsonProvider``.

Design Decisions
────────────────
1. Features como ``(str, Enum)``:
   Os valores são strings simples (ex: "pretty_format"), o que permite
   configurá-las por variável de ambiente e exibi-las em JSON sem o
   prefixo "SerializerFeature.".

2. SerializationConfig congelado (``frozen=True``):
   A configuração é lida por requisições concorrentes. Sendo imutável, um
   snapshot capturado no início de uma chamada nunca muda durante ela.
   Reconfigurar = construir uma nova instância e trocar a referência no
   provider (``JsonProvider.config = ...``).

3. Features guardadas em ``tuple``:
   Nenhum código pode dar ``append`` na coleção compartilhada. O merge por
   requisição (ex: ``?pretty``) copia a tupla para uma lista local.

4. ``arbitrary_types_allowed``:
   ``SerializeConfig``/``ParserConfig`` e os filtros são objetos Python
   comuns, não modelos Pydantic; são validados apenas por ``isinstance``.
"""

from __future__ import annotations

import codecs
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.constants import DEFAULT_CHARSET, DEFAULT_MAX_DEPTH
from core.filters import SerializeFilter
from core.type_mapping import (
    GLOBAL_PARSER_CONFIG,
    GLOBAL_SERIALIZE_CONFIG,
    ParserConfig,
    SerializeConfig,
)


# ─── Enum: Features de serialização ──────────────────────────────────────────

class SerializerFeature(str, Enum):
    """Flags que alteram a forma do JSON gerado pelo engine."""

    PRETTY_FORMAT = "pretty_format"                  # saída indentada, multi-linha
    WRITE_MAP_NULL_VALUE = "write_map_null_value"    # mantém membros None
    SORT_FIELD = "sort_field"                        # ordena as chaves
    BROWSER_COMPATIBLE = "browser_compatible"        # escapa não-ASCII
    WRITE_DATE_USE_DATE_FORMAT = "write_date_use_date_format"
    WRITE_ENUM_USING_NAME = "write_enum_using_name"
    SKIP_PRIVATE_FIELD = "skip_private_field"        # ignora membros "_x"
    DISABLE_CIRCULAR_REFERENCE_DETECT = "disable_circular_reference_detect"


# ─── Enum: Features de desserialização ───────────────────────────────────────

class ParserFeature(str, Enum):
    """Flags que alteram a leitura do JSON pelo engine."""

    USE_BIG_DECIMAL = "use_big_decimal"      # floats como Decimal
    ALLOW_NON_FINITE = "allow_non_finite"    # aceita NaN / Infinity
    STRICT_TYPES = "strict_types"            # validação Pydantic estrita
    ALLOW_EMPTY_BODY = "allow_empty_body"    # corpo vazio vira None


# Features sempre aplicadas na geração, somadas às configuradas.
DEFAULT_GENERATE_FEATURES: tuple[SerializerFeature, ...] = (
    SerializerFeature.SKIP_PRIVATE_FIELD,
)


def parse_features(names: Iterable[str], enum_cls: type[Enum]) -> tuple:
    """
    Converte nomes (valor ou nome do membro, qualquer caixa) em features.

    Raises:
        ValueError: Se algum nome não corresponder a uma feature conhecida.
    """
    by_key = {}
    for member in enum_cls:
        by_key[member.value.lower()] = member
        by_key[member.name.lower()] = member

    result = []
    for raw in names:
        key = raw.strip().lower()
        if not key:
            continue
        if key not in by_key:
            raise ValueError(f"Feature desconhecida para {enum_cls.__name__}: {raw!r}")
        result.append(by_key[key])
    return tuple(result)


# ─── Modelo: Configuração de serialização ────────────────────────────────────

class SerializationConfig(BaseModel):
    """
    Snapshot imutável da configuração do adaptador JSON.

    Exemplo::

        config = SerializationConfig(
            charset="utf-8",
            serializer_features=(SerializerFeature.WRITE_MAP_NULL_VALUE,),
            date_format="%Y-%m-%d",
        )
        pretty = config.model_copy(update={"serializer_features": (
            *config.serializer_features, SerializerFeature.PRETTY_FORMAT,
        )})
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        str_strip_whitespace=True,
    )

    charset: str = Field(
        default=DEFAULT_CHARSET,
        description="Codificação usada para ler e escrever os bytes da entidade.",
    )
    serializer_features: tuple[SerializerFeature, ...] = Field(
        default=(),
        description="Features base de escrita; o merge por requisição é feito em cópia.",
    )
    parser_features: tuple[ParserFeature, ...] = Field(
        default=(),
        description="Features de leitura.",
    )
    serialize_config: SerializeConfig = Field(
        default=GLOBAL_SERIALIZE_CONFIG,
        description="Mapeamento de tipos Python → JSON (escrita).",
    )
    parser_config: ParserConfig = Field(
        default=GLOBAL_PARSER_CONFIG,
        description="Mapeamento JSON → tipos Python (leitura).",
    )
    serialize_filters: tuple[SerializeFilter, ...] = Field(
        default=(),
        description="Filtros de propriedade/nome/valor aplicados no encode.",
    )
    date_format: Optional[str] = Field(
        default=None,
        description=(
            "Padrão strftime para date/datetime (ex: '%Y-%m-%d %H:%M:%S'). "
            "Quando definido, ativa WRITE_DATE_USE_DATE_FORMAT."
        ),
    )
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        description="Profundidade máxima do grafo de objetos no encode.",
    )

    @field_validator("charset")
    @classmethod
    def _validate_charset(cls, value: str) -> str:
        try:
            return codecs.lookup(value).name
        except LookupError as exc:
            raise ValueError(f"Charset desconhecido: {value!r}") from exc

    @field_validator("date_format")
    @classmethod
    def _empty_date_format_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None
