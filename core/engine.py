"""
core/engine.py
──────────────
Contrato do engine JSON e sua implementação padrão.

O adaptador (``core.provider.JsonProvider``) não sabe gerar nem interpretar
JSON: ele decide SE a troca é tratada e COMO configurar a chamada, e delega
o trabalho a um ``JsonEngine``.

Design Decisions
────────────────
1. ABC para o engine:
   ``JsonEngine`` define apenas ``encode``/``decode``. Trocar de engine
   (ex: orjson, msgspec) é implementar essas duas funções; o provider não
   muda.

2. Hierarquia de exceções própria:
   ``EncodeError`` (escrita), ``ParseError`` e ``TypeMismatchError``
   (leitura). ``ParseError`` herda de ``ValueError`` para continuar
   compatível com quem já captura ``json.JSONDecodeError``. Falhas de I/O
   (``OSError``) nunca são capturadas aqui.

3. Encode em duas fases:
   Primeiro o grafo de objetos é convertido para uma árvore nativa do JSON
   (aplicando filtros, features e o ``SerializeConfig``); só então os
   bytes são escritos no stream. Um erro de conversão nunca deixa JSON
   parcial no corpo da resposta.

4. Decode via ``pydantic.TypeAdapter``:
   O JSON cru é lido com ``json.loads`` e coagido ao tipo genérico alvo
   (``list[Item]``, ``dict[str, int]``...). Erros de forma viram
   ``TypeMismatchError`` com a lista de erros do Pydantic.

5. Números exatos:
   ``Decimal`` é escrito com o próprio texto (``19.90``, nunca
   ``19.9`` nem ``1.2345678901234568e+16``). ``NaN`` e infinitos não são
   JSON válido e viram ``EncodeError``.
"""

from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import IO, Any, Iterable, Optional

from pydantic import PydanticSchemaGenerationError, ValidationError

from core.constants import DEFAULT_MAX_DEPTH, PRETTY_INDENT
from core.filters import SerializeFilter, apply_filters
from core.schemas import ParserFeature, SerializerFeature
from core.type_mapping import ParserConfig, SerializeConfig


class JsonBridgeError(Exception):
    """Exceção base do JsonBridge_FLS."""


class EncodeError(JsonBridgeError):
    """O grafo de objetos não pôde ser convertido em JSON."""


class ParseError(JsonBridgeError, ValueError):
    """O corpo recebido não é JSON válido (malformado, truncado, charset)."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.position = position


class TypeMismatchError(ParseError):
    """O JSON é válido mas não pode ser coagido ao tipo alvo."""

    def __init__(self, message: str, target_type: Any = None, errors: Optional[list] = None) -> None:
        super().__init__(message)
        self.target_type = target_type
        self.errors = errors or []


# ─── Contrato ─────────────────────────────────────────────────────────────────

class JsonEngine(ABC):
    """
    Contrato abstrato do engine de encode/decode JSON.

    Subclasses devem implementar:
        - encode()  → escreve o JSON de ``value`` em ``stream``
        - decode()  → lê ``stream`` e devolve um valor do tipo alvo

    Ambos são síncronos e rodam na thread do chamador.
    """

    @abstractmethod
    def encode(
        self,
        value: Any,
        stream: IO[bytes],
        charset: str,
        serialize_config: SerializeConfig,
        filters: Iterable[SerializeFilter],
        date_format: Optional[str],
        generate_features: Iterable[SerializerFeature],
        features: Iterable[SerializerFeature],
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """
        Serializa ``value`` e escreve os bytes em ``stream``.

        Raises:
            EncodeError: Tipo não suportado, referência circular ou
                         profundidade acima de ``max_depth``.
            OSError:     Falha de escrita no stream (propagada sem alteração).
        """

    @abstractmethod
    def decode(
        self,
        stream: IO[bytes],
        charset: str,
        target_type: Any,
        features: Iterable[ParserFeature],
        parser_config: ParserConfig,
    ) -> Any:
        """
        Lê o corpo inteiro de ``stream`` e devolve um valor de ``target_type``.

        Raises:
            ParseError:        JSON malformado, truncado ou charset inválido.
            TypeMismatchError: JSON válido com forma incompatível com o alvo.
            OSError:           Falha de leitura no stream.
        """


# ─── Implementação padrão ─────────────────────────────────────────────────────

_NATIVE_SCALARS = (str, int, float, bool, type(None))
_UNTYPED_TARGETS = (None, object, Any)


class _ExactNumber(float):
    """``float`` que carrega o texto exato de um ``Decimal`` para a saída."""

    def __new__(cls, value: Decimal) -> "_ExactNumber":
        number = super().__new__(cls, value)
        number.text = str(value)
        return number


class _ExactNumberEncoder(json.JSONEncoder):
    """
    ``JSONEncoder`` que escreve ``_ExactNumber`` com o texto do ``Decimal``.

    O encoder em C formata todo ``float`` com ``float.__repr__``; por isso
    este caminho usa o gerador em Python de ``json.encoder``, trocando só a
    formatação de números. Só é usado quando a árvore contém ``Decimal``.
    """

    def iterencode(self, o: Any, _one_shot: bool = False):
        def floatstr(value: float, _repr=float.__repr__) -> str:
            if isinstance(value, _ExactNumber):
                return value.text
            if not math.isfinite(value):
                raise ValueError(f"Valor não finito não representável em JSON: {value!r}")
            return _repr(value)

        encode_string = (
            json.encoder.encode_basestring_ascii
            if self.ensure_ascii
            else json.encoder.encode_basestring
        )
        iterencode = json.encoder._make_iterencode(
            {} if self.check_circular else None,
            self.default,
            encode_string,
            self.indent,
            floatstr,
            self.key_separator,
            self.item_separator,
            self.sort_keys,
            self.skipkeys,
            _one_shot,
        )
        return iterencode(o, 0)


class _TreeBuilder:
    """Converte um grafo de objetos Python numa árvore nativa do JSON."""

    def __init__(
        self,
        serialize_config: SerializeConfig,
        filters: tuple[SerializeFilter, ...],
        date_format: Optional[str],
        features: frozenset[SerializerFeature],
        max_depth: int,
    ) -> None:
        self.serialize_config = serialize_config
        self.filters = filters
        self.date_format = date_format
        self.max_depth = max_depth
        self.write_nulls = SerializerFeature.WRITE_MAP_NULL_VALUE in features
        self.enum_by_name = SerializerFeature.WRITE_ENUM_USING_NAME in features
        self.skip_private = SerializerFeature.SKIP_PRIVATE_FIELD in features
        self.detect_cycles = SerializerFeature.DISABLE_CIRCULAR_REFERENCE_DETECT not in features
        self.use_date_format = bool(date_format) and (
            SerializerFeature.WRITE_DATE_USE_DATE_FORMAT in features
        )
        self.exact_numbers = False
        self._ancestors: set[int] = set()

    def build(self, obj: Any, depth: int = 0) -> Any:
        if depth > self.max_depth:
            raise EncodeError(f"Profundidade máxima de {self.max_depth} níveis excedida")

        converter = self.serialize_config.registered_converter(type(obj))
        if converter is not None:
            try:
                converted = converter(obj)
            except TypeError as exc:
                raise EncodeError(str(exc)) from exc
            return self._build_converted(obj, converted, depth)
        return self._build_default(obj, depth)

    def _build_default(self, obj: Any, depth: int) -> Any:
        if isinstance(obj, Enum):
            return obj.name if self.enum_by_name else self.build(obj.value, depth)
        if isinstance(obj, float):
            if not math.isfinite(obj):
                raise EncodeError(f"Valor não finito não representável em JSON: {obj!r}")
            return obj
        if isinstance(obj, _NATIVE_SCALARS):
            return obj
        if isinstance(obj, Decimal):
            if not obj.is_finite():
                raise EncodeError(f"Valor não finito não representável em JSON: {obj}")
            self.exact_numbers = True
            return _ExactNumber(obj)
        if isinstance(obj, (datetime, date, time)):
            return self._format_temporal(obj)

        if isinstance(obj, Mapping):
            return self._guarded(obj, lambda: self._members(obj, obj.items(), depth))
        if isinstance(obj, (list, tuple)):
            return self._guarded(obj, lambda: [self.build(item, depth + 1) for item in obj])

        try:
            converted = self.serialize_config.convert(obj)
        except TypeError as exc:
            raise EncodeError(str(exc)) from exc
        return self._build_converted(obj, converted, depth)

    def _build_converted(self, obj: Any, converted: Any, depth: int) -> Any:
        if isinstance(converted, dict):
            return self._guarded(
                obj,
                lambda: self._members(obj, converted.items(), depth, is_object=True),
            )
        # O conversor já foi aplicado: o resultado não volta ao registro.
        return self._build_default(converted, depth)

    def _guarded(self, container: Any, produce):
        if not self.detect_cycles:
            return produce()
        marker = id(container)
        if marker in self._ancestors:
            raise EncodeError(
                f"Referência circular detectada em {type(container).__name__}"
            )
        self._ancestors.add(marker)
        try:
            return produce()
        finally:
            self._ancestors.discard(marker)

    def _members(self, owner: Any, items, depth: int, is_object: bool = False) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for raw_name, value in items:
            name = self._key(raw_name)
            if is_object and self.skip_private and name.startswith("_"):
                continue
            if self.filters:
                filtered = apply_filters(self.filters, owner, name, value)
                if filtered is None:
                    continue
                name, value = filtered
            if value is None and not self.write_nulls:
                continue
            out[name] = self.build(value, depth + 1)
        return out

    def _key(self, key: Any) -> str:
        if isinstance(key, str):
            return key
        if isinstance(key, Enum):
            return key.name if self.enum_by_name else str(key.value)
        return str(key)

    def _format_temporal(self, value: Any) -> str:
        if self.use_date_format:
            return value.strftime(self.date_format)
        return value.isoformat()


def _reject_constant(name: str) -> Any:
    raise ParseError(f"Valor não finito não permitido: {name}")


class StandardJsonEngine(JsonEngine):
    """
    Engine padrão: ``json`` da biblioteca padrão + ``pydantic.TypeAdapter``.

    Uso típico::

        engine = StandardJsonEngine()
        buffer = io.BytesIO()
        engine.encode({"a": 1}, buffer, "utf-8", GLOBAL_SERIALIZE_CONFIG,
                      (), None, DEFAULT_GENERATE_FEATURES, ())
        engine.decode(io.BytesIO(buffer.getvalue()), "utf-8", dict[str, int],
                      (), GLOBAL_PARSER_CONFIG)
    """

    def encode(
        self,
        value: Any,
        stream: IO[bytes],
        charset: str,
        serialize_config: SerializeConfig,
        filters: Iterable[SerializeFilter],
        date_format: Optional[str],
        generate_features: Iterable[SerializerFeature],
        features: Iterable[SerializerFeature],
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        active = frozenset(generate_features) | frozenset(features)
        if date_format:
            active |= {SerializerFeature.WRITE_DATE_USE_DATE_FORMAT}

        builder = _TreeBuilder(serialize_config, tuple(filters), date_format, active, max_depth)
        try:
            tree = builder.build(value)
        except RecursionError as exc:
            raise EncodeError("Grafo de objetos profundo demais para serializar") from exc

        pretty = SerializerFeature.PRETTY_FORMAT in active
        encoder_cls = _ExactNumberEncoder if builder.exact_numbers else json.JSONEncoder
        encoder = encoder_cls(
            ensure_ascii=SerializerFeature.BROWSER_COMPATIBLE in active,
            sort_keys=SerializerFeature.SORT_FIELD in active,
            indent=PRETTY_INDENT if pretty else None,
            separators=(",", ": ") if pretty else (",", ":"),
            check_circular=False,
            allow_nan=False,
        )
        try:
            payload = encoder.encode(tree).encode(charset)
        except UnicodeEncodeError as exc:
            raise EncodeError(f"Falha ao codificar JSON em {charset}: {exc}") from exc
        except ValueError as exc:
            raise EncodeError(str(exc)) from exc

        stream.write(payload)

    def decode(
        self,
        stream: IO[bytes],
        charset: str,
        target_type: Any,
        features: Iterable[ParserFeature],
        parser_config: ParserConfig,
    ) -> Any:
        active = frozenset(features)
        raw = stream.read()

        if isinstance(raw, bytes):
            try:
                text = raw.decode(charset)
            except UnicodeDecodeError as exc:
                raise ParseError(f"Corpo não é {charset} válido: {exc.reason}", exc.start) from exc
        else:
            text = raw
        text = text.lstrip("\ufeff")

        if not text.strip():
            if ParserFeature.ALLOW_EMPTY_BODY in active:
                return None
            raise ParseError("Corpo da requisição vazio", 0)

        loads_kwargs: dict[str, Any] = {}
        if ParserFeature.USE_BIG_DECIMAL in active:
            loads_kwargs["parse_float"] = Decimal
        if ParserFeature.ALLOW_NON_FINITE not in active:
            loads_kwargs["parse_constant"] = _reject_constant

        try:
            data = json.loads(text, **loads_kwargs)
        except json.JSONDecodeError as exc:
            raise ParseError(f"JSON inválido: {exc.msg} (posição {exc.pos})", exc.pos) from exc

        if target_type in _UNTYPED_TARGETS:
            return data

        try:
            adapter = parser_config.adapter_for(target_type)
            return adapter.validate_python(data, strict=ParserFeature.STRICT_TYPES in active)
        except PydanticSchemaGenerationError as exc:
            raise TypeMismatchError(
                f"Tipo alvo não suportado: {target_type!r}", target_type
            ) from exc
        except ValidationError as exc:
            raise TypeMismatchError(
                f"JSON incompatível com {target_type!r}: {exc.error_count()} erro(s)",
                target_type,
                exc.errors(include_url=False, include_context=False, include_input=False),
            ) from exc
