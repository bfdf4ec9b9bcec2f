"""
core/type_mapping.py
────────────────────
Mapeamento de tipos Python ↔ JSON usado pelo engine, nas duas direções.

- ``SerializeConfig`` (escrita): converte objetos não nativos do JSON em
  estruturas nativas (dict/list/str/número). Procura primeiro o tipo
  exato, depois a MRO; por fim trata dataclasses, modelos Pydantic e
  objetos com ``__dict__``. O engine consulta os conversores registrados
  antes do tratamento nativo, inclusive para ``datetime``, ``Enum``,
  ``Decimal`` e escalares.

- ``ParserConfig`` (leitura): mantém um cache de ``pydantic.TypeAdapter``
  por tipo alvo, usado para coagir o JSON cru ao tipo genérico pedido
  (``list[Item]``, ``dict[str, int]``, modelos, dataclasses...).

Design Decisions
────────────────
1. Registro copy-on-write:
   ``SerializeConfig.register()`` substitui o dicionário inteiro em vez de
   alterá-lo in-place. Leitores concorrentes sempre enxergam um dicionário
   consistente, sem lock no caminho quente.

2. Cache de TypeAdapter com lock:
   Construir um TypeAdapter é caro; o cache é compartilhado por todas as
   requisições e protegido por ``threading.Lock``. Tipos não hashable
   simplesmente não são cacheados.
"""

from __future__ import annotations

import base64
import dataclasses
import threading
import uuid
from pathlib import PurePath
from typing import Any, Callable, Optional

from pydantic import BaseModel, TypeAdapter

Converter = Callable[[Any], Any]


def _model_members(obj: BaseModel) -> dict[str, Any]:
    # Rasa: os valores aninhados continuam objetos, para que filtros e
    # conversões sejam aplicados recursivamente pelo engine.
    members: dict[str, Any] = {}
    for name, info in type(obj).model_fields.items():
        members[info.alias or name] = getattr(obj, name)
    return members


def _dataclass_members(obj: Any) -> dict[str, Any]:
    return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}


_DEFAULT_CONVERTERS: dict[type, Converter] = {
    uuid.UUID: str,
    PurePath: str,
    set: list,
    frozenset: list,
    bytes: lambda b: base64.b64encode(b).decode("ascii"),
    bytearray: lambda b: base64.b64encode(bytes(b)).decode("ascii"),
}


class SerializeConfig:
    """Conversores de tipos Python para estruturas nativas do JSON."""

    def __init__(self, converters: Optional[dict[type, Converter]] = None) -> None:
        self._converters: dict[type, Converter] = {
            **_DEFAULT_CONVERTERS,
            **(converters or {}),
        }

    def register(self, type_: type, converter: Converter) -> None:
        """Registra (ou substitui) o conversor de ``type_``."""
        self._converters = {**self._converters, type_: converter}

    def registered_converter(self, type_: type) -> Optional[Converter]:
        """Conversor registrado para ``type_`` ou para a classe mais próxima na MRO."""
        converters = self._converters
        for klass in type_.__mro__:
            converter = converters.get(klass)
            if converter is not None:
                return converter
        return None

    def find_converter(self, type_: type) -> Optional[Converter]:
        converter = self.registered_converter(type_)
        if converter is not None:
            return converter

        if issubclass(type_, BaseModel):
            return _model_members
        if dataclasses.is_dataclass(type_):
            return _dataclass_members
        return None

    def convert(self, obj: Any) -> Any:
        """
        Converte ``obj`` para uma estrutura nativa do JSON (rasa).

        Raises:
            TypeError: Se não houver conversor e o objeto não tiver ``__dict__``.
        """
        converter = self.find_converter(type(obj))
        if converter is not None:
            return converter(obj)
        if hasattr(obj, "__dict__"):
            return dict(vars(obj))
        raise TypeError(f"Tipo {type(obj).__name__!r} não é serializável em JSON")


class ParserConfig:
    """Cache de ``TypeAdapter`` por tipo alvo da desserialização."""

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter] = {}
        self._lock = threading.Lock()

    def adapter_for(self, target_type: Any) -> TypeAdapter:
        try:
            hash(target_type)
        except TypeError:
            return TypeAdapter(target_type)

        with self._lock:
            adapter = self._adapters.get(target_type)
            if adapter is None:
                adapter = TypeAdapter(target_type)
                self._adapters[target_type] = adapter
            return adapter

    def __len__(self) -> int:
        return len(self._adapters)


# Instâncias globais padrão, equivalentes ao "global instance" do engine.
GLOBAL_SERIALIZE_CONFIG = SerializeConfig()
GLOBAL_PARSER_CONFIG = ParserConfig()
