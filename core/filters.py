"""
core/filters.py
───────────────
Filtros de serialização aplicados a cada membro de objeto/mapa durante o
encode.

Três tipos, aplicados nesta ordem para cada par (nome, valor):

- ``PropertyFilter``: decide se o membro entra na saída.
- ``NameFilter``:     renomeia a chave.
- ``ValueFilter``:    substitui o valor (antes da conversão para JSON).

Os filtros recebem o objeto dono (``owner``) para permitir decisões por
tipo. Devem ser puros: são compartilhados entre requisições concorrentes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional


class SerializeFilter(ABC):
    """Base comum para os filtros aceitos por ``SerializationConfig``."""


class PropertyFilter(SerializeFilter):
    @abstractmethod
    def apply(self, owner: Any, name: str, value: Any) -> bool:
        """True mantém o membro; False o remove da saída."""


class NameFilter(SerializeFilter):
    @abstractmethod
    def process(self, owner: Any, name: str, value: Any) -> str:
        """Retorna o nome a ser escrito na saída."""


class ValueFilter(SerializeFilter):
    @abstractmethod
    def process(self, owner: Any, name: str, value: Any) -> Any:
        """Retorna o valor a ser serializado no lugar de ``value``."""


class SimplePropertyPreFilter(PropertyFilter):
    """
    Inclui/exclui membros por nome, opcionalmente restrito a um tipo dono.

    Com ``includes`` vazio, todos os nomes fora de ``excludes`` passam.
    """

    def __init__(
        self,
        includes: Iterable[str] = (),
        excludes: Iterable[str] = (),
        owner_type: Optional[type] = None,
    ) -> None:
        self.includes = frozenset(includes)
        self.excludes = frozenset(excludes)
        self.owner_type = owner_type

    def apply(self, owner: Any, name: str, value: Any) -> bool:
        if self.owner_type is not None and type(owner) is not self.owner_type:
            return True
        if name in self.excludes:
            return False
        return not self.includes or name in self.includes


class _CallableValueFilter(ValueFilter):
    def __init__(self, func: Callable[[Any, str, Any], Any]) -> None:
        self._func = func

    def process(self, owner: Any, name: str, value: Any) -> Any:
        return self._func(owner, name, value)


class _CallableNameFilter(NameFilter):
    def __init__(self, func: Callable[[Any, str, Any], str]) -> None:
        self._func = func

    def process(self, owner: Any, name: str, value: Any) -> str:
        return self._func(owner, name, value)


def value_filter(func: Callable[[Any, str, Any], Any]) -> ValueFilter:
    """Adapta uma função ``(owner, name, value) -> value`` em ValueFilter."""
    return _CallableValueFilter(func)


def name_filter(func: Callable[[Any, str, Any], str]) -> NameFilter:
    """Adapta uma função ``(owner, name, value) -> str`` em NameFilter."""
    return _CallableNameFilter(func)


def apply_filters(
    filters: Iterable[SerializeFilter],
    owner: Any,
    name: str,
    value: Any,
) -> Optional[tuple[str, Any]]:
    """
    Aplica a cadeia de filtros a um membro.

    Returns:
        ``(nome, valor)`` resultantes, ou None se algum PropertyFilter
        descartou o membro.
    """
    filters = tuple(filters)
    for f in filters:
        if isinstance(f, PropertyFilter) and not f.apply(owner, name, value):
            return None
    for f in filters:
        if isinstance(f, NameFilter):
            name = f.process(owner, name, value)
    for f in filters:
        if isinstance(f, ValueFilter):
            value = f.process(owner, name, value)
    return name, value
