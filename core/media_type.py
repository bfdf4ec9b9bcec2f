"""
core/media_type.py
──────────────────
Representação mínima de um media type negociado (``type/subtype; params``).

Design Decisions
────────────────
1. Dataclass congelada:
   O media type é lido por requisição e nunca alterado pelo núcleo.
   ``frozen=True`` garante isso e permite usá-lo como chave de dicionário.

2. Caixa do subtype preservada:
   A regra de elegibilidade mistura comparações case-insensitive com
   checagens de sufixo case-sensitive. Normalizar a caixa aqui mudaria o
   resultado da regra, então ``parse()`` devolve o subtype exatamente como
   recebido (apenas sem espaços nas bordas).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class MediaType:
    """Media type negociado, ex: ``application/ld+json; charset=utf-8``."""

    type: str
    subtype: str
    params: dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["MediaType"]:
        """
        Converte o texto de um header (Content-Type/Accept) em MediaType.

        Retorna None para valor ausente ou vazio. Um valor sem ``/`` é
        tratado como ``<valor>/*``.
        """
        if value is None:
            return None
        main, _, raw_params = value.partition(";")
        main = main.strip()
        if not main:
            return None

        type_, _, subtype = main.partition("/")
        params: dict[str, str] = {}
        for chunk in raw_params.split(";"):
            key, sep, val = chunk.partition("=")
            if sep and key.strip():
                params[key.strip().lower()] = val.strip().strip('"')

        return cls(type=type_.strip(), subtype=subtype.strip() or "*", params=params)

    @property
    def is_wildcard(self) -> bool:
        """True para ``*/*``."""
        return self.type == "*" and self.subtype == "*"

    @property
    def charset(self) -> Optional[str]:
        return self.params.get("charset")

    def __str__(self) -> str:
        base = f"{self.type}/{self.subtype}"
        extras = "".join(f"; {k}={v}" for k, v in self.params.items())
        return base + extras
