"""
core/eligibility.py
───────────────────
Portão de elegibilidade: decide se uma troca HTTP (tipo candidato + media
type negociado) é tratada por este adaptador.

Design Decisions
────────────────
1. Allow-list por identidade estrita:
   Os tipos permitidos ficam num ``frozenset``; a checagem é um simples
   ``in``, que usa hash/igualdade do próprio objeto ``type``. Nenhuma
   consulta à hierarquia (MRO) é feita: uma subclasse de um tipo permitido
   NÃO é elegível.

2. Regra de media type como lista ordenada de predicados:
   Algumas comparações ignoram caixa (``json``, ``x-www-form-urlencoded``)
   e outras não (sufixos ``+json`` e ``x-www-form-urlencoded``, além de
   ``javascript``, ``x-javascript`` e ``x-json``). A lista abaixo reproduz
   cada predicado literalmente; não "simplificar".

3. Media type ausente ou ``*/*`` é elegível:
   A ausência de media type não é motivo de rejeição.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from core.media_type import MediaType

_SubtypeRule = Callable[[str], bool]

# Ordem importa apenas para leitura; o resultado é um OR dos predicados.
_SUBTYPE_RULES: tuple[_SubtypeRule, ...] = (
    lambda s: s.lower() == "json",
    lambda s: s.endswith("+json"),
    lambda s: s == "javascript",
    lambda s: s == "x-javascript",
    lambda s: s == "x-json",
    lambda s: s.lower() == "x-www-form-urlencoded",
    # Sufixo case-sensitive: "CUSTOM-X-WWW-FORM-URLENCODED" não casa aqui.
    lambda s: s.endswith("x-www-form-urlencoded"),
)


def has_matching_media_type(media_type: Optional[MediaType]) -> bool:
    """True se o subtype do media type é um dos formatos JSON aceitos."""
    if media_type is None or media_type.is_wildcard:
        return True
    subtype = media_type.subtype
    return any(rule(subtype) for rule in _SUBTYPE_RULES)


class EligibilityGate:
    """
    Responde, para leitura e escrita, "esta troca é tratada aqui?".

    Uso típico::

        gate = EligibilityGate()                    # aceita qualquer tipo
        gate = EligibilityGate(allowed_types=[Item])  # só Item, exatamente

        gate.is_eligible(Item, MediaType.parse("application/json"))  # True
    """

    def __init__(self, allowed_types: Optional[Iterable[type]] = None) -> None:
        types: tuple[type, ...] = tuple(allowed_types) if allowed_types is not None else ()
        self._allowed_types: tuple[type, ...] = types
        # None = sem allow-list; uma allow-list vazia não aceita nenhum tipo.
        self._allowed: Optional[frozenset[type]] = (
            frozenset(types) if allowed_types is not None else None
        )

    @property
    def allowed_types(self) -> tuple[type, ...]:
        return self._allowed_types

    @property
    def restricted(self) -> bool:
        """True quando uma allow-list (mesmo vazia) foi configurada."""
        return self._allowed is not None

    def is_valid_type(
        self,
        candidate_type: Optional[type],
        annotations: Sequence[object] = (),
    ) -> bool:
        """Regra de tipo: não-nulo e, havendo allow-list, membro exato dela."""
        if candidate_type is None:
            return False
        if self._allowed is None:
            return True
        return candidate_type in self._allowed

    def is_eligible(
        self,
        candidate_type: Optional[type],
        media_type: Optional[MediaType],
        annotations: Sequence[object] = (),
    ) -> bool:
        """AND lógico entre a regra de media type e a regra de tipo."""
        if not has_matching_media_type(media_type):
            return False
        return self.is_valid_type(candidate_type, annotations)

    def __repr__(self) -> str:
        if self._allowed is None:
            return "<EligibilityGate allowed=*>"
        names = ", ".join(t.__name__ for t in self._allowed_types)
        return f"<EligibilityGate allowed=[{names}]>"
