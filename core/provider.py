"""
core/provider.py
────────────────
``JsonProvider`` — o adaptador JSON plugado no pipeline de
requisição/resposta do framework hospedeiro.

Responsabilidades:
    - Responder ao framework se uma troca (tipo + media type) é tratada
      aqui (``is_readable`` / ``is_writeable``).
    - Na escrita, mesclar os overrides da requisição (``?pretty``) nas
      features configuradas e delegar ao engine.
    - Na leitura, delegar ao engine com a configuração atual.

Design Decisions
────────────────
1. Snapshot da configuração por chamada:
   ``write_to`` e ``read_from`` leem ``self._config`` UMA vez e usam só
   essa referência até o fim. Trocar a configuração (``provider.config =
   nova``) é uma simples troca de referência; chamadas em andamento
   continuam com o snapshot antigo, que é imutável.

2. Merge de features em lista local:
   O ``?pretty`` nunca altera a tupla compartilhada. A lista criada em
   ``_merge_features`` pertence apenas à chamada corrente, então duas
   requisições concorrentes (uma com ``?pretty``, outra sem) não se
   influenciam.

3. Query params como parâmetro explícito:
   O núcleo não consulta nenhum "request atual" global. Quem conhece a
   requisição (ex: ``api.json_provider``) passa ``query_params``.

4. Fail-fast:
   Nenhum ``try/except`` aqui. ``EncodeError``, ``ParseError``,
   ``TypeMismatchError`` e ``OSError`` chegam intactos ao framework, que
   decide o status HTTP.

5. Stream do framework:
   A escrita termina com ``flush()``; fechar o stream é responsabilidade
   do framework. Os headers de resposta são recebidos mas nunca alterados.
"""

from __future__ import annotations

from typing import IO, Any, Iterable, Mapping, MutableMapping, Optional, Sequence

from core.constants import PRETTY_QUERY_PARAM, UNKNOWN_SIZE
from core.eligibility import EligibilityGate
from core.engine import JsonEngine, StandardJsonEngine
from core.media_type import MediaType
from core.schemas import (
    DEFAULT_GENERATE_FEATURES,
    SerializationConfig,
    SerializerFeature,
)
from internalloggin.logger import setup_logger

logger = setup_logger("JsonProvider")


class JsonProvider:
    """
    Leitor/escritor de entidades JSON para o framework hospedeiro.

    Uso típico::

        provider = JsonProvider()                          # qualquer tipo
        provider = JsonProvider(allowed_types=[Item])      # só Item, exato

        media = MediaType.parse("application/json")
        if provider.is_writeable(Item, None, (), media):
            provider.write_to(item, Item, None, (), media, {}, stream,
                              query_params={"pretty": ""})

    Args:
        config:        Configuração inicial. Default: ``SerializationConfig()``.
        allowed_types: Allow-list de tipos aceitos por identidade exata.
                       None = qualquer tipo não nulo; vazia = nenhum.
        engine:        Engine de encode/decode. Default: ``StandardJsonEngine``.
    """

    def __init__(
        self,
        config: Optional[SerializationConfig] = None,
        allowed_types: Optional[Iterable[type]] = None,
        engine: Optional[JsonEngine] = None,
    ) -> None:
        self._config: SerializationConfig = config or SerializationConfig()
        self._gate = EligibilityGate(allowed_types)
        self._engine: JsonEngine = engine or StandardJsonEngine()
        logger.debug(
            "JsonProvider inicializado. charset=%s allow-list=%d tipo(s) engine=%s",
            self._config.charset,
            len(self._gate.allowed_types),
            type(self._engine).__name__,
        )

    # ── Configuração ──────────────────────────────────────────────────────────

    @property
    def config(self) -> SerializationConfig:
        return self._config

    @config.setter
    def config(self, config: SerializationConfig) -> None:
        """Evento de reconfiguração: troca atômica da referência."""
        self._config = config
        logger.info(
            "Configuração recarregada. charset=%s features=%s",
            config.charset,
            [f.value for f in config.serializer_features],
        )

    @property
    def gate(self) -> EligibilityGate:
        return self._gate

    @property
    def engine(self) -> JsonEngine:
        return self._engine

    # ── Elegibilidade ─────────────────────────────────────────────────────────

    def is_writeable(
        self,
        type_: Optional[type],
        generic_type: Any,
        annotations: Sequence[object],
        media_type: Optional[MediaType],
    ) -> bool:
        """O framework pergunta se ``type_`` pode ser serializado aqui."""
        eligible = self._gate.is_eligible(type_, media_type, annotations)
        if not eligible:
            logger.debug("Escrita recusada: tipo=%s media=%s", _type_name(type_), media_type)
        return eligible

    def is_readable(
        self,
        type_: Optional[type],
        generic_type: Any,
        annotations: Sequence[object],
        media_type: Optional[MediaType],
    ) -> bool:
        """O framework pergunta se ``type_`` pode ser desserializado aqui."""
        eligible = self._gate.is_eligible(type_, media_type, annotations)
        if not eligible:
            logger.debug("Leitura recusada: tipo=%s media=%s", _type_name(type_), media_type)
        return eligible

    def get_size(
        self,
        value: Any,
        type_: Optional[type],
        generic_type: Any,
        annotations: Sequence[object],
        media_type: Optional[MediaType],
    ) -> int:
        """Tamanho serializado nunca é pré-calculado: sempre ``UNKNOWN_SIZE``."""
        return UNKNOWN_SIZE

    # ── Escrita ───────────────────────────────────────────────────────────────

    def write_to(
        self,
        value: Any,
        type_: Optional[type],
        generic_type: Any,
        annotations: Sequence[object],
        media_type: Optional[MediaType],
        http_headers: MutableMapping[str, Any],
        entity_stream: IO[bytes],
        query_params: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Serializa ``value`` em ``entity_stream``.

        Args:
            http_headers:  Headers da resposta; repassados, nunca alterados.
            entity_stream: Stream binário do corpo. Fica com flush, aberto.
            query_params:  Query string da requisição; ``pretty`` (com ou
                           sem valor) ativa pretty-print só nesta resposta.

        Raises:
            EncodeError: Propagado do engine.
            OSError:     Falha de escrita no stream.
        """
        config = self._config
        features = self._merge_features(config, query_params)

        self._engine.encode(
            value,
            entity_stream,
            config.charset,
            config.serialize_config,
            config.serialize_filters,
            config.date_format,
            DEFAULT_GENERATE_FEATURES,
            features,
            max_depth=config.max_depth,
        )
        entity_stream.flush()

    @staticmethod
    def _merge_features(
        config: SerializationConfig,
        query_params: Optional[Mapping[str, Any]],
    ) -> list[SerializerFeature]:
        features = list(config.serializer_features)
        if query_params is not None and PRETTY_QUERY_PARAM in query_params:
            features.append(SerializerFeature.PRETTY_FORMAT)
        return features

    # ── Leitura ───────────────────────────────────────────────────────────────

    def read_from(
        self,
        type_: Optional[type],
        generic_type: Any,
        annotations: Sequence[object],
        media_type: Optional[MediaType],
        http_headers: Mapping[str, str],
        entity_stream: IO[bytes],
    ) -> Any:
        """
        Desserializa ``entity_stream`` num valor de ``generic_type``
        (ou ``type_``, quando não há tipo genérico).

        Raises:
            ParseError:        JSON malformado ou truncado.
            TypeMismatchError: Forma incompatível com o tipo alvo.
            OSError:           Falha de leitura no stream.
        """
        config = self._config
        target = generic_type if generic_type is not None else type_
        return self._engine.decode(
            entity_stream,
            config.charset,
            target,
            config.parser_features,
            config.parser_config,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} charset={self._config.charset!r} {self._gate!r}>"


def _type_name(type_: Optional[type]) -> str:
    return getattr(type_, "__name__", repr(type_))
