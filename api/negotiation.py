"""
api/negotiation.py
Leitura/escrita de entidades com negociação de conteúdo.

É o ponto onde o Flask faz o papel de framework hospedeiro:
pergunta ao portão (``is_readable``/``is_writeable``) e, se
aceito, delega ao JsonProvider passando os streams e a query
string da requisição atual.

    - Leitura recusada → 415 Unsupported Media Type.
    - Escrita recusada → 406 Not Acceptable.
"""

from __future__ import annotations

import io
from typing import Any, Optional

from flask import Response, abort, current_app, request

from api.http_utils import (
    request_media_type,
    response_media_type,
    response_mimetype,
)
from core.provider import JsonProvider

EXTENSION_KEY = "jsonbridge"


def current_json_provider() -> JsonProvider:
    """JsonProvider registrado no app ativo por ``create_app``."""
    return current_app.extensions[EXTENSION_KEY]


def read_entity(
    target_type: type,
    generic_type: Any = None,
) -> Any:
    """Lê o corpo da requisição como ``generic_type`` (ou ``target_type``)."""
    provider = current_json_provider()
    media = request_media_type(request)

    if not provider.is_readable(target_type, generic_type, (), media):
        abort(
            415,
            description=(
                f"Media type '{media}' ou tipo "
                f"'{target_type.__name__}' não suportado."
            ),
        )

    return provider.read_from(
        target_type,
        generic_type,
        (),
        media,
        request.headers,
        request.stream,
    )


def write_entity(
    value: Any,
    status: int = 200,
    type_: Optional[type] = None,
    generic_type: Any = None,
) -> Response:
    """Serializa ``value`` numa resposta negociada pelo Accept."""
    provider = current_json_provider()
    media = response_media_type(request)
    type_ = type_ or type(value)

    if not provider.is_writeable(type_, generic_type, (), media):
        abort(
            406,
            description=(
                "Nenhum media type JSON aceitável no Accept "
                f"para '{type_.__name__}'."
            ),
        )

    response = current_app.response_class(
        status=status, mimetype=response_mimetype(media)
    )
    buffer = io.BytesIO()
    provider.write_to(
        value,
        type_,
        generic_type,
        (),
        media,
        response.headers,
        buffer,
        query_params=request.args,
    )
    response.set_data(buffer.getvalue())
    return response
