"""
api/http_utils.py
Utilitários HTTP exclusivos da camada web Flask.

Traduzem os headers da requisição Flask para o ``MediaType`` do núcleo.
"""

from __future__ import annotations

from typing import Optional

from flask import Request
from werkzeug.exceptions import NotAcceptable

from core.constants import JSON_MEDIA_TYPE
from core.eligibility import has_matching_media_type
from core.media_type import MediaType


def request_media_type(request: Request) -> Optional[MediaType]:
    """Media type do corpo recebido (Content-Type); None se ausente."""
    return MediaType.parse(request.content_type)


def response_media_type(request: Request) -> Optional[MediaType]:
    """Media type negociado para a resposta a partir do Accept.

    Sem Accept → None (elegível). Caso contrário, o primeiro
    valor aceito (q > 0) cujo subtype é JSON; se nenhum for,
    o primeiro valor aceito, que será recusado pelo portão.

    Raises:
        NotAcceptable: todos os valores do Accept têm q=0.
    """
    accept = request.accept_mimetypes
    if not accept:
        return None

    accepted = [value for value, quality in accept if quality > 0]
    if not accepted:
        raise NotAcceptable(
            "O Accept recusa todos os media types (q=0)."
        )
    for value in accepted:
        media = MediaType.parse(value)
        if has_matching_media_type(media):
            return media
    return MediaType.parse(accepted[0])


def response_mimetype(media: Optional[MediaType]) -> str:
    """Mimetype do Content-Type da resposta."""
    if media is not None and media.subtype.endswith("+json"):
        return f"{media.type}/{media.subtype}"
    return JSON_MEDIA_TYPE
