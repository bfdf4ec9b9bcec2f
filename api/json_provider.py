"""
api/json_provider.py
Integração do JsonProvider com o ``app.json`` do Flask.

Com ``app.json = BridgeJSONProvider(app, provider)``, ``jsonify``,
retornos ``dict``/``list`` das views e ``request.get_json()`` passam
pelo mesmo engine e configuração das entidades negociadas.

Regras:
    - ``?pretty`` só vale em ``response()`` (corpo HTTP); ``dumps()``
      também é usado pelo Flask para a sessão e ignora a query string.
    - O portão de elegibilidade não é aplicado aqui: ``app.json`` serve
      ao próprio Flask (erros, sessão). Entidades de domínio passam por
      ``api.negotiation``.
"""

from __future__ import annotations

import io
import typing as t

from flask import Flask, Response, has_request_context, request
from flask.json.provider import JSONProvider

from core.constants import JSON_MEDIA_TYPE
from core.media_type import MediaType
from core.provider import JsonProvider

_JSON_MEDIA = MediaType.parse(JSON_MEDIA_TYPE)


def current_query_params() -> t.Optional[t.Mapping[str, t.Any]]:
    """Query string da requisição Flask ativa, ou None fora de request."""
    if has_request_context():
        return request.args
    return None


class BridgeJSONProvider(JSONProvider):
    """``flask.json.provider.JSONProvider`` que delega ao JsonProvider."""

    mimetype = JSON_MEDIA_TYPE

    def __init__(self, app: Flask, provider: JsonProvider) -> None:
        super().__init__(app)
        self.provider = provider

    def _encode(
        self,
        obj: t.Any,
        query_params: t.Optional[t.Mapping[str, t.Any]] = None,
    ) -> bytes:
        buffer = io.BytesIO()
        self.provider.write_to(
            obj,
            type(obj),
            None,
            (),
            _JSON_MEDIA,
            {},
            buffer,
            query_params=query_params,
        )
        return buffer.getvalue()

    def dumps(self, obj: t.Any, **kwargs: t.Any) -> str:
        # kwargs do json.dumps são ignorados: o formato vem do SerializationConfig.
        return self._encode(obj).decode(self.provider.config.charset)

    def loads(self, s: str | bytes, **kwargs: t.Any) -> t.Any:
        if isinstance(s, str):
            s = s.encode(self.provider.config.charset)
        return self.provider.read_from(
            object, None, (), _JSON_MEDIA, {}, io.BytesIO(s)
        )

    def response(self, *args: t.Any, **kwargs: t.Any) -> Response:
        obj = self._prepare_response_obj(args, kwargs)
        body = self._encode(obj, query_params=current_query_params())
        return self._app.response_class(body, mimetype=self.mimetype)
