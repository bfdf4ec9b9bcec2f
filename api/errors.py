"""
api/errors.py
Mapeamento das exceções do engine para respostas HTTP.

O núcleo não se recupera de nada; aqui o framework decide o status:
    ParseError        → 400 Bad Request
    TypeMismatchError → 422 Unprocessable Entity
    EncodeError       → 500 Internal Server Error
    406 / 415         → corpo JSON em vez da página HTML padrão
"""

from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from core.engine import EncodeError, ParseError, TypeMismatchError
from internalloggin.logger import setup_logger

logger = setup_logger("JsonBridgeAPI")


def _error_body(error: str, message: str, **extra):
    body = {"error": error, "message": message}
    body.update(extra)
    return jsonify(body)


def register_error_handlers(app: Flask) -> None:
    """Registra os handlers de erro do JsonBridge no app."""

    @app.errorhandler(TypeMismatchError)
    def handle_type_mismatch(exc: TypeMismatchError):
        logger.warning(
            "422 em %s %s: %s", request.method, request.path, exc
        )
        details = [
            {
                "loc": list(err.get("loc", ())),
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors
        ]
        return (
            _error_body(
                "unprocessable_entity", str(exc), details=details
            ),
            422,
        )

    @app.errorhandler(ParseError)
    def handle_parse_error(exc: ParseError):
        logger.warning(
            "400 em %s %s: %s", request.method, request.path, exc
        )
        return (
            _error_body(
                "malformed_entity", str(exc), position=exc.position
            ),
            400,
        )

    @app.errorhandler(EncodeError)
    def handle_encode_error(exc: EncodeError):
        logger.error(
            "500 em %s %s: %s", request.method, request.path, exc
        )
        return (
            _error_body("encode_failure", "Falha ao serializar a resposta."),
            500,
        )

    @app.errorhandler(406)
    @app.errorhandler(415)
    def handle_negotiation_error(exc: HTTPException):
        logger.debug(
            "%d em %s %s: %s",
            exc.code, request.method, request.path, exc.description,
        )
        return (
            _error_body(
                exc.name.lower().replace(" ", "_"),
                exc.description or exc.name,
            ),
            exc.code,
        )
