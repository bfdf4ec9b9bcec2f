"""
main.py
────────
CLI do JsonBridge_FLS — usa o mesmo JsonProvider da camada web fora do Flask.

Comandos:
    python main.py check application/ld+json
        → informa se o media type é elegível (exit 0 = sim, 2 = não).

    python main.py format [--pretty] [--sort] [--nulls] [arquivo]
        → lê JSON (arquivo ou stdin) via read_from e reescreve via write_to
          em stdout. Exit 1 em JSON malformado, charset desconhecido ou
          arquivo inexistente.
"""

from __future__ import annotations

import argparse
import sys
from typing import IO, Optional, Sequence

from core.engine import EncodeError, ParseError
from core.media_type import MediaType
from core.provider import JsonProvider
from core.schemas import ParserFeature, SerializationConfig, SerializerFeature
from internalloggin.logger import setup_logger

logger = setup_logger(__name__)


# ── Comandos ───────────────────────────────────────────────────────────────────


def _cmd_check(args: argparse.Namespace, out: IO[str]) -> int:
    provider = JsonProvider()
    media = MediaType.parse(args.media_type)
    eligible = provider.is_readable(object, None, (), media)
    out.write(f"{args.media_type}: {'elegível' if eligible else 'não elegível'}\n")
    return 0 if eligible else 2


def _cmd_format(args: argparse.Namespace, out: IO[bytes]) -> int:
    features: list[SerializerFeature] = []
    if args.sort:
        features.append(SerializerFeature.SORT_FIELD)
    if args.nulls:
        features.append(SerializerFeature.WRITE_MAP_NULL_VALUE)

    try:
        config = SerializationConfig(
            charset=args.charset,
            serializer_features=tuple(features),
            # Números são reescritos exatamente como vieram.
            parser_features=(ParserFeature.USE_BIG_DECIMAL,),
        )
    except ValueError as exc:
        logger.error("Configuração inválida: %s", exc)
        return 1
    provider = JsonProvider(config)
    query = {"pretty": ""} if args.pretty else {}

    try:
        source: IO[bytes] = open(args.file, "rb") if args.file else sys.stdin.buffer
    except OSError as exc:
        logger.error("Não foi possível abrir %s: %s", args.file, exc)
        return 1

    try:
        value = provider.read_from(object, None, (), None, {}, source)
    except ParseError as exc:
        logger.error("Entrada não é JSON válido: %s", exc)
        return 1
    finally:
        if args.file:
            source.close()

    try:
        provider.write_to(value, type(value), None, (), None, {}, out, query_params=query)
    except EncodeError as exc:
        logger.error("Falha ao reescrever JSON: %s", exc)
        return 1
    out.write(b"\n")
    out.flush()
    return 0


# ── Entrada ────────────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonbridge",
        description="Adaptador JSON: checagem de media type e formatação.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Verifica se um media type é elegível.")
    check.add_argument("media_type", help="Ex: application/json, text/xml")

    fmt = sub.add_parser("format", help="Reformata JSON de um arquivo ou stdin.")
    fmt.add_argument("file", nargs="?", help="Arquivo JSON (default: stdin).")
    fmt.add_argument("--pretty", action="store_true", help="Saída indentada.")
    fmt.add_argument("--sort", action="store_true", help="Ordena as chaves.")
    fmt.add_argument("--nulls", action="store_true", help="Mantém membros null.")
    fmt.add_argument("--charset", default="utf-8", help="Charset de entrada/saída.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "check":
        return _cmd_check(args, sys.stdout)
    return _cmd_format(args, sys.stdout.buffer)


if __name__ == "__main__":
    sys.exit(main())
