"""
core/constants.py
Constantes de domínio do JsonBridge_FLS.

Single source of truth para charset padrão, gatilhos de query string
e sentinelas do contrato com o framework hospedeiro.
"""

from __future__ import annotations

# ── Charset ──────────────────────────────────────────────────
DEFAULT_CHARSET: str = "utf-8"

# ── Query param que ativa pretty-print na resposta ───────────
PRETTY_QUERY_PARAM: str = "pretty"

# ── Tamanho serializado "desconhecido" (getSize) ─────────────
UNKNOWN_SIZE: int = -1

# ── Profundidade máxima do grafo de objetos no encode ────────
DEFAULT_MAX_DEPTH: int = 256

# ── Indentação usada por PRETTY_FORMAT ───────────────────────
PRETTY_INDENT: str = "\t"

# ── Media types ──────────────────────────────────────────────
JSON_MEDIA_TYPE: str = "application/json"
WILDCARD_MEDIA_TYPE: str = "*/*"
