"""
api/blueprints/entities.py
Blueprint de entidades negociadas pelo JsonProvider.

Endpoints:
    POST /entities/echo   — devolve o JSON recebido (qualquer forma)
    POST /entities/items  — valida uma lista de Item e devolve o lote
    GET  /entities/sample — Item de exemplo (datas, Decimal, nulos)

Todas as rotas aceitam ``?pretty`` para saída indentada.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from flask import Blueprint
from pydantic import BaseModel, ConfigDict, Field

from api.negotiation import read_entity, write_entity

entities_bp = Blueprint("entities", __name__)


class Item(BaseModel):
    """Entidade de exemplo trafegada pelas rotas de /entities."""

    model_config = ConfigDict(str_strip_whitespace=True)

    sku: str = Field(..., min_length=1)
    name: str
    price: Decimal = Field(..., ge=0)
    tags: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


# ── Rotas ────────────────────────────────────────────


@entities_bp.post("/echo")
def echo():
    """Round-trip: lê o corpo e o devolve serializado."""
    return write_entity(read_entity(object))


@entities_bp.post("/items")
def create_items():
    """Valida ``list[Item]``; corpo com forma errada → 422."""
    items = read_entity(list, list[Item])
    return write_entity(
        {"items": items, "total": len(items)}, status=201
    )


@entities_bp.get("/sample")
def sample():
    """Item fixo para inspecionar o formato de saída."""
    item = Item(
        sku="SKU-001",
        name="Cabo de rede",
        price=Decimal("19.90"),
        tags=["cat6", "3m"],
        created_at=datetime(2024, 1, 15, 12, 30, tzinfo=timezone.utc),
    )
    return write_entity(item)
