import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from corujo_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class TicketEntity(EntityMixin):
    id: uuid.UUID
    usuario_id: uuid.UUID
    matricula: str
    nome: str
    valor: Decimal
    qtd_mensalidades: int
    telefone: str
    categoria: str
    ligacao_id: uuid.UUID | None = None
    subcategoria: str | None = None
    observacoes: str | None = None
    enviado: bool = False
    pago: bool = False
    data_envio: datetime | None = None
    data_pagamento: datetime | None = None
    created_at: datetime | None = None
