import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from corujo_core.core.domain.entities._base import EntityMixin

ATENDEU = "atendeu"
NAO_ATENDEU = "nao_atendeu"


@dataclass(slots=True)
class LigacaoEntity(EntityMixin):
    id: uuid.UUID
    usuario_id: uuid.UUID
    matricula: str
    nome: str
    telefone: str
    status: str
    cliente_id: uuid.UUID | None = None

    # --- detalhes do atendimento (somente quando atendeu) --- #
    qtd_mensalidades: int | None = None
    valor: Decimal | None = None
    forma_pagamento: str | None = None
    retorno: str | None = None
    data_retorno: date | None = None
    observacoes: str | None = None

    ticket_gerado: bool = False
    ticket_id: uuid.UUID | None = None
    created_at: datetime | None = None
