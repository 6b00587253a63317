from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class DistributeClientsDTO(BaseModel):
    usuario_id: str
    categoria: str
    quantidade: int
    aba_destino: str | None = None


class AttendanceDetailsDTO(BaseModel):
    """Dados do formulário de atendimento (cliente atendeu)."""
    qtd_mensalidades: int = Field(ge=1)
    valor: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    telefone: str | None = None
    forma_pagamento: Literal["pix", "link", "unidade"]
    retorno: Literal["1x", "2x", "3x", "4+"]
    data_retorno: date | None = None
    observacoes: str | None = None
    matricula: str | None = None
    nome: str | None = None
