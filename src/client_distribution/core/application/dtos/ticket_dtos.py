from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class TicketDTO(BaseModel):
    matricula: str = Field(min_length=1)
    nome: str = Field(min_length=1)
    valor: Decimal = Field(gt=0, decimal_places=2)
    qtd_mensalidades: int = Field(ge=1)
    telefone: str = Field(min_length=1)
    categoria: Literal["Link", "Pix", "Outros assuntos"]
    subcategoria: Literal["endereco", "comprovantes"] | None = None
    observacoes: str | None = None
    ligacao_id: str | None = None


class UpdateTicketDTO(BaseModel):
    nome: str | None = None
    matricula: str | None = None
    telefone: str | None = None
    valor: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    qtd_mensalidades: int | None = Field(default=None, ge=1)
    observacoes: str | None = None
