import uuid
from dataclasses import dataclass
from datetime import datetime

from corujo_core.core.domain.entities._base import EntityMixin

CATEGORIAS: tuple[str, ...] = ("NR", "1", "2", "3", "4", "5", "6")


@dataclass(slots=True)
class ClientEntity(EntityMixin):
    id: uuid.UUID
    matricula: str
    nome: str
    telefone: str
    categoria: str
    ativo: bool = True
    created_at: datetime | None = None
