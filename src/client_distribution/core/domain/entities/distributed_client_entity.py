from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from corujo_core.core.domain.entities._base import EntityMixin

from client_distribution.core.domain.entities.client_entity import ClientEntity

PENDENTE = "pendente"
ATENDIDO = "atendido"
NAO_ATENDIDO = "nao_atendido"
TERMINAL_STATUSES: frozenset[str] = frozenset({ATENDIDO, NAO_ATENDIDO})


@dataclass(frozen=True, slots=True)
class ClientSnapshot:
    """Cópia pontual do cliente no momento da distribuição (não é FK)."""
    matricula: str
    nome: str
    telefone: str
    categoria: str
    cliente_origem_id: uuid.UUID | None = None

    @classmethod
    def of(cls, client: ClientEntity) -> ClientSnapshot:
        return cls(
            matricula=client.matricula,
            nome=client.nome,
            telefone=client.telefone,
            categoria=client.categoria,
            cliente_origem_id=client.id,
        )


@dataclass(slots=True)
class DistributedClientEntity(EntityMixin):
    id: uuid.UUID
    snapshot: ClientSnapshot
    usuario_id: uuid.UUID | None = None
    status: str = PENDENTE
    data_distribuicao: datetime | None = None
    data_atendimento: datetime | None = None

    # atalhos do snapshot ---------------------------------------------------
    @property
    def matricula(self) -> str:
        return self.snapshot.matricula

    @property
    def nome(self) -> str:
        return self.snapshot.nome

    @property
    def telefone(self) -> str:
        return self.snapshot.telefone

    @property
    def categoria(self) -> str:
        return self.snapshot.categoria

    @property
    def is_pending(self) -> bool:
        return self.status == PENDENTE

    @classmethod
    def from_model(cls, model: Any) -> DistributedClientEntity:
        return cls(
            id=model.id,
            snapshot=ClientSnapshot(
                matricula=model.matricula,
                nome=model.nome,
                telefone=model.telefone,
                categoria=model.categoria,
                cliente_origem_id=model.cliente_origem_id,
            ),
            usuario_id=model.usuario_id,
            status=model.status,
            data_distribuicao=model.data_distribuicao,
            data_atendimento=model.data_atendimento,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "usuario_id": str(self.usuario_id) if self.usuario_id else None,
            "matricula": self.matricula,
            "nome": self.nome,
            "telefone": self.telefone,
            "categoria": self.categoria,
            "status": self.status,
            "data_distribuicao": self.data_distribuicao.isoformat() if self.data_distribuicao else None,
            "data_atendimento": self.data_atendimento.isoformat() if self.data_atendimento else None,
        }
