from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from corujo_core.core.domain.entities._base import EntityMixin

Perfil = Literal["ligacao", "whatsapp", "supervisao"]

AGENT_PROFILES: frozenset[str] = frozenset({"ligacao", "whatsapp"})


@dataclass(slots=True)
class UserEntity(EntityMixin):
    id: uuid.UUID
    email: str
    nome: str
    perfil: Perfil = "ligacao"
    password_hash: str | None = None
    id_planilha: str | None = None
    ativo: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if self.perfil not in ("ligacao", "whatsapp", "supervisao"):
            raise ValueError(f"Perfil inválido: {self.perfil}")

    @property
    def is_agent(self) -> bool:
        return self.perfil in AGENT_PROFILES

    @property
    def is_supervisor(self) -> bool:
        return self.perfil == "supervisao"

    @property
    def is_authenticated(self) -> bool:
        return self.ativo
