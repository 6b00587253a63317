from __future__ import annotations

import uuid
from dataclasses import dataclass

SUPERVISOR_PROFILE = "supervisao"


@dataclass(frozen=True)
class SessionContext:
    """Quem está agindo. Montado pela camada HTTP a partir do usuário autenticado."""
    agent_id: uuid.UUID
    perfil: str
    nome: str = ""

    @property
    def is_supervisor(self) -> bool:
        return self.perfil == SUPERVISOR_PROFILE

    @property
    def scope_agent_id(self) -> str | None:
        """Restrição por dono: None para supervisão, o próprio id para atendentes."""
        return None if self.is_supervisor else str(self.agent_id)

    @classmethod
    def from_user(cls, user) -> SessionContext:
        return cls(
            agent_id=uuid.UUID(str(user.id)),
            perfil=user.perfil,
            nome=getattr(user, "nome", "") or "",
        )
