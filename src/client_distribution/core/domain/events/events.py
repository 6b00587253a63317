from __future__ import annotations

import uuid
from dataclasses import dataclass

from corujo_core.core.domain.events.events import DomainEvent


# ╭──────────────────────────────────────────────╮
# │ 1. Distribuição                              │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class ClientsDistributedEvent(DomainEvent):
    agent_id: uuid.UUID
    categoria: str
    quantidade: int
    distributed_ids: tuple[uuid.UUID, ...]
    policy: str

@dataclass(frozen=True)
class DistributionDelegatedEvent(DomainEvent):
    agent_id: uuid.UUID
    categoria: str
    quantidade: int
    aba_destino: str

@dataclass(frozen=True)
class PendingDistributionsPurgedEvent(DomainEvent):
    removed: int
    requested_by: uuid.UUID | None

# ╭──────────────────────────────────────────────╮
# │ 2. Atendimento                               │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class AttendanceResolvedEvent(DomainEvent):
    distributed_client_id: uuid.UUID
    ligacao_id: uuid.UUID
    status: str
    agent_id: uuid.UUID

# ╭──────────────────────────────────────────────╮
# │ 3. Tickets                                   │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class TicketCreatedEvent(DomainEvent):
    ticket_id: uuid.UUID
    agent_id: uuid.UUID
    ligacao_id: uuid.UUID | None

@dataclass(frozen=True)
class TicketNotificationFailedEvent(DomainEvent):
    """Canal de erro do notificador best-effort (nunca desfaz o ticket)."""
    ticket_id: uuid.UUID
    channel: str
    error: str
    permanent: bool
