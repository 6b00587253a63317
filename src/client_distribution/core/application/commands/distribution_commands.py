from dataclasses import dataclass

from corujo_core.core.application.cqrs import CommandDTO

from client_distribution.core.application.dtos.distribution_dtos import (
    AttendanceDetailsDTO,
    DistributeClientsDTO,
)
from client_distribution.core.application.dtos.session_dto import SessionContext


@dataclass(frozen=True)
class DistributeClientsCommand(CommandDTO):
    session: SessionContext
    payload: DistributeClientsDTO


@dataclass(frozen=True)
class PurgePendingDistributionsCommand(CommandDTO):
    """Manutenção: remove todas as distribuições ainda pendentes."""
    session: SessionContext | None = None


@dataclass(frozen=True)
class MarkAttendedCommand(CommandDTO):
    session: SessionContext
    distributed_client_id: str
    payload: AttendanceDetailsDTO


@dataclass(frozen=True)
class MarkNotAttendedCommand(CommandDTO):
    session: SessionContext
    distributed_client_id: str
