from dataclasses import dataclass
from typing import Any

from corujo_core.core.application.cqrs import PaginatedQueryDTO, QueryDTO


@dataclass(frozen=True)
class ListTicketsQuery(PaginatedQueryDTO[dict[str, Any]]):
    """Filtros: search, usuario_id, enviado, pago, data_inicio, data_fim."""
    pass


@dataclass(frozen=True)
class GetTicketQuery(QueryDTO[dict[str, Any]]):
    ticket_id: str


@dataclass(frozen=True)
class LookupPriorDataQuery(QueryDTO[dict[str, Any]]):
    """Nome/telefone do ticket mais recente da matrícula."""
    matricula: str


@dataclass(frozen=True)
class ListLigacoesQuery(PaginatedQueryDTO[dict[str, Any]]):
    """Filtros: usuario_id, status, matricula, data_inicio, data_fim."""
    pass


@dataclass(frozen=True)
class AttendanceStatsQuery(QueryDTO[dict[str, Any]]):
    """Filtros: usuario_id (opcional), data_inicio, data_fim."""
    pass
