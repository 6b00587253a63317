from dataclasses import dataclass
from typing import Any

from corujo_core.core.application.cqrs import PaginatedQueryDTO, QueryDTO


@dataclass(frozen=True)
class GetAvailabilityQuery(QueryDTO[dict[str, Any]]):
    """Disponibilidade de uma categoria segundo a política ativa."""
    categoria: str


@dataclass(frozen=True)
class AvailabilityOverviewQuery(QueryDTO[dict[str, Any]]):
    """Ativos e disponíveis para todas as categorias."""
    pass


@dataclass(frozen=True)
class ListDistributedClientsQuery(PaginatedQueryDTO[dict[str, Any]]):
    """Filtros: usuario_id, status, categoria."""
    pass


@dataclass(frozen=True)
class ListClientsQuery(PaginatedQueryDTO[dict[str, Any]]):
    """Filtros: categoria, ativo, matricula."""
    pass
