from abc import ABC, abstractmethod
from datetime import datetime

from corujo_core.core.application.cqrs import PagedResult

from client_distribution.core.domain.entities.ticket_entity import TicketEntity


class TicketRepository(ABC):
    @abstractmethod
    def create(self, entity: TicketEntity) -> TicketEntity:
        ...

    @abstractmethod
    def find_by_id(self, ticket_id: str) -> TicketEntity | None:
        ...

    @abstractmethod
    def update(self, ticket_id: str, changes: dict) -> TicketEntity | None:
        ...

    @abstractmethod
    def mark_sent(self, ticket_id: str, sent_at: datetime) -> TicketEntity | None:
        ...

    @abstractmethod
    def set_paid(self, ticket_id: str, pago: bool, paid_at: datetime | None) -> TicketEntity | None:
        ...

    @abstractmethod
    def latest_by_matricula(self, matricula: str) -> TicketEntity | None:
        ...

    @abstractmethod
    def count_by_agent(self, filtros: dict) -> dict[str, int]:
        """Tickets por atendente: {usuario_id: total}."""
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[TicketEntity]:
        ...
