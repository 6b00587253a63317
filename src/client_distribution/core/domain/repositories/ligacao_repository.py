from abc import ABC, abstractmethod
from datetime import date

from corujo_core.core.application.cqrs import PagedResult

from client_distribution.core.domain.entities.ligacao_entity import LigacaoEntity


class LigacaoRepository(ABC):
    @abstractmethod
    def create(self, entity: LigacaoEntity) -> LigacaoEntity:
        ...

    @abstractmethod
    def find_by_id(self, ligacao_id: str) -> LigacaoEntity | None:
        ...

    @abstractmethod
    def link_ticket(self, ligacao_id: str, ticket_id: str) -> bool:
        """Marca `ticket_gerado` uma única vez. False se já havia ticket vinculado."""
        ...

    @abstractmethod
    def stats_by_agent(self, filtros: dict, today: date) -> list[dict]:
        """
        Contagens agregadas por atendente:
        usuario_id, usuario_nome, total, atendidas, nao_atendidas, hoje.
        """
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[LigacaoEntity]:
        ...
