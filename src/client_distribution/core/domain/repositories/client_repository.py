from abc import ABC, abstractmethod

from corujo_core.core.application.cqrs import PagedResult

from client_distribution.core.domain.entities.client_entity import ClientEntity


class ClientRepository(ABC):
    @abstractmethod
    def find_by_id(self, client_id: str) -> ClientEntity | None:
        ...

    @abstractmethod
    def count_active(self, categoria: str) -> int:
        """Clientes ativos da categoria, independente de distribuições."""
        ...

    @abstractmethod
    def count_available(self, categoria: str) -> int:
        """Clientes ativos da categoria ainda não referenciados por nenhuma distribuição."""
        ...

    @abstractmethod
    def list_available(self, categoria: str, limit: int) -> list[ClientEntity]:
        """Até `limit` clientes disponíveis, em ordem estável (matrícula, id)."""
        ...

    @abstractmethod
    def set_active(self, client_id: str, ativo: bool) -> ClientEntity | None:
        ...

    @abstractmethod
    def import_new(self, rows: list[dict]) -> tuple[int, list[str]]:
        """Cria os clientes de matrícula inédita. Retorna (criados, matrículas ignoradas)."""
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ClientEntity]:
        ...
