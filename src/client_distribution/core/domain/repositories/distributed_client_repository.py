from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime

from corujo_core.core.application.cqrs import PagedResult

from client_distribution.core.domain.entities.distributed_client_entity import (
    ClientSnapshot,
    DistributedClientEntity,
)


class DistributedClientRepository(ABC):
    @abstractmethod
    def category_lock(self, categoria: str) -> AbstractContextManager[None]:
        """
        Abre uma transação e mantém um lock exclusivo da categoria até o fim do bloco.
        Leituras e escritas feitas dentro do bloco são atômicas.
        """
        ...

    @abstractmethod
    def insert_batch(self, agent_id: str, snapshots: list[ClientSnapshot]) -> list[DistributedClientEntity]:
        """Insere todas as linhas `pendente` de uma vez (tudo ou nada)."""
        ...

    @abstractmethod
    def resolve(
        self,
        distributed_client_id: str,
        status: str,
        resolved_at: datetime,
        agent_id: str | None = None,
    ) -> DistributedClientEntity:
        """
        Transição condicional `pendente → status`.

        - `agent_id` restringe a linha ao atendente dono.
        - Levanta AlreadyResolved se a linha já saiu de `pendente`.
        - Levanta UnknownEntity se a linha não existe (ou não é do atendente).
        """
        ...

    @abstractmethod
    def find_by_id(self, distributed_client_id: str) -> DistributedClientEntity | None:
        ...

    @abstractmethod
    def purge_pending(self) -> int:
        """Remove todas as linhas `pendente`. Retorna quantas foram removidas."""
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[DistributedClientEntity]:
        ...
