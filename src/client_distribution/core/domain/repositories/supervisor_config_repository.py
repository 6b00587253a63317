from abc import ABC, abstractmethod

from client_distribution.core.domain.entities.supervisor_config_entity import SupervisorConfigEntity


class SupervisorConfigRepository(ABC):
    @abstractmethod
    def get(self) -> SupervisorConfigEntity:
        """Retorna a configuração única, criando-a vazia se ainda não existir."""
        ...

    @abstractmethod
    def update_mes_referente(self, mes_referente: str) -> SupervisorConfigEntity:
        ...
