from abc import ABC, abstractmethod
from decimal import Decimal

from client_distribution.core.domain.entities.installment_fee_entity import InstallmentFeeEntity


class InstallmentFeeRepository(ABC):
    @abstractmethod
    def list_active(self) -> list[InstallmentFeeEntity]:
        """Valores ativos ordenados por quantidade de mensalidades."""
        ...

    @abstractmethod
    def find_by_id(self, fee_id: str) -> InstallmentFeeEntity | None:
        ...

    @abstractmethod
    def create(self, quantidade: int, valor: Decimal) -> InstallmentFeeEntity:
        ...

    @abstractmethod
    def update_valor(self, fee_id: str, valor: Decimal) -> InstallmentFeeEntity | None:
        ...

    @abstractmethod
    def deactivate(self, fee_id: str) -> bool:
        ...
