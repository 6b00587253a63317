from abc import ABC, abstractmethod

from corujo_core.core.application.cqrs import PagedResult
from corujo_core.core.domain.entities.user_entity import UserEntity


class UserRepository(ABC):
    @abstractmethod
    def find_by_id(self, user_id: str) -> UserEntity | None:
        """Retorna o usuário por ID."""
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> UserEntity | None:
        """Retorna o usuário com o e-mail informado, ou None."""
        ...

    @abstractmethod
    def save(self, entity: UserEntity) -> UserEntity:
        """Cria ou atualiza um usuário."""
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[UserEntity]:
        """Lista usuários paginados.

        - filtros: dicionário de filtros (ex.: {'perfil': 'ligacao', 'ativo': True})
        - page: número da página (1-based)
        - page_size: quantidade de itens por página
        """
        ...
