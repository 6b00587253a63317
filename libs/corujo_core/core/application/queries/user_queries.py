from dataclasses import dataclass
from typing import Any

from corujo_core.core.application.cqrs import PaginatedQueryDTO, QueryDTO


@dataclass(frozen=True)
class ListUsersQuery(PaginatedQueryDTO[dict[str, Any]]):
    """Lista usuários (supervisão) com paginação."""
    pass


@dataclass(frozen=True)
class GetUserQuery(QueryDTO[dict[str, Any]]):
    """Recupera um usuário pelo ID."""
    user_id: str
