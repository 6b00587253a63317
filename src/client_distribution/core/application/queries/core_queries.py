from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from corujo_core.core.application.cqrs import QueryDTO


@dataclass(frozen=True)
class ListInstallmentFeesQuery(QueryDTO[dict[str, Any]]):
    pass


@dataclass(frozen=True)
class SuggestFeeQuery(QueryDTO[dict[str, Any]]):
    quantidade: int
    valor_atual: Decimal | None = None


@dataclass(frozen=True)
class GetSupervisorConfigQuery(QueryDTO[dict[str, Any]]):
    pass
