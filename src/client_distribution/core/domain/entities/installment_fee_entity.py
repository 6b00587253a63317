import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from corujo_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class InstallmentFeeEntity(EntityMixin):
    id: uuid.UUID
    quantidade: int
    valor: Decimal
    ativo: bool = True
    created_at: datetime | None = None
