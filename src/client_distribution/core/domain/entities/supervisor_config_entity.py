import uuid
from dataclasses import dataclass
from datetime import datetime

from corujo_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class SupervisorConfigEntity(EntityMixin):
    id: uuid.UUID
    mes_referente: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
