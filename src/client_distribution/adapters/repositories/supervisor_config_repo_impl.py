from client_distribution.adapters.repositories.db_errors import translate_db_errors
from client_distribution.core.domain.entities.supervisor_config_entity import SupervisorConfigEntity
from client_distribution.core.domain.repositories.supervisor_config_repository import (
    SupervisorConfigRepository,
)
from plugins.django_interface.models import SupervisorConfig as SupervisorConfigModel


class SupervisorConfigRepoImpl(SupervisorConfigRepository):
    """Configuração única da supervisão (sempre a linha mais antiga)."""

    def _current(self) -> SupervisorConfigModel:
        m = SupervisorConfigModel.objects.order_by("created_at").first()
        return m or SupervisorConfigModel.objects.create()

    @translate_db_errors
    def get(self) -> SupervisorConfigEntity:
        return SupervisorConfigEntity.from_model(self._current())

    @translate_db_errors
    def update_mes_referente(self, mes_referente: str) -> SupervisorConfigEntity:
        m = self._current()
        m.mes_referente = mes_referente
        m.save(update_fields=["mes_referente", "updated_at"])
        return SupervisorConfigEntity.from_model(m)
