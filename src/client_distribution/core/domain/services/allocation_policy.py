"""
Políticas de alocação de clientes.

A política ativa é escolhida pela configuração `ALLOCATION_POLICY`:

- `pool_consumption` → consome o pool local gravando `clientes_distribuidos`
  sob o lock da categoria (nunca distribui o mesmo cliente duas vezes);
- `delegated_quota`  → apenas repassa o pedido ao fluxo externo da planilha
  do atendente; nada é gravado localmente.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import structlog
from corujo_core.core.domain.entities.user_entity import UserEntity

from client_distribution.core.application.dtos.notification_dtos import DistributionRequestDTO
from client_distribution.core.domain.entities.distributed_client_entity import (
    ClientSnapshot,
    DistributedClientEntity,
)
from client_distribution.core.domain.events.exceptions import NotificationError
from client_distribution.core.domain.exceptions import (
    InsufficientPool,
    InvalidRequest,
    UpstreamUnavailable,
)
from client_distribution.core.domain.repositories.client_repository import ClientRepository
from client_distribution.core.domain.repositories.distributed_client_repository import (
    DistributedClientRepository,
)
from client_distribution.core.domain.repositories.supervisor_config_repository import (
    SupervisorConfigRepository,
)

logger = structlog.get_logger(__name__)

POOL_CONSUMPTION = "pool_consumption"
DELEGATED_QUOTA = "delegated_quota"


@dataclass(frozen=True)
class AllocationResult:
    policy: str
    categoria: str
    quantidade: int
    distributed: tuple[DistributedClientEntity, ...] = field(default_factory=tuple)
    aba_destino: str | None = None

    @property
    def delegated(self) -> bool:
        return self.policy == DELEGATED_QUOTA


class AllocationPolicy(ABC):
    name: str

    @abstractmethod
    def availability(self, categoria: str) -> int:
        """Quantos clientes da categoria podem ser distribuídos agora."""
        ...

    @abstractmethod
    def allocate(
        self,
        agent: UserEntity,
        categoria: str,
        quantidade: int,
        aba_destino: str | None = None,
    ) -> AllocationResult:
        ...


class PoolConsumption(AllocationPolicy):
    name = POOL_CONSUMPTION

    def __init__(self, client_repo: ClientRepository, distributed_repo: DistributedClientRepository):
        self.client_repo = client_repo
        self.distributed_repo = distributed_repo

    def availability(self, categoria: str) -> int:
        return self.client_repo.count_available(categoria)

    def allocate(
        self,
        agent: UserEntity,
        categoria: str,
        quantidade: int,
        aba_destino: str | None = None,
    ) -> AllocationResult:
        with self.distributed_repo.category_lock(categoria):
            candidates = self.client_repo.list_available(categoria, quantidade)
            if len(candidates) < quantidade:
                raise InsufficientPool(categoria, quantidade, len(candidates))
            rows = self.distributed_repo.insert_batch(
                str(agent.id), [ClientSnapshot.of(c) for c in candidates]
            )

        logger.info(
            "distribution.allocated",
            policy=self.name,
            agent_id=str(agent.id),
            categoria=categoria,
            quantidade=len(rows),
        )
        return AllocationResult(
            policy=self.name,
            categoria=categoria,
            quantidade=len(rows),
            distributed=tuple(rows),
        )


class DelegatedQuota(AllocationPolicy):
    name = DELEGATED_QUOTA

    def __init__(self, client_repo: ClientRepository, config_repo: SupervisorConfigRepository, notifier):
        self.client_repo = client_repo
        self.config_repo = config_repo
        self.notifier = notifier

    def availability(self, categoria: str) -> int:
        return self.client_repo.count_active(categoria)

    def _resolve_target(self, aba_destino: str | None) -> str:
        target = (aba_destino or "").strip() or self.config_repo.get().mes_referente.strip()
        if not target:
            raise InvalidRequest("Informe a aba de destino ou configure o mês referente da supervisão.")
        return target

    def allocate(
        self,
        agent: UserEntity,
        categoria: str,
        quantidade: int,
        aba_destino: str | None = None,
    ) -> AllocationResult:
        if not agent.id_planilha:
            raise InvalidRequest("O usuário selecionado não possui ID da planilha configurado.")
        target = self._resolve_target(aba_destino)

        request = DistributionRequestDTO(
            usuario_id=agent.id_planilha,
            categoria=categoria,
            aba_destino=target,
            quantidade=quantidade,
        )
        try:
            self.notifier.send(request)
        except NotificationError as exc:
            logger.error(
                "distribution.delegation_failed",
                agent_id=str(agent.id),
                categoria=categoria,
                error=str(exc),
            )
            raise UpstreamUnavailable("Erro ao enviar distribuição de clientes. Tente novamente.") from exc

        logger.info(
            "distribution.delegated",
            agent_id=str(agent.id),
            categoria=categoria,
            quantidade=quantidade,
            aba_destino=target,
        )
        return AllocationResult(
            policy=self.name,
            categoria=categoria,
            quantidade=quantidade,
            aba_destino=target,
        )


def build_allocation_policy(
    name: str,
    client_repo: ClientRepository,
    distributed_repo: DistributedClientRepository,
    config_repo: SupervisorConfigRepository,
    notifier,
) -> AllocationPolicy:
    """Instancia a política pelo nome configurado (falha cedo se o nome for inválido)."""
    if name == POOL_CONSUMPTION:
        return PoolConsumption(client_repo, distributed_repo)
    if name == DELEGATED_QUOTA:
        return DelegatedQuota(client_repo, config_repo, notifier)
    raise ValueError(f"ALLOCATION_POLICY desconhecida: {name!r}")
