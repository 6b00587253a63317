from __future__ import annotations

import time

import structlog
from corujo_core.adapters.utils.phone_utils import normalize_phone
from corujo_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler
from corujo_core.core.domain.repositories.user_repository import UserRepository
from corujo_core.core.domain.services.event_dispatcher import EventDispatcher

from client_distribution.adapters.observability.metrics import (
    DISTRIBUTED_CLIENTS,
    DISTRIBUTION_COUNT,
    DISTRIBUTION_DURATION,
)
from client_distribution.core.application.commands.core_commands import (
    ImportClientsCommand,
    SetClientActiveCommand,
)
from client_distribution.core.application.commands.distribution_commands import (
    DistributeClientsCommand,
    PurgePendingDistributionsCommand,
)
from client_distribution.core.application.queries.distribution_queries import (
    AvailabilityOverviewQuery,
    GetAvailabilityQuery,
    ListClientsQuery,
    ListDistributedClientsQuery,
)
from client_distribution.core.domain.entities.client_entity import CATEGORIAS, ClientEntity
from client_distribution.core.domain.entities.distributed_client_entity import (
    DistributedClientEntity,
)
from client_distribution.core.domain.events.events import (
    ClientsDistributedEvent,
    DistributionDelegatedEvent,
    PendingDistributionsPurgedEvent,
)
from client_distribution.core.domain.exceptions import (
    DistributionError,
    InvalidQuantity,
    InvalidRequest,
    UnknownAgent,
    UnknownEntity,
)
from client_distribution.core.domain.repositories.client_repository import ClientRepository
from client_distribution.core.domain.repositories.distributed_client_repository import (
    DistributedClientRepository,
)
from client_distribution.core.domain.services.allocation_policy import (
    AllocationPolicy,
    AllocationResult,
)

logger = structlog.get_logger(__name__)


def ensure_categoria(categoria: str) -> str:
    if categoria not in CATEGORIAS:
        raise UnknownEntity("Categoria", categoria)
    return categoria


# ——— DISTRIBUIÇÃO ——————————————————————————————————————————

class DistributeClientsHandler(CommandHandler[DistributeClientsCommand]):
    def __init__(
        self,
        policy: AllocationPolicy,
        user_repo: UserRepository,
        dispatcher: EventDispatcher,
        max_quantity: int,
    ):
        self.policy = policy
        self.user_repo = user_repo
        self.dispatcher = dispatcher
        self.max_quantity = max_quantity

    def handle(self, command: DistributeClientsCommand) -> AllocationResult:
        p = command.payload
        if p.quantidade <= 0 or p.quantidade > self.max_quantity:
            raise InvalidQuantity(p.quantidade, self.max_quantity)
        categoria = ensure_categoria(p.categoria)

        agent = self.user_repo.find_by_id(p.usuario_id)
        if agent is None or not agent.ativo or not agent.is_agent:
            raise UnknownAgent(p.usuario_id)

        start = time.perf_counter()
        try:
            result = self.policy.allocate(agent, categoria, p.quantidade, p.aba_destino)
        except DistributionError as exc:
            DISTRIBUTION_COUNT.labels(self.policy.name, categoria, exc.code).inc()
            logger.info(
                "distribution.rejected",
                policy=self.policy.name,
                categoria=categoria,
                quantidade=p.quantidade,
                reason=exc.code,
                requested_by=str(command.session.agent_id),
            )
            raise
        finally:
            DISTRIBUTION_DURATION.labels(self.policy.name).observe(time.perf_counter() - start)

        DISTRIBUTION_COUNT.labels(self.policy.name, categoria, "ok").inc()
        DISTRIBUTED_CLIENTS.labels(self.policy.name, categoria).inc(len(result.distributed))

        if result.delegated:
            event = DistributionDelegatedEvent(
                agent_id=agent.id,
                categoria=categoria,
                quantidade=result.quantidade,
                aba_destino=result.aba_destino or "",
            )
        else:
            event = ClientsDistributedEvent(
                agent_id=agent.id,
                categoria=categoria,
                quantidade=result.quantidade,
                distributed_ids=tuple(row.id for row in result.distributed),
                policy=result.policy,
            )
        self.dispatcher.dispatch(event)
        return result


class PurgePendingDistributionsHandler(CommandHandler[PurgePendingDistributionsCommand]):
    def __init__(self, repo: DistributedClientRepository, dispatcher: EventDispatcher):
        self.repo = repo
        self.dispatcher = dispatcher

    def handle(self, command: PurgePendingDistributionsCommand) -> int:
        removed = self.repo.purge_pending()
        requested_by = command.session.agent_id if command.session else None
        logger.warning("distribution.pending_purged", removed=removed, requested_by=str(requested_by))
        self.dispatcher.dispatch(PendingDistributionsPurgedEvent(removed=removed, requested_by=requested_by))
        return removed


class GetAvailabilityHandler(QueryHandler[GetAvailabilityQuery, dict]):
    def __init__(self, policy: AllocationPolicy):
        self.policy = policy

    def handle(self, q: GetAvailabilityQuery) -> dict:
        categoria = ensure_categoria(q.categoria)
        return {
            "categoria": categoria,
            "disponiveis": self.policy.availability(categoria),
            "policy": self.policy.name,
        }


class AvailabilityOverviewHandler(QueryHandler[AvailabilityOverviewQuery, dict]):
    def __init__(self, policy: AllocationPolicy, client_repo: ClientRepository):
        self.policy = policy
        self.client_repo = client_repo

    def handle(self, q: AvailabilityOverviewQuery) -> dict:
        return {
            categoria: {
                "ativos": self.client_repo.count_active(categoria),
                "disponiveis": self.policy.availability(categoria),
            }
            for categoria in CATEGORIAS
        }


class ListDistributedClientsHandler(
    QueryHandler[ListDistributedClientsQuery, PagedResult[DistributedClientEntity]]
):
    def __init__(self, repo: DistributedClientRepository):
        self.repo = repo

    def handle(self, q: ListDistributedClientsQuery) -> PagedResult[DistributedClientEntity]:
        return self.repo.list(q.filtros, q.page, q.page_size)


# ——— POOL DE CLIENTES ——————————————————————————————————————

class ListClientsHandler(QueryHandler[ListClientsQuery, PagedResult[ClientEntity]]):
    def __init__(self, repo: ClientRepository):
        self.repo = repo

    def handle(self, q: ListClientsQuery) -> PagedResult[ClientEntity]:
        return self.repo.list(q.filtros, q.page, q.page_size)


class SetClientActiveHandler(CommandHandler[SetClientActiveCommand]):
    def __init__(self, repo: ClientRepository):
        self.repo = repo

    def handle(self, command: SetClientActiveCommand) -> ClientEntity:
        client = self.repo.set_active(command.client_id, command.ativo)
        if client is None:
            raise UnknownEntity("Cliente", command.client_id)
        logger.info("client.active_changed", client_id=str(client.id), ativo=client.ativo)
        return client


class ImportClientsHandler(CommandHandler[ImportClientsCommand]):
    REQUIRED = ("matricula", "nome", "telefone", "categoria")

    def __init__(self, repo: ClientRepository):
        self.repo = repo

    def handle(self, command: ImportClientsCommand) -> tuple[int, list[str]]:
        rows = []
        for line, raw in enumerate(command.rows, start=1):
            row = {k: (raw.get(k) or "").strip() for k in self.REQUIRED}
            missing = [k for k, v in row.items() if not v]
            if missing:
                raise InvalidRequest(f"Linha {line}: campos obrigatórios ausentes ({', '.join(missing)}).")
            row["categoria"] = ensure_categoria(row["categoria"].upper())
            if not normalize_phone(row["telefone"]):
                raise InvalidRequest(f"Linha {line}: telefone inválido ({row['telefone']}).")
            rows.append(row)

        created, skipped = self.repo.import_new(rows)
        logger.info("clients.imported", created=created, skipped=len(skipped))
        return created, skipped
