from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

import structlog
from corujo_core.core.application.cqrs import PagedResult
from django.core.exceptions import ValidationError
from django.db import IntegrityError, InterfaceError, OperationalError, transaction

from client_distribution.adapters.repositories.client_repo_impl import available_clients
from client_distribution.adapters.repositories.db_errors import (
    DB_UNAVAILABLE_MESSAGE,
    translate_db_errors,
)
from client_distribution.core.domain.entities.distributed_client_entity import (
    PENDENTE,
    ClientSnapshot,
    DistributedClientEntity,
)
from client_distribution.core.domain.exceptions import (
    AlreadyResolved,
    InsufficientPool,
    UnknownEntity,
    UpstreamUnavailable,
)
from client_distribution.core.domain.repositories.distributed_client_repository import (
    DistributedClientRepository,
)
from plugins.django_interface.models import DistributedClient as DistributedClientModel
from plugins.django_interface.models import DistributionLock as DistributionLockModel

logger = structlog.get_logger(__name__)


class DistributedClientRepoImpl(DistributedClientRepository):
    """Implementação Django do DistributedClientRepository."""

    # ────────────────────────────────── #
    # Lock por categoria
    # ────────────────────────────────── #
    @contextmanager
    def category_lock(self, categoria: str) -> Iterator[None]:
        try:
            with transaction.atomic():
                DistributionLockModel.objects.get_or_create(categoria=categoria)
                DistributionLockModel.objects.select_for_update().get(categoria=categoria)
                logger.debug("distribution.lock_acquired", categoria=categoria)
                yield
        except (OperationalError, InterfaceError) as exc:
            logger.error("db.unavailable", operation="category_lock", categoria=categoria, error=str(exc))
            raise UpstreamUnavailable(DB_UNAVAILABLE_MESSAGE) from exc

    # ────────────────────────────────── #
    # Escrita
    # ────────────────────────────────── #
    @translate_db_errors
    def insert_batch(self, agent_id: str, snapshots: list[ClientSnapshot]) -> list[DistributedClientEntity]:
        if not snapshots:
            return []
        categoria = snapshots[0].categoria
        objs = [
            DistributedClientModel(
                usuario_id=agent_id,
                matricula=s.matricula,
                nome=s.nome,
                telefone=s.telefone,
                categoria=s.categoria,
                cliente_origem_id=s.cliente_origem_id,
                status=DistributedClientModel.Status.PENDENTE,
            )
            for s in snapshots
        ]
        try:
            with transaction.atomic():
                created = DistributedClientModel.objects.bulk_create(objs)
        except IntegrityError as exc:
            # outra distribuição consumiu algum destes clientes
            disponivel = available_clients(categoria).count()
            logger.warning(
                "distribution.unique_violation",
                categoria=categoria,
                solicitado=len(snapshots),
                disponivel=disponivel,
            )
            raise InsufficientPool(categoria, len(snapshots), disponivel) from exc
        return [DistributedClientEntity.from_model(m) for m in created]

    @translate_db_errors
    def resolve(
        self,
        distributed_client_id: str,
        status: str,
        resolved_at: datetime,
        agent_id: str | None = None,
    ) -> DistributedClientEntity:
        try:
            visible = DistributedClientModel.objects.filter(id=distributed_client_id)
            if agent_id is not None:
                visible = visible.filter(usuario_id=agent_id)
            updated = visible.filter(status=PENDENTE).update(status=status, data_atendimento=resolved_at)
        except (ValidationError, ValueError):
            raise UnknownEntity("Cliente distribuído", distributed_client_id) from None

        if updated == 0:
            current = visible.values_list("status", flat=True).first()
            if current is None:
                raise UnknownEntity("Cliente distribuído", distributed_client_id)
            raise AlreadyResolved(str(distributed_client_id), current)

        return DistributedClientEntity.from_model(DistributedClientModel.objects.get(id=distributed_client_id))

    @translate_db_errors
    def purge_pending(self) -> int:
        removed, _ = DistributedClientModel.objects.filter(status=PENDENTE).delete()
        return removed

    # ────────────────────────────────── #
    # Consultas
    # ────────────────────────────────── #
    @translate_db_errors
    def find_by_id(self, distributed_client_id: str) -> DistributedClientEntity | None:
        try:
            m = DistributedClientModel.objects.get(id=distributed_client_id)
            return DistributedClientEntity.from_model(m)
        except (DistributedClientModel.DoesNotExist, ValidationError, ValueError):
            return None

    @translate_db_errors
    def list(
        self, filtros: dict[str, Any] | None, page: int, page_size: int
    ) -> PagedResult[DistributedClientEntity]:
        filtros = filtros or {}
        qs = DistributedClientModel.objects.all()
        for key in ("usuario_id", "status", "categoria"):
            if filtros.get(key):
                qs = qs.filter(**{key: filtros[key]})

        total = qs.count()
        offset = (page - 1) * page_size
        objs = qs.order_by("-data_distribuicao", "matricula")[offset : offset + page_size]
        items = [DistributedClientEntity.from_model(m) for m in objs]
        return PagedResult(items=items, total=total, page=page, page_size=page_size)
