from typing import Any

from corujo_core.core.application.cqrs import PagedResult
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Exists, OuterRef

from client_distribution.adapters.repositories.db_errors import translate_db_errors
from client_distribution.core.domain.entities.client_entity import ClientEntity
from client_distribution.core.domain.repositories.client_repository import ClientRepository
from plugins.django_interface.models import Client as ClientModel
from plugins.django_interface.models import DistributedClient as DistributedClientModel


def available_clients(categoria: str):
    """Clientes ativos da categoria que nenhuma distribuição referencia."""
    consumed = DistributedClientModel.objects.filter(cliente_origem_id=OuterRef("pk"))
    return ClientModel.objects.filter(categoria=categoria, ativo=True).filter(~Exists(consumed))


class ClientRepoImpl(ClientRepository):
    """Implementação Django do ClientRepository."""

    @translate_db_errors
    def find_by_id(self, client_id: str) -> ClientEntity | None:
        try:
            return ClientEntity.from_model(ClientModel.objects.get(id=client_id))
        except (ClientModel.DoesNotExist, ValidationError, ValueError):
            return None

    @translate_db_errors
    def count_active(self, categoria: str) -> int:
        return ClientModel.objects.filter(categoria=categoria, ativo=True).count()

    @translate_db_errors
    def count_available(self, categoria: str) -> int:
        return available_clients(categoria).count()

    @translate_db_errors
    def list_available(self, categoria: str, limit: int) -> list[ClientEntity]:
        qs = available_clients(categoria).order_by("matricula", "id")[:limit]
        return [ClientEntity.from_model(m) for m in qs]

    @translate_db_errors
    def set_active(self, client_id: str, ativo: bool) -> ClientEntity | None:
        try:
            updated = ClientModel.objects.filter(id=client_id).update(ativo=ativo)
        except (ValidationError, ValueError):
            return None
        return self.find_by_id(client_id) if updated else None

    @translate_db_errors
    @transaction.atomic
    def import_new(self, rows: list[dict]) -> tuple[int, list[str]]:
        existing = set(
            ClientModel.objects.filter(matricula__in=[r["matricula"] for r in rows])
            .values_list("matricula", flat=True)
        )
        created = 0
        skipped: list[str] = []
        for row in rows:
            if row["matricula"] in existing:
                skipped.append(row["matricula"])
                continue
            ClientModel.objects.create(**row)
            existing.add(row["matricula"])
            created += 1
        return created, skipped

    @translate_db_errors
    def list(
        self, filtros: dict[str, Any] | None, page: int, page_size: int
    ) -> PagedResult[ClientEntity]:
        filtros = filtros or {}
        qs = ClientModel.objects.all()
        if categoria := filtros.get("categoria"):
            qs = qs.filter(categoria=categoria)
        if filtros.get("ativo") is not None:
            qs = qs.filter(ativo=filtros["ativo"])
        if matricula := filtros.get("matricula"):
            qs = qs.filter(matricula__icontains=matricula)

        total = qs.count()
        offset = (page - 1) * page_size
        items = [ClientEntity.from_model(m) for m in qs.order_by("matricula")[offset : offset + page_size]]
        return PagedResult(items=items, total=total, page=page, page_size=page_size)
