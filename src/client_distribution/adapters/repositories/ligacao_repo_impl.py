from datetime import date
from typing import Any

from corujo_core.core.application.cqrs import PagedResult
from django.core.exceptions import ValidationError
from django.db.models import Count, Q

from client_distribution.adapters.repositories.db_errors import apply_period, translate_db_errors
from client_distribution.core.domain.entities.ligacao_entity import (
    ATENDEU,
    NAO_ATENDEU,
    LigacaoEntity,
)
from client_distribution.core.domain.repositories.ligacao_repository import LigacaoRepository
from plugins.django_interface.models import Ligacao as LigacaoModel


class LigacaoRepoImpl(LigacaoRepository):
    """Implementação Django do LigacaoRepository."""

    @translate_db_errors
    def create(self, entity: LigacaoEntity) -> LigacaoEntity:
        data = entity.to_dict()
        data.pop("created_at", None)
        m = LigacaoModel.objects.create(**data)
        return LigacaoEntity.from_model(m)

    @translate_db_errors
    def find_by_id(self, ligacao_id: str) -> LigacaoEntity | None:
        try:
            return LigacaoEntity.from_model(LigacaoModel.objects.get(id=ligacao_id))
        except (LigacaoModel.DoesNotExist, ValidationError, ValueError):
            return None

    @translate_db_errors
    def link_ticket(self, ligacao_id: str, ticket_id: str) -> bool:
        updated = LigacaoModel.objects.filter(id=ligacao_id, ticket_gerado=False).update(
            ticket_gerado=True, ticket_id=ticket_id
        )
        return updated == 1

    @translate_db_errors
    def stats_by_agent(self, filtros: dict, today: date) -> list[dict]:
        qs = LigacaoModel.objects.all()
        if usuario_id := filtros.get("usuario_id"):
            qs = qs.filter(usuario_id=usuario_id)
        qs = apply_period(qs, filtros)

        rows = (
            qs.values("usuario_id", "usuario__nome")
            .annotate(
                total=Count("id"),
                atendidas=Count("id", filter=Q(status=ATENDEU)),
                nao_atendidas=Count("id", filter=Q(status=NAO_ATENDEU)),
                hoje=Count("id", filter=Q(created_at__date=today)),
            )
            .order_by("usuario__nome")
        )
        return [
            {
                "usuario_id": r["usuario_id"],
                "usuario_nome": r["usuario__nome"],
                "total": r["total"],
                "atendidas": r["atendidas"],
                "nao_atendidas": r["nao_atendidas"],
                "hoje": r["hoje"],
            }
            for r in rows
        ]

    @translate_db_errors
    def list(
        self, filtros: dict[str, Any] | None, page: int, page_size: int
    ) -> PagedResult[LigacaoEntity]:
        filtros = filtros or {}
        qs = LigacaoModel.objects.all()
        for key in ("usuario_id", "status", "matricula"):
            if filtros.get(key):
                qs = qs.filter(**{key: filtros[key]})
        qs = apply_period(qs, filtros)

        total = qs.count()
        offset = (page - 1) * page_size
        items = [LigacaoEntity.from_model(m) for m in qs.order_by("-created_at")[offset : offset + page_size]]
        return PagedResult(items=items, total=total, page=page, page_size=page_size)
