from datetime import datetime
from typing import Any

from corujo_core.core.application.cqrs import PagedResult
from django.core.exceptions import ValidationError
from django.db.models import Count, Q

from client_distribution.adapters.repositories.db_errors import apply_period, translate_db_errors
from client_distribution.core.domain.entities.ticket_entity import TicketEntity
from client_distribution.core.domain.repositories.ticket_repository import TicketRepository
from plugins.django_interface.models import Ticket as TicketModel

EDITABLE_FIELDS = frozenset({"nome", "matricula", "telefone", "valor", "qtd_mensalidades", "observacoes"})


class TicketRepoImpl(TicketRepository):
    """Implementação Django do TicketRepository."""

    # ────────────────────────────────── #
    # Escrita
    # ────────────────────────────────── #
    @translate_db_errors
    def create(self, entity: TicketEntity) -> TicketEntity:
        data = entity.to_dict()
        data.pop("created_at", None)
        m = TicketModel.objects.create(**data)
        return TicketEntity.from_model(m)

    @translate_db_errors
    def update(self, ticket_id: str, changes: dict) -> TicketEntity | None:
        fields = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
        if fields:
            TicketModel.objects.filter(id=ticket_id).update(**fields)
        return self.find_by_id(ticket_id)

    @translate_db_errors
    def mark_sent(self, ticket_id: str, sent_at: datetime) -> TicketEntity | None:
        TicketModel.objects.filter(id=ticket_id).update(enviado=True, data_envio=sent_at)
        return self.find_by_id(ticket_id)

    @translate_db_errors
    def set_paid(self, ticket_id: str, pago: bool, paid_at: datetime | None) -> TicketEntity | None:
        TicketModel.objects.filter(id=ticket_id).update(pago=pago, data_pagamento=paid_at if pago else None)
        return self.find_by_id(ticket_id)

    # ────────────────────────────────── #
    # Consultas
    # ────────────────────────────────── #
    @translate_db_errors
    def find_by_id(self, ticket_id: str) -> TicketEntity | None:
        try:
            return TicketEntity.from_model(TicketModel.objects.get(id=ticket_id))
        except (TicketModel.DoesNotExist, ValidationError, ValueError):
            return None

    @translate_db_errors
    def latest_by_matricula(self, matricula: str) -> TicketEntity | None:
        m = TicketModel.objects.filter(matricula=matricula).order_by("-created_at").first()
        return TicketEntity.from_model(m) if m else None

    @translate_db_errors
    def count_by_agent(self, filtros: dict) -> dict[str, int]:
        qs = TicketModel.objects.all()
        if usuario_id := filtros.get("usuario_id"):
            qs = qs.filter(usuario_id=usuario_id)
        qs = apply_period(qs, filtros)
        rows = qs.values("usuario_id").annotate(total=Count("id")).order_by()
        return {str(r["usuario_id"]): r["total"] for r in rows}

    @translate_db_errors
    def list(
        self, filtros: dict[str, Any] | None, page: int, page_size: int
    ) -> PagedResult[TicketEntity]:
        filtros = filtros or {}
        qs = TicketModel.objects.all()
        if search := filtros.get("search"):
            qs = qs.filter(Q(nome__icontains=search) | Q(matricula__icontains=search))
        if usuario_id := filtros.get("usuario_id"):
            qs = qs.filter(usuario_id=usuario_id)
        for flag in ("enviado", "pago"):
            if filtros.get(flag) is not None:
                qs = qs.filter(**{flag: filtros[flag]})
        qs = apply_period(qs, filtros)

        total = qs.count()
        offset = (page - 1) * page_size
        items = [TicketEntity.from_model(m) for m in qs.order_by("-created_at")[offset : offset + page_size]]
        return PagedResult(items=items, total=total, page=page, page_size=page_size)
