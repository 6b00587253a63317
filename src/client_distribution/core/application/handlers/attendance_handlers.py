from __future__ import annotations

import uuid

import structlog
from corujo_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler
from corujo_core.core.domain.services.event_dispatcher import EventDispatcher
from django.db import transaction
from django.utils import timezone

from client_distribution.adapters.observability.metrics import ATTENDANCE_COUNT
from client_distribution.core.application.commands.distribution_commands import (
    MarkAttendedCommand,
    MarkNotAttendedCommand,
)
from client_distribution.core.application.queries.ticket_queries import (
    AttendanceStatsQuery,
    ListLigacoesQuery,
)
from client_distribution.core.domain.entities.distributed_client_entity import (
    ATENDIDO,
    NAO_ATENDIDO,
    DistributedClientEntity,
)
from client_distribution.core.domain.entities.ligacao_entity import (
    ATENDEU,
    NAO_ATENDEU,
    LigacaoEntity,
)
from client_distribution.core.domain.events.events import AttendanceResolvedEvent
from client_distribution.core.domain.exceptions import DistributionError, InvalidRequest
from client_distribution.core.domain.repositories.distributed_client_repository import (
    DistributedClientRepository,
)
from client_distribution.core.domain.repositories.ligacao_repository import LigacaoRepository
from client_distribution.core.domain.repositories.ticket_repository import TicketRepository
from client_distribution.core.domain.services.fee_suggestion import FeeSuggestionService

logger = structlog.get_logger(__name__)


class _ResolveAttendance:
    """
    Transição `pendente → terminal` + registro da ligação na mesma transação.
    Nada é gravado quando a transição falha.
    """
    status: str

    def __init__(
        self,
        distributed_repo: DistributedClientRepository,
        ligacao_repo: LigacaoRepository,
        dispatcher: EventDispatcher,
    ):
        self.distributed_repo = distributed_repo
        self.ligacao_repo = ligacao_repo
        self.dispatcher = dispatcher

    def _resolve(self, command, build_ligacao) -> LigacaoEntity:
        session = command.session
        try:
            with transaction.atomic():
                row = self.distributed_repo.resolve(
                    command.distributed_client_id,
                    self.status,
                    timezone.now(),
                    agent_id=session.scope_agent_id,
                )
                ligacao = self.ligacao_repo.create(build_ligacao(row))
        except DistributionError as exc:
            ATTENDANCE_COUNT.labels(self.status, exc.code).inc()
            raise

        ATTENDANCE_COUNT.labels(self.status, "ok").inc()
        logger.info(
            "attendance.resolved",
            distributed_client_id=str(row.id),
            ligacao_id=str(ligacao.id),
            status=self.status,
            agent_id=str(session.agent_id),
        )
        self.dispatcher.dispatch(
            AttendanceResolvedEvent(
                distributed_client_id=row.id,
                ligacao_id=ligacao.id,
                status=self.status,
                agent_id=session.agent_id,
            )
        )
        return ligacao

    @staticmethod
    def _owner(row: DistributedClientEntity, command) -> uuid.UUID:
        return row.usuario_id or command.session.agent_id


class MarkNotAttendedHandler(_ResolveAttendance, CommandHandler[MarkNotAttendedCommand]):
    status = NAO_ATENDIDO

    def handle(self, command: MarkNotAttendedCommand) -> LigacaoEntity:
        return self._resolve(
            command,
            lambda row: LigacaoEntity(
                id=uuid.uuid4(),
                usuario_id=self._owner(row, command),
                cliente_id=row.id,
                matricula=row.matricula,
                nome=row.nome,
                telefone=row.telefone,
                status=NAO_ATENDEU,
            ),
        )


class MarkAttendedHandler(_ResolveAttendance, CommandHandler[MarkAttendedCommand]):
    status = ATENDIDO

    def __init__(
        self,
        distributed_repo: DistributedClientRepository,
        ligacao_repo: LigacaoRepository,
        dispatcher: EventDispatcher,
        fee_service: FeeSuggestionService,
    ):
        super().__init__(distributed_repo, ligacao_repo, dispatcher)
        self.fee_service = fee_service

    def handle(self, command: MarkAttendedCommand) -> LigacaoEntity:
        details = command.payload
        valor = details.valor
        if valor is None:
            valor = self.fee_service.suggest_fee(details.qtd_mensalidades)
        if valor is None:
            raise InvalidRequest(
                f"Informe o valor: não há valor configurado para {details.qtd_mensalidades} mensalidade(s)."
            )

        return self._resolve(
            command,
            lambda row: LigacaoEntity(
                id=uuid.uuid4(),
                usuario_id=self._owner(row, command),
                cliente_id=row.id,
                matricula=details.matricula or row.matricula,
                nome=details.nome or row.nome,
                telefone=details.telefone or row.telefone,
                status=ATENDEU,
                qtd_mensalidades=details.qtd_mensalidades,
                valor=valor,
                forma_pagamento=details.forma_pagamento,
                retorno=details.retorno,
                data_retorno=details.data_retorno,
                observacoes=details.observacoes,
            ),
        )


class ListLigacoesHandler(QueryHandler[ListLigacoesQuery, PagedResult[LigacaoEntity]]):
    def __init__(self, repo: LigacaoRepository):
        self.repo = repo

    def handle(self, q: ListLigacoesQuery) -> PagedResult[LigacaoEntity]:
        return self.repo.list(q.filtros, q.page, q.page_size)


def _rate(part: int, total: int) -> float:
    return round(part / total * 100, 1) if total else 0.0


def _summary(total: int, hoje: int, atendidas: int, nao_atendidas: int, tickets: int, meta: int) -> dict:
    return {
        "total_ligacoes": total,
        "ligacoes_hoje": hoje,
        "atendidas": atendidas,
        "nao_atendidas": nao_atendidas,
        "tickets_gerados": tickets,
        "taxa_atendimento": _rate(atendidas, total),
        "taxa_conversao": _rate(tickets, total),
        "meta_diaria": {
            "meta": meta,
            "realizadas": hoje,
            "progresso": min(_rate(hoje, meta), 100.0),
        },
    }


class AttendanceStatsHandler(QueryHandler[AttendanceStatsQuery, dict]):
    def __init__(self, ligacao_repo: LigacaoRepository, ticket_repo: TicketRepository, daily_goal: int):
        self.ligacao_repo = ligacao_repo
        self.ticket_repo = ticket_repo
        self.daily_goal = daily_goal

    def handle(self, q: AttendanceStatsQuery) -> dict:
        filtros = q.filtros or {}
        rows = self.ligacao_repo.stats_by_agent(filtros, timezone.localdate())
        tickets = self.ticket_repo.count_by_agent(filtros)

        por_atendente = [
            {
                "usuario_id": str(r["usuario_id"]),
                "usuario_nome": r["usuario_nome"],
                **_summary(
                    r["total"],
                    r["hoje"],
                    r["atendidas"],
                    r["nao_atendidas"],
                    tickets.get(str(r["usuario_id"]), 0),
                    self.daily_goal,
                ),
            }
            for r in rows
        ]
        geral = _summary(
            sum(r["total"] for r in rows),
            sum(r["hoje"] for r in rows),
            sum(r["atendidas"] for r in rows),
            sum(r["nao_atendidas"] for r in rows),
            sum(tickets.values()),
            self.daily_goal,
        )
        result = {"geral": geral}
        if not filtros.get("usuario_id"):
            result["por_atendente"] = por_atendente
        return result
