from __future__ import annotations

import uuid
from dataclasses import dataclass

import structlog
from corujo_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler
from corujo_core.core.domain.repositories.user_repository import UserRepository
from corujo_core.core.domain.services.event_dispatcher import EventDispatcher
from django.db import transaction
from django.utils import timezone

from client_distribution.core.application.commands.ticket_commands import (
    ResendTicketCommand,
    SendTicketCommand,
    SetTicketPaidCommand,
    UpdateTicketCommand,
)
from client_distribution.core.application.dtos.notification_dtos import TicketNotificationDTO
from client_distribution.core.application.dtos.session_dto import SessionContext
from client_distribution.core.application.queries.ticket_queries import (
    GetTicketQuery,
    ListTicketsQuery,
    LookupPriorDataQuery,
)
from client_distribution.core.application.services.best_effort_notifier import (
    BestEffortNotifier,
    NotificationOutcome,
)
from client_distribution.core.domain.entities.ticket_entity import TicketEntity
from client_distribution.core.domain.events.events import TicketCreatedEvent
from client_distribution.core.domain.exceptions import InvalidRequest, UnknownEntity
from client_distribution.core.domain.repositories.ligacao_repository import LigacaoRepository
from client_distribution.core.domain.repositories.ticket_repository import TicketRepository

logger = structlog.get_logger(__name__)

NOTIFICATION_WARNING = "Ticket salvo, mas o envio para a automação falhou. Use 'reenviar' mais tarde."


@dataclass(frozen=True)
class TicketDispatchResult:
    ticket: TicketEntity
    notified: bool
    warning: str | None = None


def build_ticket_notification(ticket: TicketEntity, atendente: str) -> TicketNotificationDTO:
    return TicketNotificationDTO(
        atendente=atendente,
        matricula=ticket.matricula,
        nome=ticket.nome,
        valor=f"{ticket.valor:.2f}",
        qtd=ticket.qtd_mensalidades,
        telefone=ticket.telefone,
        categoria=ticket.categoria,
        subcategoria=ticket.subcategoria,
    )


class _NotifyTicket:
    def __init__(self, repo: TicketRepository, notifier: BestEffortNotifier):
        self.repo = repo
        self.notifier = notifier

    def _notify(self, ticket: TicketEntity, atendente: str) -> TicketDispatchResult:
        outcome: NotificationOutcome = self.notifier.notify(
            ticket.id, build_ticket_notification(ticket, atendente)
        )
        if not outcome.delivered:
            return TicketDispatchResult(ticket=ticket, notified=False, warning=NOTIFICATION_WARNING)
        sent = self.repo.mark_sent(str(ticket.id), timezone.now()) or ticket
        return TicketDispatchResult(ticket=sent, notified=True)


class SendTicketHandler(_NotifyTicket, CommandHandler[SendTicketCommand]):
    def __init__(
        self,
        repo: TicketRepository,
        ligacao_repo: LigacaoRepository,
        notifier: BestEffortNotifier,
        dispatcher: EventDispatcher,
    ):
        super().__init__(repo, notifier)
        self.ligacao_repo = ligacao_repo
        self.dispatcher = dispatcher

    def handle(self, command: SendTicketCommand) -> TicketDispatchResult:
        session, p = command.session, command.payload

        with transaction.atomic():
            ligacao = None
            if p.ligacao_id:
                ligacao = self.ligacao_repo.find_by_id(p.ligacao_id)
                if ligacao is None or (
                    session.scope_agent_id and str(ligacao.usuario_id) != session.scope_agent_id
                ):
                    raise UnknownEntity("Ligação", p.ligacao_id)

            ticket = self.repo.create(
                TicketEntity(
                    id=uuid.uuid4(),
                    usuario_id=session.agent_id,
                    ligacao_id=ligacao.id if ligacao else None,
                    matricula=p.matricula,
                    nome=p.nome,
                    valor=p.valor,
                    qtd_mensalidades=p.qtd_mensalidades,
                    telefone=p.telefone,
                    categoria=p.categoria,
                    subcategoria=p.subcategoria,
                    observacoes=p.observacoes,
                )
            )
            if ligacao and not self.ligacao_repo.link_ticket(str(ligacao.id), str(ticket.id)):
                raise InvalidRequest("Esta ligação já possui um ticket gerado.")

        logger.info(
            "ticket.created",
            ticket_id=str(ticket.id),
            agent_id=str(session.agent_id),
            ligacao_id=str(ligacao.id) if ligacao else None,
        )
        self.dispatcher.dispatch(
            TicketCreatedEvent(
                ticket_id=ticket.id,
                agent_id=session.agent_id,
                ligacao_id=ligacao.id if ligacao else None,
            )
        )
        # o envio acontece só depois do commit e nunca desfaz o ticket
        return self._notify(ticket, session.nome)


class ResendTicketHandler(_NotifyTicket, CommandHandler[ResendTicketCommand]):
    def __init__(self, repo: TicketRepository, user_repo: UserRepository, notifier: BestEffortNotifier):
        super().__init__(repo, notifier)
        self.user_repo = user_repo

    def handle(self, command: ResendTicketCommand) -> TicketDispatchResult:
        ticket = _visible_ticket(self.repo, command.ticket_id, command.session)
        owner = self.user_repo.find_by_id(str(ticket.usuario_id))
        atendente = owner.nome if owner else command.session.nome
        logger.info("ticket.resend", ticket_id=str(ticket.id), requested_by=str(command.session.agent_id))
        return self._notify(ticket, atendente)


class UpdateTicketHandler(CommandHandler[UpdateTicketCommand]):
    def __init__(self, repo: TicketRepository):
        self.repo = repo

    def handle(self, command: UpdateTicketCommand) -> TicketEntity:
        changes = command.payload.model_dump(exclude_none=True)
        ticket = self.repo.update(command.ticket_id, changes)
        if ticket is None:
            raise UnknownEntity("Ticket", command.ticket_id)
        logger.info("ticket.updated", ticket_id=str(ticket.id), fields=sorted(changes))
        return ticket


class SetTicketPaidHandler(CommandHandler[SetTicketPaidCommand]):
    def __init__(self, repo: TicketRepository):
        self.repo = repo

    def handle(self, command: SetTicketPaidCommand) -> TicketEntity:
        paid_at = timezone.now() if command.pago else None
        ticket = self.repo.set_paid(command.ticket_id, command.pago, paid_at)
        if ticket is None:
            raise UnknownEntity("Ticket", command.ticket_id)
        logger.info("ticket.paid_changed", ticket_id=str(ticket.id), pago=ticket.pago)
        return ticket


def _visible_ticket(repo: TicketRepository, ticket_id: str, session: SessionContext) -> TicketEntity:
    ticket = repo.find_by_id(ticket_id)
    if ticket is None or (session.scope_agent_id and str(ticket.usuario_id) != session.scope_agent_id):
        raise UnknownEntity("Ticket", ticket_id)
    return ticket


class ListTicketsHandler(QueryHandler[ListTicketsQuery, PagedResult[TicketEntity]]):
    def __init__(self, repo: TicketRepository):
        self.repo = repo

    def handle(self, q: ListTicketsQuery) -> PagedResult[TicketEntity]:
        return self.repo.list(q.filtros, q.page, q.page_size)


class GetTicketHandler(QueryHandler[GetTicketQuery, TicketEntity | None]):
    def __init__(self, repo: TicketRepository):
        self.repo = repo

    def handle(self, q: GetTicketQuery) -> TicketEntity | None:
        return self.repo.find_by_id(q.ticket_id)


class LookupPriorDataHandler(QueryHandler[LookupPriorDataQuery, dict | None]):
    def __init__(self, repo: TicketRepository):
        self.repo = repo

    def handle(self, q: LookupPriorDataQuery) -> dict | None:
        ticket = self.repo.latest_by_matricula(q.matricula.strip())
        if ticket is None:
            return None
        return {"matricula": ticket.matricula, "nome": ticket.nome, "telefone": ticket.telefone}
