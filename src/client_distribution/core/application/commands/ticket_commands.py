from dataclasses import dataclass

from corujo_core.core.application.cqrs import CommandDTO

from client_distribution.core.application.dtos.session_dto import SessionContext
from client_distribution.core.application.dtos.ticket_dtos import TicketDTO, UpdateTicketDTO


@dataclass(frozen=True)
class SendTicketCommand(CommandDTO):
    session: SessionContext
    payload: TicketDTO


@dataclass(frozen=True)
class ResendTicketCommand(CommandDTO):
    session: SessionContext
    ticket_id: str


@dataclass(frozen=True)
class UpdateTicketCommand(CommandDTO):
    ticket_id: str
    payload: UpdateTicketDTO


@dataclass(frozen=True)
class SetTicketPaidCommand(CommandDTO):
    ticket_id: str
    pago: bool = True
