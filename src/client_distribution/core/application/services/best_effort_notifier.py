"""
Notificador best-effort.

Falhas de envio nunca sobem para o chamador: viram log, métrica,
`TicketNotificationFailedEvent` e um `NotificationOutcome` com o erro.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass

import structlog
from corujo_core.core.domain.services.event_dispatcher import EventDispatcher

from client_distribution.adapters.observability.metrics import NOTIFIER_DEGRADED
from client_distribution.core.domain.events.events import TicketNotificationFailedEvent
from client_distribution.core.domain.events.exceptions import (
    NotificationError,
    PermanentNotificationError,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class NotificationOutcome:
    delivered: bool
    error: str | None = None
    permanent: bool = False


class BestEffortNotifier:
    def __init__(self, notifier, dispatcher: EventDispatcher, channel: str = "ticket"):
        self.notifier = notifier
        self.dispatcher = dispatcher
        self.channel = channel

    def notify(self, ticket_id: uuid.UUID, payload) -> NotificationOutcome:
        try:
            self.notifier.send(payload)
        except NotificationError as exc:
            permanent = isinstance(exc, PermanentNotificationError)
            logger.warning(
                "ticket_notifier.failure",
                ticket_id=str(ticket_id),
                channel=self.channel,
                permanent=permanent,
                error=str(exc),
            )
            NOTIFIER_DEGRADED.labels(self.channel, str(permanent).lower()).inc()
            self.dispatcher.dispatch(
                TicketNotificationFailedEvent(
                    ticket_id=ticket_id,
                    channel=self.channel,
                    error=str(exc),
                    permanent=permanent,
                )
            )
            return NotificationOutcome(delivered=False, error=str(exc), permanent=permanent)

        logger.info("ticket_notifier.delivered", ticket_id=str(ticket_id), channel=self.channel)
        return NotificationOutcome(delivered=True)
