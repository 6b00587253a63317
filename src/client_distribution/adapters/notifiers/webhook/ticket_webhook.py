from __future__ import annotations

import structlog

from client_distribution.adapters.notifiers.base import BaseNotifier
from client_distribution.core.application.dtos.notification_dtos import TicketNotificationDTO

log = structlog.get_logger()


class TicketWebhook(BaseNotifier):
    """
    Adapter do webhook de tickets (cria o card do ticket na automação).

    Todos os dados seguem na query-string de um GET.
    """

    def __init__(self, url: str, timeout: int | None = None) -> None:
        super().__init__("automacao", "ticket", timeout)
        self._url = url

    def send(self, notification: TicketNotificationDTO) -> None:
        params = notification.model_dump(exclude_none=True)
        self._call("GET", self._url, params=params)
        log.info("ticket_webhook.sent", provider=self.provider, matricula=notification.matricula)
