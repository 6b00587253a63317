"""
Fábrica de notifiers: devolve o webhook correto baseado no canal.
"""
from functools import lru_cache
from typing import Literal

from django.conf import settings

from client_distribution.adapters.notifiers.base import BaseNotifier
from client_distribution.adapters.notifiers.webhook.distribution_webhook import DistributionWebhook
from client_distribution.adapters.notifiers.webhook.ticket_webhook import TicketWebhook


@lru_cache
def get_ticket_notifier() -> BaseNotifier:
    return TicketWebhook(url=settings.TICKET_WEBHOOK_URL, timeout=settings.NOTIFIER_TIMEOUT)


@lru_cache
def get_distribution_notifier() -> BaseNotifier:
    return DistributionWebhook(url=settings.DISTRIBUTION_WEBHOOK_URL, timeout=settings.NOTIFIER_TIMEOUT)


def get_notifier(channel: Literal["ticket", "distribution"]) -> BaseNotifier:
    """
    Retorna o notifier para o canal especificado.

    - 'ticket' → TicketWebhook
    - 'distribution' → DistributionWebhook
    """
    if channel == "ticket":
        return get_ticket_notifier()
    if channel == "distribution":
        return get_distribution_notifier()
    raise ValueError(f"Canal de notificação desconhecido: {channel}")
