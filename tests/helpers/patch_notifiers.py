from unittest.mock import patch

from client_distribution.adapters.notifiers.webhook.distribution_webhook import DistributionWebhook
from client_distribution.adapters.notifiers.webhook.ticket_webhook import TicketWebhook


def patch_notifiers(ticket_side_effect=None, distribution_side_effect=None):
    """
    Patcha os webhooks na classe (o registry guarda as instâncias em cache).
    Devolve (patches, ticket_send, distribution_send); pare os patches no tearDown.
    """
    patches = [
        patch.object(TicketWebhook, "send", side_effect=ticket_side_effect),
        patch.object(DistributionWebhook, "send", side_effect=distribution_side_effect),
    ]
    ticket_send, distribution_send = (p.start() for p in patches)
    return patches, ticket_send, distribution_send
