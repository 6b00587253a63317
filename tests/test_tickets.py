"""
Tickets: gravação transacional + envio best-effort ao webhook da automação.
"""
from __future__ import annotations

import uuid
from decimal import Decimal
from unittest.mock import Mock

from django.test import TestCase

from client_distribution.core.application.dtos.notification_dtos import TicketNotificationDTO
from client_distribution.core.application.handlers.ticket_handlers import NOTIFICATION_WARNING
from client_distribution.core.application.services.best_effort_notifier import BestEffortNotifier
from client_distribution.core.domain.events.events import TicketNotificationFailedEvent
from client_distribution.core.domain.events.exceptions import (
    PermanentNotificationError,
    TemporaryNotificationError,
)
from plugins.django_interface.models import Ligacao, Ticket
from tests.helpers.api import ApiClientMixin, make_pending, make_user
from tests.helpers.patch_notifiers import patch_notifiers

TICKETS_URL = "/api/tickets"


def ticket_payload(**overrides) -> dict:
    payload = {
        "matricula": "M-0001",
        "nome": "Cliente M-0001",
        "valor": "1200.00",
        "qtd_mensalidades": 12,
        "telefone": "5511987654321",
        "categoria": "Pix",
    }
    payload.update(overrides)
    return payload


class TicketApiTests(ApiClientMixin, TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.supervisor = make_user("sup@example.com", perfil="supervisao", nome="Sup")
        cls.ana = make_user("ana@example.com", nome="Ana")
        cls.bia = make_user("bia@example.com", nome="Bia")

    def setUp(self):
        self.patches, self.ticket_send, _ = patch_notifiers()

    def tearDown(self):
        for p in self.patches:
            p.stop()

    def attended_call(self, agent) -> Ligacao:
        row = make_pending(agent, matricula="M-0001")
        resp = self.api_post(
            agent,
            f"/api/distributed-clients/{row.id}/mark-attended",
            {"qtd_mensalidades": 12, "valor": "1200.00", "forma_pagamento": "pix", "retorno": "1x"},
        )
        return Ligacao.objects.get(id=resp.json()["id"])

    def test_ticket_is_saved_and_sent(self) -> None:
        resp = self.api_post(self.ana, TICKETS_URL, ticket_payload(subcategoria="comprovantes"))
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertTrue(body["notified"])
        self.assertIsNone(body["warning"])
        self.assertTrue(body["ticket"]["enviado"])
        self.assertIsNotNone(body["ticket"]["data_envio"])

        sent: TicketNotificationDTO = self.ticket_send.call_args.args[0]
        self.assertEqual(sent.atendente, "Ana")
        self.assertEqual(sent.valor, "1200.00")
        self.assertEqual(sent.qtd, 12)
        self.assertEqual(sent.subcategoria, "comprovantes")

    def test_webhook_failure_keeps_ticket(self) -> None:
        self.ticket_send.side_effect = TemporaryNotificationError("timeout")
        resp = self.api_post(self.ana, TICKETS_URL, ticket_payload())

        self.assertEqual(resp.status_code, 201)
        self.assertFalse(resp.json()["notified"])
        self.assertEqual(resp.json()["warning"], NOTIFICATION_WARNING)
        ticket = Ticket.objects.get()
        self.assertFalse(ticket.enviado)

        # reenvio depois que a automação volta
        self.ticket_send.side_effect = None
        resp = self.api_post(self.ana, f"{TICKETS_URL}/{ticket.id}/resend")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["notified"])
        ticket.refresh_from_db()
        self.assertTrue(ticket.enviado)

    def test_ticket_links_to_call_once(self) -> None:
        ligacao = self.attended_call(self.ana)
        resp = self.api_post(self.ana, TICKETS_URL, ticket_payload(ligacao_id=str(ligacao.id)))
        self.assertEqual(resp.status_code, 201)

        ligacao.refresh_from_db()
        self.assertTrue(ligacao.ticket_gerado)
        self.assertEqual(str(ligacao.ticket_id), resp.json()["ticket"]["id"])
        self.assertEqual(resp.json()["ticket"]["ligacao_id"], str(ligacao.id))

        again = self.api_post(self.ana, TICKETS_URL, ticket_payload(ligacao_id=str(ligacao.id)))
        self.assertEqual(again.status_code, 400)
        self.assertEqual(Ticket.objects.count(), 1)
        self.assertEqual(self.ticket_send.call_count, 1)

    def test_cannot_link_someone_elses_call(self) -> None:
        ligacao = self.attended_call(self.bia)
        resp = self.api_post(self.ana, TICKETS_URL, ticket_payload(ligacao_id=str(ligacao.id)))
        self.assertEqual(resp.status_code, 404)
        self.assertFalse(Ticket.objects.exists())
        self.ticket_send.assert_not_called()

    def test_invalid_category(self) -> None:
        resp = self.api_post(self.ana, TICKETS_URL, ticket_payload(categoria="Boleto"))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "validation_error")

    def test_lookup_prior_data(self) -> None:
        self.api_post(self.ana, TICKETS_URL, ticket_payload(nome="Maria Souza"))
        resp = self.api_get(self.bia, f"{TICKETS_URL}/lookup", matricula="M-0001")
        self.assertEqual(
            resp.json(),
            {"found": True, "matricula": "M-0001", "nome": "Maria Souza", "telefone": "5511987654321"},
        )
        resp = self.api_get(self.bia, f"{TICKETS_URL}/lookup", matricula="X-9999")
        self.assertEqual(resp.json(), {"found": False, "matricula": "X-9999"})

    def test_agents_only_see_own_tickets(self) -> None:
        mine = self.api_post(self.ana, TICKETS_URL, ticket_payload()).json()["ticket"]
        self.api_post(self.bia, TICKETS_URL, ticket_payload(matricula="M-0002"))

        self.assertEqual(self.api_get(self.ana, TICKETS_URL).json()["total_items"], 1)
        self.assertEqual(self.api_get(self.supervisor, TICKETS_URL).json()["total_items"], 2)
        self.assertEqual(self.api_get(self.bia, f"{TICKETS_URL}/{mine['id']}").status_code, 404)
        self.assertEqual(self.api_post(self.bia, f"{TICKETS_URL}/{mine['id']}/resend").status_code, 404)

    def test_supervisor_marks_paid_and_edits(self) -> None:
        ticket_id = self.api_post(self.ana, TICKETS_URL, ticket_payload()).json()["ticket"]["id"]

        self.assertEqual(self.api_post(self.ana, f"{TICKETS_URL}/{ticket_id}/mark-paid").status_code, 403)
        resp = self.api_post(self.supervisor, f"{TICKETS_URL}/{ticket_id}/mark-paid", {"pago": True})
        self.assertTrue(resp.json()["pago"])
        self.assertIsNotNone(resp.json()["data_pagamento"])

        resp = self.api_patch(self.supervisor, f"{TICKETS_URL}/{ticket_id}", {"valor": "990.00"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(Ticket.objects.get(id=ticket_id).valor, Decimal("990.00"))

        filtered = self.api_get(self.supervisor, TICKETS_URL, pago="true")
        self.assertEqual(filtered.json()["total_items"], 1)

    def test_unknown_ticket(self) -> None:
        resp = self.api_patch(self.supervisor, f"{TICKETS_URL}/{uuid.uuid4()}", {"valor": "10.00"})
        self.assertEqual(resp.status_code, 404)


class BestEffortNotifierTests(TestCase):
    def setUp(self):
        self.webhook = Mock()
        self.dispatcher = Mock()
        self.notifier = BestEffortNotifier(self.webhook, self.dispatcher)

    def test_failure_is_reported_on_error_channel(self) -> None:
        self.webhook.send.side_effect = PermanentNotificationError("HTTP 400")
        ticket_id = uuid.uuid4()

        outcome = self.notifier.notify(ticket_id, {"matricula": "M-0001"})

        self.assertFalse(outcome.delivered)
        self.assertTrue(outcome.permanent)
        event = self.dispatcher.dispatch.call_args.args[0]
        self.assertIsInstance(event, TicketNotificationFailedEvent)
        self.assertEqual((event.ticket_id, event.channel, event.permanent), (ticket_id, "ticket", True))

    def test_success_emits_nothing(self) -> None:
        outcome = self.notifier.notify(uuid.uuid4(), {"matricula": "M-0001"})
        self.assertTrue(outcome.delivered)
        self.dispatcher.dispatch.assert_not_called()

    def test_unexpected_errors_propagate(self) -> None:
        self.webhook.send.side_effect = RuntimeError("bug")
        with self.assertRaises(RuntimeError):
            self.notifier.notify(uuid.uuid4(), {})
