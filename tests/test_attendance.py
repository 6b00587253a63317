"""
Atendimento: transição pendente → atendido / não atendido + registro da ligação.
"""
from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.cache import cache
from django.test import TestCase

from plugins.django_interface.models import DistributedClient, InstallmentFee, Ligacao
from tests.helpers.api import ApiClientMixin, make_pending, make_user


def attended_url(row) -> str:
    return f"/api/distributed-clients/{row.id}/mark-attended"


def not_attended_url(row) -> str:
    return f"/api/distributed-clients/{row.id}/mark-not-attended"


def attendance_form(**fields) -> dict:
    return {"forma_pagamento": "pix", "retorno": "1x", **fields}


class AttendanceTests(ApiClientMixin, TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.supervisor = make_user("sup@example.com", perfil="supervisao")
        cls.ana = make_user("ana@example.com", nome="Ana")
        cls.bia = make_user("bia@example.com", nome="Bia")
        InstallmentFee.objects.create(quantidade=12, valor=Decimal("1200.00"))

    def setUp(self):
        cache.clear()
        self.row = make_pending(self.ana, matricula="M-0001")

    def test_not_attended_records_call_without_ticket(self) -> None:
        resp = self.api_post(self.ana, not_attended_url(self.row))
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["status"], "nao_atendeu")
        self.assertFalse(body["ticket_gerado"])
        self.assertIsNone(body["valor"])

        self.row.refresh_from_db()
        self.assertEqual(self.row.status, "nao_atendido")
        self.assertIsNotNone(self.row.data_atendimento)

    def test_second_resolution_is_rejected(self) -> None:
        self.api_post(self.ana, not_attended_url(self.row))
        resp = self.api_post(self.ana, attended_url(self.row), attendance_form(qtd_mensalidades=12))
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["code"], "already_resolved")
        self.assertEqual(Ligacao.objects.count(), 1)
        self.row.refresh_from_db()
        self.assertEqual(self.row.status, "nao_atendido")

    def test_attended_uses_configured_fee(self) -> None:
        resp = self.api_post(
            self.ana,
            attended_url(self.row),
            attendance_form(qtd_mensalidades=12),
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["valor"], "1200.00")
        self.assertEqual(resp.json()["valor_formatado"], "R$ 1.200,00")

        ligacao = Ligacao.objects.get()
        self.assertEqual(ligacao.status, "atendeu")
        self.assertEqual(ligacao.cliente_id, self.row.id)
        self.assertEqual(ligacao.usuario_id, self.ana.id)
        self.assertEqual(ligacao.matricula, "M-0001")

    def test_typed_value_overrides_suggestion(self) -> None:
        resp = self.api_post(
            self.ana, attended_url(self.row), attendance_form(qtd_mensalidades=12, valor="1000.00")
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(Ligacao.objects.get().valor, Decimal("1000.00"))

    def test_missing_value_without_configured_fee(self) -> None:
        resp = self.api_post(self.ana, attended_url(self.row), attendance_form(qtd_mensalidades=5))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "invalid_request")
        self.row.refresh_from_db()
        self.assertEqual(self.row.status, "pendente")
        self.assertFalse(Ligacao.objects.exists())

    def test_payment_method_and_callback_are_required(self) -> None:
        resp = self.api_post(
            self.ana, attended_url(self.row), {"qtd_mensalidades": 3, "valor": "100.00"}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "validation_error")
        self.row.refresh_from_db()
        self.assertEqual(self.row.status, "pendente")
        self.assertFalse(Ligacao.objects.exists())

        resp = self.api_post(
            self.ana, attended_url(self.row), attendance_form(qtd_mensalidades=3, valor="100.00", retorno=None)
        )
        self.assertEqual(resp.status_code, 400)
        self.row.refresh_from_db()
        self.assertEqual(self.row.status, "pendente")

    def test_invalid_form_values(self) -> None:
        resp = self.api_post(
            self.ana, attended_url(self.row), {"qtd_mensalidades": 0, "forma_pagamento": "boleto"}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "validation_error")

    def test_agent_cannot_resolve_someone_elses_row(self) -> None:
        resp = self.api_post(self.bia, not_attended_url(self.row))
        self.assertEqual(resp.status_code, 404)
        self.row.refresh_from_db()
        self.assertEqual(self.row.status, "pendente")

    def test_supervisor_resolution_keeps_owner(self) -> None:
        resp = self.api_post(self.supervisor, not_attended_url(self.row))
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["usuario_id"], str(self.ana.id))

    def test_unknown_row(self) -> None:
        resp = self.api_post(self.ana, f"/api/distributed-clients/{uuid.uuid4()}/mark-not-attended")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["code"], "unknown_entity")

    def test_agent_lists_own_calls(self) -> None:
        self.api_post(self.ana, not_attended_url(self.row))
        other = make_pending(self.bia, matricula="M-0002")
        self.api_post(self.bia, not_attended_url(other))

        resp = self.api_get(self.ana, "/api/ligacoes")
        self.assertEqual(resp.json()["total_items"], 1)
        resp = self.api_get(self.supervisor, "/api/ligacoes")
        self.assertEqual(resp.json()["total_items"], 2)

    def test_resolved_rows_leave_agent_queue(self) -> None:
        self.api_post(self.ana, not_attended_url(self.row))
        resp = self.api_get(self.ana, "/api/distributed-clients")
        self.assertEqual(resp.json()["total_items"], 0)
        self.assertEqual(DistributedClient.objects.filter(status="nao_atendido").count(), 1)
