from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.test import TestCase

from plugins.django_interface.models import Ligacao, Ticket
from tests.helpers.api import ApiClientMixin, make_user

STATS_URL = "/api/attendance-stats/"


def make_call(user, status: str, matricula: str = "M-0001") -> Ligacao:
    return Ligacao.objects.create(
        usuario=user, matricula=matricula, nome="Cliente", telefone="5511987654321", status=status
    )


class AttendanceStatsTests(ApiClientMixin, TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.supervisor = make_user("sup@example.com", perfil="supervisao")
        cls.ana = make_user("ana@example.com", nome="Ana")
        cls.bia = make_user("bia@example.com", nome="Bia")

        for status in ("atendeu", "atendeu", "nao_atendeu"):
            make_call(cls.ana, status)
        make_call(cls.bia, "nao_atendeu")
        Ticket.objects.create(
            usuario=cls.ana,
            matricula="M-0001",
            nome="Cliente",
            valor=Decimal("100.00"),
            qtd_mensalidades=1,
            telefone="5511987654321",
            categoria="Pix",
        )

    def test_supervisor_sees_totals_and_breakdown(self) -> None:
        body = self.api_get(self.supervisor, STATS_URL).json()
        geral = body["geral"]
        self.assertEqual(geral["total_ligacoes"], 4)
        self.assertEqual(geral["atendidas"], 2)
        self.assertEqual(geral["nao_atendidas"], 2)
        self.assertEqual(geral["tickets_gerados"], 1)
        self.assertEqual(geral["taxa_atendimento"], 50.0)
        self.assertEqual(geral["taxa_conversao"], 25.0)

        por_atendente = {row["usuario_nome"]: row for row in body["por_atendente"]}
        self.assertEqual(set(por_atendente), {"Ana", "Bia"})
        self.assertEqual(por_atendente["Ana"]["taxa_atendimento"], 66.7)
        self.assertEqual(por_atendente["Bia"]["tickets_gerados"], 0)

        goal = settings.DAILY_CALL_GOAL
        self.assertEqual(
            por_atendente["Ana"]["meta_diaria"],
            {"meta": goal, "realizadas": 3, "progresso": min(round(3 / goal * 100, 1), 100.0)},
        )

    def test_agent_sees_only_own_numbers(self) -> None:
        body = self.api_get(self.bia, STATS_URL, usuario_id=str(self.ana.id)).json()
        self.assertNotIn("por_atendente", body)
        self.assertEqual(body["geral"]["total_ligacoes"], 1)
        self.assertEqual(body["geral"]["taxa_atendimento"], 0.0)

    def test_empty_period_has_zero_rates(self) -> None:
        body = self.api_get(self.supervisor, STATS_URL, data_inicio="2000-01-01", data_fim="2000-01-31").json()
        self.assertEqual(body["geral"]["total_ligacoes"], 0)
        self.assertEqual(body["geral"]["taxa_conversao"], 0.0)
        self.assertEqual(body["por_atendente"], [])
