from __future__ import annotations

from decimal import Decimal

from django.core.cache import cache
from django.test import TestCase

from client_distribution.adapters.repositories.installment_fee_repo_impl import (
    ACTIVE_FEES_CACHE_KEY,
    InstallmentFeeRepoImpl,
)
from client_distribution.core.domain.services.fee_suggestion import FeeSuggestionService
from plugins.django_interface.models import InstallmentFee
from tests.helpers.api import ApiClientMixin, make_user

FEES_URL = "/api/installment-fees"


class InstallmentFeeApiTests(ApiClientMixin, TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.supervisor = make_user("sup@example.com", perfil="supervisao")
        cls.ana = make_user("ana@example.com")

    def setUp(self):
        cache.clear()

    def test_supervisor_manages_fee_table(self) -> None:
        resp = self.api_post(self.supervisor, FEES_URL, {"quantidade": 12, "valor": "1200.00"})
        self.assertEqual(resp.status_code, 201)
        fee_id = resp.json()["id"]
        self.assertEqual(resp.json()["valor_formatado"], "R$ 1.200,00")

        duplicate = self.api_post(self.supervisor, FEES_URL, {"quantidade": 12, "valor": "999.00"})
        self.assertEqual(duplicate.status_code, 400)

        resp = self.api_patch(self.supervisor, f"{FEES_URL}/{fee_id}", {"valor": "1100.00"})
        self.assertEqual(resp.json()["valor"], "1100.00")

        self.assertEqual(self.api_delete(self.supervisor, f"{FEES_URL}/{fee_id}").status_code, 204)
        self.assertEqual(self.api_get(self.ana, FEES_URL).json(), [])
        self.assertEqual(self.api_delete(self.supervisor, f"{FEES_URL}/{fee_id}").status_code, 404)

        # desativado libera a quantidade para um novo valor
        again = self.api_post(self.supervisor, FEES_URL, {"quantidade": 12, "valor": "1300.00"})
        self.assertEqual(again.status_code, 201)

    def test_agents_read_but_do_not_write(self) -> None:
        InstallmentFee.objects.create(quantidade=1, valor=Decimal("100.00"))
        self.assertEqual(len(self.api_get(self.ana, FEES_URL).json()), 1)
        resp = self.api_post(self.ana, FEES_URL, {"quantidade": 2, "valor": "200.00"})
        self.assertEqual(resp.status_code, 403)

    def test_invalid_values(self) -> None:
        for payload in ({"quantidade": 0, "valor": "10.00"}, {"quantidade": 2, "valor": "-5"}):
            resp = self.api_post(self.supervisor, FEES_URL, payload)
            self.assertEqual(resp.status_code, 400, payload)

    def test_suggest_endpoint(self) -> None:
        InstallmentFee.objects.create(quantidade=12, valor=Decimal("1200.00"))
        resp = self.api_get(self.ana, f"{FEES_URL}/suggest", quantidade=12)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(Decimal(str(resp.json()["valor_sugerido"])), Decimal("1200.00"))

        resp = self.api_get(self.ana, f"{FEES_URL}/suggest", quantidade="doze")
        self.assertEqual(resp.status_code, 400)


class FeeSuggestionTests(TestCase):
    def setUp(self):
        cache.clear()
        self.repo = InstallmentFeeRepoImpl()
        self.service = FeeSuggestionService(self.repo)
        InstallmentFee.objects.create(quantidade=12, valor=Decimal("1200.00"))

    def test_suggest_and_prefill(self) -> None:
        self.assertEqual(self.service.suggest_fee(12), Decimal("1200.00"))
        self.assertIsNone(self.service.suggest_fee(5))
        self.assertIsNone(self.service.suggest_fee(None))

        self.assertEqual(self.service.prefill_value(Decimal("50.00"), 12), Decimal("1200.00"))
        self.assertEqual(self.service.prefill_value(Decimal("50.00"), 5), Decimal("50.00"))

    def test_active_fees_are_cached_until_a_write(self) -> None:
        self.repo.list_active()
        self.assertIsNotNone(cache.get(ACTIVE_FEES_CACHE_KEY))

        # escrita fora do repositório não invalida o cache
        InstallmentFee.objects.filter(quantidade=12).update(valor=Decimal("1500.00"))
        self.assertEqual(self.service.suggest_fee(12), Decimal("1200.00"))

        self.repo.create(6, Decimal("600.00"))
        self.assertIsNone(cache.get(ACTIVE_FEES_CACHE_KEY))
        self.assertEqual(self.service.suggest_fee(12), Decimal("1500.00"))
        self.assertEqual([f.quantidade for f in self.repo.list_active()], [6, 12])
