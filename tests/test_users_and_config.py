"""Tests for supervisor user management and the supervisor configuration."""

from django.test import TestCase

from plugins.django_interface.models import SupervisorConfig, User
from tests.helpers.api import ApiClientMixin, make_user


class UserManagementTests(ApiClientMixin, TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.supervisor = make_user("sup@example.com", perfil="supervisao", nome="Sup")
        cls.agent = make_user("ana@example.com", perfil="ligacao", nome="Ana")

    def test_create_user_hashes_password(self) -> None:
        resp = self.api_post(self.supervisor, "/api/users", {
            "email": "bia@example.com",
            "password": "segredo1",
            "nome": "Bia",
            "perfil": "whatsapp",
            "id_planilha": "planilha-bia",
        })
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["perfil"], "whatsapp")
        self.assertNotIn("password_hash", body)

        stored = User.objects.get(email="bia@example.com")
        self.assertNotEqual(stored.password_hash, "segredo1")
        self.assertEqual(stored.id_planilha, "planilha-bia")

    def test_create_user_validates_payload(self) -> None:
        resp = self.api_post(self.supervisor, "/api/users", {
            "email": "nao-e-email",
            "password": "123",
            "nome": "X",
            "perfil": "gerente",
        })
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "validation_error")

    def test_partial_update_deactivates_user(self) -> None:
        resp = self.api_patch(self.supervisor, f"/api/users/{self.agent.id}", {"ativo": False, "nome": "Ana B."})
        self.assertEqual(resp.status_code, 200)
        self.agent.refresh_from_db()
        self.assertFalse(self.agent.ativo)
        self.assertEqual(self.agent.nome, "Ana B.")

        login = self.client.post(
            "/api/login/",
            {"email": self.agent.email, "password": "senha123"},
            content_type="application/json",
        )
        self.assertEqual(login.status_code, 401)

    def test_partial_update_changes_password(self) -> None:
        resp = self.api_patch(self.supervisor, f"/api/users/{self.agent.id}", {"password": "novasenha"})
        self.assertEqual(resp.status_code, 200)

        login = self.client.post(
            "/api/login/",
            {"email": self.agent.email, "password": "novasenha"},
            content_type="application/json",
        )
        self.assertEqual(login.status_code, 200)

    def test_list_filters_by_perfil(self) -> None:
        resp = self.api_get(self.supervisor, "/api/users", perfil="ligacao")
        self.assertEqual(resp.status_code, 200)
        emails = [u["email"] for u in resp.json()["results"]]
        self.assertEqual(emails, [self.agent.email])

    def test_unknown_user_is_404(self) -> None:
        missing = "00000000-0000-0000-0000-000000000000"
        self.assertEqual(self.api_get(self.supervisor, f"/api/users/{missing}").status_code, 404)
        resp = self.api_patch(self.supervisor, f"/api/users/{missing}", {"nome": "X"})
        self.assertEqual(resp.status_code, 404)

    def test_invalid_page_falls_back_to_defaults(self) -> None:
        resp = self.api_get(self.supervisor, "/api/users", page="abc")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["page"], 1)


class SupervisorConfigTests(ApiClientMixin, TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.supervisor = make_user("sup@example.com", perfil="supervisao")
        cls.agent = make_user("ana@example.com", perfil="ligacao")

    def test_get_creates_singleton(self) -> None:
        resp = self.api_get(self.agent, "/api/supervisor-config/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["mes_referente"], "")
        self.assertEqual(SupervisorConfig.objects.count(), 1)

    def test_supervisor_updates_mes_referente(self) -> None:
        resp = self.api_put(self.supervisor, "/api/supervisor-config/", {"mes_referente": "  Outubro/2026 "})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["mes_referente"], "Outubro/2026")

        again = self.api_put(self.supervisor, "/api/supervisor-config/", {"mes_referente": "Novembro/2026"})
        self.assertEqual(again.json()["mes_referente"], "Novembro/2026")
        self.assertEqual(SupervisorConfig.objects.count(), 1)

    def test_agent_cannot_update(self) -> None:
        resp = self.api_put(self.agent, "/api/supervisor-config/", {"mes_referente": "Outubro/2026"})
        self.assertEqual(resp.status_code, 403)

    def test_missing_mes_referente_is_400(self) -> None:
        resp = self.api_put(self.supervisor, "/api/supervisor-config/", {})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "invalid_request")
