"""Tests for login, JWT tokens and role-based access."""

from corujo_core.adapters.security.jwt_service import JWTService
from django.conf import settings
from django.test import TestCase

from tests.helpers.api import DEFAULT_PASSWORD, ApiClientMixin, auth_headers, make_user


class AuthTokenTests(ApiClientMixin, TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.agent = make_user("ana@example.com", perfil="ligacao", nome="Ana")
        cls.supervisor = make_user("sup@example.com", perfil="supervisao", nome="Sup")

    def test_login_returns_token_and_cookie(self) -> None:
        resp = self.client.post(
            "/api/login/",
            {"email": self.agent.email, "password": DEFAULT_PASSWORD},
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 200)
        cookie = resp.cookies.get(settings.AUTH_COOKIE_NAME)
        self.assertIsNotNone(cookie, "JWT cookie não encontrado")

        payload = JWTService.decode_token(resp.json()["token"])
        self.assertEqual(payload["sub"], str(self.agent.id))
        self.assertEqual(payload["perfil"], "ligacao")
        self.assertEqual(resp.json()["user"]["nome"], "Ana")
        self.assertNotIn("password_hash", resp.json()["user"])

    def test_login_accepts_senha_field(self) -> None:
        resp = self.client.post(
            "/api/login/",
            {"email": self.supervisor.email, "senha": DEFAULT_PASSWORD},
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 200)

    def test_wrong_password_is_rejected(self) -> None:
        resp = self.client.post(
            "/api/login/",
            {"email": self.agent.email, "password": "errada"},
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 401)

    def test_inactive_user_cannot_login_nor_use_token(self) -> None:
        user = make_user("inativo@example.com", ativo=False)
        resp = self.client.post(
            "/api/login/",
            {"email": user.email, "password": DEFAULT_PASSWORD},
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(self.client.get("/api/me/", **auth_headers(user)).status_code, 401)

    def test_me_uses_bearer_token(self) -> None:
        resp = self.api_get(self.agent, "/api/me/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], self.agent.email)

    def test_anonymous_request_is_unauthorized(self) -> None:
        self.assertEqual(self.client.get("/api/distributed-clients").status_code, 401)

    def test_healthcheck_is_public(self) -> None:
        self.assertEqual(self.client.get("/api/healthz/").json(), {"status": "ok"})

    def test_agent_cannot_reach_supervisor_routes(self) -> None:
        self.assertEqual(self.api_get(self.agent, "/api/users").status_code, 403)
        self.assertEqual(self.api_get(self.agent, "/api/clients").status_code, 403)
        self.assertEqual(self.api_get(self.supervisor, "/api/users").status_code, 200)
