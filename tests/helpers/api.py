from __future__ import annotations

from corujo_core.adapters.security.hash_service import HashService
from corujo_core.adapters.security.jwt_service import JWTService
from django.conf import settings

from plugins.django_interface.models import Client, DistributedClient, User

DEFAULT_PASSWORD = "senha123"


def make_user(email: str, perfil: str = "ligacao", nome: str | None = None, **extra) -> User:
    return User.objects.create(
        email=email,
        password_hash=HashService.hash_password(DEFAULT_PASSWORD),
        nome=nome or email.split("@")[0].title(),
        perfil=perfil,
        **extra,
    )


def make_clients(categoria: str, total: int, start: int = 1, **extra) -> list[Client]:
    return [
        Client.objects.create(
            matricula=f"{categoria}-{n:04d}",
            nome=f"Cliente {categoria}-{n:04d}",
            telefone=f"119876543{n % 100:02d}",
            categoria=categoria,
            **extra,
        )
        for n in range(start, start + total)
    ]


def make_pending(user: User, matricula: str = "M-0001", categoria: str = "1") -> DistributedClient:
    return DistributedClient.objects.create(
        usuario=user,
        matricula=matricula,
        nome=f"Cliente {matricula}",
        telefone="5511987654321",
        categoria=categoria,
    )


def auth_headers(user: User) -> dict[str, str]:
    token = JWTService.create_token(
        subject=str(user.id),
        expires_in=settings.JWT_EXPIRES_IN,
        perfil=user.perfil,
        nome=user.nome,
    )
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}


class ApiClientMixin:
    """Atalhos JSON autenticados sobre o `self.client` do TestCase."""

    def api_get(self, user: User, url: str, **params):
        return self.client.get(url, params, **auth_headers(user))

    def api_post(self, user: User, url: str, data: dict | None = None):
        return self.client.post(url, data or {}, content_type="application/json", **auth_headers(user))

    def api_patch(self, user: User, url: str, data: dict):
        return self.client.patch(url, data, content_type="application/json", **auth_headers(user))

    def api_put(self, user: User, url: str, data: dict):
        return self.client.put(url, data, content_type="application/json", **auth_headers(user))

    def api_delete(self, user: User, url: str):
        return self.client.delete(url, **auth_headers(user))
