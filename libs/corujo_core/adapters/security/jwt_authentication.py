import jwt
import structlog
from django.conf import settings
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication

from corujo_core.adapters.repositories.user_repo_impl import UserRepoImpl
from corujo_core.adapters.security.jwt_service import JWTService


class SimpleUser:
    """
    Representa um usuário mínimo compatível com DRF,
    usando somente os atributos necessários: id, perfil, nome e is_authenticated.
    """
    def __init__(self, id: str, perfil: str | None = None, nome: str | None = None):
        self.id = id
        self.perfil = perfil
        self.nome = nome
        self.is_authenticated = True

    def __str__(self):
        return f"<SimpleUser id={self.id} perfil={self.perfil}>"


def _user_from_token(token: str) -> SimpleUser:
    try:
        payload = JWTService.decode_token(token)
    except jwt.PyJWTError as e:
        raise exceptions.AuthenticationFailed(f"Token inválido: {e}") from e

    user_id = payload.get("sub")
    if not user_id:
        raise exceptions.AuthenticationFailed("Token não contém o claim 'sub'.")

    # Busca o usuário no repositório de domínio
    domain_user = UserRepoImpl().find_by_id(user_id)
    if not domain_user or not domain_user.ativo:
        raise exceptions.AuthenticationFailed("Usuário não encontrado ou inativo.")

    structlog.contextvars.bind_contextvars(user_id=str(domain_user.id), perfil=domain_user.perfil)
    # o perfil vem do banco: mudanças de perfil valem sem novo login
    return SimpleUser(id=str(domain_user.id), perfil=domain_user.perfil, nome=domain_user.nome)


class JWTAuthentication(BaseAuthentication):
    """
    Lê o header Authorization: Bearer <token>,
    valida com o JWTService e retorna (user, token).
    """
    def authenticate(self, request):
        header = request.headers.get("Authorization", "")
        parts = header.split()

        if not header or parts[0].lower() != "bearer" or len(parts) != 2:  # noqa: PLR2004
            return None

        token = parts[1]
        return (_user_from_token(token), token)

    def authenticate_header(self, request):
        return "Bearer"


class CookieJWTAuthentication(BaseAuthentication):
    """
    Em vez de ler do header, busca o token em um cookie (settings.AUTH_COOKIE_NAME),
    valida com o JWTService e retorna (user, token).
    """
    def authenticate(self, request):
        token = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if not token:
            return None
        return (_user_from_token(token), token)
