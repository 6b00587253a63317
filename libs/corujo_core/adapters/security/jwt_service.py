from datetime import UTC, datetime, timedelta

import jwt

from django.conf import settings


class JWTService:
    """
    Serviço de criação e validação de tokens JWT.
    """

    @staticmethod
    def create_token(
        subject: str,
        expires_in: int,
        perfil: str,
        nome: str | None = None,
    ) -> str:
        """Gera um token JWT com claim 'sub', perfil e expiração."""
        now = datetime.now(UTC)
        payload = {
            "sub": str(subject),
            "perfil": perfil,
            "iat": now,
            "exp": now + timedelta(seconds=int(expires_in)),
        }
        if nome is not None:
            payload["nome"] = nome

        return jwt.encode(
            payload,
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

    @staticmethod
    def decode_token(token: str) -> dict:
        """
        Decodifica e valida o token JWT, retornando o payload.
        Lança jwt.PyJWTError se inválido ou expirado.
        """
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
