import structlog
from corujo_core.adapters.repositories.user_repo_impl import UserRepoImpl
from corujo_core.adapters.security.hash_service import HashService
from corujo_core.adapters.security.jwt_service import JWTService
from django.conf import settings
from django.utils import timezone
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from plugins.django_interface.serializers.core_serializers import UserSerializer

logger = structlog.get_logger(__name__)


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        email = (request.data.get("email") or "").strip()
        password = request.data.get("password") or request.data.get("senha")
        if not email or not password:
            return Response({"detail": "Credenciais incompletas."},
                            status=status.HTTP_400_BAD_REQUEST)

        user = UserRepoImpl().find_by_email(email)
        if not user or not user.ativo or not HashService.verify(password, user.password_hash):
            logger.info("auth.login_failed", email=email)
            return Response({"detail": "E-mail ou senha inválidos."},
                            status=status.HTTP_401_UNAUTHORIZED)

        jwt = JWTService.create_token(
            subject=str(user.id),
            expires_in=settings.JWT_EXPIRES_IN,
            perfil=user.perfil,
            nome=user.nome,
        )
        logger.info("auth.login", user_id=str(user.id), perfil=user.perfil)
        resp = Response(
            {"message": "Autenticado com sucesso.", "token": jwt, "user": UserSerializer(user).data},
            status=status.HTTP_200_OK,
        )
        # Configura cookie seguro
        resp.set_cookie(
            settings.AUTH_COOKIE_NAME,
            jwt,
            secure=settings.AUTH_COOKIE_SECURE,
            httponly=settings.AUTH_COOKIE_HTTPONLY,
            samesite=settings.AUTH_COOKIE_SAMESITE,
            expires=timezone.now() + timezone.timedelta(seconds=settings.JWT_EXPIRES_IN),
        )
        return resp


class LogoutView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        resp = Response({"message": "Logout realizado."}, status=status.HTTP_200_OK)
        # Destroi cookie
        resp.delete_cookie(settings.AUTH_COOKIE_NAME)
        return resp

class HealthCheckView(APIView):
    """
    Rota GET /api/healthz/: retorna status 200 se a API estiver viva.
    """
    permission_classes = []
    authentication_classes = []

    def get(self, request):
        return Response({"status": "ok"}, status=status.HTTP_200_OK)
