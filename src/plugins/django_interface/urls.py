from django.conf import settings
from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

from .routers import build_router
from .views.auth_views import HealthCheckView, LoginView, LogoutView
from .views.extra_views import AttendanceStatsView, MeView, SupervisorConfigView

swagger_permissions = [permissions.IsAuthenticated] if not settings.DEBUG else [permissions.AllowAny]

schema_view = get_schema_view(
    openapi.Info(
        title="CorujoTicket",
        default_version="v1",
        description="Distribuição de clientes, atendimento e tickets (CQRS + Bus)",
    ),
    public=settings.DEBUG,
    permission_classes=swagger_permissions,
)

router = build_router()

urlpatterns = [
    path("login/",  LoginView.as_view(),  name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("healthz/", HealthCheckView.as_view(), name="healthz"),
    path("me/", MeView.as_view(), name="me"),
    path("attendance-stats/", AttendanceStatsView.as_view(), name="attendance-stats"),
    path("supervisor-config/", SupervisorConfigView.as_view(), name="supervisor-config"),

    path("swagger/",     schema_view.with_ui("swagger", cache_timeout=0), name="swagger-ui"),
    path("swagger.json", schema_view.without_ui(cache_timeout=0),         name="swagger-json"),
    path("redoc/",       schema_view.with_ui("redoc",   cache_timeout=0), name="redoc-ui"),

    path("", include(router.urls)),
]
