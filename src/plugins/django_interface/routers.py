from rest_framework.routers import DefaultRouter

from .views.core_views import (
    ClientViewSet,
    DistributedClientViewSet,
    InstallmentFeeViewSet,
    LigacaoViewSet,
    TicketViewSet,
    UserViewSet,
)

# lista de (rota, ViewSet)
RESOURCES = [
    ("clients",             ClientViewSet),
    ("distributed-clients", DistributedClientViewSet),
    ("ligacoes",            LigacaoViewSet),
    ("tickets",             TicketViewSet),
    ("installment-fees",    InstallmentFeeViewSet),
    ("users",               UserViewSet),
]

def build_router() -> DefaultRouter:
    router = DefaultRouter(trailing_slash=False)
    for prefix, viewset in RESOURCES:
        router.register(prefix, viewset, basename=prefix.replace('-', '_'))
    return router
