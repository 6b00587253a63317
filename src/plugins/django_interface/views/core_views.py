# ╭────────────────────────────────────────────────────────────────────────────╮
# │  ViewSets REST – Distribuição de clientes, atendimento e tickets          │
# │                                                                            │
# │  • Filtro seguro   → remove “page” / “page_size” antes de passar ao repo   │
# │  • Paginação DRY   → mix-in centralizado                                   │
# │  • Sessão explícita→ SessionContext montado a partir do usuário JWT        │
# │  • Métrica trace   → decorator `track_http`                                │
# ╰────────────────────────────────────────────────────────────────────────────╯
from __future__ import annotations

from decimal import Decimal, InvalidOperation

from client_distribution.adapters.config.composition_root import (
    container as client_distribution_container,
)
from client_distribution.core.application.commands.core_commands import (
    CreateInstallmentFeeCommand,
    DeactivateInstallmentFeeCommand,
    SetClientActiveCommand,
    UpdateInstallmentFeeCommand,
)
from client_distribution.core.application.commands.distribution_commands import (
    DistributeClientsCommand,
    MarkAttendedCommand,
    MarkNotAttendedCommand,
    PurgePendingDistributionsCommand,
)
from client_distribution.core.application.commands.ticket_commands import (
    ResendTicketCommand,
    SendTicketCommand,
    SetTicketPaidCommand,
    UpdateTicketCommand,
)
from client_distribution.core.application.dtos.distribution_dtos import (
    AttendanceDetailsDTO,
    DistributeClientsDTO,
)
from client_distribution.core.application.dtos.installment_fee_dtos import (
    InstallmentFeeDTO,
    UpdateInstallmentFeeDTO,
)
from client_distribution.core.application.dtos.session_dto import SessionContext
from client_distribution.core.application.dtos.ticket_dtos import TicketDTO, UpdateTicketDTO
from client_distribution.core.application.queries.core_queries import (
    ListInstallmentFeesQuery,
    SuggestFeeQuery,
)
from client_distribution.core.application.queries.distribution_queries import (
    AvailabilityOverviewQuery,
    GetAvailabilityQuery,
    ListClientsQuery,
    ListDistributedClientsQuery,
)
from client_distribution.core.application.queries.ticket_queries import (
    GetTicketQuery,
    ListLigacoesQuery,
    ListTicketsQuery,
    LookupPriorDataQuery,
)
from client_distribution.core.domain.exceptions import InvalidRequest, UnknownEntity
from corujo_core.adapters.config.composition_root import container as core_container
from corujo_core.adapters.observability.decorators import track_http
from corujo_core.core.application.commands.user_commands import CreateUserCommand, UpdateUserCommand
from corujo_core.core.application.cqrs import CommandBusImpl, QueryBusImpl
from corujo_core.core.application.dtos.user_dto import CreateUserDTO, UpdateUserDTO
from corujo_core.core.application.queries.user_queries import GetUserQuery, ListUsersQuery
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from plugins.django_interface.error_responses import domain_errors, error_response
from plugins.django_interface.permissions import IsAgentOrSupervisor, IsSupervisor

# ────────────────────────────────  Serializers  ───────────────────────────────
from ..serializers.core_serializers import (
    AllocationResultSerializer,
    ClientSerializer,
    DistributedClientSerializer,
    InstallmentFeeSerializer,
    LigacaoSerializer,
    TicketDispatchSerializer,
    TicketSerializer,
    UserSerializer,
)

# ───────────────────────────────  CQRS Buses  ────────────────────────────────
core_command_bus: CommandBusImpl = core_container.command_bus()
core_query_bus: QueryBusImpl = core_container.query_bus()
cd_command_bus: CommandBusImpl = client_distribution_container.command_bus()
cd_query_bus: QueryBusImpl = client_distribution_container.query_bus()

# ───────────────────────────────  Constantes  ────────────────────────────────
DEFAULT_PAGE_SIZE = 50
UUID_LOOKUP = r"[0-9a-fA-F-]{36}"

# ╭──────────────────────────────────────────────────────────────────────────╮
# │ Helper mix-in – paginação + filtros + sessão                             │
# ╰──────────────────────────────────────────────────────────────────────────╯
class PaginationFilterMixin:
    """Remove page/page_size do QueryDict e devolve filtros limpos."""

    @staticmethod
    def _pagination(request) -> tuple[int, int]:
        try:
            page = int(request.query_params.get("page", 1))
            size = int(request.query_params.get("page_size", DEFAULT_PAGE_SIZE))
        except ValueError:
            return 1, DEFAULT_PAGE_SIZE
        return max(page, 1), max(size, 1)

    @staticmethod
    def _filters(request, allowed: tuple[str, ...]) -> dict[str, object]:
        clean: dict[str, object] = {}
        for key in allowed:
            value = request.query_params.get(key)
            if value in (None, ""):
                continue
            if key in ("ativo", "enviado", "pago"):
                clean[key] = value.lower() in ("1", "true", "sim")
            else:
                clean[key] = value
        return clean

    @staticmethod
    def _session(request) -> SessionContext:
        return SessionContext.from_user(request.user)

    @staticmethod
    def _paged(res, serializer_cls) -> dict:
        return {
            "results": serializer_cls(res.items, many=True).data,
            "total_items": res.total,
            "page": res.page,
            "page_size": res.page_size,
            "total_pages": res.total_pages,
            "items_on_page": len(res.items),
        }


class RoleActionsMixin:
    """Ações listadas em `supervisor_actions` exigem perfil de supervisão."""
    supervisor_actions: frozenset[str] = frozenset()

    def get_permissions(self):
        if self.action in self.supervisor_actions:
            return [IsSupervisor()]
        return [IsAgentOrSupervisor()]


# ╭──────────────────────────────────────────────╮
# │  Pool de clientes (supervisão)               │
# ╰──────────────────────────────────────────────╯
class ClientViewSet(PaginationFilterMixin, viewsets.ViewSet):
    permission_classes = [IsSupervisor]
    lookup_value_regex = UUID_LOOKUP

    @track_http("ClientViewSet_list")
    def list(self, request):
        filtros = self._filters(request, ("categoria", "ativo", "matricula"))
        page, page_size = self._pagination(request)
        res = cd_query_bus.dispatch(ListClientsQuery(filtros=filtros, page=page, page_size=page_size))
        return Response(self._paged(res, ClientSerializer))

    @track_http("ClientViewSet_set_active")
    @action(detail=True, methods=["post"], url_path="set-active")
    @domain_errors
    def set_active(self, request, pk=None):
        ativo = request.data.get("ativo")
        if not isinstance(ativo, bool):
            raise InvalidRequest("Informe 'ativo' como true ou false.")
        client = cd_command_bus.dispatch(SetClientActiveCommand(client_id=str(pk), ativo=ativo))
        return Response(ClientSerializer(client).data)


# ╭──────────────────────────────────────────────╮
# │  Distribuição & atendimento                  │
# ╰──────────────────────────────────────────────╯
class DistributedClientViewSet(RoleActionsMixin, PaginationFilterMixin, viewsets.ViewSet):
    lookup_value_regex = UUID_LOOKUP
    supervisor_actions = frozenset({"distribute", "availability", "purge_pending"})

    @track_http("DistributedClientViewSet_list")
    def list(self, request):
        session = self._session(request)
        filtros = self._filters(request, ("usuario_id", "status", "categoria"))
        if not session.is_supervisor:
            filtros["usuario_id"] = session.scope_agent_id
            filtros.setdefault("status", "pendente")
        page, page_size = self._pagination(request)
        res = cd_query_bus.dispatch(
            ListDistributedClientsQuery(filtros=filtros, page=page, page_size=page_size)
        )
        return Response(self._paged(res, DistributedClientSerializer))

    @track_http("DistributedClientViewSet_distribute")
    @action(detail=False, methods=["post"])
    @domain_errors
    def distribute(self, request):
        dto = DistributeClientsDTO(**request.data)
        result = cd_command_bus.dispatch(
            DistributeClientsCommand(session=self._session(request), payload=dto)
        )
        body = AllocationResultSerializer(result).data
        body["message"] = (
            "Distribuição de clientes enviada com sucesso!"
            if result.delegated
            else f"{result.quantidade} cliente(s) distribuído(s) com sucesso."
        )
        return Response(body, status=status.HTTP_201_CREATED)

    @track_http("DistributedClientViewSet_availability")
    @action(detail=False, methods=["get"])
    @domain_errors
    def availability(self, request):
        categoria = request.query_params.get("categoria")
        if categoria:
            return Response(cd_query_bus.dispatch(GetAvailabilityQuery(filtros={}, categoria=categoria)))
        return Response(cd_query_bus.dispatch(AvailabilityOverviewQuery(filtros={})))

    @track_http("DistributedClientViewSet_purge_pending")
    @action(detail=False, methods=["post"], url_path="purge-pending")
    @domain_errors
    def purge_pending(self, request):
        removed = cd_command_bus.dispatch(PurgePendingDistributionsCommand(session=self._session(request)))
        return Response({"removed": removed})

    @track_http("DistributedClientViewSet_mark_attended")
    @action(detail=True, methods=["post"], url_path="mark-attended")
    @domain_errors
    def mark_attended(self, request, pk=None):
        dto = AttendanceDetailsDTO(**request.data)
        ligacao = cd_command_bus.dispatch(
            MarkAttendedCommand(session=self._session(request), distributed_client_id=str(pk), payload=dto)
        )
        return Response(LigacaoSerializer(ligacao).data, status=status.HTTP_201_CREATED)

    @track_http("DistributedClientViewSet_mark_not_attended")
    @action(detail=True, methods=["post"], url_path="mark-not-attended")
    @domain_errors
    def mark_not_attended(self, request, pk=None):
        ligacao = cd_command_bus.dispatch(
            MarkNotAttendedCommand(session=self._session(request), distributed_client_id=str(pk))
        )
        return Response(LigacaoSerializer(ligacao).data, status=status.HTTP_201_CREATED)


class LigacaoViewSet(PaginationFilterMixin, viewsets.ViewSet):
    permission_classes = [IsAgentOrSupervisor]

    @track_http("LigacaoViewSet_list")
    def list(self, request):
        session = self._session(request)
        filtros = self._filters(request, ("usuario_id", "status", "matricula", "data_inicio", "data_fim"))
        if not session.is_supervisor:
            filtros["usuario_id"] = session.scope_agent_id
        page, page_size = self._pagination(request)
        res = cd_query_bus.dispatch(ListLigacoesQuery(filtros=filtros, page=page, page_size=page_size))
        return Response(self._paged(res, LigacaoSerializer))


# ╭──────────────────────────────────────────────╮
# │  Tickets                                     │
# ╰──────────────────────────────────────────────╯
class TicketViewSet(RoleActionsMixin, PaginationFilterMixin, viewsets.ViewSet):
    lookup_value_regex = UUID_LOOKUP
    supervisor_actions = frozenset({"partial_update", "mark_paid"})

    @track_http("TicketViewSet_list")
    def list(self, request):
        session = self._session(request)
        filtros = self._filters(
            request, ("search", "usuario_id", "enviado", "pago", "data_inicio", "data_fim")
        )
        if not session.is_supervisor:
            filtros["usuario_id"] = session.scope_agent_id
        page, page_size = self._pagination(request)
        res = cd_query_bus.dispatch(ListTicketsQuery(filtros=filtros, page=page, page_size=page_size))
        return Response(self._paged(res, TicketSerializer))

    @track_http("TicketViewSet_retrieve")
    def retrieve(self, request, pk=None):
        session = self._session(request)
        ticket = cd_query_bus.dispatch(GetTicketQuery(filtros={}, ticket_id=str(pk)))
        if ticket is None or (session.scope_agent_id and str(ticket.usuario_id) != session.scope_agent_id):
            return error_response(UnknownEntity("Ticket", pk))
        return Response(TicketSerializer(ticket).data)

    @track_http("TicketViewSet_create")
    @domain_errors
    def create(self, request):
        dto = TicketDTO(**request.data)
        result = cd_command_bus.dispatch(SendTicketCommand(session=self._session(request), payload=dto))
        return Response(TicketDispatchSerializer(result).data, status=status.HTTP_201_CREATED)

    @track_http("TicketViewSet_partial_update")
    @domain_errors
    def partial_update(self, request, pk=None):
        dto = UpdateTicketDTO(**request.data)
        ticket = cd_command_bus.dispatch(UpdateTicketCommand(ticket_id=str(pk), payload=dto))
        return Response(TicketSerializer(ticket).data)

    @track_http("TicketViewSet_resend")
    @action(detail=True, methods=["post"])
    @domain_errors
    def resend(self, request, pk=None):
        result = cd_command_bus.dispatch(ResendTicketCommand(session=self._session(request), ticket_id=str(pk)))
        return Response(TicketDispatchSerializer(result).data)

    @track_http("TicketViewSet_mark_paid")
    @action(detail=True, methods=["post"], url_path="mark-paid")
    @domain_errors
    def mark_paid(self, request, pk=None):
        pago = request.data.get("pago", True)
        if not isinstance(pago, bool):
            raise InvalidRequest("Informe 'pago' como true ou false.")
        ticket = cd_command_bus.dispatch(SetTicketPaidCommand(ticket_id=str(pk), pago=pago))
        return Response(TicketSerializer(ticket).data)

    @track_http("TicketViewSet_lookup")
    @action(detail=False, methods=["get"])
    def lookup(self, request):
        matricula = (request.query_params.get("matricula") or "").strip()
        if not matricula:
            return Response({"error": "Informe a matrícula.", "code": "invalid_request"},
                            status=status.HTTP_400_BAD_REQUEST)
        data = cd_query_bus.dispatch(LookupPriorDataQuery(filtros={}, matricula=matricula))
        if data is None:
            return Response({"found": False, "matricula": matricula})
        return Response({"found": True, **data})


# ╭──────────────────────────────────────────────╮
# │  Valores de mensalidade                      │
# ╰──────────────────────────────────────────────╯
class InstallmentFeeViewSet(RoleActionsMixin, viewsets.ViewSet):
    lookup_value_regex = UUID_LOOKUP
    supervisor_actions = frozenset({"create", "partial_update", "destroy"})

    @track_http("InstallmentFeeViewSet_list")
    def list(self, request):
        fees = cd_query_bus.dispatch(ListInstallmentFeesQuery(filtros={}))
        return Response(InstallmentFeeSerializer(fees, many=True).data)

    @track_http("InstallmentFeeViewSet_create")
    @domain_errors
    def create(self, request):
        dto = InstallmentFeeDTO(**request.data)
        fee = cd_command_bus.dispatch(CreateInstallmentFeeCommand(payload=dto))
        return Response(InstallmentFeeSerializer(fee).data, status=status.HTTP_201_CREATED)

    @track_http("InstallmentFeeViewSet_partial_update")
    @domain_errors
    def partial_update(self, request, pk=None):
        dto = UpdateInstallmentFeeDTO(**request.data)
        fee = cd_command_bus.dispatch(UpdateInstallmentFeeCommand(fee_id=str(pk), payload=dto))
        return Response(InstallmentFeeSerializer(fee).data)

    @track_http("InstallmentFeeViewSet_destroy")
    @domain_errors
    def destroy(self, request, pk=None):
        cd_command_bus.dispatch(DeactivateInstallmentFeeCommand(fee_id=str(pk)))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @track_http("InstallmentFeeViewSet_suggest")
    @action(detail=False, methods=["get"])
    @domain_errors
    def suggest(self, request):
        try:
            quantidade = int(request.query_params.get("quantidade", ""))
            raw_valor = request.query_params.get("valor_atual")
            valor_atual = Decimal(raw_valor) if raw_valor else None
        except (ValueError, InvalidOperation):
            raise InvalidRequest("Parâmetros inválidos: informe 'quantidade' (inteiro) e 'valor_atual' opcional.") from None
        return Response(
            cd_query_bus.dispatch(SuggestFeeQuery(filtros={}, quantidade=quantidade, valor_atual=valor_atual))
        )


# ╭──────────────────────────────────────────────╮
# │  Usuários (supervisão)                       │
# ╰──────────────────────────────────────────────╯
class UserViewSet(PaginationFilterMixin, viewsets.ViewSet):
    permission_classes = [IsSupervisor]
    lookup_value_regex = UUID_LOOKUP

    @track_http("UserViewSet_list")
    def list(self, request):
        filtros = self._filters(request, ("perfil", "ativo"))
        page, page_size = self._pagination(request)
        res = core_query_bus.dispatch(ListUsersQuery(filtros=filtros, page=page, page_size=page_size))
        return Response(self._paged(res, UserSerializer))

    @track_http("UserViewSet_retrieve")
    def retrieve(self, request, pk=None):
        user = core_query_bus.dispatch(GetUserQuery(filtros={}, user_id=str(pk)))
        if user is None:
            return error_response(UnknownEntity("Usuário", pk))
        return Response(UserSerializer(user).data)

    @track_http("UserViewSet_create")
    @domain_errors
    def create(self, request):
        dto = CreateUserDTO(**request.data)
        user = core_command_bus.dispatch(CreateUserCommand(payload=dto))
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @track_http("UserViewSet_partial_update")
    @domain_errors
    def partial_update(self, request, pk=None):
        dto = UpdateUserDTO(**request.data)
        user = core_command_bus.dispatch(UpdateUserCommand(id=str(pk), payload=dto))
        if user is None:
            return error_response(UnknownEntity("Usuário", pk))
        return Response(UserSerializer(user).data)
