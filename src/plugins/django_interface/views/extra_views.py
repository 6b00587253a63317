from client_distribution.adapters.config.composition_root import container as cd_container
from client_distribution.core.application.commands.core_commands import UpdateMesReferenteCommand
from client_distribution.core.application.queries.core_queries import GetSupervisorConfigQuery
from client_distribution.core.application.queries.ticket_queries import AttendanceStatsQuery
from corujo_core.adapters.config.composition_root import container as core_container
from corujo_core.adapters.observability.decorators import track_http
from corujo_core.core.application.queries.user_queries import GetUserQuery
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from plugins.django_interface.permissions import IsAgentOrSupervisor, IsSupervisor
from plugins.django_interface.serializers.core_serializers import (
    SupervisorConfigSerializer,
    UserSerializer,
)
from plugins.django_interface.views.core_views import PaginationFilterMixin

core_query_bus = core_container.query_bus()
cd_query_bus   = cd_container.query_bus()
cd_command_bus = cd_container.command_bus()


# ╭──────────────────────────────────────────────╮
# │      ME                                      │
# ╰──────────────────────────────────────────────╯
class MeView(APIView):
    @track_http("MeView_get")
    def get(self, request):
        user = core_query_bus.dispatch(GetUserQuery(filtros={}, user_id=str(request.user.id)))
        if user is None:
            return Response({"detail": "Usuário não encontrado."}, status=status.HTTP_404_NOT_FOUND)
        return Response(UserSerializer(user).data)


# ╭──────────────────────────────────────────────╮
# │      ESTATÍSTICAS DE ATENDIMENTO             │
# ╰──────────────────────────────────────────────╯
class AttendanceStatsView(PaginationFilterMixin, APIView):
    """
    Atendentes veem apenas os próprios números; a supervisão vê o geral
    e o detalhamento por atendente (ou um atendente via `usuario_id`).
    """
    permission_classes = [IsAgentOrSupervisor]

    @track_http("AttendanceStatsView_get")
    def get(self, request):
        session = self._session(request)
        filtros = self._filters(request, ("usuario_id", "data_inicio", "data_fim"))
        if not session.is_supervisor:
            filtros["usuario_id"] = session.scope_agent_id
        return Response(cd_query_bus.dispatch(AttendanceStatsQuery(filtros=filtros)))


# ╭──────────────────────────────────────────────╮
# │      CONFIGURAÇÃO DA SUPERVISÃO              │
# ╰──────────────────────────────────────────────╯
class SupervisorConfigView(APIView):
    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAgentOrSupervisor()]
        return [IsSupervisor()]

    @track_http("SupervisorConfigView_get")
    def get(self, request):
        cfg = cd_query_bus.dispatch(GetSupervisorConfigQuery(filtros={}))
        return Response(SupervisorConfigSerializer(cfg).data)

    @track_http("SupervisorConfigView_put")
    def put(self, request):
        mes = request.data.get("mes_referente")
        if not isinstance(mes, str):
            return Response({"error": "Informe 'mes_referente'.", "code": "invalid_request"},
                            status=status.HTTP_400_BAD_REQUEST)
        cfg = cd_command_bus.dispatch(UpdateMesReferenteCommand(mes_referente=mes))
        return Response(SupervisorConfigSerializer(cfg).data)
