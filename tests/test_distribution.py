"""
Distribuição de clientes: pool local (padrão) e cota delegada à planilha.
"""
from __future__ import annotations

import uuid
from unittest.mock import Mock, patch

from corujo_core.adapters.repositories.user_repo_impl import UserRepoImpl
from corujo_core.core.domain.services.event_dispatcher import EventDispatcher
from django.test import TestCase
from django.utils import timezone

from client_distribution.adapters.repositories.client_repo_impl import ClientRepoImpl
from client_distribution.adapters.repositories.distributed_client_repo_impl import (
    DistributedClientRepoImpl,
)
from client_distribution.adapters.repositories.supervisor_config_repo_impl import (
    SupervisorConfigRepoImpl,
)
from client_distribution.core.application.commands.distribution_commands import (
    DistributeClientsCommand,
)
from client_distribution.core.application.dtos.distribution_dtos import DistributeClientsDTO
from client_distribution.core.application.dtos.notification_dtos import DistributionRequestDTO
from client_distribution.core.application.dtos.session_dto import SessionContext
from client_distribution.core.application.handlers.distribution_handlers import (
    DistributeClientsHandler,
)
from client_distribution.core.domain.events.events import DistributionDelegatedEvent
from client_distribution.core.domain.events.exceptions import TemporaryNotificationError
from client_distribution.core.domain.entities.client_entity import ClientEntity
from client_distribution.core.domain.entities.distributed_client_entity import ClientSnapshot
from client_distribution.core.domain.exceptions import (
    AlreadyResolved,
    InsufficientPool,
    InvalidRequest,
    UpstreamUnavailable,
)
from client_distribution.core.domain.services.allocation_policy import DelegatedQuota
from plugins.django_interface.models import DistributedClient, SupervisorConfig
from tests.helpers.api import ApiClientMixin, make_clients, make_pending, make_user

DISTRIBUTE_URL = "/api/distributed-clients/distribute"
AVAILABILITY_URL = "/api/distributed-clients/availability"


class PoolDistributionTests(ApiClientMixin, TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.supervisor = make_user("sup@example.com", perfil="supervisao")
        cls.ana = make_user("ana@example.com", nome="Ana")
        cls.bia = make_user("bia@example.com", perfil="whatsapp", nome="Bia")
        cls.clients = make_clients("1", 5)

    def distribute(self, agent, quantidade: int, categoria: str = "1"):
        return self.api_post(
            self.supervisor,
            DISTRIBUTE_URL,
            {"usuario_id": str(agent.id), "categoria": categoria, "quantidade": quantidade},
        )

    def test_pool_is_consumed_without_duplicates(self) -> None:
        first = self.distribute(self.ana, 3)
        self.assertEqual(first.status_code, 201)
        body = first.json()
        self.assertEqual(body["policy"], "pool_consumption")
        self.assertEqual(body["quantidade"], 3)
        self.assertEqual(
            [row["matricula"] for row in body["distributed"]],
            ["1-0001", "1-0002", "1-0003"],
        )

        rejected = self.distribute(self.bia, 3)
        self.assertEqual(rejected.status_code, 409)
        self.assertEqual(rejected.json()["code"], "insufficient_pool")
        self.assertEqual(DistributedClient.objects.filter(usuario=self.bia).count(), 0)

        second = self.distribute(self.bia, 2)
        self.assertEqual(second.status_code, 201)
        self.assertEqual(
            sorted(row["matricula"] for row in second.json()["distributed"]),
            ["1-0004", "1-0005"],
        )

        origins = DistributedClient.objects.values_list("cliente_origem_id", flat=True)
        self.assertEqual(len(set(origins)), 5)
        availability = self.api_get(self.supervisor, AVAILABILITY_URL, categoria="1").json()
        self.assertEqual(availability["disponiveis"], 0)

    def test_snapshot_keeps_client_data(self) -> None:
        self.distribute(self.ana, 1)
        row = DistributedClient.objects.get(usuario=self.ana)
        source = self.clients[0]
        self.assertEqual(row.cliente_origem_id, source.id)
        self.assertEqual((row.matricula, row.nome, row.telefone), (source.matricula, source.nome, source.telefone))
        self.assertEqual(row.status, "pendente")

    def test_inactive_clients_are_not_distributed(self) -> None:
        make_clients("2", 2, ativo=False)
        make_clients("2", 1, start=10)
        resp = self.distribute(self.ana, 2, categoria="2")
        self.assertEqual(resp.status_code, 409)

        resp = self.distribute(self.ana, 1, categoria="2")
        self.assertEqual(resp.json()["distributed"][0]["matricula"], "2-0010")

    def test_invalid_quantity(self) -> None:
        for quantidade in (0, -1, 501):
            resp = self.distribute(self.ana, quantidade)
            self.assertEqual(resp.status_code, 400, quantidade)
            self.assertEqual(resp.json()["code"], "invalid_quantity")
        self.assertFalse(DistributedClient.objects.exists())

    def test_unknown_agent_or_category(self) -> None:
        resp = self.api_post(
            self.supervisor,
            DISTRIBUTE_URL,
            {"usuario_id": str(uuid.uuid4()), "categoria": "1", "quantidade": 1},
        )
        self.assertEqual(resp.status_code, 404)

        # supervisão não recebe clientes
        self.assertEqual(self.distribute(self.supervisor, 1).status_code, 404)
        self.assertEqual(self.distribute(self.ana, 1, categoria="9").status_code, 404)

    def test_missing_fields_is_validation_error(self) -> None:
        resp = self.api_post(self.supervisor, DISTRIBUTE_URL, {"categoria": "1"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "validation_error")

    def test_only_supervisor_distributes(self) -> None:
        resp = self.api_post(
            self.ana,
            DISTRIBUTE_URL,
            {"usuario_id": str(self.ana.id), "categoria": "1", "quantidade": 1},
        )
        self.assertEqual(resp.status_code, 403)

    def test_agent_lists_only_own_pending_rows(self) -> None:
        self.distribute(self.ana, 2)
        self.distribute(self.bia, 1)
        resp = self.api_get(self.ana, "/api/distributed-clients", usuario_id=str(self.bia.id))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["total_items"], 2)
        self.assertTrue(all(r["usuario_id"] == str(self.ana.id) for r in resp.json()["results"]))
        self.assertEqual(resp.json()["results"][0]["telefone_formatado"][:4], "(11)")

    def test_purge_pending_returns_clients_to_pool(self) -> None:
        self.distribute(self.ana, 3)
        resolved = DistributedClient.objects.filter(usuario=self.ana).order_by("matricula").first()
        resolved.status = "atendido"
        resolved.save()

        resp = self.api_post(self.supervisor, "/api/distributed-clients/purge-pending")
        self.assertEqual(resp.json(), {"removed": 2})
        overview = self.api_get(self.supervisor, AVAILABILITY_URL).json()
        self.assertEqual(overview["1"], {"ativos": 5, "disponiveis": 4})

    def test_rows_without_origin_do_not_block_the_pool(self) -> None:
        make_pending(self.ana, matricula="1-0001")
        self.assertEqual(self.distribute(self.bia, 5).status_code, 201)


class DelegatedDistributionTests(TestCase):
    """Política `delegated_quota`: só repassa o pedido ao webhook da planilha."""

    @classmethod
    def setUpTestData(cls):
        cls.supervisor = make_user("sup@example.com", perfil="supervisao")
        cls.ana = make_user("ana@example.com", nome="Ana", id_planilha="planilha-ana")
        cls.sem_planilha = make_user("caio@example.com", nome="Caio")
        make_clients("NR", 2)

    def setUp(self):
        self.notifier = Mock()
        self.dispatcher = Mock(spec=EventDispatcher)
        self.handler = DistributeClientsHandler(
            policy=DelegatedQuota(ClientRepoImpl(), SupervisorConfigRepoImpl(), self.notifier),
            user_repo=UserRepoImpl(),
            dispatcher=self.dispatcher,
            max_quantity=500,
        )
        self.session = SessionContext(agent_id=self.supervisor.id, perfil="supervisao")

    def command(self, agent, quantidade=50, aba_destino=None) -> DistributeClientsCommand:
        return DistributeClientsCommand(
            session=self.session,
            payload=DistributeClientsDTO(
                usuario_id=str(agent.id), categoria="NR", quantidade=quantidade, aba_destino=aba_destino
            ),
        )

    def test_request_goes_to_agent_sheet_with_reference_month(self) -> None:
        SupervisorConfig.objects.create(mes_referente="Março")
        result = self.handler.handle(self.command(self.ana, quantidade=80))

        self.assertTrue(result.delegated)
        self.assertEqual(result.aba_destino, "Março")
        self.notifier.send.assert_called_once_with(
            DistributionRequestDTO(
                usuario_id="planilha-ana", categoria="NR", aba_destino="Março", quantidade=80
            )
        )
        event = self.dispatcher.dispatch.call_args.args[0]
        self.assertIsInstance(event, DistributionDelegatedEvent)
        # nada é gravado localmente, mesmo acima da disponibilidade
        self.assertFalse(DistributedClient.objects.exists())

    def test_explicit_target_tab_wins(self) -> None:
        SupervisorConfig.objects.create(mes_referente="Março")
        result = self.handler.handle(self.command(self.ana, aba_destino="Abril"))
        self.assertEqual(result.aba_destino, "Abril")

    def test_agent_without_sheet_is_rejected(self) -> None:
        with self.assertRaises(InvalidRequest):
            self.handler.handle(self.command(self.sem_planilha, aba_destino="Abril"))
        self.notifier.send.assert_not_called()

    def test_missing_target_tab_is_rejected(self) -> None:
        with self.assertRaises(InvalidRequest):
            self.handler.handle(self.command(self.ana))
        self.notifier.send.assert_not_called()

    def test_webhook_failure_is_upstream_unavailable(self) -> None:
        self.notifier.send.side_effect = TemporaryNotificationError("timeout")
        with self.assertRaises(UpstreamUnavailable):
            self.handler.handle(self.command(self.ana, aba_destino="Abril"))
        self.dispatcher.dispatch.assert_not_called()

    def test_availability_is_active_pool_size(self) -> None:
        self.assertEqual(self.handler.policy.availability("NR"), 2)


class DistributionRaceTests(ApiClientMixin, TestCase):
    """Corridas entre requisições simuladas em nível de repositório."""

    @classmethod
    def setUpTestData(cls):
        cls.supervisor = make_user("sup@example.com", perfil="supervisao")
        cls.ana = make_user("ana@example.com", nome="Ana")
        cls.bia = make_user("bia@example.com", nome="Bia")

    def setUp(self):
        self.repo = DistributedClientRepoImpl()
        self.clients = make_clients("2", 3)

    def snapshots(self, clients) -> list[ClientSnapshot]:
        return [ClientSnapshot.of(ClientEntity.from_model(c)) for c in clients]

    def test_batch_with_consumed_client_inserts_nothing(self) -> None:
        self.repo.insert_batch(str(self.ana.id), self.snapshots(self.clients[:1]))
        self.assertEqual(DistributedClient.objects.count(), 1)

        with self.assertRaises(InsufficientPool) as ctx:
            self.repo.insert_batch(str(self.bia.id), self.snapshots(self.clients[1:2] + self.clients[:1]))

        self.assertEqual(ctx.exception.code, "insufficient_pool")
        self.assertEqual(DistributedClient.objects.count(), 1)
        self.assertFalse(DistributedClient.objects.filter(usuario=self.bia).exists())

    def test_stale_pool_read_is_reported_as_insufficient(self) -> None:
        self.repo.insert_batch(str(self.ana.id), self.snapshots(self.clients[:1]))
        stale = [ClientEntity.from_model(c) for c in self.clients[:2]]

        with patch.object(ClientRepoImpl, "list_available", return_value=stale):
            resp = self.api_post(
                self.supervisor,
                DISTRIBUTE_URL,
                {"usuario_id": str(self.bia.id), "categoria": "2", "quantidade": 2},
            )

        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["code"], "insufficient_pool")
        self.assertEqual(DistributedClient.objects.count(), 1)

    def test_second_resolution_of_same_row_loses(self) -> None:
        row = make_pending(self.ana, matricula="M-0001")
        now = timezone.now()

        first = self.repo.resolve(str(row.id), "atendido", now, agent_id=str(self.ana.id))
        self.assertEqual(first.status, "atendido")

        with self.assertRaises(AlreadyResolved):
            self.repo.resolve(str(row.id), "nao_atendido", now)

        row.refresh_from_db()
        self.assertEqual(row.status, "atendido")
        self.assertEqual(row.data_atendimento, now)
