from dependency_injector import containers, providers

container = None

def setup_di_container_from_settings(settings):  # noqa: PLR0915
    """Inicializa o DI container de distribuição/atendimento após o Django carregar."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container já inicializado.")
        return container

    # ------- IMPORTS DE INFRA E ADAPTERS -------
    import structlog
    from corujo_core.adapters.repositories.user_repo_impl import UserRepoImpl
    from corujo_core.core.application.cqrs import CommandBusImpl, QueryBusImpl
    from corujo_core.core.domain.services.event_dispatcher import EventDispatcher

    # Notificadores (webhooks)
    from client_distribution.adapters.notifiers.registry import get_notifier

    # Repositórios concretos (Django ORM)
    from client_distribution.adapters.repositories.client_repo_impl import ClientRepoImpl
    from client_distribution.adapters.repositories.distributed_client_repo_impl import (
        DistributedClientRepoImpl,
    )
    from client_distribution.adapters.repositories.installment_fee_repo_impl import InstallmentFeeRepoImpl
    from client_distribution.adapters.repositories.ligacao_repo_impl import LigacaoRepoImpl
    from client_distribution.adapters.repositories.supervisor_config_repo_impl import (
        SupervisorConfigRepoImpl,
    )
    from client_distribution.adapters.repositories.ticket_repo_impl import TicketRepoImpl

    # ------- IMPORTS DO CORE DE CLIENT_DISTRIBUTION -------
    # Commands
    from client_distribution.core.application.commands.core_commands import (
        CreateInstallmentFeeCommand,
        DeactivateInstallmentFeeCommand,
        ImportClientsCommand,
        SetClientActiveCommand,
        UpdateInstallmentFeeCommand,
        UpdateMesReferenteCommand,
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

    # Handlers
    from client_distribution.core.application.handlers.attendance_handlers import (
        AttendanceStatsHandler,
        ListLigacoesHandler,
        MarkAttendedHandler,
        MarkNotAttendedHandler,
    )
    from client_distribution.core.application.handlers.core_handlers import (
        CreateInstallmentFeeHandler,
        DeactivateInstallmentFeeHandler,
        GetSupervisorConfigHandler,
        ListInstallmentFeesHandler,
        SuggestFeeHandler,
        UpdateInstallmentFeeHandler,
        UpdateMesReferenteHandler,
    )
    from client_distribution.core.application.handlers.distribution_handlers import (
        AvailabilityOverviewHandler,
        DistributeClientsHandler,
        GetAvailabilityHandler,
        ImportClientsHandler,
        ListClientsHandler,
        ListDistributedClientsHandler,
        PurgePendingDistributionsHandler,
        SetClientActiveHandler,
    )
    from client_distribution.core.application.handlers.ticket_handlers import (
        GetTicketHandler,
        ListTicketsHandler,
        LookupPriorDataHandler,
        ResendTicketHandler,
        SendTicketHandler,
        SetTicketPaidHandler,
        UpdateTicketHandler,
    )

    # Queries
    from client_distribution.core.application.queries.core_queries import (
        GetSupervisorConfigQuery,
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
        AttendanceStatsQuery,
        GetTicketQuery,
        ListLigacoesQuery,
        ListTicketsQuery,
        LookupPriorDataQuery,
    )

    # Serviços
    from client_distribution.core.application.services.best_effort_notifier import BestEffortNotifier
    from client_distribution.core.domain.services.allocation_policy import build_allocation_policy
    from client_distribution.core.domain.services.fee_suggestion import FeeSuggestionService

    # ------- DECLARAÇÃO DO CONTAINER -------
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        # Infra & integração
        logger = providers.Singleton(structlog.get_logger)
        event_dispatcher = providers.Singleton(EventDispatcher)

        # CQRS
        command_bus = providers.Singleton(CommandBusImpl, dispatcher=event_dispatcher)
        query_bus = providers.Singleton(QueryBusImpl)

        # Notifier Registry
        ticket_notifier = providers.Singleton(get_notifier, channel="ticket")
        distribution_notifier = providers.Singleton(get_notifier, channel="distribution")

        # Implementações de Repositórios (Ports → Adapters)
        user_repo = providers.Singleton(UserRepoImpl)
        client_repo = providers.Singleton(ClientRepoImpl)
        distributed_client_repo = providers.Singleton(DistributedClientRepoImpl)
        ligacao_repo = providers.Singleton(LigacaoRepoImpl)
        ticket_repo = providers.Singleton(TicketRepoImpl)
        installment_fee_repo = providers.Singleton(InstallmentFeeRepoImpl)
        supervisor_config_repo = providers.Singleton(SupervisorConfigRepoImpl)

        # Serviços de negócio
        fee_service = providers.Singleton(FeeSuggestionService, repo=installment_fee_repo)
        best_effort_notifier = providers.Singleton(
            BestEffortNotifier,
            notifier=ticket_notifier,
            dispatcher=event_dispatcher,
            channel="ticket",
        )
        allocation_policy = providers.Singleton(
            build_allocation_policy,
            name=config.allocation_policy,
            client_repo=client_repo,
            distributed_repo=distributed_client_repo,
            config_repo=supervisor_config_repo,
            notifier=distribution_notifier,
        )

        # Handlers de distribuição / pool
        distribute_clients_handler = providers.Factory(
            DistributeClientsHandler,
            policy=allocation_policy,
            user_repo=user_repo,
            dispatcher=event_dispatcher,
            max_quantity=config.max_distribution_quantity,
        )
        purge_pending_handler = providers.Factory(
            PurgePendingDistributionsHandler,
            repo=distributed_client_repo,
            dispatcher=event_dispatcher,
        )
        get_availability_handler = providers.Factory(GetAvailabilityHandler, policy=allocation_policy)
        availability_overview_handler = providers.Factory(
            AvailabilityOverviewHandler, policy=allocation_policy, client_repo=client_repo
        )
        list_distributed_clients_handler = providers.Factory(
            ListDistributedClientsHandler, repo=distributed_client_repo
        )
        list_clients_handler = providers.Factory(ListClientsHandler, repo=client_repo)
        set_client_active_handler = providers.Factory(SetClientActiveHandler, repo=client_repo)
        import_clients_handler = providers.Factory(ImportClientsHandler, repo=client_repo)

        # Handlers de atendimento
        mark_attended_handler = providers.Factory(
            MarkAttendedHandler,
            distributed_repo=distributed_client_repo,
            ligacao_repo=ligacao_repo,
            dispatcher=event_dispatcher,
            fee_service=fee_service,
        )
        mark_not_attended_handler = providers.Factory(
            MarkNotAttendedHandler,
            distributed_repo=distributed_client_repo,
            ligacao_repo=ligacao_repo,
            dispatcher=event_dispatcher,
        )
        list_ligacoes_handler = providers.Factory(ListLigacoesHandler, repo=ligacao_repo)
        attendance_stats_handler = providers.Factory(
            AttendanceStatsHandler,
            ligacao_repo=ligacao_repo,
            ticket_repo=ticket_repo,
            daily_goal=config.daily_call_goal,
        )

        # Handlers de tickets
        send_ticket_handler = providers.Factory(
            SendTicketHandler,
            repo=ticket_repo,
            ligacao_repo=ligacao_repo,
            notifier=best_effort_notifier,
            dispatcher=event_dispatcher,
        )
        resend_ticket_handler = providers.Factory(
            ResendTicketHandler,
            repo=ticket_repo,
            user_repo=user_repo,
            notifier=best_effort_notifier,
        )
        update_ticket_handler = providers.Factory(UpdateTicketHandler, repo=ticket_repo)
        set_ticket_paid_handler = providers.Factory(SetTicketPaidHandler, repo=ticket_repo)
        list_tickets_handler = providers.Factory(ListTicketsHandler, repo=ticket_repo)
        get_ticket_handler = providers.Factory(GetTicketHandler, repo=ticket_repo)
        lookup_prior_data_handler = providers.Factory(LookupPriorDataHandler, repo=ticket_repo)

        # Handlers de valores de mensalidade / configuração
        list_installment_fees_handler = providers.Factory(ListInstallmentFeesHandler, repo=installment_fee_repo)
        suggest_fee_handler = providers.Factory(SuggestFeeHandler, fee_service=fee_service)
        create_installment_fee_handler = providers.Factory(CreateInstallmentFeeHandler, repo=installment_fee_repo)
        update_installment_fee_handler = providers.Factory(UpdateInstallmentFeeHandler, repo=installment_fee_repo)
        deactivate_installment_fee_handler = providers.Factory(
            DeactivateInstallmentFeeHandler, repo=installment_fee_repo
        )
        get_supervisor_config_handler = providers.Factory(GetSupervisorConfigHandler, repo=supervisor_config_repo)
        update_mes_referente_handler = providers.Factory(UpdateMesReferenteHandler, repo=supervisor_config_repo)

        def init(self):
            # Registrar comandos no CommandBus
            bus = self.command_bus()

            # Distribuição / pool
            bus.register(DistributeClientsCommand, self.distribute_clients_handler())
            bus.register(PurgePendingDistributionsCommand, self.purge_pending_handler())
            bus.register(SetClientActiveCommand, self.set_client_active_handler())
            bus.register(ImportClientsCommand, self.import_clients_handler())

            # Atendimento
            bus.register(MarkAttendedCommand, self.mark_attended_handler())
            bus.register(MarkNotAttendedCommand, self.mark_not_attended_handler())

            # Tickets
            bus.register(SendTicketCommand, self.send_ticket_handler())
            bus.register(ResendTicketCommand, self.resend_ticket_handler())
            bus.register(UpdateTicketCommand, self.update_ticket_handler())
            bus.register(SetTicketPaidCommand, self.set_ticket_paid_handler())

            # Valores de mensalidade / configuração
            bus.register(CreateInstallmentFeeCommand, self.create_installment_fee_handler())
            bus.register(UpdateInstallmentFeeCommand, self.update_installment_fee_handler())
            bus.register(DeactivateInstallmentFeeCommand, self.deactivate_installment_fee_handler())
            bus.register(UpdateMesReferenteCommand, self.update_mes_referente_handler())

            # Registrar queries no QueryBus
            qb = self.query_bus()
            qb.register(GetAvailabilityQuery, self.get_availability_handler())
            qb.register(AvailabilityOverviewQuery, self.availability_overview_handler())
            qb.register(ListDistributedClientsQuery, self.list_distributed_clients_handler())
            qb.register(ListClientsQuery, self.list_clients_handler())
            qb.register(ListLigacoesQuery, self.list_ligacoes_handler())
            qb.register(AttendanceStatsQuery, self.attendance_stats_handler())
            qb.register(ListTicketsQuery, self.list_tickets_handler())
            qb.register(GetTicketQuery, self.get_ticket_handler())
            qb.register(LookupPriorDataQuery, self.lookup_prior_data_handler())
            qb.register(ListInstallmentFeesQuery, self.list_installment_fees_handler())
            qb.register(SuggestFeeQuery, self.suggest_fee_handler())
            qb.register(GetSupervisorConfigQuery, self.get_supervisor_config_handler())

    # ------- INSTANCIAÇÃO E CONFIG -------
    container = Container()
    container.config.allocation_policy.from_value(settings.ALLOCATION_POLICY)
    container.config.max_distribution_quantity.from_value(settings.MAX_DISTRIBUTION_QUANTITY)
    container.config.daily_call_goal.from_value(settings.DAILY_CALL_GOAL)

    # Inicializa o CommandBus com todos os handlers
    Container.init(container)
    return container
