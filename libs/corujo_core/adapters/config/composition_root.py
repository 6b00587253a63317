from dependency_injector import containers, providers

container = None

def setup_di_container_from_settings(settings):
    """Inicializa o DI container do core (usuários/autenticação) após o Django carregar."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container (core) já inicializado.")
        return container

    import structlog

    from corujo_core.adapters.repositories.user_repo_impl import UserRepoImpl
    from corujo_core.adapters.security.hash_service import HashService
    from corujo_core.core.application.commands.user_commands import CreateUserCommand, UpdateUserCommand
    from corujo_core.core.application.cqrs import CommandBusImpl, QueryBusImpl
    from corujo_core.core.application.handlers.user_handlers import (
        CreateUserHandler,
        GetUserHandler,
        ListUsersHandler,
        UpdateUserHandler,
    )
    from corujo_core.core.application.queries.user_queries import GetUserQuery, ListUsersQuery
    from corujo_core.core.domain.services.event_dispatcher import EventDispatcher

    # ------- DECLARAÇÃO DO CONTAINER -------
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        logger = providers.Singleton(structlog.get_logger)
        event_dispatcher = providers.Singleton(EventDispatcher)

        # CQRS
        command_bus = providers.Singleton(CommandBusImpl, dispatcher=event_dispatcher)
        query_bus = providers.Singleton(QueryBusImpl)

        # Infra
        hash_service = providers.Singleton(HashService)
        user_repo = providers.Singleton(UserRepoImpl)

        # Handlers
        create_user_handler = providers.Factory(
            CreateUserHandler,
            repo=user_repo,
            hash_service=hash_service,
            dispatcher=event_dispatcher,
        )
        update_user_handler = providers.Factory(UpdateUserHandler, repo=user_repo, hash_service=hash_service)
        list_users_handler = providers.Factory(ListUsersHandler, repo=user_repo)
        get_user_handler = providers.Factory(GetUserHandler, repo=user_repo)

        def init(self):
            bus = self.command_bus()
            bus.register(CreateUserCommand, self.create_user_handler())
            bus.register(UpdateUserCommand, self.update_user_handler())

            qb = self.query_bus()
            qb.register(ListUsersQuery, self.list_users_handler())
            qb.register(GetUserQuery, self.get_user_handler())

    # ------- INSTANCIAÇÃO -------
    container = Container()

    Container.init(container)
    return container
