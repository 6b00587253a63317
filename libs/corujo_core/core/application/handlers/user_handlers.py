from __future__ import annotations

import uuid

import structlog

from corujo_core.adapters.security.hash_service import HashService
from corujo_core.core.application.commands.user_commands import CreateUserCommand, UpdateUserCommand
from corujo_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler
from corujo_core.core.application.queries.user_queries import GetUserQuery, ListUsersQuery
from corujo_core.core.domain.entities.user_entity import UserEntity
from corujo_core.core.domain.events.events import UserCreatedEvent
from corujo_core.core.domain.repositories.user_repository import UserRepository
from corujo_core.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)


# ——— USER ————————————————————————————————————————————————

class CreateUserHandler(CommandHandler[CreateUserCommand]):
    def __init__(self, repo: UserRepository, hash_service: HashService, dispatcher: EventDispatcher):
        self.repo = repo
        self.hash_service = hash_service
        self.dispatcher = dispatcher

    def handle(self, command: CreateUserCommand) -> UserEntity:
        data = command.payload.model_dump()
        existing = self.repo.find_by_email(data["email"])

        data["id"] = existing.id if existing else uuid.uuid4()
        data["password_hash"] = self.hash_service.hash_password(data.pop("password"))
        user = self.repo.save(UserEntity.from_dict(data))

        if not existing:
            self.dispatcher.dispatch(UserCreatedEvent(user_id=user.id, perfil=user.perfil))
        logger.info("user.saved", user_id=str(user.id), perfil=user.perfil, created=not existing)
        return user


class UpdateUserHandler(CommandHandler[UpdateUserCommand]):
    def __init__(self, repo: UserRepository, hash_service: HashService):
        self.repo = repo
        self.hash_service = hash_service

    def handle(self, command: UpdateUserCommand) -> UserEntity | None:
        current = self.repo.find_by_id(command.id)
        if current is None:
            return None

        changes = command.payload.model_dump(exclude_none=True)
        if password := changes.pop("password", None):
            current.password_hash = self.hash_service.hash_password(password)
        for field_name, value in changes.items():
            setattr(current, field_name, value)
        return self.repo.save(current)


class ListUsersHandler(QueryHandler[ListUsersQuery, PagedResult[UserEntity]]):
    def __init__(self, repo: UserRepository):
        self.repo = repo

    def handle(self, q: ListUsersQuery) -> PagedResult[UserEntity]:
        return self.repo.list(q.filtros, q.page, q.page_size)


class GetUserHandler(QueryHandler[GetUserQuery, UserEntity | None]):
    def __init__(self, repo: UserRepository):
        self.repo = repo

    def handle(self, q: GetUserQuery) -> UserEntity | None:
        return self.repo.find_by_id(q.user_id)
