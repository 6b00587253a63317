from dataclasses import dataclass

from corujo_core.core.application.cqrs import CommandDTO
from corujo_core.core.application.dtos.user_dto import CreateUserDTO, UpdateUserDTO


@dataclass(frozen=True)
class CreateUserCommand(CommandDTO):
    payload: CreateUserDTO


@dataclass(frozen=True)
class UpdateUserCommand(CommandDTO):
    id: str
    payload: UpdateUserDTO
