from __future__ import annotations

from typing import Any

from corujo_core.adapters.config.composition_root import setup_di_container_from_settings
from corujo_core.core.application.commands.user_commands import CreateUserCommand
from corujo_core.core.application.dtos.user_dto import CreateUserDTO
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from pydantic import ValidationError


class Command(BaseCommand):
    """
    Cria ou atualiza o usuário de supervisão.
    Idempotente: rodar de novo com o mesmo e-mail apenas troca nome/senha.
    """
    help = "Cria ou atualiza um usuário com perfil de supervisão."

    def add_arguments(self, parser) -> None:
        parser.add_argument("--email", type=str, required=True, help="E-mail de login.")
        parser.add_argument("--password", type=str, required=True, help="Senha (mínimo 6 caracteres).")
        parser.add_argument("--nome", type=str, default="Supervisão", help="Nome exibido.")

    def handle(self, *args: Any, **opt: Any) -> None:
        self.stdout.write(self.style.NOTICE("--- Criando usuário de supervisão ---"))

        container = setup_di_container_from_settings(settings)
        cmd_bus = container.command_bus()

        try:
            payload = CreateUserDTO(
                email=opt["email"],
                password=opt["password"],
                nome=opt["nome"],
                perfil="supervisao",
            )
        except ValidationError as exc:
            raise CommandError(f"Dados inválidos: {exc}") from exc

        user = cmd_bus.dispatch(CreateUserCommand(payload=payload))
        self.stdout.write(self.style.SUCCESS(f"✅ Supervisor '{user.email}' pronto. ID: {user.id}"))
