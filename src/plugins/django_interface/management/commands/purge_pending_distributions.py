from __future__ import annotations

from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand

from client_distribution.adapters.config.composition_root import setup_di_container_from_settings
from client_distribution.core.application.commands.distribution_commands import (
    PurgePendingDistributionsCommand,
)


class Command(BaseCommand):
    """
    Remove todas as distribuições ainda pendentes, devolvendo os clientes ao pool.
    Pensado para o fechamento do dia/mês; atendidos e não atendidos são mantidos.
    """
    help = "Devolve ao pool os clientes distribuídos que seguem pendentes."

    def add_arguments(self, parser) -> None:
        parser.add_argument("--yes", action="store_true", help="Não pede confirmação.")

    def handle(self, *args: Any, **opt: Any) -> None:
        if not opt["yes"]:
            answer = input("Remover TODAS as distribuições pendentes? [s/N] ")
            if answer.strip().lower() not in {"s", "sim", "y", "yes"}:
                self.stdout.write(self.style.WARNING("Operação cancelada."))
                return

        container = setup_di_container_from_settings(settings)
        removed = container.command_bus().dispatch(PurgePendingDistributionsCommand())
        self.stdout.write(self.style.SUCCESS(f"✅ {removed} distribuição(ões) pendente(s) removida(s)."))
