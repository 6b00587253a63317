from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand

from client_distribution.adapters.config.composition_root import setup_di_container_from_settings
from client_distribution.core.application.commands.core_commands import (
    CreateInstallmentFeeCommand,
    UpdateInstallmentFeeCommand,
)
from client_distribution.core.application.dtos.installment_fee_dtos import (
    InstallmentFeeDTO,
    UpdateInstallmentFeeDTO,
)
from client_distribution.core.application.queries.core_queries import ListInstallmentFeesQuery

DEFAULT_FEES: dict[int, Decimal] = {
    1: Decimal("100.00"),
    2: Decimal("200.00"),
    3: Decimal("300.00"),
    6: Decimal("600.00"),
    12: Decimal("1200.00"),
}


class Command(BaseCommand):
    help = "Cadastra a tabela padrão de valores por quantidade de mensalidades."

    def add_arguments(self, parser) -> None:
        parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Atualiza o valor das quantidades que já estão cadastradas.",
        )

    def handle(self, *args: Any, **opt: Any) -> None:
        container = setup_di_container_from_settings(settings)
        cmd_bus = container.command_bus()
        existing = {
            fee.quantidade: fee
            for fee in container.query_bus().dispatch(ListInstallmentFeesQuery(filtros={}))
        }

        created = updated = 0
        for quantidade, valor in DEFAULT_FEES.items():
            current = existing.get(quantidade)
            if current is None:
                cmd_bus.dispatch(CreateInstallmentFeeCommand(
                    payload=InstallmentFeeDTO(quantidade=quantidade, valor=valor)
                ))
                created += 1
            elif opt["overwrite"] and current.valor != valor:
                cmd_bus.dispatch(UpdateInstallmentFeeCommand(
                    fee_id=str(current.id), payload=UpdateInstallmentFeeDTO(valor=valor)
                ))
                updated += 1

        self.stdout.write(self.style.SUCCESS(
            f"✅ Valores de mensalidade: {created} criado(s), {updated} atualizado(s)."
        ))
