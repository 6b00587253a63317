from __future__ import annotations

import structlog
from corujo_core.core.application.cqrs import CommandHandler, QueryHandler

from client_distribution.core.application.commands.core_commands import (
    CreateInstallmentFeeCommand,
    DeactivateInstallmentFeeCommand,
    UpdateInstallmentFeeCommand,
    UpdateMesReferenteCommand,
)
from client_distribution.core.application.queries.core_queries import (
    GetSupervisorConfigQuery,
    ListInstallmentFeesQuery,
    SuggestFeeQuery,
)
from client_distribution.core.domain.entities.installment_fee_entity import InstallmentFeeEntity
from client_distribution.core.domain.entities.supervisor_config_entity import SupervisorConfigEntity
from client_distribution.core.domain.exceptions import UnknownEntity
from client_distribution.core.domain.repositories.installment_fee_repository import (
    InstallmentFeeRepository,
)
from client_distribution.core.domain.repositories.supervisor_config_repository import (
    SupervisorConfigRepository,
)
from client_distribution.core.domain.services.fee_suggestion import FeeSuggestionService

logger = structlog.get_logger(__name__)


# ——— VALORES DE MENSALIDADE ———————————————————————————————

class ListInstallmentFeesHandler(QueryHandler[ListInstallmentFeesQuery, list[InstallmentFeeEntity]]):
    def __init__(self, repo: InstallmentFeeRepository):
        self.repo = repo

    def handle(self, q: ListInstallmentFeesQuery) -> list[InstallmentFeeEntity]:
        return self.repo.list_active()


class SuggestFeeHandler(QueryHandler[SuggestFeeQuery, dict]):
    def __init__(self, fee_service: FeeSuggestionService):
        self.fee_service = fee_service

    def handle(self, q: SuggestFeeQuery) -> dict:
        return {
            "quantidade": q.quantidade,
            "valor_sugerido": self.fee_service.suggest_fee(q.quantidade),
            "valor": self.fee_service.prefill_value(q.valor_atual, q.quantidade),
        }


class CreateInstallmentFeeHandler(CommandHandler[CreateInstallmentFeeCommand]):
    def __init__(self, repo: InstallmentFeeRepository):
        self.repo = repo

    def handle(self, command: CreateInstallmentFeeCommand) -> InstallmentFeeEntity:
        fee = self.repo.create(command.payload.quantidade, command.payload.valor)
        logger.info("installment_fee.created", quantidade=fee.quantidade, valor=str(fee.valor))
        return fee


class UpdateInstallmentFeeHandler(CommandHandler[UpdateInstallmentFeeCommand]):
    def __init__(self, repo: InstallmentFeeRepository):
        self.repo = repo

    def handle(self, command: UpdateInstallmentFeeCommand) -> InstallmentFeeEntity:
        fee = self.repo.update_valor(command.fee_id, command.payload.valor)
        if fee is None:
            raise UnknownEntity("Valor de mensalidade", command.fee_id)
        logger.info("installment_fee.updated", quantidade=fee.quantidade, valor=str(fee.valor))
        return fee


class DeactivateInstallmentFeeHandler(CommandHandler[DeactivateInstallmentFeeCommand]):
    def __init__(self, repo: InstallmentFeeRepository):
        self.repo = repo

    def handle(self, command: DeactivateInstallmentFeeCommand) -> None:
        if not self.repo.deactivate(command.fee_id):
            raise UnknownEntity("Valor de mensalidade", command.fee_id)
        logger.info("installment_fee.deactivated", fee_id=command.fee_id)


# ——— CONFIGURAÇÃO DA SUPERVISÃO ————————————————————————————

class GetSupervisorConfigHandler(QueryHandler[GetSupervisorConfigQuery, SupervisorConfigEntity]):
    def __init__(self, repo: SupervisorConfigRepository):
        self.repo = repo

    def handle(self, q: GetSupervisorConfigQuery) -> SupervisorConfigEntity:
        return self.repo.get()


class UpdateMesReferenteHandler(CommandHandler[UpdateMesReferenteCommand]):
    def __init__(self, repo: SupervisorConfigRepository):
        self.repo = repo

    def handle(self, command: UpdateMesReferenteCommand) -> SupervisorConfigEntity:
        cfg = self.repo.update_mes_referente(command.mes_referente.strip())
        logger.info("supervisor_config.updated", mes_referente=cfg.mes_referente)
        return cfg
