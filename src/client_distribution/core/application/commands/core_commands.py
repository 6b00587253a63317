from dataclasses import dataclass

from corujo_core.core.application.cqrs import CommandDTO

from client_distribution.core.application.dtos.installment_fee_dtos import (
    InstallmentFeeDTO,
    UpdateInstallmentFeeDTO,
)


# ——— CLIENTES ——————————————————————————————————————————————
@dataclass(frozen=True)
class SetClientActiveCommand(CommandDTO):
    client_id: str
    ativo: bool


@dataclass(frozen=True)
class ImportClientsCommand(CommandDTO):
    """Linhas já lidas do CSV: matricula, nome, telefone, categoria."""
    rows: tuple[dict, ...]


# ——— VALORES DE MENSALIDADE ———————————————————————————————
@dataclass(frozen=True)
class CreateInstallmentFeeCommand(CommandDTO):
    payload: InstallmentFeeDTO


@dataclass(frozen=True)
class UpdateInstallmentFeeCommand(CommandDTO):
    fee_id: str
    payload: UpdateInstallmentFeeDTO


@dataclass(frozen=True)
class DeactivateInstallmentFeeCommand(CommandDTO):
    fee_id: str


# ——— CONFIGURAÇÃO DA SUPERVISÃO ————————————————————————————
@dataclass(frozen=True)
class UpdateMesReferenteCommand(CommandDTO):
    mes_referente: str
