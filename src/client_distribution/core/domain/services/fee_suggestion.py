from decimal import Decimal

from client_distribution.core.domain.repositories.installment_fee_repository import (
    InstallmentFeeRepository,
)


class FeeSuggestionService:
    """Sugestão de valor pela quantidade de mensalidades (apenas consultiva)."""

    def __init__(self, repo: InstallmentFeeRepository):
        self.repo = repo

    def suggest_fee(self, quantidade: int | None) -> Decimal | None:
        if not quantidade:
            return None
        for fee in self.repo.list_active():
            if fee.quantidade == quantidade:
                return fee.valor
        return None

    def prefill_value(self, current_value: Decimal | None, quantidade: int | None) -> Decimal | None:
        """
        Valor a exibir no formulário: o configurado quando existe,
        senão o valor atual sem alteração.
        """
        suggested = self.suggest_fee(quantidade)
        return suggested if suggested is not None else current_value
