from decimal import Decimal

import structlog
from django.conf import settings
from django.core.cache import cache
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from client_distribution.adapters.repositories.db_errors import translate_db_errors
from client_distribution.core.domain.entities.installment_fee_entity import InstallmentFeeEntity
from client_distribution.core.domain.exceptions import InvalidRequest
from client_distribution.core.domain.repositories.installment_fee_repository import (
    InstallmentFeeRepository,
)
from plugins.django_interface.models import InstallmentFee as InstallmentFeeModel

logger = structlog.get_logger(__name__)

ACTIVE_FEES_CACHE_KEY = "installment_fees:active"


class InstallmentFeeRepoImpl(InstallmentFeeRepository):
    """
    Implementação Django do InstallmentFeeRepository.

    A lista de valores ativos fica no cache do Django e é invalidada
    em qualquer escrita.
    """

    @translate_db_errors
    def list_active(self) -> list[InstallmentFeeEntity]:
        cached = cache.get(ACTIVE_FEES_CACHE_KEY)
        if cached is not None:
            return [InstallmentFeeEntity.from_dict(row) for row in cached]

        fees = [
            InstallmentFeeEntity.from_model(m)
            for m in InstallmentFeeModel.objects.filter(ativo=True).order_by("quantidade")
        ]
        cache.set(
            ACTIVE_FEES_CACHE_KEY,
            [f.to_dict() for f in fees],
            timeout=settings.INSTALLMENT_FEES_CACHE_TTL,
        )
        return fees

    @translate_db_errors
    def find_by_id(self, fee_id: str) -> InstallmentFeeEntity | None:
        try:
            return InstallmentFeeEntity.from_model(InstallmentFeeModel.objects.get(id=fee_id))
        except (InstallmentFeeModel.DoesNotExist, ValidationError, ValueError):
            return None

    @translate_db_errors
    def create(self, quantidade: int, valor: Decimal) -> InstallmentFeeEntity:
        if InstallmentFeeModel.objects.filter(quantidade=quantidade, ativo=True).exists():
            raise InvalidRequest(f"Já existe um valor ativo para {quantidade} mensalidade(s).")
        try:
            with transaction.atomic():
                m = InstallmentFeeModel.objects.create(quantidade=quantidade, valor=valor)
        except IntegrityError as exc:
            raise InvalidRequest(f"Já existe um valor ativo para {quantidade} mensalidade(s).") from exc
        self._invalidate()
        return InstallmentFeeEntity.from_model(m)

    @translate_db_errors
    def update_valor(self, fee_id: str, valor: Decimal) -> InstallmentFeeEntity | None:
        try:
            updated = InstallmentFeeModel.objects.filter(id=fee_id).update(valor=valor)
        except (ValidationError, ValueError):
            return None
        self._invalidate()
        return self.find_by_id(fee_id) if updated else None

    @translate_db_errors
    def deactivate(self, fee_id: str) -> bool:
        try:
            updated = InstallmentFeeModel.objects.filter(id=fee_id, ativo=True).update(ativo=False)
        except (ValidationError, ValueError):
            return False
        self._invalidate()
        return updated == 1

    def _invalidate(self) -> None:
        cache.delete(ACTIVE_FEES_CACHE_KEY)
        logger.debug("installment_fees.cache_invalidated")
