from __future__ import annotations

import structlog

from client_distribution.adapters.notifiers.base import BaseNotifier
from client_distribution.core.application.dtos.notification_dtos import DistributionRequestDTO

log = structlog.get_logger()


class DistributionWebhook(BaseNotifier):
    """Adapter do fluxo externo que distribui clientes direto na planilha do atendente."""

    def __init__(self, url: str, timeout: int | None = None) -> None:
        super().__init__("planilha", "distribution", timeout)
        self._url = url

    def send(self, request: DistributionRequestDTO) -> None:
        self._call("GET", self._url, params=request.model_dump())
        log.info(
            "distribution_webhook.sent",
            provider=self.provider,
            categoria=request.categoria,
            quantidade=request.quantidade,
            aba_destino=request.aba_destino,
        )
