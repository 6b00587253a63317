import time
from abc import ABC, abstractmethod
from http import HTTPStatus

import backoff
import httpx
import structlog
from prometheus_client import Counter, Histogram

from client_distribution.core.domain.events.exceptions import (
    PermanentNotificationError,
    TemporaryNotificationError,
)

logger = structlog.get_logger()

REQ_LATENCY = Histogram("notifier_request_seconds", "Latency", ["provider","channel"])
REQ_SUCCESS = Counter  ("notifier_success_total",   "Success", ["provider","channel"])
REQ_FAILURE = Counter  ("notifier_failure_total",   "Failure", ["provider","channel"])


def _is_client_error(exc: Exception) -> bool:
    return (
        isinstance(exc, httpx.HTTPStatusError)
        and exc.response.status_code < HTTPStatus.INTERNAL_SERVER_ERROR
    )


class BaseNotifier(ABC):
    DEFAULT_TIMEOUT = 10

    def __init__(self, provider: str, channel: str, timeout: int | None = None) -> None:
        self.provider = provider
        self.channel  = channel
        self.timeout  = timeout or self.DEFAULT_TIMEOUT

    @backoff.on_exception(backoff.expo, (httpx.TimeoutException, httpx.HTTPError),
                          max_tries=3, jitter=None, giveup=_is_client_error)
    def _request(self, method: str, url: str, **kw) -> httpx.Response:
        start = time.perf_counter()
        try:
            resp = httpx.request(method, url, timeout=self.timeout, **kw)
            if resp.status_code >= HTTPStatus.BAD_REQUEST:
                raise httpx.HTTPStatusError("Bad status", request=resp.request, response=resp)
            REQ_SUCCESS.labels(self.provider, self.channel).inc()
            return resp
        except Exception:
            REQ_FAILURE.labels(self.provider, self.channel).inc()
            raise
        finally:
            REQ_LATENCY.labels(self.provider, self.channel).observe(time.perf_counter() - start)

    def _call(self, method: str, url: str, **kw) -> httpx.Response:
        """
        Executa `_request` e traduz falhas httpx para a hierarquia de
        NotificationError (4xx → permanente; 5xx/rede → temporária).
        """
        if not url:
            raise PermanentNotificationError(f"URL do webhook '{self.channel}' não configurada.")
        try:
            return self._request(method, url, **kw)
        except httpx.HTTPStatusError as http_err:
            status_code = http_err.response.status_code
            if HTTPStatus.BAD_REQUEST <= status_code < HTTPStatus.INTERNAL_SERVER_ERROR:
                raise PermanentNotificationError(f"Erro permanente do cliente (HTTP {status_code}): {http_err}") from http_err
            raise TemporaryNotificationError(f"Erro temporário no servidor (HTTP {status_code}): {http_err}") from http_err
        except httpx.HTTPError as err:
            raise TemporaryNotificationError(f"Falha de rede ao chamar webhook: {err}") from err

    @abstractmethod
    def send(self, *args, **kwargs) -> None:
        """Envia uma notificação. Assinatura varia por canal."""
        ...
