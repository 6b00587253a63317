from functools import wraps

import structlog
from django.db import InterfaceError, OperationalError

from client_distribution.core.domain.exceptions import UpstreamUnavailable

logger = structlog.get_logger(__name__)

DB_UNAVAILABLE_MESSAGE = "Banco de dados indisponível no momento. Tente novamente."


def translate_db_errors(fn):
    """Converte falhas de conexão do banco em `UpstreamUnavailable`."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error("db.unavailable", operation=fn.__qualname__, error=str(exc))
            raise UpstreamUnavailable(DB_UNAVAILABLE_MESSAGE) from exc
    return wrapper


def apply_period(qs, filtros: dict, field: str = "created_at"):
    """Aplica `data_inicio` / `data_fim` (datas, inclusivas) sobre `field`."""
    if inicio := filtros.get("data_inicio"):
        qs = qs.filter(**{f"{field}__date__gte": inicio})
    if fim := filtros.get("data_fim"):
        qs = qs.filter(**{f"{field}__date__lte": fim})
    return qs
