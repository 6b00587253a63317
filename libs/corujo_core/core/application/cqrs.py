from __future__ import annotations

import math
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

import structlog

from corujo_core.core.domain.events.events import DomainEvent
from corujo_core.core.domain.services.event_dispatcher import EventDispatcher

# ───────────────────────────────────────────────
# CQRS: comandos, consultas paginadas e buses com medição
# ───────────────────────────────────────────────

C = TypeVar('C')  # Command type
Q = TypeVar('Q')  # Query filtros type
R = TypeVar('R')  # Query result type
T = TypeVar('T')  # PagedResult item type

logger = structlog.get_logger(__name__)

# ───────────────────────────────────────────────
# DTOs
# ───────────────────────────────────────────────
@dataclass(frozen=True)
class CommandDTO:
    """Base para todos comandos de escrita."""
    pass

@dataclass(frozen=True)
class QueryDTO(Generic[Q]):
    """Base para consultas de leitura; `filtros` sempre vem primeiro."""
    filtros: Q

@dataclass(frozen=True)
class PaginatedQueryDTO(Generic[Q]):
    """Consulta paginada: filtros + página (1-based) + tamanho."""
    filtros: Q
    page: int = 1
    page_size: int = 50

@dataclass(frozen=True)
class PagedResult(Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    page_size: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'total_pages', math.ceil(self.total / self.page_size) if self.page_size else 0)

# ───────────────────────────────────────────────
# Handlers Protocols
# ───────────────────────────────────────────────
class CommandHandler(Protocol, Generic[C]):
    def handle(self, command: C) -> Any:
        """Processa um comando e aplica mudanças de estado."""
        ...

class QueryHandler(Protocol, Generic[Q, R]):
    def handle(self, query: QueryDTO[Q]) -> R:
        """Processa uma consulta e retorna um resultado."""
        ...

# ───────────────────────────────────────────────
# Buses
# ───────────────────────────────────────────────
class _Bus:
    """Registro tipo → handler com log de duração por mensagem."""
    kind = "message"

    def __init__(self) -> None:
        self._handlers: dict[type, Any] = {}

    def register(self, message_type: type, handler: Any) -> None:
        self._handlers[message_type] = handler
        logger.debug("bus.handler_registered", kind=self.kind, message=message_type.__name__)

    def dispatch(self, message: Any) -> Any:
        name = type(message).__name__
        handler = self._handlers.get(type(message))
        if not handler:
            raise ValueError(f"Nenhum handler para {self.kind}: {name}")

        start = time.perf_counter()
        try:
            return handler.handle(message)
        finally:
            logger.info(
                "bus.dispatched",
                kind=self.kind,
                message=name,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )

class CommandBus(_Bus):
    kind = "comando"

class QueryBus(_Bus):
    kind = "query"

class CommandBusImpl(CommandBus):
    """
    CommandBus que publica no EventDispatcher os DomainEvents
    devolvidos pelos handlers (um evento ou uma lista deles).
    """
    def __init__(self, dispatcher: EventDispatcher):
        super().__init__()
        self.dispatcher = dispatcher

    def dispatch(self, command: Any) -> Any:
        result = super().dispatch(command)

        if isinstance(result, DomainEvent):
            self.dispatcher.dispatch(result)
        elif isinstance(result, list | tuple):
            for evt in result:
                if isinstance(evt, DomainEvent):
                    self.dispatcher.dispatch(evt)

        return result

class QueryBusImpl(QueryBus):
    pass
