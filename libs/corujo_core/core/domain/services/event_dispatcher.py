from collections.abc import Callable

import structlog

from corujo_core.core.domain.events.events import DomainEvent

logger = structlog.get_logger(__name__)

Listener = Callable[[DomainEvent], None]


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or type(listener).__name__


class EventDispatcher:
    """
    Dispatcher síncrono de eventos de domínio.

    Um listener com erro é logado e não impede os seguintes; o chamador
    nunca recebe a exceção.
    """
    def __init__(self) -> None:
        self._subs: dict[type[DomainEvent], list[Listener]] = {}

    def subscribe(self, event_type: type[DomainEvent], listener: Listener) -> None:
        self._subs.setdefault(event_type, []).append(listener)
        logger.debug("event.subscribed", event_type=event_type.__name__, listener=_listener_name(listener))

    def dispatch(self, event: DomainEvent) -> None:
        listeners = self._subs.get(type(event), [])
        logger.info("event.dispatch", event_name=type(event).__name__, listeners=len(listeners))
        for listener in listeners:
            try:
                listener(event)
            except Exception as exc:
                logger.error(
                    "event.listener_error",
                    event_name=type(event).__name__,
                    listener=_listener_name(listener),
                    error=str(exc),
                    exc_info=True,
                )
