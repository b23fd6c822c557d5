from __future__ import annotations

import logging
import queue
import threading
from typing import Optional

from .domain.events import EVENT_TYPES, Event
from .errors import BusClosedError

logger = logging.getLogger(__name__)

# Marca interna que despierta al consumidor bloqueado tras close().
_CLOSED = object()


class EventBus:
    """Canal FIFO en memoria entre productores (watchers, heartbeat) y el publisher.

    - Varios productores, un único consumidor.
    - Cola sin límite: ``send`` nunca bloquea.
    - FIFO por productor; entre productores no hay orden garantizado.
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._closed = False
        self._lock = threading.Lock()

    def send(self, event: Event) -> None:
        """Encola el evento sin bloquear.

        Lanza ``BusClosedError`` si el consumidor ya se cerró; el llamador
        decide loggear y seguir.
        """
        if not isinstance(event, EVENT_TYPES):
            raise TypeError(f"not an event: {event!r}")

        with self._lock:
            if self._closed:
                raise BusClosedError("event bus is closed")
            self._queue.put_nowait(event)

    def receive(self, timeout: Optional[float] = None) -> Event:
        """Bloquea hasta que haya un evento.

        Con ``timeout`` lanza ``queue.Empty`` si no llega nada. Los eventos
        encolados antes de ``close()`` se siguen entregando; después lanza
        ``BusClosedError``.
        """
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            # Se re-encola para que cualquier receive posterior también salga.
            self._queue.put_nowait(_CLOSED)
            raise BusClosedError("event bus is closed")
        return item  # type: ignore[return-value]

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put_nowait(_CLOSED)
        logger.info("[BUS] Closed")

    def qsize(self) -> int:
        """Eventos pendientes (aproximado), sin contar la marca de cierre."""
        n = self._queue.qsize()
        return max(n - 1, 0) if self._closed else n
