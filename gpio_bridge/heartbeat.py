"""Heartbeat periódico hacia el bus."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .core.bus import EventBus
from .core.domain.events import Heartbeat
from .core.errors import BusClosedError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 60.0


class HeartbeatTicker:
    """Envía un ``Heartbeat`` cada ``interval_seconds``.

    Espera fija entre envíos (sin corrección de deriva). Un envío fallido
    se loggea y el ticker sigue en el siguiente intervalo.
    """

    def __init__(
        self,
        bus: EventBus,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        stop_event: Optional[threading.Event] = None,
    ):
        self._bus = bus
        self.interval_seconds = interval_seconds
        self._stop_event = stop_event or threading.Event()
        self.sent = 0
        self.failed = 0

    def run(self) -> None:
        logger.info("[HEARTBEAT] Ticking every %.1fs", self.interval_seconds)
        # wait() devuelve True cuando se pide la parada
        while not self._stop_event.wait(self.interval_seconds):
            self.tick()

    def tick(self) -> None:
        try:
            self._bus.send(Heartbeat())
            self.sent += 1
        except BusClosedError as e:
            self.failed += 1
            logger.error("[HEARTBEAT] Could not send heartbeat: %s", e)
