"""Publisher: consumidor único del bus y dueño de la conexión MQTT.

Flujo:
  EventBus → render_payload() → sink.publish(topic, payload)

Formato de payload (ASCII separado por espacios):
  "<topic> <pin-name> 1"     flanco de subida
  "<topic> <pin-name> 0"     flanco de bajada
  "<topic> heartbeat 1"      tick de vida

El topic va también como primer token del payload; se mantiene tal cual.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Callable, Optional

from ..core.bus import EventBus
from ..core.domain.events import Event, Heartbeat, LineTransition
from ..core.errors import BusClosedError
from .client import MessageSink
from .publisher_stats import PublisherStats

logger = logging.getLogger(__name__)

HEARTBEAT_TOKEN = "heartbeat"


def render_payload(event: Event, topic: str) -> str:
    """Construye el payload de un evento. Determinista: no depende del reloj."""
    if isinstance(event, LineTransition):
        return f"{topic} {event.chip.pin_name(event.line)} {event.edge.code}"
    if isinstance(event, Heartbeat):
        return f"{topic} {HEARTBEAT_TOKEN} 1"
    raise TypeError(f"not an event: {event!r}")


class Publisher:
    """Vacía el bus y publica cada evento, uno a uno y en orden de llegada.

    Único hilo que toca el sink. Los errores de publicación se loggean y
    se ignoran (entrega best-effort, QoS 0).
    Cualquier otro error es fatal: se entrega a ``on_fatal`` (o se relanza
    si no hay handler).
    """

    def __init__(
        self,
        bus: EventBus,
        sink: MessageSink,
        topic: str,
        stop_event: Optional[threading.Event] = None,
        poll_seconds: float = 0.5,
        on_fatal: Optional[Callable[[BaseException], None]] = None,
    ):
        self._bus = bus
        self._sink = sink
        self.topic = topic
        self._stop_event = stop_event or threading.Event()
        self._poll_seconds = poll_seconds
        self._on_fatal = on_fatal
        self._stats = PublisherStats()

    def run(self) -> None:
        """Bucle principal. Sale solo al pedir parada o al cerrarse el bus."""
        logger.info("[MQTT] Starting publisher for topic %s", self.topic)
        while not self._stop_event.is_set():
            try:
                event = self._bus.receive(timeout=self._poll_seconds)
            except queue.Empty:
                continue
            except BusClosedError:
                break

            try:
                self.handle(event)
            except Exception as e:
                logger.exception("[MQTT] Publisher crashed: %s", e)
                if self._on_fatal is None:
                    raise
                self._on_fatal(e)
                break

        logger.info("[MQTT] Publisher stopped (pending=%d). %s", self._bus.qsize(), self._stats)

    def handle(self, event: Event) -> None:
        """Renderiza y publica un evento."""
        logger.debug("[MQTT] event: %s", event)
        payload = render_payload(event, self.topic)
        logger.debug("[MQTT] payload: %s", payload)
        self._stats.last_event_at = time.time()

        try:
            self._sink.publish(self.topic, payload)
        except Exception as e:
            self._stats.record_error()
            logger.warning("[MQTT] Publish failed (ignored): %s", e)
            return

        if isinstance(event, Heartbeat):
            self._stats.record_heartbeat()
        else:
            self._stats.record_transition()

    @property
    def stats(self) -> dict:
        return self._stats.to_dict()
