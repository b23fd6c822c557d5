"""Watcher de líneas GPIO: un hilo por chip.

Flujo:
  chip (EdgeSource) → LineTransition → EventBus

Política de errores:
- Apertura del chip / petición de líneas / lectura fallida → fatal, sin reintento.
- Bus cerrado al enviar → se loggea, el evento se descarta y el watcher sigue.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..core.bus import EventBus
from ..core.domain.config import ChipConfig
from ..core.domain.events import LineTransition
from ..core.errors import BusClosedError, HardwareError
from .interfaces import EdgeReport, EdgeSource, EdgeSourceFactory, open_gpiod_source

logger = logging.getLogger(__name__)


class LineWatcher:
    """Vigila todas las líneas configuradas de un chip y publica sus flancos en el bus.

    ``on_fatal`` recibe el ``HardwareError``; en producción termina el
    proceso (ver ``gpio_bridge.main.terminate_process``).
    """

    def __init__(
        self,
        chip: ChipConfig,
        bus: EventBus,
        on_fatal: Callable[[BaseException], None],
        source_factory: EdgeSourceFactory = open_gpiod_source,
        stop_event: Optional[threading.Event] = None,
    ):
        self.chip = chip
        self._bus = bus
        self._on_fatal = on_fatal
        self._source_factory = source_factory
        self._stop_event = stop_event or threading.Event()
        self._source: Optional[EdgeSource] = None

        self.edges_seen = 0
        self.edges_dropped = 0

    def run(self) -> None:
        """Bucle del hilo. Solo sale por error fatal o por la señal de parada."""
        logger.info("[GPIO] Listening for events on: %s", self.chip.path)
        try:
            self._source = self._source_factory(self.chip)
            while not self._stop_event.is_set():
                for report in self._source.read_edges():
                    self._forward(report)
        except HardwareError as e:
            logger.critical("[GPIO] Watcher for %s failed: %s", self.chip.path, e)
            self._on_fatal(e)
        except Exception as e:
            # Errores del backend que no son OSError (p.ej. petición liberada)
            logger.exception("[GPIO] Watcher for %s crashed: %s", self.chip.path, e)
            self._on_fatal(e)
        finally:
            if self._source is not None:
                self._source.close()

    def _forward(self, report: EdgeReport) -> None:
        self.edges_seen += 1
        event = LineTransition(chip=self.chip, line=report.line, edge=report.edge)
        logger.debug("[GPIO] event: %s: %s", self.chip.path, event)
        try:
            self._bus.send(event)
        except BusClosedError as e:
            self.edges_dropped += 1
            logger.error("[GPIO] Could not send event: %s; error %s", self.chip.path, e)
