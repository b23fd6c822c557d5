"""Interfaz de lectura de flancos GPIO.

Arquitectura:
  - :class:`EdgeSource` es el contrato abstracto; el watcher solo habla con él.
  - :class:`GpiodEdgeSource` usa ``gpiod`` (bindings Python de libgpiod v2)
    sobre el dispositivo de carácter ``/dev/gpiochipN``.

Ningún tipo de ``gpiod`` cruza la abstracción: las lecturas se devuelven
como :class:`EdgeReport` con el ``Edge`` del dominio. ``gpiod`` se importa
al abrir el chip para que el paquete cargue en máquinas sin libgpiod.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Sequence

from ..core.domain.config import ChipConfig
from ..core.domain.events import Edge
from ..core.errors import HardwareError

logger = logging.getLogger(__name__)

CONSUMER_NAME = "gpio-mqtt-bridge"


@dataclass(frozen=True)
class EdgeReport:
    """Un flanco tal como lo reporta el hardware."""

    line: int
    edge: Edge


class EdgeSource(ABC):
    """Líneas de un chip pedidas como entradas con detección de ambos flancos."""

    @abstractmethod
    def read_edges(self) -> Sequence[EdgeReport]:
        """Bloquea hasta que haya al menos un flanco y devuelve el lote en orden.

        Lanza ``HardwareError`` si la lectura falla.
        """

    @abstractmethod
    def close(self) -> None:
        """Libera las líneas pedidas."""


# Abre un chip con sus líneas configuradas; lanza HardwareError si falla.
EdgeSourceFactory = Callable[[ChipConfig], EdgeSource]


class GpiodEdgeSource(EdgeSource):
    """EdgeSource respaldado por ``gpiod`` (libgpiod v2)."""

    def __init__(self, chip_path: str, lines: Sequence[int], consumer: str = CONSUMER_NAME) -> None:
        self.chip_path = chip_path
        try:
            import gpiod  # type: ignore[import]
            from gpiod.line import Direction
            from gpiod.line import Edge as GpiodEdge
        except ImportError as e:
            raise HardwareError(chip_path, f"gpiod bindings not installed: {e}") from e

        self._rising = gpiod.EdgeEvent.Type.RISING_EDGE
        settings = gpiod.LineSettings(
            direction=Direction.INPUT,
            edge_detection=GpiodEdge.BOTH,
        )
        try:
            self._request = gpiod.request_lines(
                chip_path,
                consumer=consumer,
                config={tuple(lines): settings},
            )
        except (OSError, ValueError) as e:
            raise HardwareError(chip_path, f"could not request lines {list(lines)}: {e}") from e

        logger.info("[GPIO] Requested lines %s on %s", list(lines), chip_path)

    def read_edges(self) -> Sequence[EdgeReport]:
        try:
            events = self._request.read_edge_events()
        except OSError as e:
            raise HardwareError(self.chip_path, f"could not read event: {e}") from e

        return [
            EdgeReport(
                line=ev.line_offset,
                edge=Edge.RISING if ev.event_type == self._rising else Edge.FALLING,
            )
            for ev in events
        ]

    def close(self) -> None:
        try:
            self._request.release()
        except OSError as e:
            logger.warning("[GPIO] Release error on %s: %s", self.chip_path, e)


def open_gpiod_source(chip: ChipConfig) -> EdgeSource:
    """Factory por defecto: abre ``chip.path`` con todas sus líneas."""
    return GpiodEdgeSource(chip.path, chip.lines)
