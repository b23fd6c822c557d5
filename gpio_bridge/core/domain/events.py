"""Eventos que viajan por el bus.

``Event`` es una unión cerrada de dos casos: ``LineTransition`` o
``Heartbeat``. Un evento es siempre exactamente uno de ellos; no hay
sobre con dos campos opcionales.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .config import ChipConfig


class Edge(Enum):
    RISING = "rising"
    FALLING = "falling"

    @property
    def code(self) -> str:
        """Código de payload: ``"1"`` subida, ``"0"`` bajada."""
        return "1" if self is Edge.RISING else "0"


@dataclass(frozen=True)
class LineTransition:
    """Flanco detectado en una línea de un chip.

    ``line`` es el offset tal como lo reporta el hardware; el nombre se
    resuelve al renderizar con ``chip.pin_name(line)``.
    """

    chip: ChipConfig
    line: int
    edge: Edge


@dataclass(frozen=True)
class Heartbeat:
    """Tick de vida periódico."""


Event = Union[LineTransition, Heartbeat]

EVENT_TYPES = (LineTransition, Heartbeat)
