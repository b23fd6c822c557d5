"""Core del bridge GPIO → MQTT.

Estructura:
- domain/    → Configuración y eventos (unión LineTransition | Heartbeat)
- bus.py     → Canal multi-productor / consumidor único
- errors.py  → Errores fatales y no fatales
"""

from .bus import EventBus
from .errors import BusClosedError, ConfigError, HardwareError

__all__ = ["EventBus", "BusClosedError", "ConfigError", "HardwareError"]
