"""Errores del bridge GPIO → MQTT.

Dos severidades:
- Fatales (ConfigError, HardwareError): el proceso termina con estado 1.
- No fatales (BusClosedError): se loggean y el productor continúa.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Fichero de configuración ilegible, YAML inválido o esquema incorrecto."""


class HardwareError(Exception):
    """Fallo al abrir el chip, pedir las líneas o leer un evento de flanco."""

    def __init__(self, chip_path: str, message: str):
        super().__init__(f"{chip_path}: {message}")
        self.chip_path = chip_path


class BusClosedError(Exception):
    """El consumidor del bus ya no existe; el evento se descarta."""
