"""Modelos de configuración del bridge.

Se cargan una sola vez al arrancar y no se mutan después: todos los hilos
(watchers, heartbeat, publisher) los comparten en solo lectura, sin locks.

Formato YAML esperado:

    mqtt:
      host: tcp://localhost:1883
      topic: home/gpio
    gpiochip:
      - path: /dev/gpiochip0
        pins:
          - name: door
            line: 3
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Nombre que se publica cuando el offset reportado no está configurado.
UNKNOWN_PIN_NAME = "Unknown"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PinConfig(_FrozenModel):
    """Línea vigilada: etiqueta visible + offset en el chip."""

    name: str = Field(..., min_length=1)
    line: int = Field(..., ge=0)


class ChipConfig(_FrozenModel):
    """Chip GPIO y sus líneas vigiladas.

    La unicidad de ``line`` dentro del chip se asume, no se valida: si se
    repite, gana el primer pin de la lista.
    """

    path: str = Field(..., min_length=1)
    pins: tuple[PinConfig, ...] = ()

    @field_validator("pins", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return () if v is None else v

    @property
    def lines(self) -> list[int]:
        return [pin.line for pin in self.pins]

    def pin_name(self, line: int) -> str:
        """Resuelve un offset a su nombre; ``"Unknown"`` si no está configurado."""
        for pin in self.pins:
            if pin.line == line:
                return pin.name
        return UNKNOWN_PIN_NAME


class BrokerConfig(_FrozenModel):
    """Broker MQTT: URI de conexión y topic de publicación."""

    host: str = Field(..., min_length=1)
    topic: str = Field(..., min_length=1)


class HeartbeatConfig(_FrozenModel):
    enabled: bool = True
    interval_seconds: float = Field(default=60.0, gt=0)


class MetricsConfig(_FrozenModel):
    # None = sin endpoint HTTP de Prometheus
    port: Optional[int] = Field(default=None, ge=1, le=65535)


class BridgeConfig(_FrozenModel):
    """Configuración completa del proceso."""

    mqtt: BrokerConfig
    gpiochip: tuple[ChipConfig, ...] = ()
    heartbeat: HeartbeatConfig = HeartbeatConfig()
    metrics: MetricsConfig = MetricsConfig()

    # `gpiochip:` vacío en YAML llega como None
    @field_validator("gpiochip", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return () if v is None else v
