"""Modelos de dominio: configuración y eventos."""

from .config import (
    UNKNOWN_PIN_NAME,
    BridgeConfig,
    BrokerConfig,
    ChipConfig,
    HeartbeatConfig,
    MetricsConfig,
    PinConfig,
)
from .events import EVENT_TYPES, Edge, Event, Heartbeat, LineTransition

__all__ = [
    "UNKNOWN_PIN_NAME",
    "BridgeConfig",
    "BrokerConfig",
    "ChipConfig",
    "HeartbeatConfig",
    "MetricsConfig",
    "PinConfig",
    "EVENT_TYPES",
    "Edge",
    "Event",
    "Heartbeat",
    "LineTransition",
]
