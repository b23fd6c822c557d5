"""Salida MQTT del bridge.

Estructura modular:
- client.py: Conexión paho-mqtt y parseo de la URI del broker
- publisher.py: Consumidor del bus y render de payloads
- publisher_stats.py: Contadores y métricas Prometheus
"""

from .client import BrokerAddress, MessageSink, MQTTSink, parse_broker_uri
from .publisher import Publisher, render_payload
from .publisher_stats import PublisherStats

__all__ = [
    "BrokerAddress",
    "MessageSink",
    "MQTTSink",
    "parse_broker_uri",
    "Publisher",
    "render_payload",
    "PublisherStats",
]
