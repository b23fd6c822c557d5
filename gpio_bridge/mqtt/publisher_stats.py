"""Estadísticas del publisher.

Contadores locales + métricas Prometheus equivalentes.
"""

from __future__ import annotations

from prometheus_client import Counter

BRIDGE_EVENTS_PUBLISHED = Counter(
    "gpio_bridge_events_published_total",
    "Total events rendered and handed to the MQTT client",
    ["kind"],  # transition, heartbeat
)
BRIDGE_PUBLISH_ERRORS = Counter(
    "gpio_bridge_publish_errors_total",
    "Total publish calls that raised",
)


class PublisherStats:
    """Estadísticas del publisher MQTT."""

    def __init__(self):
        self.transitions = 0
        self.heartbeats = 0
        self.publish_errors = 0
        self.last_event_at: float = 0

    def __str__(self) -> str:
        return (
            f"Stats: transitions={self.transitions} heartbeats={self.heartbeats} "
            f"publish_errors={self.publish_errors}"
        )

    def record_transition(self) -> None:
        self.transitions += 1
        BRIDGE_EVENTS_PUBLISHED.labels(kind="transition").inc()

    def record_heartbeat(self) -> None:
        self.heartbeats += 1
        BRIDGE_EVENTS_PUBLISHED.labels(kind="heartbeat").inc()

    def record_error(self) -> None:
        self.publish_errors += 1
        BRIDGE_PUBLISH_ERRORS.inc()

    def to_dict(self) -> dict:
        return {
            "transitions": self.transitions,
            "heartbeats": self.heartbeats,
            "publish_errors": self.publish_errors,
            "last_event_at": self.last_event_at,
        }
