"""Punto de entrada del bridge GPIO → MQTT.

Arranque:
  1. Config (YAML)           → fatal si falla
  2. Conexión MQTT           → fatal si falla
  3. Bus + hilos: publisher, un watcher por chip, heartbeat
  4. Bloquea hasta SIGTERM/SIGINT (en operación normal, nunca)

Un fallo de hardware en cualquier watcher termina el proceso entero.
"""

from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
import threading
from typing import Callable, Optional

from prometheus_client import start_http_server

from common.config import get_settings, load_config

from .core.bus import EventBus
from .core.domain.config import BridgeConfig
from .core.errors import ConfigError
from .hardware.interfaces import EdgeSourceFactory, open_gpiod_source
from .hardware.watcher import LineWatcher
from .heartbeat import HeartbeatTicker
from .mqtt.client import MessageSink, MQTTSink
from .mqtt.publisher import Publisher

logger = logging.getLogger(__name__)


def terminate_process(reason: BaseException) -> None:
    """Fail-fast: cualquier error fatal de un hilo termina todo el proceso."""
    logger.critical("[BRIDGE] Fatal error, exiting: %s", reason)
    logging.shutdown()
    os._exit(1)


class Bridge:
    """Agrupa el bus y los hilos productores/consumidor.

    No hay supervisión por watcher: ``on_fatal`` se comparte entre todos.
    """

    def __init__(
        self,
        config: BridgeConfig,
        sink: MessageSink,
        source_factory: EdgeSourceFactory = open_gpiod_source,
        on_fatal: Callable[[BaseException], None] = terminate_process,
    ):
        self.config = config
        self.bus = EventBus()
        self.stop_event = threading.Event()

        self.publisher = Publisher(
            self.bus,
            sink,
            config.mqtt.topic,
            stop_event=self.stop_event,
            on_fatal=on_fatal,
        )

        self.watchers: list[LineWatcher] = []
        for chip in config.gpiochip:
            if not chip.pins:
                logger.warning("[BRIDGE] Chip %s has no pins configured, skipping", chip.path)
                continue
            self.watchers.append(
                LineWatcher(
                    chip,
                    self.bus,
                    on_fatal=on_fatal,
                    source_factory=source_factory,
                    stop_event=self.stop_event,
                )
            )

        self.heartbeat: Optional[HeartbeatTicker] = None
        if config.heartbeat.enabled:
            self.heartbeat = HeartbeatTicker(
                self.bus,
                interval_seconds=config.heartbeat.interval_seconds,
                stop_event=self.stop_event,
            )

        self._threads: list[threading.Thread] = []

    def start(self) -> None:
        targets = [("publisher", self.publisher.run)]
        for i, watcher in enumerate(self.watchers):
            targets.append((f"watcher-{i}", watcher.run))
        if self.heartbeat is not None:
            targets.append(("heartbeat", self.heartbeat.run))

        for name, target in targets:
            thread = threading.Thread(target=target, name=name, daemon=True)
            thread.start()
            self._threads.append(thread)

        logger.info(
            "[BRIDGE] Started: %d watcher(s), heartbeat=%s",
            len(self.watchers),
            self.heartbeat is not None,
        )

    def wait(self) -> None:
        self.stop_event.wait()

    def stop(self) -> None:
        """Pide la parada y cierra el bus.

        Los watchers bloqueados en una lectura de hardware solo salen con
        el siguiente flanco; son hilos daemon y mueren con el proceso.
        """
        self.stop_event.set()
        self.bus.close()

    @property
    def threads(self) -> list[threading.Thread]:
        return list(self._threads)


def main(argv: Optional[list[str]] = None) -> int:
    settings = get_settings()

    p = argparse.ArgumentParser(description="Publish GPIO line edges and a heartbeat to MQTT")
    p.add_argument("--config", default=settings.config_path, help="path to the YAML config file")
    p.add_argument("--log-level", default=settings.log_level)
    args = p.parse_args(argv)

    level = args.log_level.upper()
    valid_level = isinstance(logging.getLevelName(level), int)
    logging.basicConfig(
        level=level if valid_level else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    if not valid_level:
        logger.critical("[BRIDGE] Invalid log level: %s", args.log_level)
        return 1
    logger.info("[BRIDGE] Starting move-detect...")

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.critical("[BRIDGE] %s", e)
        return 1

    try:
        sink = MQTTSink(config.mqtt.host)
    except ValueError as e:
        logger.critical("[BRIDGE] Invalid MQTT host: %s", e)
        return 1

    if not sink.connect():
        return 1

    if config.metrics.port:
        start_http_server(config.metrics.port)
        logger.info("[BRIDGE] Metrics on :%d/metrics", config.metrics.port)

    bridge = Bridge(config, sink)

    def _handle_signal(signum, frame):
        logger.info("[BRIDGE] Signal %d received, stopping", signum)
        bridge.stop()

    signal.signal(signal.SIGTERM, _handle_signal)
    signal.signal(signal.SIGINT, _handle_signal)

    bridge.start()
    bridge.wait()
    sink.disconnect()
    return 0


if __name__ == "__main__":
    sys.exit(main())
