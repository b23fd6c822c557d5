"""Fixtures compartidas."""

from __future__ import annotations

import pytest

from gpio_bridge.core.bus import EventBus
from gpio_bridge.core.domain.config import BridgeConfig, BrokerConfig, ChipConfig, PinConfig

from .fakes import RecordingSink


@pytest.fixture
def door_chip() -> ChipConfig:
    """chip0 con un único pin: door en la línea 3."""
    return ChipConfig(path="chip0", pins=(PinConfig(name="door", line=3),))


@pytest.fixture
def bridge_config(door_chip) -> BridgeConfig:
    return BridgeConfig(
        mqtt=BrokerConfig(host="tcp://localhost:1883", topic="home/gpio"),
        gpiochip=(door_chip,),
    )


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
