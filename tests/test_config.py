"""Tests de configuración: esquema, resolución de pines y carga del YAML."""

import pytest
from pydantic import ValidationError

from common.config import DEFAULT_CONFIG_PATH, get_settings, load_config
from gpio_bridge.core.domain.config import (
    UNKNOWN_PIN_NAME,
    BridgeConfig,
    ChipConfig,
    PinConfig,
)
from gpio_bridge.core.errors import ConfigError


VALID_YAML = """
mqtt:
  host: tcp://localhost:1883
  topic: home/gpio
gpiochip:
  - path: chip0
    pins:
      - name: door
        line: 3
      - name: window
        line: 5
  - path: chip1
    pins:
      - name: garage
        line: 0
"""


@pytest.fixture
def config_file(tmp_path):
    def _write(text: str):
        path = tmp_path / "move-detect.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


# =============================================================================
# RESOLUCIÓN DE PINES
# =============================================================================

class TestPinResolution:

    def test_configured_line_resolves_to_name(self, door_chip):
        assert door_chip.pin_name(3) == "door"

    def test_unconfigured_line_falls_back_to_unknown(self, door_chip):
        """Offset fuera de la lista → "Unknown", siempre."""
        assert door_chip.pin_name(9) == UNKNOWN_PIN_NAME
        assert door_chip.pin_name(9) == "Unknown"

    def test_duplicate_line_first_pin_wins(self):
        chip = ChipConfig(
            path="chip0",
            pins=(PinConfig(name="a", line=1), PinConfig(name="b", line=1)),
        )
        assert chip.pin_name(1) == "a"

    def test_lines_preserve_order(self):
        chip = ChipConfig(
            path="chip0",
            pins=(PinConfig(name="x", line=7), PinConfig(name="y", line=2)),
        )
        assert chip.lines == [7, 2]


# =============================================================================
# ESQUEMA
# =============================================================================

class TestSchema:

    def test_models_are_immutable(self, door_chip):
        with pytest.raises(ValidationError):
            door_chip.path = "chip9"

    def test_negative_line_rejected(self):
        with pytest.raises(ValidationError):
            PinConfig(name="door", line=-1)

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            BridgeConfig.model_validate(
                {"mqtt": {"host": "h", "topic": "t", "qos": 2}}
            )

    def test_defaults(self):
        config = BridgeConfig.model_validate({"mqtt": {"host": "h", "topic": "t"}})
        assert config.gpiochip == ()
        assert config.heartbeat.enabled is True
        assert config.heartbeat.interval_seconds == 60.0
        assert config.metrics.port is None


# =============================================================================
# CARGA DEL FICHERO
# =============================================================================

class TestLoadConfig:

    def test_load_valid_file(self, config_file):
        config = load_config(config_file(VALID_YAML))

        assert config.mqtt.host == "tcp://localhost:1883"
        assert config.mqtt.topic == "home/gpio"
        assert [chip.path for chip in config.gpiochip] == ["chip0", "chip1"]
        assert config.gpiochip[0].lines == [3, 5]
        assert config.gpiochip[1].pin_name(0) == "garage"

    def test_zero_chips_is_valid(self, config_file):
        config = load_config(config_file("mqtt:\n  host: h\n  topic: t\ngpiochip: []\n"))
        assert config.gpiochip == ()

    def test_empty_gpiochip_key_is_valid(self, config_file):
        config = load_config(config_file("mqtt:\n  host: h\n  topic: t\ngpiochip:\n"))
        assert config.gpiochip == ()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Could not open"):
            load_config(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, config_file):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_file("mqtt: [unclosed\n"))

    def test_not_a_mapping(self, config_file):
        with pytest.raises(ConfigError, match="mapping"):
            load_config(config_file("- just\n- a list\n"))

    def test_missing_mqtt_section(self, config_file):
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(config_file("gpiochip: []\n"))

    def test_non_integer_line(self, config_file):
        text = VALID_YAML.replace("line: 3", "line: three")
        with pytest.raises(ConfigError):
            load_config(config_file(text))


# =============================================================================
# SETTINGS DE ENTORNO
# =============================================================================

class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GPIO_BRIDGE_CONFIG", raising=False)
        monkeypatch.delenv("GPIO_BRIDGE_ENV_FILE", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = get_settings()

        assert settings.config_path == DEFAULT_CONFIG_PATH == "/etc/move-detect.yaml"
        assert settings.log_level == "INFO"

    def test_env_file_does_not_override_environment(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("GPIO_BRIDGE_CONFIG=/from/env-file.yaml\nLOG_LEVEL=debug\n")
        monkeypatch.setenv("GPIO_BRIDGE_ENV_FILE", str(env_file))
        monkeypatch.setenv("GPIO_BRIDGE_CONFIG", "/from/environment.yaml")
        # setenv + delenv: monkeypatch restaura LOG_LEVEL al terminar
        monkeypatch.setenv("LOG_LEVEL", "unset")
        monkeypatch.delenv("LOG_LEVEL")

        settings = get_settings()

        assert settings.config_path == "/from/environment.yaml"
        assert settings.log_level == "DEBUG"
