from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from gpio_bridge.core.domain.config import BridgeConfig
from gpio_bridge.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "/etc/move-detect.yaml"


@dataclass(frozen=True)
class Settings:
    config_path: str
    log_level: str


def get_settings() -> Settings:
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("GPIO_BRIDGE_ENV_FILE")
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    return Settings(
        config_path=os.getenv("GPIO_BRIDGE_CONFIG", DEFAULT_CONFIG_PATH),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def load_config(path: Optional[str] = None) -> BridgeConfig:
    """Lee y valida el YAML de configuración.

    Lanza ConfigError si el fichero no se puede abrir, no es YAML válido
    o no cumple el esquema. Para el proceso es un error fatal.
    """
    path = path or get_settings().config_path

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not open config file: {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        config = BridgeConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    logger.info(
        "[CONFIG] Loaded %s: %d chip(s), topic=%s",
        path,
        len(config.gpiochip),
        config.mqtt.topic,
    )
    return config
