"""Bridge que republica flancos de líneas GPIO y un heartbeat en un topic MQTT."""

__version__ = "0.1.0"
