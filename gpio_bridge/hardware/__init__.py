"""Capa de hardware: lectura de flancos GPIO y watcher por chip."""

from .interfaces import EdgeReport, EdgeSource, GpiodEdgeSource, open_gpiod_source
from .watcher import LineWatcher

__all__ = [
    "EdgeReport",
    "EdgeSource",
    "GpiodEdgeSource",
    "open_gpiod_source",
    "LineWatcher",
]
