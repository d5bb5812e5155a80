# meshdepth/utils/__init__.py
"""
Пакет утилит.

Экспортируем:
    * logger      – готовый объект logging.Logger (с level INFO)
    * Config      – JSON‑конфигурация загрузчика
    * Profiler    – замер времени этапов
    * ProgressReporter и реализации
"""

from .logger import logger, set_level
from .config import Config, DEFAULT_CONFIG
from .profiler import Profiler
from .progress import ProgressReporter, LoggingProgress, NullProgress, RecordingProgress

__all__ = [
    "logger",
    "set_level",
    "Config",
    "DEFAULT_CONFIG",
    "Profiler",
    "ProgressReporter",
    "LoggingProgress",
    "NullProgress",
    "RecordingProgress",
]
