"""
Простой загрузчик/сохранитель конфигурации в формате JSON.

Если файл не найден – используются настройки по‑умолчанию.
Вложенные секции сливаются с умолчаниями, поэтому в файле можно
указать только то, что меняется, например::

    {"parser": {"lenient_numbers": false}}
"""

import copy
import json
from pathlib import Path
from typing import Optional, Union

from meshdepth.utils.logger import logger

ORPHAN_POLICIES = ("nan", "zero", "raise")
BACKENDS = ("memory", "gl")

DEFAULT_CONFIG = {
    "parser": {
        # "1.5abc" -> 1.5, "abc" -> 0.0 (как atof)
        "lenient_numbers": True,
        # "f 1//3" -> texcoord 1; небезопасно, если у меша нет vt/vn
        "default_missing_index": True,
    },
    "normals": {"orphan_policy": "nan"},
    "compute": {"jit": True, "workers": 1},
    "backend": "memory",
    "log_level": "INFO",
}


def _merge(defaults: dict, overrides: dict) -> dict:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Конфигурация загрузчика (файл JSON + умолчания)."""

    def __init__(self, path: Optional[Union[str, Path]] = None, data: Optional[dict] = None):
        self.path = Path(path) if path is not None else None
        self.data = _merge(DEFAULT_CONFIG, data or {})
        if self.path is not None:
            self._load()
        self._validate()

    def _load(self):
        if self.path.is_file():
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    self.data = _merge(self.data, json.load(f))
                logger.info(f"[Config] Loaded configuration from {self.path}.")
            except (OSError, ValueError) as exc:
                # self.data остаётся прежним: умолчания + переданные data
                logger.error(f"[Config] Failed to read config, keeping defaults and overrides: {exc}")
        else:
            logger.info(f"[Config] No config file at {self.path} – using defaults.")

    def _validate(self):
        policy = self.section("normals")["orphan_policy"]
        if policy not in ORPHAN_POLICIES:
            raise ValueError(f"Unknown orphan_policy: {policy!r} (expected one of {ORPHAN_POLICIES})")
        if self["backend"] not in BACKENDS:
            raise ValueError(f"Unknown backend: {self['backend']!r}")
        if int(self.section("compute")["workers"]) < 1:
            raise ValueError("compute.workers must be >= 1")

    def save(self, path: Optional[Union[str, Path]] = None):
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("Config.save() needs a path")
        try:
            with target.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=4)
            logger.info("[Config] Configuration saved.")
        except OSError as exc:
            logger.error(f"[Config] Unable to save config: {exc}")

    def section(self, name: str) -> dict:
        """Секция со всеми ключами (умолчания + файл)."""
        return _merge(DEFAULT_CONFIG.get(name, {}), self.data.get(name, {}))

    def __getitem__(self, key):
        return self.data.get(key, DEFAULT_CONFIG.get(key))

    def __setitem__(self, key, value):
        self.data[key] = value
        self._validate()

    def get(self, key, default=None):
        return self.data.get(key, default)
