"""
Замер времени этапов загрузки.

    timings = {}
    with Profiler("parse", timings):
        ...
    timings["parse"]  # миллисекунды
"""

import time
from typing import Dict, Optional

from meshdepth.utils.logger import logger


class Profiler:
    """Контекст‑менеджер: время блока пишется в лог (DEBUG) и в `sink`."""

    def __init__(self, name: str, sink: Optional[Dict[str, float]] = None):
        self.name = name
        self.sink = sink
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self):
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
        if self.sink is not None:
            self.sink[self.name] = self.sink.get(self.name, 0.0) + self.elapsed_ms
        logger.debug(f"[Profiler] {self.name}: {self.elapsed_ms:.2f} ms")
