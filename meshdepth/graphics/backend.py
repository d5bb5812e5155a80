"""
Абстрактный интерфейс для бекендов, принимающих готовые буферы.

Загрузчик только пишет в буферы и делает commit(); читать данные
обратно из бекенда ему не нужно.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from itertools import count
from typing import Any

from meshdepth.utils.logger import logger


class BufferBackend(ABC):
    """Base interface for buffer backends."""

    @abstractmethod
    def create_buffer(self, data: bytes, usage: str = "default") -> Any:
        pass

    @abstractmethod
    def update_buffer(self, buffer: Any, data: bytes) -> None:
        pass

    @abstractmethod
    def release_resource(self, resource: Any) -> None:
        pass

    @abstractmethod
    def shutdown(self) -> None:
        pass


class MemoryBackend(BufferBackend):
    """
    Бекенд «в памяти»: хранит последнюю закоммиченную копию каждого
    буфера.  Используется по‑умолчанию, в CLI и в тестах.
    """

    def __init__(self) -> None:
        self._handles = count(1)
        # handle -> (usage, bytes)
        self.buffers: dict[int, tuple[str, bytes]] = {}

    def create_buffer(self, data: bytes, usage: str = "default") -> int:
        handle = next(self._handles)
        self.buffers[handle] = (usage, bytes(data))
        logger.debug(f"[MemoryBackend] create_buffer #{handle} ({usage}, {len(data)} bytes)")
        return handle

    def update_buffer(self, buffer: int, data: bytes) -> None:
        if buffer not in self.buffers:
            raise KeyError(f"Unknown buffer handle: {buffer}")
        usage, _ = self.buffers[buffer]
        self.buffers[buffer] = (usage, bytes(data))

    def release_resource(self, resource: int) -> None:
        self.buffers.pop(resource, None)

    def shutdown(self) -> None:
        self.buffers.clear()

    def data(self, buffer: int) -> bytes:
        """Последние закоммиченные байты буфера."""
        return self.buffers[buffer][1]


def select_backend(name: str = "memory") -> BufferBackend:
    """Select buffer backend by name."""
    name = name.lower()
    if name == "memory":
        return MemoryBackend()
    elif name == "gl":
        from .gl_backend import GLBufferBackend
        return GLBufferBackend()
    else:
        raise ValueError(f"Unknown buffer backend: {name}")
