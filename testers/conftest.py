# -*- coding: utf-8 -*-
"""
conftest.py – мок‑бэкенд и готовые OBJ‑файлы для тестов.

RecordingBackend ведёт себя как MemoryBackend, но дополнительно
записывает каждый вызов, чтобы проверять порядок commit‑ов.
"""

import io
from pathlib import Path
from typing import Any, Tuple

import pytest

from meshdepth.graphics.backend import MemoryBackend
from meshdepth.loader.obj_parser import count_records, read_records
from meshdepth.utils.config import Config
from meshdepth.utils.progress import RecordingProgress


# ----------------------------------------------------------------------
# Куб со стороной 1.  Квады записаны так, что диагональ c0‑c2 каждой
# грани соединяет вершины 1, 3, 6, 8 – тогда у всех вершин одинаковое
# число смежных треугольников на каждой грани и нормали строго
# диагональные.
# ----------------------------------------------------------------------
CUBE_OBJ = """\
# unit cube
o cube
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
v 0 0 1
v 1 0 1
v 1 1 1
v 0 1 1
vt 0.0 0.0
vt 1.0 0.0
vt 1.0 1.0
vn 0 0 -1
s off
f 1/1/1 4/2/1 3/3/1 2/1/1
f 6 7 8 5
f 1 2 6 5
f 8 7 3 4
f 1 5 8 4
f 3 7 6 2
"""

TRIANGLE_OBJ = """\
v 0 0 0
v 1 0 0
v 0 1 0
f 1 2 3
"""


class RecordingBackend(MemoryBackend):
    """MemoryBackend, который помнит все вызовы."""

    def __init__(self) -> None:
        super().__init__()
        # (method_name, args)
        self.calls: list[Tuple[str, Tuple[Any, ...]]] = []

    def _record(self, name: str, *a) -> None:
        self.calls.append((name, a))

    def create_buffer(self, data: bytes, usage: str = "default") -> int:
        handle = super().create_buffer(data, usage)
        self._record("create_buffer", handle, usage, len(data))
        return handle

    def update_buffer(self, buffer: int, data: bytes) -> None:
        super().update_buffer(buffer, data)
        self._record("update_buffer", buffer, len(data))

    def release_resource(self, resource: int) -> None:
        super().release_resource(resource)
        self._record("release_resource", resource)

    # -----------------------------------------------------------------
    def called(self, name: str) -> bool:
        """True, если метод `name` был вызван хотя бы один раз."""
        return any(call[0] == name for call in self.calls)

    def count(self, name: str) -> int:
        """Сколько раз был вызван метод `name`."""
        return sum(1 for call in self.calls if call[0] == name)


# ----------------------------------------------------------------------
# PyTest‑fixtures
# ----------------------------------------------------------------------
@pytest.fixture
def mock_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def write_obj(tmp_path):
    """Фабрика: write_obj(text, name="mesh.obj") -> Path."""
    def _write(text: str, name: str = "mesh.obj") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def cube_obj(write_obj) -> Path:
    return write_obj(CUBE_OBJ, "cube.obj")


@pytest.fixture
def triangle_obj(write_obj) -> Path:
    return write_obj(TRIANGLE_OBJ, "triangle.obj")


def parse_obj(text: str):
    """Разобрать OBJ‑текст в Mesh без загрузчика (оба прохода)."""
    counts = count_records(io.StringIO(text))
    return read_records(io.StringIO(text), counts)
