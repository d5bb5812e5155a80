# meshdepth/graphics/buffers.py
"""
Вершинный и индексный буферы с «теневой» копией в памяти.

Запись идёт в numpy‑массив, commit() отдаёт байты бекенду:
первый раз – create_buffer(), дальше – update_buffer().
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Optional

import numpy as np

from meshdepth.graphics.backend import BufferBackend, MemoryBackend


class VertexFormat(IntEnum):
    """Фиксированные раскладки вершины."""
    VERTEX2 = 0
    VERTEX3 = 1
    VERTEX3_TEXTURE2_NORMAL3 = 2
    VERTEX3_TEXTURE2_NORMAL3_COLOUR4 = 3
    VERTEX3_NORMAL3_COLOUR4 = 4

    @property
    def stride(self) -> int:
        """Сколько float‑компонент в одной вершине."""
        return _STRIDES[self]


_STRIDES = {
    VertexFormat.VERTEX2: 2,
    VertexFormat.VERTEX3: 3,
    VertexFormat.VERTEX3_TEXTURE2_NORMAL3: 8,
    VertexFormat.VERTEX3_TEXTURE2_NORMAL3_COLOUR4: 12,
    VertexFormat.VERTEX3_NORMAL3_COLOUR4: 10,
}


class _ShadowBuffer:
    dtype = np.float32
    usage = "default"

    def __init__(self, size: int, backend: Optional[BufferBackend] = None):
        if size <= 0:
            raise ValueError(f"{type(self).__name__} size must be > 0, got {size}")
        self.size = int(size)
        self.backend = backend if backend is not None else MemoryBackend()
        self.handle = None
        self.commit_count = 0
        self._storage = np.zeros(self.size, dtype=self.dtype)

    # -----------------------------------------------------------------
    def _check(self, index: int) -> int:
        index = int(index)
        if index < 0 or index >= self.size:
            raise IndexError(f"{type(self).__name__} index {index} out of range [0, {self.size})")
        return index

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int):
        return self._storage[self._check(index)].item()

    def __setitem__(self, index: int, value) -> None:
        self._storage[self._check(index)] = value

    def get(self, index: int):
        return self[index]

    def set(self, index: int, value) -> None:
        """Записать одну компоненту."""
        self[index] = value

    def write(self, offset: int, values: Iterable) -> None:
        """Записать подряд несколько компонент, начиная с offset."""
        values = np.asarray(values, dtype=self.dtype).ravel()
        offset = self._check(offset)
        if offset + values.size > self.size:
            raise IndexError(
                f"{type(self).__name__} write of {values.size} at {offset} overflows size {self.size}"
            )
        self._storage[offset:offset + values.size] = values

    def read(self, data: Iterable) -> None:
        """Загрузить буфер из последовательности (не больше size)."""
        data = np.asarray(data, dtype=self.dtype).ravel()
        if data.size > self.size:
            raise ValueError(f"Cannot load {data.size} values into buffer of {self.size}")
        self._storage[:data.size] = data

    def as_np(self) -> np.ndarray:
        """Копия теневого массива."""
        return self._storage.copy()

    def tobytes(self) -> bytes:
        return self._storage.tobytes()

    # -----------------------------------------------------------------
    def commit(self) -> None:
        """Отдать текущее содержимое бекенду."""
        data = self._storage.tobytes()
        if self.handle is None:
            self.handle = self.backend.create_buffer(data, usage=self.usage)
        else:
            self.backend.update_buffer(self.handle, data)
        self.commit_count += 1

    def release(self) -> None:
        if self.handle is not None:
            self.backend.release_resource(self.handle)
            self.handle = None


class VertexBuffer(_ShadowBuffer):
    """Плоский float32‑буфер вершин заданного формата."""
    dtype = np.float32
    usage = "vertex"

    def __init__(self, size: int,
                 fmt: VertexFormat = VertexFormat.VERTEX3_TEXTURE2_NORMAL3,
                 backend: Optional[BufferBackend] = None):
        super().__init__(size, backend)
        self.format = VertexFormat(fmt)

    @property
    def stride(self) -> int:
        return self.format.stride

    @property
    def vertex_count(self) -> int:
        return self.size // self.stride

    def vertices(self) -> np.ndarray:
        """Копия данных в виде (vertex_count, stride)."""
        return self._storage.reshape(-1, self.stride).copy()


class IndexBuffer(_ShadowBuffer):
    """uint32‑буфер индексов."""
    dtype = np.uint32
    usage = "index"
