"""
Графический слой – буферы и бекенды, в которые они коммитятся
(память или OpenGL).  GL‑модули импортируются лениво.
"""

from meshdepth.graphics.backend import BufferBackend, MemoryBackend, select_backend
from meshdepth.graphics.buffers import VertexBuffer, IndexBuffer, VertexFormat

__all__ = [
    "BufferBackend",
    "MemoryBackend",
    "select_backend",
    "VertexBuffer",
    "IndexBuffer",
    "VertexFormat",
]
