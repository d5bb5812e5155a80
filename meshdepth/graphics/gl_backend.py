"""
OpenGL‑бекенд: буферы живут в VBO/EBO.

Требует текущий GL‑контекст (см. meshdepth.graphics.context).
"""

from typing import Any

import numpy as np
from OpenGL import GL

from meshdepth.graphics.backend import BufferBackend
from meshdepth.utils.logger import logger

_TARGETS = {
    "vertex": GL.GL_ARRAY_BUFFER,
    "index": GL.GL_ELEMENT_ARRAY_BUFFER,
}


def gl_check_error(context: str = ""):
    """Проверить glGetError и вывести в лог, если что‑то не так."""
    err = GL.glGetError()
    if err != GL.GL_NO_ERROR:
        logger.error(f"OpenGL error 0x{int(err):04x} [{context}]")
    return err


class GLBufferBackend(BufferBackend):
    """VBO/EBO через PyOpenGL (GL_STATIC_DRAW)."""

    def __init__(self):
        # handle -> target
        self._targets: dict[int, int] = {}

    def _upload(self, handle: int, data: bytes) -> None:
        target = self._targets[handle]
        payload = np.frombuffer(data, dtype=np.uint8)
        GL.glBindBuffer(target, handle)
        GL.glBufferData(target, payload.nbytes, payload, GL.GL_STATIC_DRAW)
        GL.glBindBuffer(target, 0)
        gl_check_error(f"upload buffer {handle}")

    def create_buffer(self, data: bytes, usage: str = "default") -> Any:
        target = _TARGETS.get(usage, GL.GL_ARRAY_BUFFER)
        handle = int(GL.glGenBuffers(1))
        if handle == 0:
            raise RuntimeError("glGenBuffers returned 0 – is a GL context current?")
        self._targets[handle] = target
        self._upload(handle, data)
        logger.debug(f"[GLBufferBackend] buffer {handle} ({usage}, {len(data)} bytes)")
        return handle

    def update_buffer(self, buffer: Any, data: bytes) -> None:
        self._upload(int(buffer), data)

    def release_resource(self, resource: Any) -> None:
        handle = int(resource)
        if self._targets.pop(handle, None) is not None:
            GL.glDeleteBuffers(1, [handle])

    def shutdown(self) -> None:
        for handle in list(self._targets):
            self.release_resource(handle)
