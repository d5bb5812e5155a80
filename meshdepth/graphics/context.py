"""
Скрытое GLFW‑окно – источник GL‑контекста для GLBufferBackend.
"""

from contextlib import contextmanager

import glfw

from meshdepth.utils.logger import logger


@contextmanager
def offscreen_context(width: int = 64, height: int = 64, title: str = "meshdepth"):
    """Создать невидимое окно, сделать его контекст текущим."""
    if not glfw.init():
        raise RuntimeError("Failed to initialize GLFW")
    glfw.window_hint(glfw.VISIBLE, glfw.FALSE)

    handle = glfw.create_window(width, height, title, None, None)
    if not handle:
        glfw.terminate()
        raise RuntimeError("Failed to create GLFW window")
    glfw.make_context_current(handle)
    logger.debug("[GLContext] hidden window created")
    try:
        yield handle
    finally:
        glfw.destroy_window(handle)
        glfw.terminate()
