"""
Математический суб‑пакет.
"""

from meshdepth.math.vec3 import Vec3

__all__ = ["Vec3"]
