"""
meshdepth – загрузчик Wavefront OBJ в GPU‑готовые буферы
(позиция, текстурные координаты, нормаль) с оценкой внутренней
толщины меша в каждой вершине.
"""

from meshdepth.utils import logger, Config
from meshdepth.errors import MeshDepthError, MeshIntegrityError, ObjParseError
from meshdepth.math import Vec3
from meshdepth.geometry import Mesh, InternalDepth, NO_HIT_DEPTH, intersect_ray_triangle
from meshdepth.graphics import (
    BufferBackend,
    MemoryBackend,
    VertexBuffer,
    IndexBuffer,
    VertexFormat,
    select_backend,
)
from meshdepth.loader import MeshGeometry, ObjLoader, load_mesh

__version__ = "1.0.0"

__all__ = [
    "logger",
    "Config",
    "MeshDepthError",
    "MeshIntegrityError",
    "ObjParseError",
    "Vec3",
    "Mesh",
    "InternalDepth",
    "NO_HIT_DEPTH",
    "intersect_ray_triangle",
    "BufferBackend",
    "MemoryBackend",
    "VertexBuffer",
    "IndexBuffer",
    "VertexFormat",
    "select_backend",
    "MeshGeometry",
    "ObjLoader",
    "load_mesh",
]
