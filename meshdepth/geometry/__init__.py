"""
Геометрия меша: таблицы, нормали, нормализация, внутренняя глубина.
"""

from meshdepth.geometry.mesh import FaceCorner, Mesh, RecordCounts, Triangle
from meshdepth.geometry.normals import derive_vertex_normals, orphan_vertices, vertex_normal
from meshdepth.geometry.normalize import (
    MeshBounds,
    apply_scale,
    normalize_mesh,
    recenter,
    triangle_extent,
    uniform_scale,
)
from meshdepth.geometry.raycast import (
    NO_HIT_DEPTH,
    InternalDepth,
    estimate_internal_depth,
    intersect_ray_triangle,
    ray_triangle_intersect,
)

__all__ = [
    "FaceCorner",
    "Mesh",
    "RecordCounts",
    "Triangle",
    "derive_vertex_normals",
    "orphan_vertices",
    "vertex_normal",
    "MeshBounds",
    "apply_scale",
    "normalize_mesh",
    "recenter",
    "triangle_extent",
    "uniform_scale",
    "NO_HIT_DEPTH",
    "InternalDepth",
    "estimate_internal_depth",
    "intersect_ray_triangle",
    "ray_triangle_intersect",
]
