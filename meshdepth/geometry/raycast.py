# -*- coding: utf-8 -*-
"""
Внутренняя толщина меша: из каждой вершины пускаем луч внутрь
(против нормали вершины) и ищем ближайшее пересечение с любым
треугольником.

Пересечение луча с треугольником – классический параметрический
тест (Möller–Trumbore):
    * |a| < 1e-5         – луч параллелен плоскости, промах;
    * u вне [0, 1]       – промах;
    * v < 0 или u+v > 1  – промах;
    * t > 1e-5           – попадание строго впереди.

Если луч ничего не задел, глубина = NO_HIT_DEPTH (максимальный
конечный float32).  Это метка «толщину измерить нельзя», а не
настоящее расстояние.

Перебор O(V×T) без BVH/сеток – намеренно: ускоряющие структуры
меняют поведение на вырожденных случаях (равные t).
"""

from typing import Optional

import numpy as np
from numba import njit

from meshdepth.geometry.mesh import Mesh
from meshdepth.multithread import run_ranges

PARALLEL_EPSILON = 1e-5
HIT_EPSILON = 1e-5
NO_HIT_DEPTH = float(np.finfo(np.float32).max)


@njit(nogil=True, cache=False)
def ray_triangle_intersect(origin, direction, v0, v1, v2):
    """
    Вернуть (hit, t).  Все аргументы – 3‑элементные массивы.
    """
    e1x = v1[0] - v0[0]
    e1y = v1[1] - v0[1]
    e1z = v1[2] - v0[2]
    e2x = v2[0] - v0[0]
    e2y = v2[1] - v0[1]
    e2z = v2[2] - v0[2]

    # h = direction x e2
    hx = direction[1] * e2z - direction[2] * e2y
    hy = direction[2] * e2x - direction[0] * e2z
    hz = direction[0] * e2y - direction[1] * e2x
    a = e1x * hx + e1y * hy + e1z * hz

    if a > -PARALLEL_EPSILON and a < PARALLEL_EPSILON:
        return False, 0.0

    f = 1.0 / a
    sx = origin[0] - v0[0]
    sy = origin[1] - v0[1]
    sz = origin[2] - v0[2]

    u = f * (sx * hx + sy * hy + sz * hz)
    if u < 0.0 or u > 1.0:
        return False, 0.0

    # q = s x e1
    qx = sy * e1z - sz * e1y
    qy = sz * e1x - sx * e1z
    qz = sx * e1y - sy * e1x

    v = f * (direction[0] * qx + direction[1] * qy + direction[2] * qz)
    if v < 0.0 or u + v > 1.0:
        return False, 0.0

    t = f * (e2x * qx + e2y * qy + e2z * qz)
    if t > HIT_EPSILON:
        return True, t
    return False, 0.0


@njit(nogil=True, cache=False)
def internal_depth_kernel(positions, vertex_normals, tri_vertices, out, start, stop):
    """Минимальное t по всем треугольникам для вершин [start, stop)."""
    direction = np.empty(3, dtype=np.float64)
    for i in range(start, stop):
        nx = vertex_normals[i, 0]
        ny = vertex_normals[i, 1]
        nz = vertex_normals[i, 2]
        length = np.sqrt(nx * nx + ny * ny + nz * nz)
        # луч внутрь; нулевая/NaN нормаль даёт NaN‑луч, который ни с чем не пересекается
        if length == 0.0:
            direction[0] = np.nan
            direction[1] = np.nan
            direction[2] = np.nan
        else:
            direction[0] = -nx / length
            direction[1] = -ny / length
            direction[2] = -nz / length

        origin = positions[i]
        minimum = NO_HIT_DEPTH
        for t in range(tri_vertices.shape[0]):
            hit, depth = ray_triangle_intersect(
                origin, direction,
                positions[tri_vertices[t, 0]],
                positions[tri_vertices[t, 1]],
                positions[tri_vertices[t, 2]],
            )
            if hit and depth < minimum:
                minimum = depth
        out[i] = minimum


def _kernel(jit: bool):
    return internal_depth_kernel if jit else internal_depth_kernel.py_func


def _as_vector(value) -> np.ndarray:
    if hasattr(value, "as_np"):
        value = value.as_np()
    arr = np.asarray(value, dtype=np.float64).ravel()
    if arr.size < 3:
        raise ValueError(f"expected a 3‑component vector, got {value!r}")
    return arr[:3]


def intersect_ray_triangle(origin, direction, triangle) -> Optional[float]:
    """
    Удобная обёртка над ray_triangle_intersect.

    origin, direction – Vec3 или последовательности из 3 чисел,
    triangle – три вершины.  Возвращает t или None при промахе.
    """
    v0, v1, v2 = (_as_vector(v) for v in triangle)
    hit, t = ray_triangle_intersect(_as_vector(origin), _as_vector(direction), v0, v1, v2)
    return float(t) if hit else None


class InternalDepth:
    """Глубина для каждой исходной вершины (по её порядковому номеру)."""

    def __init__(self, distances: np.ndarray):
        self.distances = np.asarray(distances, dtype=np.float32)

    def __len__(self) -> int:
        return self.distances.shape[0]

    def distance(self, vertex_index: int) -> float:
        """Глубина вершины (0‑based), в масштабированных единицах."""
        return float(self.distances[vertex_index])

    def has_hit(self, vertex_index: int) -> bool:
        return self.distance(vertex_index) != NO_HIT_DEPTH

    def hit_mask(self) -> np.ndarray:
        return self.distances != np.float32(NO_HIT_DEPTH)

    def stats(self):
        """(min, max, mean) по вершинам с попаданием или None."""
        hits = self.distances[self.hit_mask()]
        if hits.size == 0:
            return None
        return float(hits.min()), float(hits.max()), float(hits.mean())

    def __repr__(self):
        return f"InternalDepth(vertices={len(self)}, hits={int(self.hit_mask().sum())})"


def estimate_internal_depth(mesh: Mesh, jit: bool = True, workers: int = 1) -> InternalDepth:
    """Посчитать глубину для всех вершин (нормали уже должны быть готовы)."""
    mesh.check_indices()
    tri_vertices = np.ascontiguousarray(mesh.vertex_indices())
    positions = np.ascontiguousarray(mesh.positions)
    normals = np.ascontiguousarray(mesh.vertex_normals)
    out = np.empty(mesh.vertex_count, dtype=np.float32)
    run_ranges(_kernel(jit), mesh.vertex_count, workers, positions, normals, tri_vertices, out)
    return InternalDepth(out)
