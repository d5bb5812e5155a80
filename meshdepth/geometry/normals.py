# -*- coding: utf-8 -*-
"""
Нормали вершин из нормалей граней.

Нормаль грани не нормируется: её длина пропорциональна площади,
поэтому большие грани сильнее влияют на усреднённую нормаль вершины.

Поиск смежных граней – полный перебор O(V×T) («медленно, но просто»).
Результат не должен зависеть от того, считали ли мы последовательно
или по диапазонам вершин в TaskPool.
"""

import math

import numpy as np
from numba import njit

from meshdepth.errors import MeshIntegrityError
from meshdepth.geometry.mesh import Mesh
from meshdepth.multithread import run_ranges
from meshdepth.utils.logger import logger

ORPHAN_POLICIES = ("nan", "zero", "raise")


@njit(nogil=True, cache=False)
def vertex_normals_kernel(tri_vertices, face_normals, out, start, stop):
    """
    Для вершин [start, stop): сумма нормалей всех граней, где вершина
    встречается, / число таких граней, затем нормировка.
    Вершина без граней (или с нулевой суммой) получает NaN.
    """
    nan = np.nan
    for i in range(start, stop):
        sx = 0.0
        sy = 0.0
        sz = 0.0
        adjacent = 0
        for t in range(tri_vertices.shape[0]):
            if tri_vertices[t, 0] == i or tri_vertices[t, 1] == i or tri_vertices[t, 2] == i:
                sx += face_normals[t, 0]
                sy += face_normals[t, 1]
                sz += face_normals[t, 2]
                adjacent += 1

        if adjacent == 0:
            out[i, 0] = nan
            out[i, 1] = nan
            out[i, 2] = nan
            continue

        sx /= adjacent
        sy /= adjacent
        sz /= adjacent
        length = math.sqrt(sx * sx + sy * sy + sz * sz)
        if length == 0.0:
            # 0/0 – как при нормировке нулевого float‑вектора
            out[i, 0] = nan
            out[i, 1] = nan
            out[i, 2] = nan
        else:
            out[i, 0] = sx / length
            out[i, 1] = sy / length
            out[i, 2] = sz / length


def _kernel(jit: bool):
    return vertex_normals_kernel if jit else vertex_normals_kernel.py_func


def orphan_vertices(mesh: Mesh) -> np.ndarray:
    """Индексы вершин, на которые не ссылается ни один треугольник."""
    referenced = np.zeros(mesh.vertex_count, dtype=bool)
    if mesh.triangle_count:
        referenced[mesh.vertex_indices().ravel()] = True
    return np.flatnonzero(~referenced)


def derive_vertex_normals(mesh: Mesh,
                          orphan_policy: str = "nan",
                          jit: bool = True,
                          workers: int = 1) -> np.ndarray:
    """
    Заполнить mesh.vertex_normals (V, 3) и вернуть его.

    orphan_policy – что делать с вершинами без треугольников:
        "nan"   – оставить NaN (неопределённая нормаль),
        "zero"  – нулевой вектор,
        "raise" – MeshIntegrityError.
    """
    if orphan_policy not in ORPHAN_POLICIES:
        raise ValueError(f"Unknown orphan_policy: {orphan_policy!r}")

    mesh.check_indices()
    orphans = orphan_vertices(mesh)
    if orphans.size:
        if orphan_policy == "raise":
            raise MeshIntegrityError(
                f"{orphans.size} vertex(es) are not referenced by any triangle "
                f"(first: {int(orphans[0])})"
            )
        logger.warning(f"[Normals] {orphans.size} orphan vertex(es), policy '{orphan_policy}'")

    face_normals = mesh.face_normals
    tri_vertices = np.ascontiguousarray(mesh.vertex_indices())
    out = np.empty((mesh.vertex_count, 3), dtype=np.float32)
    run_ranges(_kernel(jit), mesh.vertex_count, workers, tri_vertices, face_normals, out)

    if orphans.size and orphan_policy == "zero":
        out[orphans] = 0.0

    mesh.vertex_normals = out
    return out


def vertex_normal(mesh: Mesh, vertex_index: int, jit: bool = True) -> np.ndarray:
    """Нормаль одной вершины (0‑based индекс), без записи в mesh."""
    if not 0 <= vertex_index < mesh.vertex_count:
        raise IndexError(f"vertex {vertex_index} out of range [0, {mesh.vertex_count})")
    out = np.zeros((mesh.vertex_count, 3), dtype=np.float32)
    tri_vertices = np.ascontiguousarray(mesh.vertex_indices())
    _kernel(jit)(tri_vertices, mesh.face_normals, out, vertex_index, vertex_index + 1)
    return out[vertex_index].copy()
