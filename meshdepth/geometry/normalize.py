# -*- coding: utf-8 -*-
"""
Центрирование и равномерное масштабирование меша.

Порядок важен:
    1. recenter()        – вычесть центр масс вершин;
    2. triangle_extent() – max |x|, |y|, |z| по углам треугольников;
    3. (нормали вершин считаются здесь, на центрированных позициях);
    4. apply_scale()     – умножить на 1 / (scale * 2).

scale = max(0.5, max(extent)) – нижняя граница 0.5 не даёт
крошечному (или точечному) мешу «взорваться» при делении.
"""

from typing import NamedTuple

import numpy as np

from meshdepth.geometry.mesh import Mesh
from meshdepth.math import Vec3

MIN_SCALE = 0.5


class MeshBounds(NamedTuple):
    minimum: Vec3      # до центрирования
    maximum: Vec3
    centroid: Vec3
    extent: Vec3       # ширина / высота / глубина после центрирования
    scale: float


def recenter(mesh: Mesh):
    """Сдвинуть вершины в центр масс; вернуть (centroid, minimum, maximum)."""
    if mesh.vertex_count == 0:
        return Vec3(), Vec3(), Vec3()
    positions = mesh.positions
    minimum = Vec3.from_np(positions.min(axis=0))
    maximum = Vec3.from_np(positions.max(axis=0))
    centroid = positions.mean(axis=0, dtype=np.float64).astype(np.float32)
    positions -= centroid
    mesh.reset_face_normals()
    return Vec3.from_np(centroid), minimum, maximum


def triangle_extent(mesh: Mesh) -> Vec3:
    """Максимальные |x|, |y|, |z| по всем углам треугольников."""
    if mesh.triangle_count == 0:
        return Vec3()
    mesh.check_indices()
    corners = mesh.positions[mesh.vertex_indices().ravel()]
    return Vec3.from_np(np.abs(corners).max(axis=0))


def uniform_scale(extent: Vec3) -> float:
    return max(MIN_SCALE, extent.max_component())


def apply_scale(mesh: Mesh, scale: float) -> None:
    """positions *= 1 / (scale * 2)."""
    adjusted = np.float32(1.0 / (scale * 2.0))
    mesh.positions *= adjusted
    mesh.reset_face_normals()


def normalize_mesh(mesh: Mesh, progress=None, before_scale=None) -> MeshBounds:
    """
    Полная нормализация.  `before_scale(mesh)` вызывается между
    измерением габаритов и масштабированием (там считаются нормали).
    """
    centroid, minimum, maximum = recenter(mesh)
    extent = triangle_extent(mesh)
    scale = uniform_scale(extent)

    if progress is not None:
        progress.report(
            f"Maximum dimensions: [{minimum.x},{maximum.x}] "
            f"[{minimum.y},{maximum.y}] [{minimum.z},{maximum.z}]"
        )
        progress.report(f"Average: [{centroid.x},{centroid.y},{centroid.z}]")
        progress.report(f"New dimensions: [{extent.x},{extent.y},{extent.z}]")

    if before_scale is not None:
        before_scale(mesh)
    apply_scale(mesh, scale)
    return MeshBounds(minimum, maximum, centroid, extent, scale)
