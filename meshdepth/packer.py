# -*- coding: utf-8 -*-
"""
Упаковка меша в вершинный/индексный буферы.

Раскладка вершины – VERTEX3_TEXTURE2_NORMAL3 (8 float):

    offset 0..2  позиция
    offset 3..4  текстурные координаты (u, v)
    offset 5..7  нормаль вершины (не нормаль грани!)

Каждый угол каждого треугольника – отдельная запись: угол c
треугольника i лежит по смещению i * 24 + c * 8.

После упаковки u‑компонента (offset 3) каждого угла затирается
внутренней глубиной вершины – так глубина попадает в шейдер без
отдельного атрибута.  Исходная u из файла при этом теряется.
"""

from typing import Optional

import numpy as np

from meshdepth.errors import MeshIntegrityError
from meshdepth.geometry.mesh import Mesh
from meshdepth.geometry.raycast import InternalDepth
from meshdepth.graphics.backend import BufferBackend
from meshdepth.graphics.buffers import IndexBuffer, VertexBuffer, VertexFormat

LAYOUT = VertexFormat.VERTEX3_TEXTURE2_NORMAL3
STRIDE = LAYOUT.stride          # 8
CORNER_STRIDE = STRIDE * 3      # 24 float на треугольник
TEXCOORD_U_OFFSET = 3


def check_positions(mesh: Mesh) -> None:
    """NaN или координата вне [-1, 1] у угла треугольника – ошибка логики."""
    if mesh.triangle_count == 0:
        return
    vertex_indices = mesh.vertex_indices()
    corners = mesh.positions[vertex_indices]
    nan = np.isnan(corners).any(axis=2)
    if nan.any():
        tri, corner = (int(i) for i in np.argwhere(nan)[0])
        raise MeshIntegrityError(
            f"NaN position at triangle {tri}, corner {corner} "
            f"(vertex {int(vertex_indices[tri, corner])})"
        )
    outside = (np.abs(corners) > 1.0).any(axis=2)
    if outside.any():
        tri, corner = (int(i) for i in np.argwhere(outside)[0])
        raise MeshIntegrityError(
            f"position {corners[tri, corner].tolist()} outside [-1, 1] at triangle {tri}, "
            f"corner {corner} – mesh was not normalized"
        )


def pack_mesh(mesh: Mesh,
              backend: Optional[BufferBackend] = None,
              commit: bool = True):
    """
    Записать все углы треугольников и индексы в новые буферы.
    Возвращает (VertexBuffer, IndexBuffer).
    """
    mesh.check_indices()
    check_positions(mesh)

    triangles = mesh.triangle_count
    vb = VertexBuffer(triangles * CORNER_STRIDE, LAYOUT, backend)
    ib = IndexBuffer(triangles * 3, vb.backend)

    vertex_indices = mesh.vertex_indices()
    texcoord_indices = mesh.texcoord_indices()

    for i in range(triangles):
        for c in range(3):
            vertex = vertex_indices[i, c]
            offset = i * CORNER_STRIDE + c * STRIDE
            vb.write(offset, mesh.positions[vertex])
            vb.write(offset + 3, mesh.texcoords[texcoord_indices[i, c]])
            vb.write(offset + 5, mesh.vertex_normals[vertex])
        ib.write(i * 3, vertex_indices[i])

    if commit:
        vb.commit()
        ib.commit()
    return vb, ib


def write_depth_as_texcoords(vb: VertexBuffer, mesh: Mesh, depth: InternalDepth,
                             commit: bool = True) -> None:
    """Затереть u каждого угла глубиной его вершины и закоммитить."""
    if len(depth) != mesh.vertex_count:
        raise MeshIntegrityError(
            f"depth table has {len(depth)} entries, mesh has {mesh.vertex_count} vertices"
        )
    stride = vb.stride
    vertex_indices = mesh.vertex_indices()
    for i in range(mesh.triangle_count):
        base = i * stride * 3
        for c in range(3):
            vb.set(base + stride * c + TEXCOORD_U_OFFSET, depth.distances[vertex_indices[i, c]])
    if commit:
        vb.commit()
