# -*- coding: utf-8 -*-
"""
Таблицы меша, заполняемые загрузчиком.

Все размеры фиксируются первым проходом (RecordCounts) и дальше не
меняются.  Индексы углов хранятся 1‑based, как в файле; 0‑based они
получаются только в момент использования (`vertex_indices()` и т.п.).
"""

from typing import NamedTuple, Optional

import numpy as np

from meshdepth.errors import MeshIntegrityError

# Оси последнего измерения Mesh.corners
VERTEX, TEXCOORD, NORMAL = 0, 1, 2


class RecordCounts(NamedTuple):
    """Результат первого прохода."""
    vertices: int = 0
    normals: int = 0
    texcoords: int = 0
    triangles: int = 0

    @property
    def is_empty(self) -> bool:
        return not any(self)


class FaceCorner(NamedTuple):
    """Угол грани: 1‑based индексы вершины, текстурной координаты и нормали."""
    vertex: int
    texcoord: int
    normal: int

    def resolved(self):
        """0‑based тройка (vertex, texcoord, normal)."""
        return self.vertex - 1, self.texcoord - 1, self.normal - 1


class Triangle(NamedTuple):
    """Вид на одну строку Mesh.corners: три угла грани."""
    a: FaceCorner
    b: FaceCorner
    c: FaceCorner

    @property
    def vertex_indices(self):
        """0‑based индексы вершин."""
        return tuple(corner.vertex - 1 for corner in self)


class Mesh:
    """
    Сырые таблицы OBJ‑файла.

    positions      (V, 3) float32 – позиции вершин (меняются при нормализации)
    vertex_normals (V, 3) float32 – производные нормали вершин
    normals        (N, 3) float32 – vn из файла, N >= 1
    texcoords      (M, 2) float32 – vt из файла, M >= 1
    corners        (T, 3, 3) uint32 – [треугольник, угол, vertex/texcoord/normal], 1‑based
    """

    def __init__(self, counts: RecordCounts):
        self.counts = counts
        self.positions = np.zeros((counts.vertices, 3), dtype=np.float32)
        self.vertex_normals = np.zeros((counts.vertices, 3), dtype=np.float32)
        # хотя бы одна запись – чтобы индекс 1 по‑умолчанию был валиден
        self.normals = np.zeros((max(1, counts.normals), 3), dtype=np.float32)
        self.texcoords = np.zeros((max(1, counts.texcoords), 2), dtype=np.float32)
        self.corners = np.zeros((counts.triangles, 3, 3), dtype=np.uint32)
        self._face_normals: Optional[np.ndarray] = None

    # -----------------------------------------------------------------
    @property
    def vertex_count(self) -> int:
        return self.positions.shape[0]

    @property
    def triangle_count(self) -> int:
        return self.corners.shape[0]

    def set_triangle(self, index: int, a: FaceCorner, b: FaceCorner, c: FaceCorner) -> None:
        self.corners[index] = (a, b, c)
        self._face_normals = None

    def triangle(self, index: int) -> Triangle:
        rows = self.corners[index].tolist()
        return Triangle(*(FaceCorner(*row) for row in rows))

    def vertex_indices(self) -> np.ndarray:
        """(T, 3) int64 – 0‑based индексы вершин треугольников."""
        return self.corners[:, :, VERTEX].astype(np.int64) - 1

    def texcoord_indices(self) -> np.ndarray:
        return self.corners[:, :, TEXCOORD].astype(np.int64) - 1

    def normal_indices(self) -> np.ndarray:
        return self.corners[:, :, NORMAL].astype(np.int64) - 1

    # -----------------------------------------------------------------
    def check_indices(self) -> None:
        """
        Все индексы углов должны попадать в свои таблицы.
        Нарушение – MeshIntegrityError (ничего не обрезаем молча).
        """
        if self.triangle_count == 0:
            return
        if int(self.corners.min()) < 1:
            bad = int(np.argwhere(self.corners < 1)[0][0])
            raise MeshIntegrityError(f"triangle {bad} holds an index < 1 (unset corner)")
        for axis, name, size in (
            (VERTEX, "vertex", self.vertex_count),
            (TEXCOORD, "texcoord", self.texcoords.shape[0]),
            (NORMAL, "normal", self.normals.shape[0]),
        ):
            column = self.corners[:, :, axis]
            if int(column.max()) > size:
                bad = int(np.argwhere(column > size)[0][0])
                raise MeshIntegrityError(
                    f"triangle {bad} references {name} {int(column[bad].max())} "
                    f"but only {size} {name}(s) exist"
                )

    # -----------------------------------------------------------------
    @property
    def face_normals(self) -> np.ndarray:
        """
        (T, 3) ненормированные нормали граней: (p1 - p0) x (p2 - p0).
        Считаются один раз по текущим позициям и кэшируются; длина
        пропорциональна площади.
        """
        if self._face_normals is None:
            self.check_indices()
            tri = self.positions[self.vertex_indices()]
            self._face_normals = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0]).astype(np.float32)
        return self._face_normals

    def reset_face_normals(self) -> None:
        self._face_normals = None

    def __repr__(self):
        return (f"Mesh(vertices={self.vertex_count}, triangles={self.triangle_count}, "
                f"normals={self.counts.normals}, texcoords={self.counts.texcoords})")
