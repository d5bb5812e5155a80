# -*- coding: utf-8 -*-
"""
Трёхмерный вектор на базе NumPy (float32, как и вершинные таблицы меша).

Используется для габаритов (MeshBounds) и в удобной обёртке
intersect_ray_triangle.  Вектор неизменяемый: компоненты только
для чтения.
"""
import numpy as np


class Vec3:
    __slots__ = ("_v",)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._v = np.array([x, y, z], dtype=np.float32)

    @classmethod
    def from_np(cls, arr) -> "Vec3":
        """Построить вектор из первых трёх элементов массива/последовательности."""
        x, y, z = (float(c) for c in arr[:3])
        return cls(x, y, z)

    # -------------------------------------------------
    # компоненты (только чтение)
    # -------------------------------------------------
    @property
    def x(self) -> float:
        return float(self._v[0])

    @property
    def y(self) -> float:
        return float(self._v[1])

    @property
    def z(self) -> float:
        return float(self._v[2])

    def __getitem__(self, i: int) -> float:
        return float(self._v[i])

    def __iter__(self):
        return iter(self._v.tolist())

    def __len__(self) -> int:
        return 3

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    __hash__ = None

    def max_component(self) -> float:
        return float(self._v.max())

    def as_np(self) -> np.ndarray:
        """Копия 3‑элементного массива float32."""
        return self._v.copy()

    def __repr__(self) -> str:
        return f"Vec3({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"
