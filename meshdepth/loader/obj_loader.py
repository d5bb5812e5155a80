# -*- coding: utf-8 -*-
"""
Загрузчик OBJ → MeshGeometry.

Этапы:
    1. подсчёт записей (первое чтение файла);
    2. разбор записей (второе чтение);
    3. центрирование, габариты, нормали вершин, масштаб;
    4. внутренняя глубина (луч из каждой вершины внутрь);
    5. упаковка в буферы, затем запись глубины в u‑компоненту.

Ошибки открытия файла не бросаются наружу: они пишутся в лог,
а результат приходит с пустыми (None) буферами.
"""

from pathlib import Path
from typing import Dict, Optional, Union

from meshdepth.geometry.mesh import Mesh, RecordCounts
from meshdepth.geometry.normalize import MeshBounds, normalize_mesh
from meshdepth.geometry.normals import derive_vertex_normals
from meshdepth.geometry.raycast import InternalDepth, estimate_internal_depth
from meshdepth.graphics.backend import BufferBackend, select_backend
from meshdepth.graphics.buffers import IndexBuffer, VertexBuffer
from meshdepth.loader.obj_parser import count_records, read_records
from meshdepth.loader.records import ParseOptions
from meshdepth.packer import pack_mesh, write_depth_as_texcoords
from meshdepth.utils.config import Config
from meshdepth.utils.logger import logger
from meshdepth.utils.profiler import Profiler
from meshdepth.utils.progress import LoggingProgress, ProgressReporter


class MeshGeometry:
    """Результат загрузки: буферы, масштаб и таблица глубин."""

    def __init__(self,
                 vertices: Optional[VertexBuffer] = None,
                 indices: Optional[IndexBuffer] = None,
                 scale: float = 0.0,
                 internal_depth: Optional[InternalDepth] = None,
                 counts: RecordCounts = RecordCounts(),
                 bounds: Optional[MeshBounds] = None,
                 timings: Optional[Dict[str, float]] = None):
        self.vertices = vertices
        self.indices = indices
        self.scale = scale
        self.internal_depth = internal_depth
        self.counts = counts
        self.bounds = bounds
        # этап -> миллисекунды
        self.timings = dict(timings or {})

    @property
    def loaded(self) -> bool:
        return self.vertices is not None and self.indices is not None

    def vertex_internal_distance(self, vertex_index: int) -> float:
        """Глубина исходной вершины (0‑based), в масштабированных единицах."""
        if self.internal_depth is None:
            raise ValueError("mesh was not loaded – no depth information")
        return self.internal_depth.distance(vertex_index)

    def __repr__(self):
        return (f"MeshGeometry(loaded={self.loaded}, triangles={self.counts.triangles}, "
                f"scale={self.scale:.4f})")


class ObjLoader:
    """A mesh loader for the Alias/Wavefront OBJ file format."""

    def __init__(self,
                 config: Optional[Config] = None,
                 backend: Optional[BufferBackend] = None,
                 progress: Optional[ProgressReporter] = None):
        self.config = config if config is not None else Config()
        self.options = ParseOptions.from_config(self.config)
        self.backend = backend
        self.progress = progress if progress is not None else LoggingProgress()

        compute = self.config.section("compute")
        self.jit = bool(compute["jit"])
        self.workers = int(compute["workers"])
        self.orphan_policy = self.config.section("normals")["orphan_policy"]
        self.timings: Dict[str, float] = {}

    # -----------------------------------------------------------------
    def load_mesh(self, path: Union[str, Path]) -> MeshGeometry:
        path = Path(path)
        self.timings = {}
        try:
            with path.open("r", encoding="utf-8", errors="replace") as f:
                counts = count_records(f)
        except OSError as exc:
            logger.error(f'[ObjLoader] Could not open OBJ file "{path}": {exc}')
            return MeshGeometry()

        self.progress.report(
            f"{path.name}: {counts.vertices} vertices, {counts.normals} normals, "
            f"{counts.texcoords} texture coordinates, {counts.triangles} triangles"
        )
        if counts.triangles == 0:
            logger.warning(f'[ObjLoader] "{path}" has no faces – nothing to pack')
            return MeshGeometry(counts=counts)

        try:
            with path.open("r", encoding="utf-8", errors="replace") as f, Profiler("parse", self.timings):
                mesh = read_records(f, counts, self.options)
        except OSError as exc:
            logger.error(f'[ObjLoader] Could not reopen OBJ file "{path}" for second stage load: {exc}')
            return MeshGeometry(counts=counts)

        return self.build(mesh)

    # -----------------------------------------------------------------
    def _derive_normals(self, mesh: Mesh) -> None:
        self.progress.stage("Calculating normals")
        with Profiler("vertex normals", self.timings):
            derive_vertex_normals(mesh, self.orphan_policy, jit=self.jit, workers=self.workers)

    def build(self, mesh: Mesh) -> MeshGeometry:
        """Этапы 3–5 для уже разобранного меша."""
        with Profiler("normalize", self.timings):
            bounds = normalize_mesh(mesh, self.progress, before_scale=self._derive_normals)

        self.progress.stage("Generating vertex depth information")
        with Profiler("internal depth", self.timings):
            depth = estimate_internal_depth(mesh, jit=self.jit, workers=self.workers)

        backend = self.backend if self.backend is not None else select_backend(self.config["backend"])
        with Profiler("pack", self.timings):
            vb, ib = pack_mesh(mesh, backend)
            # глубина затирает u – это последний commit вершинного буфера
            write_depth_as_texcoords(vb, mesh, depth)

        return MeshGeometry(vb, ib, bounds.scale, depth, mesh.counts, bounds, self.timings)


def load_mesh(path: Union[str, Path],
              config: Optional[Config] = None,
              backend: Optional[BufferBackend] = None,
              progress: Optional[ProgressReporter] = None) -> MeshGeometry:
    """Короткий вызов: ObjLoader(config, backend, progress).load_mesh(path)."""
    return ObjLoader(config, backend, progress).load_mesh(path)
