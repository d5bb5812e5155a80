# -*- coding: utf-8 -*-
import logging
from pathlib import Path

import numpy as np
import pytest

from meshdepth import ObjLoader, load_mesh
from meshdepth.errors import MeshDepthError, MeshIntegrityError, ObjParseError
from meshdepth.geometry.mesh import RecordCounts
from meshdepth.geometry.raycast import NO_HIT_DEPTH
from meshdepth.utils.config import Config


def test_load_cube(cube_obj, mock_backend, progress):
    geometry = ObjLoader(backend=mock_backend, progress=progress).load_mesh(cube_obj)

    assert geometry.loaded
    assert geometry.counts == RecordCounts(8, 1, 3, 12)
    assert geometry.scale == 0.5
    assert len(geometry.vertices) == 12 * 24
    assert len(geometry.indices) == 12 * 3
    assert geometry.bounds.centroid.as_np().tolist() == [0.5, 0.5, 0.5]

    rows = np.frombuffer(mock_backend.data(geometry.vertices.handle), dtype=np.float32).reshape(-1, 8)
    assert np.abs(rows[:, 0:3]).max() <= 1.0
    assert np.allclose(rows[:, 3], np.sqrt(3.0), atol=1e-5)
    assert geometry.vertex_internal_distance(0) == pytest.approx(np.sqrt(3.0), abs=1e-5)


def test_progress_reports(cube_obj, mock_backend, progress):
    ObjLoader(backend=mock_backend, progress=progress).load_mesh(cube_obj)
    assert progress.stages == ["Calculating normals", "Generating vertex depth information"]
    assert "8 vertices" in progress.messages[0]
    assert "12 triangles" in progress.messages[0]
    assert any(m.startswith("Maximum dimensions") for m in progress.messages)


def test_commit_sequence(cube_obj, mock_backend):
    geometry = ObjLoader(backend=mock_backend).load_mesh(cube_obj)
    assert mock_backend.count("create_buffer") == 2
    assert mock_backend.count("update_buffer") == 1
    assert geometry.vertices.commit_count == 2
    assert geometry.indices.commit_count == 1


def test_default_backend_is_memory(triangle_obj):
    geometry = load_mesh(triangle_obj)
    assert geometry.loaded
    assert geometry.vertices.backend.data(geometry.vertices.handle) == geometry.vertices.tobytes()
    assert geometry.internal_depth.distance(0) == np.float32(NO_HIT_DEPTH)


def test_missing_file_yields_empty_geometry(tmp_path, mock_backend, caplog):
    with caplog.at_level(logging.ERROR, logger="meshdepth"):
        geometry = ObjLoader(backend=mock_backend).load_mesh(tmp_path / "absent.obj")
    assert not geometry.loaded
    assert geometry.vertices is None and geometry.indices is None
    assert not mock_backend.calls
    assert "Could not open" in caplog.text


def test_empty_file_yields_empty_geometry(write_obj, mock_backend):
    geometry = ObjLoader(backend=mock_backend).load_mesh(write_obj("# nothing here\n"))
    assert not geometry.loaded
    assert geometry.counts.is_empty
    assert not mock_backend.calls


def test_vertices_without_faces(write_obj):
    geometry = load_mesh(write_obj("v 0 0 0\nv 1 1 1\n"))
    assert not geometry.loaded
    assert geometry.counts.vertices == 2
    with pytest.raises(ValueError):
        geometry.vertex_internal_distance(0)


def test_out_of_range_face_index_fails(write_obj):
    with pytest.raises(MeshIntegrityError):
        load_mesh(write_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 4\n"))


def test_missing_texcoord_table_is_tolerated(write_obj):
    # vt нет, но индекс по‑умолчанию 1 указывает на нулевую запись
    geometry = load_mesh(write_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nvn 0 0 1\nf 1//1 2//1 3//1\n"))
    assert geometry.loaded
    assert geometry.vertices.vertices()[:, 4].tolist() == [0.0, 0.0, 0.0]


def test_strict_mode_rejects_malformed_numbers(write_obj):
    config = Config(data={"parser": {"lenient_numbers": False}})
    with pytest.raises(ObjParseError):
        load_mesh(write_obj("v 0 0 0\nv 1x 0 0\nv 0 1 0\nf 1 2 3\n"), config)


def test_lenient_mode_reads_numeric_prefix(write_obj):
    geometry = load_mesh(write_obj("v 0 0 0\nv 1x 0 0\nv 0 1 0\nf 1 2 3\n"))
    assert geometry.loaded
    assert geometry.bounds.maximum.x == 1.0


def test_orphan_policy_from_config(write_obj):
    path = write_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nv 2 2 2\nf 1 2 3\n")
    geometry = load_mesh(path)
    assert not geometry.internal_depth.has_hit(3)

    config = Config(data={"normals": {"orphan_policy": "raise"}})
    with pytest.raises(MeshIntegrityError):
        load_mesh(path, config)


def test_workers_and_jit_settings(cube_obj):
    base = load_mesh(cube_obj)
    config = Config(data={"compute": {"jit": False, "workers": 2}})
    loader = ObjLoader(config)
    assert loader.jit is False and loader.workers == 2
    other = loader.load_mesh(cube_obj)
    assert np.allclose(base.vertices.as_np(), other.vertices.as_np(), atol=1e-6)
    assert np.array_equal(base.indices.as_np(), other.indices.as_np())


def test_stage_timings(cube_obj):
    loader = ObjLoader()
    geometry = loader.load_mesh(cube_obj)
    assert set(geometry.timings) == {"parse", "vertex normals", "normalize", "internal depth", "pack"}
    assert all(ms >= 0.0 for ms in geometry.timings.values())
    assert geometry.timings is not loader.timings


def test_huge_face_index_is_a_parse_error(write_obj):
    with pytest.raises(MeshDepthError) as info:
        load_mesh(write_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 99999999999\n"))
    assert isinstance(info.value, ObjParseError)
    assert info.value.line_no == 4


def test_reopen_failure_yields_empty_geometry(cube_obj, mock_backend, caplog, monkeypatch):
    real_open = Path.open
    opened = []

    def open_once(self, *args, **kwargs):
        opened.append(self)
        if len(opened) > 1:
            raise PermissionError("locked")
        return real_open(self, *args, **kwargs)

    monkeypatch.setattr(Path, "open", open_once)
    with caplog.at_level(logging.ERROR, logger="meshdepth"):
        geometry = ObjLoader(backend=mock_backend).load_mesh(cube_obj)

    assert len(opened) == 2
    assert not geometry.loaded
    assert geometry.counts.triangles == 12
    assert not mock_backend.calls
    assert "second stage load" in caplog.text
