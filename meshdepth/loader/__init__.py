"""
Загрузка Wavefront OBJ.
"""

from meshdepth.loader.records import (
    ParseOptions,
    RecordKind,
    classify_line,
    parse_corner,
    parse_float,
    parse_index,
)
from meshdepth.loader.obj_parser import count_records, read_records
from meshdepth.loader.obj_loader import MeshGeometry, ObjLoader, load_mesh

__all__ = [
    "ParseOptions",
    "RecordKind",
    "classify_line",
    "parse_corner",
    "parse_float",
    "parse_index",
    "count_records",
    "read_records",
    "MeshGeometry",
    "ObjLoader",
    "load_mesh",
]
