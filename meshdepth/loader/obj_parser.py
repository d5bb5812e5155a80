# -*- coding: utf-8 -*-
"""
Двухпроходный разбор OBJ.

1. count_records() – считает v / vn / vt и треугольники (квад = 2),
   чтобы заранее выделить таблицы точного размера.
2. read_records()   – второй проход по тем же строкам, заполняет
   таблицы Mesh.  Выход за посчитанные размеры или недобор –
   ObjParseError.

Квад (c0, c1, c2, c3) превращается в треугольники (c0, c1, c2) и
(c0, c2, c3) – общая диагональ c0‑c2.  Углы сверх четвёртого
игнорируются (многоугольники не поддерживаются).
"""

from typing import Iterable

from meshdepth.errors import ObjParseError
from meshdepth.geometry.mesh import Mesh, RecordCounts
from meshdepth.loader.records import (
    ParseOptions,
    RecordKind,
    classify_line,
    parse_corner,
    parse_floats,
)


def face_triangle_count(line: str) -> int:
    """1 для треугольника, 2 для квада (ключевое слово + больше 4 полей)."""
    return 2 if len(line.split()) > 4 else 1


def count_records(lines: Iterable[str]) -> RecordCounts:
    """Первый проход: только подсчёт, без разбора чисел."""
    vertices = normals = texcoords = triangles = 0
    for line in lines:
        kind = classify_line(line)
        if kind is RecordKind.NORMAL:
            normals += 1
        elif kind is RecordKind.TEXCOORD:
            texcoords += 1
        elif kind is RecordKind.VERTEX:
            vertices += 1
        elif kind is RecordKind.FACE:
            triangles += face_triangle_count(line)
    return RecordCounts(vertices, normals, texcoords, triangles)


def _overflow(kind: str, counted: int, line_no: int) -> ObjParseError:
    return ObjParseError(f"more {kind} than the counting pass found ({counted})", line_no)


def read_records(lines: Iterable[str], counts: RecordCounts, options: ParseOptions = None) -> Mesh:
    """Второй проход: заполнить предвыделенные таблицы."""
    options = options or ParseOptions()
    mesh = Mesh(counts)
    vertex = normal = texcoord = triangle = 0

    for line_no, line in enumerate(lines, 1):
        kind = classify_line(line)
        if kind is RecordKind.OTHER:
            continue
        fields = line.split()[1:]

        if kind is RecordKind.NORMAL:
            if normal >= counts.normals:
                raise _overflow("normals", counts.normals, line_no)
            mesh.normals[normal] = parse_floats(fields, 3, options, line_no)
            normal += 1

        elif kind is RecordKind.TEXCOORD:
            if texcoord >= counts.texcoords:
                raise _overflow("texture coordinates", counts.texcoords, line_no)
            mesh.texcoords[texcoord] = parse_floats(fields, 2, options, line_no)
            texcoord += 1

        elif kind is RecordKind.VERTEX:
            if vertex >= counts.vertices:
                raise _overflow("vertices", counts.vertices, line_no)
            mesh.positions[vertex] = parse_floats(fields, 3, options, line_no)
            vertex += 1

        else:
            if len(fields) < 3:
                raise ObjParseError(f"face needs at least 3 corners, got {len(fields)}", line_no)
            corners = [parse_corner(group, options, line_no) for group in fields[:4]]
            needed = 2 if len(corners) == 4 else 1
            if triangle + needed > counts.triangles:
                raise _overflow("triangles", counts.triangles, line_no)

            mesh.set_triangle(triangle, corners[0], corners[1], corners[2])
            triangle += 1
            if len(corners) == 4:
                mesh.set_triangle(triangle, corners[0], corners[2], corners[3])
                triangle += 1

    populated = RecordCounts(vertex, normal, texcoord, triangle)
    if populated != counts:
        raise ObjParseError(f"record pass populated {populated}, counting pass found {counts}")
    return mesh
