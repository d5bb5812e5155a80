# -*- coding: utf-8 -*-
"""
Записи Wavefront OBJ: классификация строк и разбор отдельных полей.

Поддерживаются только v / vn / vt / f, всё остальное (g, o, s,
usemtl, mtllib, комментарии …) молча пропускается.

Разбор чисел по‑умолчанию «мягкий», как atof/atoi: берётся самый
длинный числовой префикс, мусор даёт 0.0.  Пропущенный подиндекс
грани ("1//3", "1") по‑умолчанию превращается в 1.  Оба поведения
можно выключить через ParseOptions (секция "parser" конфигурации).
"""

import re
from enum import Enum
from typing import Optional

import numpy as np

from meshdepth.errors import ObjParseError
from meshdepth.geometry.mesh import FaceCorner

_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"[+-]?\d+")
# Mesh.corners хранит индексы в uint32
MAX_INDEX = int(np.iinfo(np.uint32).max)


class RecordKind(Enum):
    VERTEX = "v"
    NORMAL = "vn"
    TEXCOORD = "vt"
    FACE = "f"
    OTHER = ""


def classify_line(line: str) -> RecordKind:
    """Тип записи по первому токену (по префиксу, как в исходном формате)."""
    if line.startswith("vn"):
        return RecordKind.NORMAL
    if line.startswith("vt"):
        return RecordKind.TEXCOORD
    if line.startswith("v"):
        return RecordKind.VERTEX
    if line.startswith("f"):
        return RecordKind.FACE
    return RecordKind.OTHER


class ParseOptions:
    """Флаги «мягкости» разбора."""

    __slots__ = ("lenient_numbers", "default_missing_index")

    def __init__(self, lenient_numbers: bool = True, default_missing_index: bool = True):
        self.lenient_numbers = bool(lenient_numbers)
        self.default_missing_index = bool(default_missing_index)

    @classmethod
    def from_config(cls, config) -> "ParseOptions":
        section = config.section("parser")
        return cls(section["lenient_numbers"], section["default_missing_index"])

    def __repr__(self):
        return (f"ParseOptions(lenient_numbers={self.lenient_numbers}, "
                f"default_missing_index={self.default_missing_index})")


def parse_float(text: Optional[str], lenient: bool = True, line_no: Optional[int] = None) -> float:
    """
    Разобрать число с плавающей точкой.

    lenient=True: "1.5abc" -> 1.5, "abc" / "" / None -> 0.0.
    lenient=False: всё, что не float() целиком, – ObjParseError.
    """
    if not lenient:
        try:
            return float(text)
        except (TypeError, ValueError):
            raise ObjParseError(f"malformed number {text!r}", line_no) from None
    if not text:
        return 0.0
    match = _FLOAT_PREFIX.match(text.lstrip())
    return float(match.group(0)) if match else 0.0


def parse_index(text: str, lenient: bool = True, line_no: Optional[int] = None) -> int:
    """
    Разобрать 1‑based индекс.  Результат всегда >= 1 –
    ноль, отрицательные (относительные) индексы и мусор не допускаются.
    """
    if lenient:
        match = _INT_PREFIX.match(text.lstrip())
        value = int(match.group(0)) if match else 0
    else:
        try:
            value = int(text)
        except ValueError:
            raise ObjParseError(f"malformed index {text!r}", line_no) from None
    if value < 1:
        raise ObjParseError(f"face index must be >= 1, got {text!r}", line_no)
    if value > MAX_INDEX:
        raise ObjParseError(f"face index {text!r} exceeds {MAX_INDEX}", line_no)
    return value


def split_group(group: str, line_no: Optional[int] = None):
    """'v/vt/vn' -> [v, vt, vn]; недостающие части – пустые строки."""
    parts = group.split("/")
    if len(parts) > 3:
        raise ObjParseError(f"too many '/' fields in {group!r}", line_no)
    return parts + [""] * (3 - len(parts))


def parse_corner(group: str, options: ParseOptions = None, line_no: Optional[int] = None) -> FaceCorner:
    """Разобрать одну группу грани ('7', '7/2', '7//3', '7/2/3')."""
    options = options or ParseOptions()
    indices = []
    for name, text in zip(FaceCorner._fields, split_group(group, line_no)):
        if not text:
            if not options.default_missing_index:
                raise ObjParseError(f"missing {name} index in {group!r}", line_no)
            indices.append(1)
        else:
            indices.append(parse_index(text, options.lenient_numbers, line_no))
    return FaceCorner(*indices)


def parse_floats(fields, count: int, options: ParseOptions = None, line_no: Optional[int] = None):
    """Первые `count` чисел записи; недостающие поля – 0.0 в мягком режиме."""
    options = options or ParseOptions()
    values = []
    for i in range(count):
        text = fields[i] if i < len(fields) else None
        if text is None and not options.lenient_numbers:
            raise ObjParseError(f"expected {count} numbers, got {len(fields)}", line_no)
        values.append(parse_float(text, options.lenient_numbers, line_no))
    return values
