# -*- coding: utf-8 -*-
import pytest

from meshdepth.errors import ObjParseError
from meshdepth.geometry.mesh import FaceCorner
from meshdepth.loader.records import (
    MAX_INDEX,
    ParseOptions,
    RecordKind,
    classify_line,
    parse_corner,
    parse_float,
    parse_floats,
    parse_index,
    split_group,
)

STRICT = ParseOptions(lenient_numbers=False, default_missing_index=False)


@pytest.mark.parametrize("line, kind", [
    ("v 1 2 3", RecordKind.VERTEX),
    ("vn 0 0 1", RecordKind.NORMAL),
    ("vt 0.5 0.5", RecordKind.TEXCOORD),
    ("f 1 2 3", RecordKind.FACE),
    ("# comment", RecordKind.OTHER),
    ("usemtl wood", RecordKind.OTHER),
    ("g group", RecordKind.OTHER),
    ("", RecordKind.OTHER),
])
def test_classify_line(line, kind):
    assert classify_line(line) is kind


def test_classify_is_prefix_based():
    # ключевое слово без пробела всё равно классифицируется по префиксу
    assert classify_line("vp 1 2") is RecordKind.VERTEX
    assert classify_line("fo bar") is RecordKind.FACE


@pytest.mark.parametrize("text, value", [
    ("1.5", 1.5),
    ("-2e3", -2000.0),
    (".25", 0.25),
    ("1.5abc", 1.5),
    ("abc", 0.0),
    ("", 0.0),
    (None, 0.0),
])
def test_parse_float_lenient(text, value):
    assert parse_float(text) == value


def test_parse_float_strict():
    assert parse_float("3.25", lenient=False) == 3.25
    with pytest.raises(ObjParseError) as info:
        parse_float("1.5abc", lenient=False, line_no=7)
    assert info.value.line_no == 7
    assert "line 7" in str(info.value)


def test_parse_index():
    assert parse_index("12") == 12
    assert parse_index("3xyz") == 3
    with pytest.raises(ObjParseError):
        parse_index("0")
    with pytest.raises(ObjParseError):
        parse_index("-1")
    with pytest.raises(ObjParseError):
        parse_index("junk")
    with pytest.raises(ObjParseError):
        parse_index("3xyz", lenient=False)


def test_parse_index_fits_uint32():
    assert parse_index(str(MAX_INDEX)) == MAX_INDEX
    with pytest.raises(ObjParseError) as info:
        parse_index(str(MAX_INDEX + 1), line_no=4)
    assert info.value.line_no == 4
    with pytest.raises(ObjParseError):
        parse_index("99999999999", lenient=False)


def test_split_group():
    assert split_group("7") == ["7", "", ""]
    assert split_group("7//3") == ["7", "", "3"]
    assert split_group("7/2/3") == ["7", "2", "3"]
    with pytest.raises(ObjParseError):
        split_group("1/2/3/4")


def test_parse_corner_defaults_missing_indices_to_one():
    assert parse_corner("7") == FaceCorner(7, 1, 1)
    assert parse_corner("7//3") == FaceCorner(7, 1, 3)
    assert parse_corner("7/2") == FaceCorner(7, 2, 1)
    assert parse_corner("7/2/3") == FaceCorner(7, 2, 3)


def test_single_digit_texcoord_index_is_kept():
    assert parse_corner("4/5/6").texcoord == 5


def test_parse_corner_strict_rejects_missing_index():
    with pytest.raises(ObjParseError):
        parse_corner("7//3", STRICT)
    assert parse_corner("7/2/3", STRICT) == FaceCorner(7, 2, 3)


def test_parse_floats_pads_short_records():
    assert parse_floats(["1", "2"], 3) == [1.0, 2.0, 0.0]
    with pytest.raises(ObjParseError):
        parse_floats(["1", "2"], 3, STRICT)


def test_options_from_config(config):
    assert ParseOptions.from_config(config).lenient_numbers is True
    config["parser"] = {"lenient_numbers": False}
    options = ParseOptions.from_config(config)
    assert options.lenient_numbers is False
    assert options.default_missing_index is True
