"""Unit tests for the line/column to offset index."""

import pytest

from ast_annotate.core.positions import LineAndColumnMap


def test_records_line_starts() -> None:
    line_map = LineAndColumnMap("a\nbc\n")
    assert line_map.offsets == [0, 2, 5]


def test_get_offset_adds_column_to_line_start() -> None:
    line_map = LineAndColumnMap("a\nbc\ndef")
    assert line_map.get_offset(0, 0) == 0
    assert line_map.get_offset(1, 1) == 3
    assert line_map.get_offset(2, 2) == 7


def test_carriage_return_stays_on_its_line() -> None:
    line_map = LineAndColumnMap("a\r\nb")
    assert line_map.get_offset(0, 1) == 1
    assert line_map.get_offset(1, 0) == 3


def test_source_without_newlines_is_one_line() -> None:
    line_map = LineAndColumnMap("x = 1")
    assert line_map.offsets == [0]
    assert line_map.get_offset(0, 4) == 4


def test_get_location_inverts_get_offset() -> None:
    source = "first\n\nthird line\n"
    line_map = LineAndColumnMap(source)
    for offset in range(len(source) + 1):
        line, column = line_map.get_location(offset)
        assert line_map.get_offset(line, column) == offset


def test_get_location_at_line_boundaries() -> None:
    line_map = LineAndColumnMap("a\nbc")
    assert line_map.get_location(0) == (0, 0)
    assert line_map.get_location(1) == (0, 1)
    assert line_map.get_location(2) == (1, 0)
    assert line_map.get_location(4) == (1, 2)


def test_get_location_rejects_out_of_bounds() -> None:
    line_map = LineAndColumnMap("abc")
    with pytest.raises(ValueError, match="out of bounds"):
        line_map.get_location(4)
    with pytest.raises(ValueError):
        line_map.get_location(-1)


def test_offsets_are_monotonic() -> None:
    line_map = LineAndColumnMap("one\ntwo\nthree\n")
    assert line_map.offsets == sorted(line_map.offsets)
    assert line_map.get_offset(1, 0) < line_map.get_offset(1, 1) < line_map.get_offset(2, 0)
