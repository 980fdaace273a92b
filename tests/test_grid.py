"""Tests for cellgrid coordinates, cells and the sparse Grid."""

from __future__ import annotations

import pytest

from cellgrid import (
    COLUMNS,
    MAX_COLUMN,
    MAX_ROW,
    Coordinate,
    Grid,
    coordinate_to_key,
    parse_coordinate,
)
from cellgrid.calc import MalformedReference, RangeEntry


class TestCoordinate:
    def test_key(self) -> None:
        assert coordinate_to_key(Coordinate(7, 1)) == "B7"
        assert Coordinate(0, 0).key == "A0"
        assert str(Coordinate(99, 25)) == "Z99"

    def test_parse(self) -> None:
        assert parse_coordinate("B7") == Coordinate(7, 1)
        assert parse_coordinate("Z99") == Coordinate(99, 25)

    def test_leading_zeros(self) -> None:
        assert parse_coordinate("C007") == Coordinate(7, 2)

    def test_roundtrip_every_coordinate(self) -> None:
        for row in range(MAX_ROW + 1):
            for column in range(MAX_COLUMN + 1):
                c = Coordinate(row, column)
                assert parse_coordinate(coordinate_to_key(c)) == c

    @pytest.mark.parametrize("text", ["", "7", "B", "b7", "AA1", "B-1", "B 7", "B7 ", "B1.5", "A100"])
    def test_malformed(self, text: str) -> None:
        with pytest.raises(MalformedReference):
            parse_coordinate(text)

    def test_malformed_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="Malformed cell reference"):
            parse_coordinate("??")

    def test_out_of_range_construction(self) -> None:
        with pytest.raises(ValueError):
            Coordinate(100, 0)
        with pytest.raises(ValueError):
            Coordinate(0, 26)
        with pytest.raises(ValueError):
            Coordinate(-1, 0)

    def test_offset_clamps(self) -> None:
        assert Coordinate(0, 0).offset(-1, -1) == Coordinate(0, 0)
        assert Coordinate(99, 25).offset(1, 1) == Coordinate(99, 25)
        assert Coordinate(5, 5).offset(1, -2) == Coordinate(6, 3)

    def test_columns_constant(self) -> None:
        assert len(COLUMNS) == 26
        assert MAX_COLUMN == 25


class TestCellAccess:
    def test_get_or_create(self) -> None:
        grid = Grid()
        cell = grid.get_or_create_cell(Coordinate(3, 2))
        assert cell.raw_value == ""
        assert cell.error is False
        assert grid.get_or_create_cell(Coordinate(3, 2)) is cell
        assert len(grid) == 1

    def test_item_access(self) -> None:
        grid = Grid()
        grid["B7"] = "hello"
        assert grid["B7"].raw_value == "hello"
        assert grid["B7"].coordinate == Coordinate(7, 1)

    def test_cell_by_index(self) -> None:
        grid = Grid()
        grid.cell(2, 0, "x")
        assert grid.cell(2, 0).raw_value == "x"
        assert "A2" in grid

    def test_get_cell_does_not_create(self) -> None:
        grid = Grid()
        assert grid.get_cell(Coordinate(0, 0)) is None
        assert len(grid) == 0

    def test_delete_cell(self) -> None:
        grid = Grid()
        grid["C3"] = "text"
        grid.delete_cell(Coordinate(3, 2))
        assert Coordinate(3, 2) not in grid
        grid.delete_cell(Coordinate(3, 2))  # absent: no error

    def test_contains(self) -> None:
        grid = Grid()
        grid["A1"] = "1"
        assert "A1" in grid
        assert Coordinate(1, 0) in grid
        assert "A2" not in grid
        assert 42 not in grid

    def test_iter_cells_row_major(self) -> None:
        grid = Grid()
        for key in ["B2", "A2", "C0", "A0"]:
            grid[key] = key
        assert [c.coordinate.key for c in grid.iter_cells()] == ["A0", "C0", "A2", "B2"]

    def test_evaluated_value_passthrough(self) -> None:
        grid = Grid()
        grid["A1"] = "plain"
        assert grid["A1"].evaluated_value == "plain"

    def test_repr(self) -> None:
        grid = Grid()
        grid["A1"] = "x"
        assert repr(grid["A1"]) == "<Cell A1 raw='x'>"


class TestGetRange:
    def test_empty_grid(self) -> None:
        grid = Grid()
        assert grid.get_range(Coordinate(0, 0), Coordinate(99, 25)) == []
        assert grid.get_range(Coordinate(5, 5), Coordinate(1, 1)) == []

    def test_row_major_order(self) -> None:
        grid = Grid()
        grid["A1"] = "1"
        grid["B1"] = "2"
        grid["A2"] = "3"
        grid["B2"] = "4"
        entries = grid.get_range(parse_coordinate("A1"), parse_coordinate("B2"))
        assert [(e.coordinate.key, e.value) for e in entries] == [
            ("A1", "1"), ("B1", "2"), ("A2", "3"), ("B2", "4"),
        ]

    def test_corners_normalized(self) -> None:
        grid = Grid()
        grid["A1"] = "1"
        grid["B2"] = "4"
        forward = grid.get_range(parse_coordinate("A1"), parse_coordinate("B2"))
        backward = grid.get_range(parse_coordinate("B2"), parse_coordinate("A1"))
        anti = grid.get_range(parse_coordinate("B1"), parse_coordinate("A2"))
        assert forward == backward == anti

    def test_holes_omitted(self) -> None:
        grid = Grid()
        grid["A1"] = "1"
        grid["A3"] = "3"
        entries = grid.get_range(parse_coordinate("A1"), parse_coordinate("A3"))
        assert entries == [
            RangeEntry(Coordinate(1, 0), "1"),
            RangeEntry(Coordinate(3, 0), "3"),
        ]

    def test_values_are_evaluated(self) -> None:
        grid = Grid()
        grid["A1"] = "=sum(1,1)"
        entries = grid.get_range(parse_coordinate("A1"), parse_coordinate("A1"))
        assert entries[0].value == "2.00"

    def test_outside_cells_excluded(self) -> None:
        grid = Grid()
        grid["A1"] = "in"
        grid["C1"] = "out"
        grid["A3"] = "out"
        entries = grid.get_range(parse_coordinate("A0"), parse_coordinate("B2"))
        assert [e.value for e in entries] == ["in"]
