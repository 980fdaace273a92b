"""Grid: sparse mapping from coordinate key to Cell, with ``grid['A1']`` access."""

from __future__ import annotations

from collections.abc import Iterator

from cellgrid._cell import Cell
from cellgrid._utils import Coordinate, coordinate_to_key, parse_coordinate
from cellgrid.calc._evaluator import FormulaEvaluator
from cellgrid.calc._parser import expand_range
from cellgrid.calc._protocol import FormulaEngine, RangeEntry


class Grid:
    """A 100 x 26 sheet that only stores cells which exist.

    A cell is present once it has been created (by editing, selection or a
    formula reading it) and until it is deleted. Keeping empty, unselected
    cells out of the map is the caller's job; the selection coordinator does
    it when an edit commits or the selection leaves a cell.
    """

    __slots__ = ("_cells", "_evaluator")

    def __init__(self, evaluator: FormulaEngine | None = None) -> None:
        self._cells: dict[str, Cell] = {}
        self._evaluator: FormulaEngine = (
            evaluator if evaluator is not None else FormulaEvaluator()
        )

    @property
    def evaluator(self) -> FormulaEngine:
        return self._evaluator

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> Cell:
        """``grid['A1']`` -> Cell, created if absent."""
        return self.get_or_create_cell(parse_coordinate(key))

    def __setitem__(self, key: str, raw_value: str) -> None:
        """``grid['A1'] = '=sum(B1:B3)'``: shorthand for setting raw content."""
        self[key].raw_value = raw_value

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Coordinate):
            return coordinate_to_key(item) in self._cells
        if isinstance(item, str):
            return item in self._cells
        return False

    def __len__(self) -> int:
        return len(self._cells)

    def cell(self, row: int, column: int, raw_value: str | None = None) -> Cell:
        """Get or create a cell by zero-based (row, column)."""
        c = self.get_or_create_cell(Coordinate(row, column))
        if raw_value is not None:
            c.raw_value = raw_value
        return c

    def get_cell(self, coord: Coordinate) -> Cell | None:
        return self._cells.get(coordinate_to_key(coord))

    def get_or_create_cell(self, coord: Coordinate) -> Cell:
        key = coordinate_to_key(coord)
        if key not in self._cells:
            self._cells[key] = Cell(self, coord)
        return self._cells[key]

    def delete_cell(self, coord: Coordinate) -> None:
        """Remove the cell at *coord* if present. No emptiness check."""
        self._cells.pop(coordinate_to_key(coord), None)

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def iter_cells(self) -> Iterator[Cell]:
        """Present cells in row-major order."""
        yield from sorted(self._cells.values(), key=lambda c: c.coordinate)

    def get_range(self, start: Coordinate, end: Coordinate) -> list[RangeEntry]:
        """Evaluated values of the present cells between two corners.

        Rows ascend, then columns within a row. Holes are omitted, not
        zero-filled.
        """
        entries: list[RangeEntry] = []
        for coord in expand_range(start, end):
            cell = self._cells.get(coordinate_to_key(coord))
            if cell is not None:
                entries.append(RangeEntry(coord, cell.evaluated_value))
        return entries
