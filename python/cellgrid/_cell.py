"""Cell: raw content of one coordinate and the error flag of its last evaluation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cellgrid._grid import Grid
    from cellgrid._utils import Coordinate


class Cell:
    """One grid cell.

    ``evaluated_value`` is derived, never stored: every read interprets
    ``raw_value`` afresh through the grid's evaluator and updates ``error``.
    """

    __slots__ = ("_grid", "_coordinate", "raw_value", "error")

    def __init__(self, grid: Grid, coordinate: Coordinate, raw_value: str = "") -> None:
        self._grid = grid
        self._coordinate = coordinate
        self.raw_value = raw_value
        self.error = False

    @property
    def coordinate(self) -> Coordinate:
        return self._coordinate

    @property
    def evaluated_value(self) -> str:
        return self._grid.evaluator.evaluate_cell(self, self._grid)

    @property
    def is_empty(self) -> bool:
        return self.raw_value == ""

    def __repr__(self) -> str:
        return f"<Cell {self._coordinate.key} raw={self.raw_value!r}>"
