"""FormulaEngine protocol and range result dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cellgrid._cell import Cell
    from cellgrid._grid import Grid
    from cellgrid._utils import Coordinate


@dataclass(frozen=True)
class RangeEntry:
    """One present cell inside a range, with its freshly evaluated value."""

    coordinate: Coordinate
    value: str


@runtime_checkable
class FormulaEngine(Protocol):
    """Protocol for the object a Grid uses to compute displayed values."""

    def evaluate(self, raw_value: str, grid: Grid) -> str:
        """Interpret *raw_value* against *grid*.

        Raises a FormulaError subclass when the formula cannot be evaluated.
        """
        ...

    def evaluate_cell(self, cell: Cell, grid: Grid) -> str:
        """Compute *cell*'s displayed value, recording failure on ``cell.error``.

        Faults from the cell's own formula never escape this call.
        """
        ...
