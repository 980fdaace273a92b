"""Coordinate helpers: (row, column) pairs and their canonical ``"B7"`` keys."""

from __future__ import annotations

import re
from dataclasses import dataclass

from cellgrid._errors import MalformedReference

COLUMNS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
MAX_ROW = 99
MAX_COLUMN = len(COLUMNS) - 1

_KEY_RE = re.compile(r"([A-Z])([0-9]+)")


@dataclass(frozen=True, order=True)
class Coordinate:
    """A zero-based (row, column) position inside the 100 x 26 grid."""

    row: int
    column: int

    def __post_init__(self) -> None:
        if not 0 <= self.row <= MAX_ROW or not 0 <= self.column <= MAX_COLUMN:
            raise ValueError(f"Coordinate out of range: ({self.row}, {self.column})")

    @property
    def key(self) -> str:
        return coordinate_to_key(self)

    def offset(self, delta_row: int, delta_column: int) -> Coordinate:
        """Move by the given deltas, clamped to the grid bounds."""
        return Coordinate(
            max(0, min(MAX_ROW, self.row + delta_row)),
            max(0, min(MAX_COLUMN, self.column + delta_column)),
        )

    def __str__(self) -> str:
        return self.key


def coordinate_to_key(coord: Coordinate) -> str:
    """``Coordinate(7, 1)`` -> ``"B7"``."""
    return f"{COLUMNS[coord.column]}{coord.row}"


def parse_coordinate(text: str) -> Coordinate:
    """``"B7"`` -> ``Coordinate(7, 1)``.

    Raises MalformedReference for anything other than one uppercase letter
    followed by a row number inside the grid.
    """
    m = _KEY_RE.fullmatch(text)
    if not m:
        raise MalformedReference(text)
    row = int(m.group(2))
    if row > MAX_ROW:
        raise MalformedReference(text, f"row {row} is outside 0..{MAX_ROW}")
    return Coordinate(row, COLUMNS.index(m.group(1)))
