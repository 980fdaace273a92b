"""cellgrid: a sparse 100 x 26 spreadsheet with a small formula language.

Usage::

    from cellgrid import Grid, SelectionCoordinator, parse_coordinate

    grid = Grid()
    grid["B1"] = "8"
    grid["B2"] = "4"
    grid["C1"] = "=mean(B1:B2)"
    print(grid["C1"].evaluated_value)   # "6.00"

    ui = SelectionCoordinator(grid)
    ui.select_cell(parse_coordinate("B3"))
    ui.handle_key("7")
    ui.handle_key("Enter")
"""

from cellgrid._utils import (
    COLUMNS,
    MAX_COLUMN,
    MAX_ROW,
    Coordinate,
    coordinate_to_key,
    parse_coordinate,
)
from cellgrid._cell import Cell
from cellgrid._grid import Grid
from cellgrid._coordinator import (
    Editing,
    NoSelection,
    Selected,
    SelectionCoordinator,
    SelectionState,
)
from cellgrid._example import generate_spreadsheet_example

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "COLUMNS",
    "Cell",
    "Coordinate",
    "Editing",
    "Grid",
    "MAX_COLUMN",
    "MAX_ROW",
    "NoSelection",
    "Selected",
    "SelectionCoordinator",
    "SelectionState",
    "coordinate_to_key",
    "generate_spreadsheet_example",
    "parse_coordinate",
]
