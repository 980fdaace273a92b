"""Sample sheet: monthly rainy days in San Francisco and Vancouver."""

from __future__ import annotations

from cellgrid._coordinator import SelectionCoordinator
from cellgrid._grid import Grid
from cellgrid._utils import parse_coordinate

_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
_SF = [8, 8, 8, 4, 2, 0, 0, 0, 0, 2, 6, 8]
_VANCOUVER = [15, 13, 14, 12, 9, 7, 4, 4, 6, 12, 16, 15]


def generate_spreadsheet_example() -> tuple[Grid, SelectionCoordinator]:
    """Build the sample grid and a coordinator with A0 selected.

    Column A holds month names, B and C the rainy-day counts, and E/F
    summary statistics over them. F6 takes ``std`` of the month names and
    therefore displays an error.
    """
    grid = Grid()

    grid["A0"] = "# Rainy Days"
    grid["B0"] = "SF"
    grid["C0"] = "Vancouver"
    for row, (month, sf, van) in enumerate(zip(_MONTHS, _SF, _VANCOUVER), start=1):
        grid[f"A{row}"] = month
        grid[f"B{row}"] = str(sf)
        grid[f"C{row}"] = str(van)

    grid["E0"] = "SF"
    grid["F0"] = "Vancouver"
    for row, (label, proc) in enumerate(
        [("mean (μ)", "mean"), ("median", "median"), ("std (σ)", "std")], start=1,
    ):
        grid[f"D{row}"] = label
        grid[f"E{row}"] = f"={proc}(B1:B12)"
        grid[f"F{row}"] = f"={proc}(C1:C12)"

    grid["E5"] = "Hello World!"
    grid["E6"] = "本日は晴天なり"
    grid["F5"] = "I am Error"
    grid["F6"] = "=std(A1:A12)"

    coordinator = SelectionCoordinator(grid)
    coordinator.select_cell(parse_coordinate("A0"))
    return grid, coordinator
