"""SelectionCoordinator: which cell is selected or being edited, and keyboard input.

States::

    NoSelection
    Selected(coordinate)
    Editing(coordinate, original_value, buffer)

Only the coordinator holds the selection, so at most one cell can be
selected at a time. While editing, typed text lives in the buffer and
reaches the cell's raw value only when the edit commits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Union

from cellgrid._grid import Grid
from cellgrid._utils import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoSelection:
    pass


@dataclass(frozen=True)
class Selected:
    coordinate: Coordinate


@dataclass(frozen=True)
class Editing:
    coordinate: Coordinate
    original_value: str
    buffer: str


SelectionState = Union[NoSelection, Selected, Editing]

_ARROWS: dict[str, tuple[int, int]] = {
    "ArrowUp": (-1, 0),
    "ArrowDown": (1, 0),
    "ArrowLeft": (0, -1),
    "ArrowRight": (0, 1),
}


class SelectionCoordinator:
    """Per-grid selection/editing state machine.

    The rendering layer forwards input here: clicks become ``select_cell``,
    double clicks ``edit_cell``, key presses ``handle_key``, text field
    changes ``update_buffer`` and focus loss ``blur``.
    """

    def __init__(self, grid: Grid) -> None:
        self._grid = grid
        self._state: SelectionState = NoSelection()

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def selected_coordinate(self) -> Coordinate | None:
        if isinstance(self._state, NoSelection):
            return None
        return self._state.coordinate

    @property
    def editing_coordinate(self) -> Coordinate | None:
        if isinstance(self._state, Editing):
            return self._state.coordinate
        return None

    def is_selected(self, coord: Coordinate) -> bool:
        return self.selected_coordinate == coord

    def is_editing(self, coord: Coordinate) -> bool:
        return self.editing_coordinate == coord

    @property
    def label(self) -> str:
        """Minibuffer caption: ``"Cell B7:"`` or ``"No Selection"``."""
        coord = self.selected_coordinate
        if coord is None:
            return "No Selection"
        return f"Cell {coord.key}:"

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_cell(self, coord: Coordinate) -> None:
        """Select *coord*, leaving any previous selection or edit behind.

        An edit in progress is committed first, as if focus had left the
        editor. The target cell is created if it does not exist yet.
        """
        if isinstance(self._state, Editing):
            self._commit(self._state)
        previous = self.selected_coordinate
        if previous is not None and previous != coord:
            self._drop_if_empty(previous)
        self._grid.get_or_create_cell(coord)
        self._set_state(Selected(coord))

    def edit_cell(self, coord: Coordinate) -> None:
        """Select *coord* and start editing its current raw value."""
        self.select_cell(coord)
        raw = self._grid.get_or_create_cell(coord).raw_value
        self._set_state(Editing(coord, raw, raw))

    def clear_selection(self) -> None:
        if isinstance(self._state, Editing):
            self._commit(self._state)
        previous = self.selected_coordinate
        if previous is not None:
            self._drop_if_empty(previous)
        self._set_state(NoSelection())

    def move_selection(self, delta_row: int, delta_column: int) -> None:
        """Move a plain selection, clamped to the grid. No-op unless Selected."""
        if not isinstance(self._state, Selected):
            return
        self.select_cell(self._state.coordinate.offset(delta_row, delta_column))

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def handle_key(self, key: str, ctrl: bool = False, meta: bool = False) -> bool:
        """Dispatch a key press. Returns True when the key was consumed.

        *key* uses DOM ``KeyboardEvent.key`` names (``"ArrowUp"``,
        ``"Enter"``, ``"a"``). While editing, only Enter and Escape are
        consumed; everything else belongs to the text field.
        """
        state = self._state
        if isinstance(state, Editing):
            if key == "Enter":
                self.press_enter()
                return True
            if key == "Escape":
                self.press_escape()
                return True
            return False

        if isinstance(state, Selected):
            if key in _ARROWS:
                self.move_selection(*_ARROWS[key])
                return True
            if key == "Enter":
                self.press_enter()
                return True
            if key == "Escape":
                self.press_escape()
                return True
            if key == "Backspace":
                self.press_backspace()
                return True
            if len(key) == 1 and not ctrl and not meta:
                self.type_character(key)
                return True

        logger.debug("Ignoring key %r in state %r", key, state)
        return False

    def press_enter(self) -> None:
        """Selected: start editing. Editing: commit and move down one row."""
        state = self._state
        if isinstance(state, Selected):
            raw = self._grid.get_or_create_cell(state.coordinate).raw_value
            self._set_state(Editing(state.coordinate, raw, raw))
        elif isinstance(state, Editing):
            self._commit(state)
            self._set_state(Selected(state.coordinate))
            below = state.coordinate.offset(1, 0)
            self.select_cell(below)
            cell_below = self._grid.get_cell(below)
            if cell_below is not None and not cell_below.is_empty:
                self._set_state(Editing(below, cell_below.raw_value, cell_below.raw_value))

    def press_escape(self) -> None:
        """Selected: clear the selection. Editing: revert and stay selected."""
        state = self._state
        if isinstance(state, Selected):
            self.clear_selection()
        elif isinstance(state, Editing):
            cell = self._grid.get_or_create_cell(state.coordinate)
            cell.raw_value = state.original_value
            if cell.is_empty:
                self._grid.delete_cell(state.coordinate)
            self._set_state(Selected(state.coordinate))

    def press_backspace(self) -> None:
        """Selected: erase the cell. It stays selected but leaves the grid."""
        state = self._state
        if not isinstance(state, Selected):
            return
        cell = self._grid.get_cell(state.coordinate)
        if cell is not None:
            cell.raw_value = ""
            self._grid.delete_cell(state.coordinate)

    def type_character(self, char: str) -> None:
        """Selected: start editing with *char* replacing the whole content."""
        state = self._state
        if not isinstance(state, Selected):
            return
        original = self._grid.get_or_create_cell(state.coordinate).raw_value
        self._set_state(Editing(state.coordinate, original, char))

    # ------------------------------------------------------------------
    # Text input and focus
    # ------------------------------------------------------------------

    def update_buffer(self, text: str) -> None:
        """Replace the edit buffer. No-op unless Editing."""
        if isinstance(self._state, Editing):
            self._state = replace(self._state, buffer=text)

    def set_selected_raw_value(self, text: str) -> bool:
        """Minibuffer input: edit whatever is selected.

        Editing updates the buffer; a plain selection writes the raw value
        straight into the cell. Returns False when nothing is selected.
        """
        state = self._state
        if isinstance(state, Editing):
            self.update_buffer(text)
            return True
        if isinstance(state, Selected):
            self._grid.get_or_create_cell(state.coordinate).raw_value = text
            return True
        return False

    def blur(self) -> None:
        """Focus left the editor: commit like Enter, without moving."""
        state = self._state
        if isinstance(state, Editing):
            self._commit(state)
            self._set_state(Selected(state.coordinate))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(self, state: Editing) -> None:
        cell = self._grid.get_or_create_cell(state.coordinate)
        cell.raw_value = state.buffer
        if cell.is_empty:
            self._grid.delete_cell(state.coordinate)

    def _drop_if_empty(self, coord: Coordinate) -> None:
        cell = self._grid.get_cell(coord)
        if cell is not None and cell.is_empty:
            self._grid.delete_cell(coord)

    def _set_state(self, state: SelectionState) -> None:
        logger.debug("Selection %r -> %r", self._state, state)
        self._state = state
