"""Integration tests: the sample sheet evaluated end to end and edited through the coordinator."""

from __future__ import annotations

import pytest

from cellgrid import (
    Editing,
    Grid,
    Selected,
    SelectionCoordinator,
    generate_spreadsheet_example,
    parse_coordinate,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def example() -> tuple[Grid, SelectionCoordinator]:
    return generate_spreadsheet_example()


# ---------------------------------------------------------------------------
# Sample sheet
# ---------------------------------------------------------------------------


class TestExampleSheet:
    def test_starts_with_a0_selected(self, example: tuple[Grid, SelectionCoordinator]) -> None:
        _, ui = example
        assert ui.state == Selected(parse_coordinate("A0"))
        assert ui.label == "Cell A0:"

    def test_text_cells(self, example: tuple[Grid, SelectionCoordinator]) -> None:
        grid, _ = example
        assert grid["A0"].evaluated_value == "# Rainy Days"
        assert grid["A12"].evaluated_value == "Dec"
        assert grid["E6"].evaluated_value == "本日は晴天なり"

    def test_summary_statistics(self, example: tuple[Grid, SelectionCoordinator]) -> None:
        grid, _ = example
        assert grid["E1"].evaluated_value == "3.83"
        assert grid["F1"].evaluated_value == "10.58"
        assert grid["E2"].evaluated_value == "3.00"
        assert grid["F2"].evaluated_value == "12.00"

    def test_std_is_population(self, example: tuple[Grid, SelectionCoordinator]) -> None:
        grid, _ = example
        # SF: mean 46/12, population variance 1676/144
        assert grid["E3"].evaluated_value == "3.41"
        assert grid["E3"].error is False

    def test_std_of_month_names_fails(self, example: tuple[Grid, SelectionCoordinator]) -> None:
        grid, _ = example
        value = grid["F6"].evaluated_value
        assert grid["F6"].error is True
        assert value.startswith("Error: ")
        assert "Jan" in value

    def test_literal_error_text_is_not_an_error(self, example: tuple[Grid, SelectionCoordinator]) -> None:
        grid, _ = example
        assert grid["F5"].evaluated_value == "I am Error"
        assert grid["F5"].error is False


# ---------------------------------------------------------------------------
# Editing through the coordinator
# ---------------------------------------------------------------------------


class TestEditingPropagates:
    def test_edit_input_updates_summary(self, example: tuple[Grid, SelectionCoordinator]) -> None:
        grid, ui = example
        ui.select_cell(parse_coordinate("B1"))
        ui.handle_key("2")
        ui.update_buffer("20")
        ui.handle_key("Enter")
        # B1 went from 8 to 20: SF total 58 over 12 months.
        assert grid["E1"].evaluated_value == "4.83"
        # B2 holds "8", so editing continues there.
        assert ui.state == Editing(parse_coordinate("B2"), "8", "8")

    def test_erasing_input_shrinks_range(self, example: tuple[Grid, SelectionCoordinator]) -> None:
        grid, ui = example
        ui.select_cell(parse_coordinate("B12"))
        ui.handle_key("Backspace")
        # Eleven remaining months, total 38.
        assert grid["E1"].evaluated_value == "3.45"

    def test_formula_over_formulas(self, example: tuple[Grid, SelectionCoordinator]) -> None:
        grid, ui = example
        ui.select_cell(parse_coordinate("G1"))
        ui.handle_key("=")
        ui.update_buffer("=sub(F1,E1)")
        ui.blur()
        # Two-decimal results are re-parsed: 10.58 - 3.83.
        assert grid["G1"].evaluated_value == "6.75"

    def test_fixing_error_cell(self, example: tuple[Grid, SelectionCoordinator]) -> None:
        grid, ui = example
        ui.edit_cell(parse_coordinate("F6"))
        ui.update_buffer("=std(C1:C12)")
        ui.handle_key("Enter")
        assert grid["F6"].error is False
        assert grid["F6"].evaluated_value == grid["F3"].evaluated_value
