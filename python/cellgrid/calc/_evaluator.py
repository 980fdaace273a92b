"""FormulaEvaluator: recursive-descent evaluator for cell formulas.

Formulas use prefix procedure calls only::

    =mean(B1:C5, 7)
    =add(A1, mul(B2, 3))

There are no infix operators. Every evaluation re-reads the cells it
references, so a displayed value is always computed from the current raw
contents of the grid; nothing is cached between reads.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import TYPE_CHECKING, Any, Union

from cellgrid._errors import CyclicReference, FormulaError, FormulaSyntaxError
from cellgrid._utils import Coordinate, parse_coordinate
from cellgrid.calc._functions import FunctionRegistry
from cellgrid.calc._parser import (
    DELIMITERS,
    is_cell_ref,
    is_range_ref,
    parse_number,
    split_range,
    tokenize,
)

if TYPE_CHECKING:
    from cellgrid._cell import Cell
    from cellgrid._grid import Grid

logger = logging.getLogger(__name__)

# A parsed expression: a number literal, a string (cell value or procedure
# result) or the list of values a range produced.
Value = Union[float, str, list]

DEFAULT_MAX_DEPTH = 64
# Expressions open at once, counted across nested cell evaluations.
DEFAULT_MAX_NESTING = 150


def _format_literal(value: float) -> str:
    """Render a bare number the way a JavaScript number prints (``5``, ``2.5``)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    mantissa, _, exp = repr(abs(value)).partition("e")
    if not exp:
        return repr(value)
    sign = "-" if value < 0 else ""
    exponent = int(exp)
    if abs(value) >= 1e-6:
        # Fixed notation down to 1e-6: 1.5e-05 -> 0.000015
        digits = mantissa.replace(".", "")
        return f"{sign}0.{'0' * (-exponent - 1)}{digits}"
    return f"{sign}{mantissa}e{exponent:+d}"


def _render(value: Value) -> str:
    if isinstance(value, float):
        return _format_literal(value)
    if isinstance(value, list):
        return ",".join(_render(v) for v in value)
    return value


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------


class FormulaEvaluator:
    """Evaluates raw cell text against a Grid.

    Usage::

        evaluator = FormulaEvaluator()
        grid = Grid(evaluator)
        grid["B1"] = "8"
        evaluator.evaluate("=mean(B1:B3)", grid)   # "8.00"

    The evaluator tracks which cells are mid-evaluation. Reading one of
    them again, or nesting more than ``max_depth`` cell evaluations, raises
    CyclicReference into the formula that made the read. Opening more than
    ``max_nesting`` expressions at once raises FormulaSyntaxError.
    """

    def __init__(
        self,
        registry: FunctionRegistry | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_nesting: int = DEFAULT_MAX_NESTING,
    ) -> None:
        self._functions = registry if registry is not None else FunctionRegistry()
        self._max_depth = max_depth
        self._max_nesting = max_nesting
        self._active: list[Coordinate] = []
        self._nesting = 0

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def max_nesting(self) -> int:
        return self._max_nesting

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def evaluate(self, raw_value: str, grid: Grid) -> str:
        """Interpret *raw_value*: verbatim text, or a formula if it starts with ``=``.

        Raises FormulaError subclasses on failure.
        """
        if not raw_value.startswith("="):
            return raw_value
        tokens = tokenize(raw_value[1:])
        # Anything after the first complete expression is ignored.
        return _render(self._parse_expr(tokens, grid))

    def evaluate_cell(self, cell: Cell, grid: Grid) -> str:
        """Compute *cell*'s displayed value.

        A fault in the cell's own formula is caught here, flags
        ``cell.error`` and becomes an ``"Error: ..."`` display string.
        """
        coord = cell.coordinate
        if coord in self._active:
            chain = " -> ".join(c.key for c in [*self._active, coord])
            raise CyclicReference(f"Circular reference: {chain}.")
        if len(self._active) >= self._max_depth:
            raise CyclicReference(
                f"Reference chain deeper than {self._max_depth} cells at {coord.key}."
            )

        self._active.append(coord)
        try:
            value = self.evaluate(cell.raw_value, grid)
        except FormulaError as e:
            logger.debug("Error evaluating %s (%r): %s", coord.key, cell.raw_value, e)
            cell.error = True
            return f"Error: {e}"
        finally:
            self._active.pop()
        cell.error = False
        return value

    # ------------------------------------------------------------------
    # Recursive descent
    # ------------------------------------------------------------------

    def _parse_expr(self, tokens: deque[str], grid: Grid) -> Value:
        if self._nesting >= self._max_nesting:
            raise FormulaSyntaxError(
                f"Formula nests deeper than {self._max_nesting} expressions."
            )
        self._nesting += 1
        try:
            return self._parse_operand(tokens, grid)
        finally:
            self._nesting -= 1

    def _parse_operand(self, tokens: deque[str], grid: Grid) -> Value:
        """Consume one expression from the front of *tokens*.

        Dispatch order (first match wins):

        1. Number literal
        2. Range reference (token contains ``:``)
        3. Cell reference
        4. Procedure call ``name(arg, ...)``
        """
        if not tokens:
            raise FormulaSyntaxError("Unexpected end of input.")
        token = tokens.popleft()

        # 1. Number literal
        num = parse_number(token)
        if num is not None:
            return num

        # 2. Range
        if is_range_ref(token):
            start, end = split_range(token)
            return [entry.value for entry in grid.get_range(start, end)]

        # 3. Cell reference
        if is_cell_ref(token):
            coord = parse_coordinate(token)
            return grid.get_or_create_cell(coord).evaluated_value

        # 4. Procedure call
        if token in DELIMITERS:
            raise FormulaSyntaxError(f"Unexpected token {token!r}.")
        return self._parse_call(token, tokens, grid)

    def _parse_call(self, name: str, tokens: deque[str], grid: Grid) -> str:
        if not tokens or tokens.popleft() != "(":
            raise FormulaSyntaxError(f"Expected '(' after procedure name {name}.")

        args: list[Any] = []
        if tokens and tokens[0] == ")":
            tokens.popleft()
        else:
            while True:
                args.append(self._parse_expr(tokens, grid))
                if not tokens:
                    raise FormulaSyntaxError("Expected ')' at the end of arguments.")
                sep = tokens.popleft()
                if sep == ")":
                    break
                if sep != ",":
                    raise FormulaSyntaxError(
                        f"Unexpected token {sep!r}; expected ',' or ')'."
                    )

        procedure = self._functions.get(name)
        return self._functions.call(procedure, args)


def evaluate(raw_value: str, grid: Grid) -> str:
    """Evaluate *raw_value* with the grid's own evaluator."""
    return grid.evaluator.evaluate(raw_value, grid)
