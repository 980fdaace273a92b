"""Faults raised while evaluating a formula.

Every fault derives from :class:`FormulaError`. The evaluator lets them
propagate through nested references; they are caught once, at the boundary
of the cell whose value was being computed, and rendered as that cell's
displayed value.
"""

from __future__ import annotations


class FormulaError(Exception):
    """Base class for everything a formula can get wrong."""


class MalformedReference(FormulaError, ValueError):
    """Text that should name a cell does not."""

    def __init__(self, text: str, reason: str | None = None) -> None:
        self.text = text
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Malformed cell reference {text!r}{detail}.")


class FormulaSyntaxError(FormulaError):
    """Missing parenthesis, premature end of input or a misplaced token."""


class UnknownProcedure(FormulaError, LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Procedure {name} not found.")


class InvalidNumericArgument(FormulaError, ValueError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Argument {value!r} is not a number.")


class CyclicReference(FormulaError):
    """A cell was read while its own evaluation was still in progress."""
