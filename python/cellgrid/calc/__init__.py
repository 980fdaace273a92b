"""cellgrid.calc - Formula tokenizer, evaluator and procedures for cellgrid grids."""

from cellgrid._errors import (
    CyclicReference,
    FormulaError,
    FormulaSyntaxError,
    InvalidNumericArgument,
    MalformedReference,
    UnknownProcedure,
)
from cellgrid.calc._evaluator import FormulaEvaluator, evaluate
from cellgrid.calc._functions import FunctionRegistry, Procedure
from cellgrid.calc._parser import expand_range, tokenize
from cellgrid.calc._protocol import FormulaEngine, RangeEntry

__all__ = [
    "CyclicReference",
    "FormulaEngine",
    "FormulaError",
    "FormulaEvaluator",
    "FormulaSyntaxError",
    "FunctionRegistry",
    "InvalidNumericArgument",
    "MalformedReference",
    "Procedure",
    "RangeEntry",
    "UnknownProcedure",
    "evaluate",
    "expand_range",
    "tokenize",
]
