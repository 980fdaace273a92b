"""Procedure enumeration and builtin implementations for formula evaluation."""

from __future__ import annotations

import enum
import math
from typing import Any, Callable

from cellgrid._errors import InvalidNumericArgument, UnknownProcedure
from cellgrid.calc._parser import parse_number

# ---------------------------------------------------------------------------
# Procedure: the closed set of names a formula may call
# ---------------------------------------------------------------------------


class Procedure(str, enum.Enum):
    """Every procedure callable from a formula, keyed by its formula name."""

    # Arithmetic (6): first two arguments only
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    POW = "pow"
    # Aggregate (8)
    SUM = "sum"
    PROD = "prod"
    MEAN = "mean"
    MEDIAN = "median"
    VAR = "var"
    STD = "std"
    MIN = "min"
    MAX = "max"

    @classmethod
    def lookup(cls, name: str) -> Procedure:
        """Resolve a formula name. Names are case-sensitive (``sum``, not ``SUM``)."""
        try:
            return cls(name)
        except ValueError:
            raise UnknownProcedure(name) from None


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------


def flatten(args: list[Any]) -> list[Any]:
    """Depth-first flatten of nested argument lists into one ordered list."""
    result: list[Any] = []
    for arg in args:
        if isinstance(arg, list):
            result.extend(flatten(arg))
        else:
            result.append(arg)
    return result


def coerce_numbers(args: list[Any]) -> list[float]:
    """Flatten *args* and coerce every scalar to a float.

    An empty string counts as 0. Any other text that is not a decimal
    number raises InvalidNumericArgument.
    """
    nums: list[float] = []
    for v in flatten(args):
        if isinstance(v, float):
            nums.append(v)
            continue
        text = str(v)
        if text == "":
            nums.append(0.0)
            continue
        num = parse_number(text.strip())
        if num is None:
            raise InvalidNumericArgument(text)
        nums.append(num)
    return nums


def format_number(value: float) -> str:
    """Two fixed decimals; NaN and infinities keep a readable spelling."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    # -0 prints as 0.
    return f"{value + 0.0:.2f}"


# ---------------------------------------------------------------------------
# Builtin implementations - pure functions over a flat list of floats.
# Missing operands and empty inputs give NaN rather than raising.
# ---------------------------------------------------------------------------


def _operands(nums: list[float]) -> tuple[float, float]:
    a = nums[0] if len(nums) > 0 else math.nan
    b = nums[1] if len(nums) > 1 else math.nan
    return a, b


def _builtin_add(nums: list[float]) -> float:
    a, b = _operands(nums)
    return a + b


def _builtin_sub(nums: list[float]) -> float:
    a, b = _operands(nums)
    return a - b


def _builtin_mul(nums: list[float]) -> float:
    a, b = _operands(nums)
    return a * b


def _builtin_div(nums: list[float]) -> float:
    a, b = _operands(nums)
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _builtin_mod(nums: list[float]) -> float:
    # Remainder takes the sign of the dividend (truncated division).
    a, b = _operands(nums)
    if b == 0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan
    if math.isinf(b):
        return a
    return math.fmod(a, b)


def _is_odd_integer(x: float) -> bool:
    return x.is_integer() and math.fmod(x, 2.0) != 0


def _builtin_pow(nums: list[float]) -> float:
    a, b = _operands(nums)
    if a == 0 and b < 0:
        if _is_odd_integer(b):
            return math.copysign(math.inf, a)
        return math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and _is_odd_integer(b):
            return -math.inf
        return math.inf
    except ValueError:
        # Negative base with a fractional exponent.
        return math.nan


def _builtin_sum(nums: list[float]) -> float:
    total = 0.0
    for n in nums:
        total += n
    return total


def _builtin_prod(nums: list[float]) -> float:
    total = 1.0
    for n in nums:
        total *= n
    return total


def _builtin_mean(nums: list[float]) -> float:
    if not nums:
        return math.nan
    return _builtin_sum(nums) / len(nums)


def _builtin_median(nums: list[float]) -> float:
    if not nums:
        return math.nan
    ordered = sorted(nums)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def _builtin_var(nums: list[float]) -> float:
    """Population variance."""
    if not nums:
        return math.nan
    mean = _builtin_mean(nums)
    return _builtin_sum([(n - mean) ** 2 for n in nums]) / len(nums)


def _builtin_std(nums: list[float]) -> float:
    return math.sqrt(_builtin_var(nums))


def _builtin_min(nums: list[float]) -> float:
    if not nums:
        return math.nan
    result = nums[0]
    for n in nums:
        if n < result:
            result = n
    return result


def _builtin_max(nums: list[float]) -> float:
    if not nums:
        return math.nan
    result = nums[0]
    for n in nums:
        if n > result:
            result = n
    return result


_BUILTINS: dict[Procedure, Callable[[list[float]], float]] = {
    Procedure.ADD: _builtin_add,
    Procedure.SUB: _builtin_sub,
    Procedure.MUL: _builtin_mul,
    Procedure.DIV: _builtin_div,
    Procedure.MOD: _builtin_mod,
    Procedure.POW: _builtin_pow,
    Procedure.SUM: _builtin_sum,
    Procedure.PROD: _builtin_prod,
    Procedure.MEAN: _builtin_mean,
    Procedure.MEDIAN: _builtin_median,
    Procedure.VAR: _builtin_var,
    Procedure.STD: _builtin_std,
    Procedure.MIN: _builtin_min,
    Procedure.MAX: _builtin_max,
}

_missing = set(Procedure) - set(_BUILTINS)
if _missing:
    raise RuntimeError(f"Procedures without a builtin: {sorted(p.value for p in _missing)}")
del _missing


class FunctionRegistry:
    """Dispatches :class:`Procedure` members to their builtins.

    Each call flattens and coerces the raw argument list, applies the
    builtin, and formats the number as the procedure's string result.
    """

    def __init__(self) -> None:
        self._functions: dict[Procedure, Callable[[list[float]], float]] = dict(_BUILTINS)

    def get(self, name: str) -> Procedure:
        """Resolve *name*, raising UnknownProcedure if it is not a procedure."""
        return Procedure.lookup(name)

    def has(self, name: str) -> bool:
        return name in self.supported_functions

    def call(self, procedure: Procedure, args: list[Any]) -> str:
        nums = coerce_numbers(args)
        return format_number(self._functions[procedure](nums))

    @property
    def supported_functions(self) -> frozenset[str]:
        return frozenset(p.value for p in self._functions)
