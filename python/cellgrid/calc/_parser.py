"""Formula tokenizer and token classification helpers."""

from __future__ import annotations

import re
from collections import deque

from cellgrid._errors import MalformedReference
from cellgrid._utils import Coordinate, parse_coordinate

# ---------------------------------------------------------------------------
# Token patterns
# ---------------------------------------------------------------------------

DELIMITERS = frozenset("(),=")

# Cell-shaped token. Deliberately wider than the grid (any number of
# letters); parse_coordinate rejects what the grid cannot hold.
_CELL_REF_RE = re.compile(r"[A-Z]+[0-9]+")


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


def tokenize(formula: str) -> deque[str]:
    """Split *formula* into a left-to-right queue of tokens.

    ``(``, ``)``, ``,`` and ``=`` are tokens of their own, whitespace only
    separates, and every maximal run of other characters is one token.
    ``:`` is an ordinary character, so ``B1:C5`` stays a single token.
    """
    tokens: deque[str] = deque()
    current = ""
    for ch in formula:
        if ch in DELIMITERS or ch.isspace():
            if current:
                tokens.append(current)
                current = ""
            if not ch.isspace():
                tokens.append(ch)
        else:
            current += ch
    if current:
        tokens.append(current)
    return tokens


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def parse_number(text: str) -> float | None:
    """Parse a float literal as ``float()`` reads it, or return None.

    Besides decimal literals this takes ``inf``, ``NaN``, ``Infinity`` and
    underscore digit groups such as ``1_000``.
    """
    try:
        return float(text)
    except ValueError:
        return None


def is_cell_ref(token: str) -> bool:
    return _CELL_REF_RE.fullmatch(token) is not None


def is_range_ref(token: str) -> bool:
    return ":" in token


def split_range(token: str) -> tuple[Coordinate, Coordinate]:
    """``"B1:C5"`` -> the two corner coordinates, in the order written."""
    parts = token.split(":")
    if len(parts) != 2:
        raise MalformedReference(token, "a range needs exactly one ':'")
    return parse_coordinate(parts[0]), parse_coordinate(parts[1])


# ---------------------------------------------------------------------------
# Range expansion
# ---------------------------------------------------------------------------


def expand_range(start: Coordinate, end: Coordinate) -> list[Coordinate]:
    """Every coordinate in the rectangle spanned by two corners, row-major.

    The corners may be given in any order.
    """
    r_min, r_max = min(start.row, end.row), max(start.row, end.row)
    c_min, c_max = min(start.column, end.column), max(start.column, end.column)

    return [
        Coordinate(r, c)
        for r in range(r_min, r_max + 1)
        for c in range(c_min, c_max + 1)
    ]
