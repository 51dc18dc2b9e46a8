from __future__ import annotations
import operator
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from rules import ElementaryRule, InvalidArgument

Row = Tuple[int, ...]


@dataclass(frozen=True)
class Grid:
    """
    Every generation of a run, row 0 first.
    rows[y][x] is cell x at step y; all rows share the same width.
    """
    rows: Tuple[Row, ...]

    def __post_init__(self):
        if not self.rows:
            raise InvalidArgument("grid needs at least one row")
        width = len(self.rows[0])
        if width == 0 or any(len(r) != width for r in self.rows):
            raise InvalidArgument("grid rows must be non-empty and equally long")

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    def to_array(self) -> np.ndarray:
        """(height, width) boolean array, True for live cells."""
        return np.array(self.rows, dtype=bool)

    def to_lists(self) -> List[List[int]]:
        return [list(r) for r in self.rows]


def _check_row(row: Sequence[int]) -> Row:
    if len(row) == 0:
        raise InvalidArgument("row must contain at least one cell")
    cells = []
    for c in row:
        if isinstance(c, (bool, np.bool_)):
            value = int(c)
        else:
            try:
                value = operator.index(c) # ints and numpy integers only
            except TypeError:
                raise InvalidArgument(f"cells must be 0 or 1, got {c!r}") from None
        if value not in (0, 1):
            raise InvalidArgument(f"cells must be 0 or 1, got {c!r}")
        cells.append(value)
    return tuple(cells)


def next_row(rule: int | ElementaryRule, current: Sequence[int]) -> List[int]:
    '''
    One ECA step with a circular boundary: cell 0's left neighbor is the
    last cell and the last cell's right neighbor is cell 0.
    '''
    rule = ElementaryRule.coerce(rule)
    cells = _check_row(current)
    n = len(cells)
    nxt = [0] * n
    for c in range(n):
        nxt[c] = rule(cells[(c - 1) % n], cells[c], cells[(c + 1) % n])
    return nxt


def simulate(state: Sequence[int], rule: int | ElementaryRule, t: int = 1) -> List[int]:
    curr = list(state)
    for _ in range(t):
        curr = next_row(rule, curr)
    return curr


def evolve(rule: int | ElementaryRule, initial: Sequence[int], steps: int) -> Grid:
    """
    Return the initial row plus `steps` successors (steps + 1 rows).
    Each row is computed from the one before it.
    """
    if steps < 0:
        raise InvalidArgument(f"steps must be non-negative, got {steps}")
    rule = ElementaryRule.coerce(rule)
    curr = list(_check_row(initial))
    rows = [tuple(curr)]
    for _ in range(steps):
        curr = next_row(rule, curr)
        rows.append(tuple(curr))
    return Grid(tuple(rows))
