from __future__ import annotations
import operator
from dataclasses import dataclass
from typing import List, Tuple

NUM_NEIGHBORHOODS = 8 # 000 .. 111
MAX_RULE = 2 ** NUM_NEIGHBORHOODS - 1


class InvalidArgument(ValueError):
    """Raised for any out-of-contract input to the automaton core."""


@dataclass(frozen=True)
class ElementaryRule:
    """
    Wolfram-coded elementary CA rule.
    Bit n of `number` is the next state of a cell whose neighborhood
    (left, self, right), packed as (left<<2)|(self<<1)|right, equals n.
    """
    number: int

    def __post_init__(self):
        if isinstance(self.number, bool):
            raise InvalidArgument(f"rule must be an integer, got {self.number!r}")
        try:
            number = operator.index(self.number)
        except TypeError:
            raise InvalidArgument(f"rule must be an integer, got {self.number!r}") from None
        if not (0 <= number <= MAX_RULE):
            raise InvalidArgument(f"rule must be in [0, {MAX_RULE}], got {number}")
        object.__setattr__(self, "number", number)

    def __call__(self, left: int, center: int, right: int) -> int:
        return (self.number >> neighborhood_code(left, center, right)) & 1

    def __int__(self) -> int:
        return self.number

    @classmethod
    def coerce(cls, rule: int | ElementaryRule) -> ElementaryRule:
        """Accept either a plain rule number or an existing rule."""
        if isinstance(rule, cls):
            return rule
        return cls(rule)

    @property
    def bits(self) -> str:
        """8-char binary string, MSB first (pattern 111 ... pattern 000)."""
        return f"{self.number:08b}"

    def transitions(self) -> List[Tuple[str, int]]:
        """
        (neighborhood, next_state) pairs ordered from 000 to 111,
        e.g. rule 110 -> [("000", 0), ("001", 1), ...].
        """
        return [(f"{code:03b}", (self.number >> code) & 1) for code in range(NUM_NEIGHBORHOODS)]


def neighborhood_code(left: int, center: int, right: int) -> int:
    return (left << 2) | (center << 1) | right
