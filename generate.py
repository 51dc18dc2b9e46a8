from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

import numpy as np

from rules import InvalidArgument

BINARY_PATTERN = re.compile(r"[01]+")


class StartType(str, Enum):
    '''
    How the first generation is laid out.
    '''
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"
    RANDOM = "random"


@dataclass(frozen=True)
class SingleLeftOn:
    pass


@dataclass(frozen=True)
class SingleMiddleOn:
    pass


@dataclass(frozen=True)
class SingleRightOn:
    pass


@dataclass(frozen=True)
class PatternOrRandom:
    """
    Tile `pattern` across the row when one is given, otherwise draw one
    random bit per cell. A nonzero `seed` makes the draw reproducible;
    seed 0 means "seed from fresh entropy".
    """
    pattern: Optional[str] = None
    seed: int = 0

    def __post_init__(self):
        if self.pattern and not BINARY_PATTERN.fullmatch(self.pattern):
            raise InvalidArgument(f"pattern must contain only 0 and 1, got {self.pattern!r}")


InitPolicy = Union[SingleLeftOn, SingleMiddleOn, SingleRightOn, PatternOrRandom]


def policy_from_tag(tag: Union[str, StartType], pattern: Optional[str] = None, seed: int = 0) -> InitPolicy:
    '''
    Map a start-type tag to its policy. Unknown tags are rejected.
    '''
    try:
        start_type = StartType(tag)
    except ValueError:
        choices = ", ".join(t.value for t in StartType)
        raise InvalidArgument(f"unknown start type {tag!r} (expected one of: {choices})") from None

    if start_type is StartType.LEFT:
        return SingleLeftOn()
    if start_type is StartType.MIDDLE:
        return SingleMiddleOn()
    if start_type is StartType.RIGHT:
        return SingleRightOn()
    return PatternOrRandom(pattern=pattern or None, seed=seed)


def make_rng(seed: int = 0) -> np.random.Generator:
    """Seeded generator for a nonzero seed, entropy-seeded otherwise."""
    if seed:
        # SeedSequence only takes non-negative entropy
        return np.random.default_rng(seed % 2**64 if seed < 0 else seed)
    return np.random.default_rng()


def tile_pattern(pattern: str, cells: int) -> List[int]:
    length = len(pattern)
    return [int(pattern[i % length] == "1") for i in range(cells)]


def _single_on(cells: int, index: int) -> List[int]:
    row = [0] * cells
    row[index] = 1
    return row


def initial_row(policy: InitPolicy, cells: int, rng: Optional[np.random.Generator] = None) -> List[int]:
    '''
    Build the first generation for `policy`. `rng` overrides the generator
    a PatternOrRandom policy would otherwise build from its seed.
    '''
    if cells < 1:
        raise InvalidArgument(f"cells must be at least 1, got {cells}")

    if isinstance(policy, SingleLeftOn):
        return _single_on(cells, 0)
    if isinstance(policy, SingleMiddleOn):
        return _single_on(cells, cells // 2)
    if isinstance(policy, SingleRightOn):
        return _single_on(cells, cells - 1)
    if isinstance(policy, PatternOrRandom):
        if policy.pattern:
            return tile_pattern(policy.pattern, cells)
        if rng is None:
            rng = make_rng(policy.seed)
        return [int(b) for b in rng.integers(0, 2, size=cells)]
    raise InvalidArgument(f"unsupported initialization policy {policy!r}")
