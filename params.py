from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import urlencode

from config import Bounds, Settings
from generate import BINARY_PATTERN, InitPolicy, StartType, policy_from_tag

Query = Dict[str, List[str]]

# leading numeric prefix, e.g. "12abc" -> 12, "  -3.5e1x" -> -35.0
_NUMERIC_PREFIX = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def get_with_default(query: Query, name: str, default: str) -> str:
    values = query.get(name)
    if not values:
        return default
    return values[0]


def to_float(value: str) -> float:
    '''
    Read the leading number of `value`; no leading number reads as 0.0.
    '''
    match = _NUMERIC_PREFIX.match(value)
    if not match:
        return 0.0
    number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


def to_int(number: float) -> int:
    if not math.isfinite(number):
        return 0
    return int(number) # truncates toward zero


def float_param_with_default(query: Query, name: str, default: float) -> float:
    return to_float(get_with_default(query, name, str(default)))


def float_param_with_default_range(query: Query, name: str, default: float, minimum: float, maximum: float) -> float:
    value = float_param_with_default(query, name, default)
    return min(maximum, max(minimum, value))


def int_param_with_default(query: Query, name: str, default: int) -> int:
    return to_int(float_param_with_default(query, name, default))


def int_param_with_default_range(query: Query, name: str, default: int, bounds: Bounds) -> int:
    return to_int(float_param_with_default_range(query, name, default, bounds.minimum, bounds.maximum))


@dataclass(frozen=True)
class RequestParams:
    rule: int
    cells: int
    steps: int
    initial: str = ""
    seed: int = 0
    start_type: StartType = StartType.RANDOM
    image: bool = False

    def policy(self) -> InitPolicy:
        return policy_from_tag(self.start_type, pattern=self.initial, seed=self.seed)

    def query_string(self, image: bool = True) -> str:
        """Echo of these parameters, suitable for the <img> reference."""
        fields = {
            "cells": self.cells,
            "steps": self.steps,
            "rule": self.rule,
            "seed": self.seed,
            "initial": self.initial,
            "start_type": self.start_type.value,
        }
        if image:
            fields["image"] = "yes"
        return urlencode(fields)


def parse_start_type(value: Optional[str]) -> StartType:
    '''
    Unrecognized or missing start types fall back to RANDOM, the same way
    other malformed optional parameters are ignored.
    '''
    try:
        return StartType(value)
    except ValueError:
        return StartType.RANDOM


def parse_request(query: Query, settings: Settings) -> RequestParams:
    """Build RequestParams from a parse_qs mapping, applying defaults and bounds."""
    initial = get_with_default(query, "initial", "")
    if not BINARY_PATTERN.fullmatch(initial):
        initial = ""

    return RequestParams(
        rule=int_param_with_default(query, "rule", settings.rule),
        cells=int_param_with_default_range(query, "cells", settings.cells, settings.cells_bounds),
        steps=int_param_with_default_range(query, "steps", settings.steps, settings.steps_bounds),
        initial=initial,
        seed=int_param_with_default(query, "seed", settings.seed),
        start_type=parse_start_type(get_with_default(query, "start_type", StartType.RANDOM.value)),
        image=get_with_default(query, "image", "no") == "yes",
    )
