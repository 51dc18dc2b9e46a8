from urllib.parse import parse_qs

import pytest
from config import Bounds, Settings
from generate import PatternOrRandom, SingleMiddleOn, StartType
from params import (
    RequestParams,
    float_param_with_default,
    int_param_with_default,
    int_param_with_default_range,
    parse_request,
    to_float,
)

SETTINGS = Settings()

def _parse(qs: str) -> RequestParams:
    return parse_request(parse_qs(qs), SETTINGS)

def test_defaults_when_empty():
    p = _parse("")
    assert (p.rule, p.cells, p.steps, p.seed) == (110, 200, 200, 0)
    assert p.initial == ""
    assert p.start_type is StartType.RANDOM
    assert not p.image

@pytest.mark.parametrize(
    "value,expected",
    [("12", 12.0), ("12abc", 12.0), ("-3.5e1x", -35.0), (".5", 0.5), ("abc", 0.0), ("", 0.0), ("1e999", 0.0)],
)
def test_to_float_reads_leading_number(value, expected):
    assert to_float(value) == expected

def test_int_param_truncates_toward_zero():
    assert int_param_with_default({"rule": ["30.9"]}, "rule", 110) == 30
    assert int_param_with_default({"seed": ["-7.9"]}, "seed", 0) == -7
    assert int_param_with_default({}, "rule", 110) == 110
    assert int_param_with_default({"rule": []}, "rule", 110) == 110
    assert float_param_with_default({"x": ["2.5"]}, "x", 1.0) == 2.5
    assert float_param_with_default({}, "x", 1.5) == 1.5

def test_range_param_clamps():
    bounds = Bounds(1, 1000)
    assert int_param_with_default_range({"cells": ["5000"]}, "cells", 200, bounds) == 1000
    assert int_param_with_default_range({"cells": ["0"]}, "cells", 200, bounds) == 1
    assert int_param_with_default_range({"cells": ["junk"]}, "cells", 200, bounds) == 1
    assert int_param_with_default_range({}, "cells", 200, bounds) == 200

def test_rule_is_not_clamped():
    assert _parse("rule=300").rule == 300

def test_initial_must_be_binary():
    assert _parse("initial=0110").initial == "0110"
    assert _parse("initial=01a0").initial == ""

def test_start_type_and_image():
    p = _parse("start_type=middle&image=yes")
    assert p.start_type is StartType.MIDDLE
    assert p.image
    assert p.policy() == SingleMiddleOn()

def test_unknown_start_type_falls_back_to_random():
    assert _parse("start_type=diagonal").start_type is StartType.RANDOM

def test_policy_carries_initial_and_seed():
    assert _parse("initial=10&seed=4").policy() == PatternOrRandom("10", 4)

def test_query_string_echo():
    p = _parse("rule=30&cells=50&steps=20&seed=9&initial=01&start_type=left")
    assert parse_qs(p.query_string()) == {
        "cells": ["50"],
        "steps": ["20"],
        "rule": ["30"],
        "seed": ["9"],
        "initial": ["01"],
        "start_type": ["left"],
        "image": ["yes"],
    }
    assert "image" not in parse_qs(p.query_string(image=False))

def test_configured_bounds_apply():
    settings = Settings(cells_bounds=Bounds(10, 20))
    assert parse_request(parse_qs("cells=3"), settings).cells == 10
    assert parse_request(parse_qs("cells=300"), settings).cells == 20
