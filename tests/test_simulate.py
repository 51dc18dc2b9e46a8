import numpy as np
import pytest
from simulate import Grid, evolve, next_row, simulate
from rules import ElementaryRule, InvalidArgument

def test_rule_110_wraparound():
    # cell0: (0,0,1)=1 -> 1, cell1: (0,1,0)=2 -> 1, cell2: (1,0,0)=4 -> 0
    assert next_row(110, [0, 1, 0]) == [1, 1, 0]

def test_rule_90_single_cell_spreads():
    assert next_row(90, [0, 0, 1, 0, 0]) == [0, 1, 0, 1, 0]

def test_left_neighbor_of_first_cell_is_last():
    # rule 2 only turns on for neighborhood 001, i.e. a live right neighbor
    assert next_row(2, [1, 0, 0, 0]) == [0, 0, 0, 1]

def test_accepts_bools_and_rule_objects():
    assert next_row(ElementaryRule(110), [False, True, False]) == [1, 1, 0]

@pytest.mark.parametrize("rule", range(256))
def test_same_length_for_every_rule(rule):
    row = [1, 0, 0, 1, 1, 0, 1]
    assert len(next_row(rule, row)) == len(row)
    assert len(next_row(rule, [0, 1])) == 2

def test_deterministic_and_input_untouched():
    row = [0, 1, 1, 0, 1, 0, 0, 1]
    before = list(row)
    assert next_row(30, row) == next_row(30, row)
    assert row == before

@pytest.mark.parametrize("rule", range(256))
def test_all_zero_row(rule):
    """All-zero maps to all-zero iff bit 0 is clear, else to all-one."""
    expected = [0] * 6 if rule & 1 == 0 else [1] * 6
    assert next_row(rule, [0] * 6) == expected

@pytest.mark.parametrize("rule", [0, 30, 110, 128, 254, 255])
def test_single_cell_row(rule):
    # left = self = right, so only neighborhoods 000 and 111 occur
    assert next_row(rule, [1]) == [(rule >> 7) & 1]
    assert next_row(rule, [0]) == [rule & 1]

@pytest.mark.parametrize("bad", [-1, 256])
def test_rule_out_of_range(bad):
    with pytest.raises(InvalidArgument):
        next_row(bad, [0, 1, 0])

def test_empty_row_rejected():
    with pytest.raises(InvalidArgument):
        next_row(110, [])

@pytest.mark.parametrize("row", [[0, 2, 0], [0, 0.5, 1], [0, 0.9, 1], [1.0, 0, 1], ["0", "1", "0"], [0, None, 1]])
def test_non_binary_cell_rejected(row):
    """Floats and strings are rejected, never rounded or parsed."""
    with pytest.raises(InvalidArgument):
        next_row(110, row)

def test_numpy_cells_accepted():
    assert next_row(110, np.array([0, 1, 0])) == [1, 1, 0]
    assert next_row(110, np.array([False, True, False])) == [1, 1, 0]

def test_next_row_goes_through_rule_call(monkeypatch):
    calls = []
    original = ElementaryRule.__call__

    def recording(self, left, center, right):
        calls.append((left, center, right))
        return original(self, left, center, right)

    monkeypatch.setattr(ElementaryRule, "__call__", recording)
    assert next_row(110, [0, 1, 0]) == [1, 1, 0]
    assert calls == [(0, 0, 1), (0, 1, 0), (1, 0, 0)]

def test_multi_step_consistency():
    state = [1, 0, 0, 1, 0]
    one = next_row(30, state)
    two = next_row(30, one)
    assert simulate(state, 30, 2) == two


def test_evolve_includes_initial_row():
    grid = evolve(110, [0, 1, 0], 3)
    assert grid.height == 4
    assert grid.width == 3
    assert grid.rows[0] == (0, 1, 0)
    assert grid.rows[1] == (1, 1, 0)


def test_evolve_each_row_from_previous():
    grid = evolve(30, [0, 0, 0, 1, 0, 0, 0], 5)
    for prev, curr in zip(grid.rows, grid.rows[1:]):
        assert list(curr) == next_row(30, prev)


def test_grid_to_array():
    grid = Grid(((0, 1), (1, 0)))
    arr = grid.to_array()
    assert arr.shape == (2, 2)
    assert arr.dtype == bool
    assert arr[0, 1] and arr[1, 0]
    assert grid.to_lists() == [[0, 1], [1, 0]]


def test_grid_rejects_ragged_rows():
    with pytest.raises(InvalidArgument):
        Grid(((0, 1), (1,)))
    with pytest.raises(InvalidArgument):
        Grid(())
