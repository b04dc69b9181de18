import math

import pytest

from gridastar.core.cost_table import CostTable
from gridastar.core.errors import ReconstructionError
from gridastar.core.reconstruct import reconstruct_path


def chain(table, cells):
    """Record cells[i - 1] as the parent of cells[i]."""
    table.record(cells[0], 0, 0, cells[0])
    for g, (parent, cell) in enumerate(zip(cells, cells[1:]), start=1):
        table.record(cell, g, 0, parent)


def test_follows_parents_in_start_to_goal_order():
    table = CostTable(3, 3)
    route = [(0, 0), (1, 0), (1, 1), (2, 1), (2, 2)]
    chain(table, route)
    assert reconstruct_path(table, (0, 0), (2, 2)) == route


def test_start_equals_goal():
    table = CostTable(2, 2)
    assert reconstruct_path(table, (1, 1), (1, 1)) == [(1, 1)]


def test_straight_line_sharing_start_row():
    # walking back along the start's row must not stop before reaching start
    table = CostTable(3, 4)
    route = [(2, 0), (2, 1), (2, 2), (2, 3)]
    chain(table, route)
    assert reconstruct_path(table, (2, 0), (2, 3)) == route


def test_straight_line_sharing_start_col():
    table = CostTable(4, 3)
    route = [(0, 1), (1, 1), (2, 1), (3, 1)]
    chain(table, route)
    assert reconstruct_path(table, (0, 1), (3, 1)) == route


def test_goal_without_parent():
    table = CostTable(2, 2)
    with pytest.raises(ReconstructionError) as ex:
        reconstruct_path(table, (0, 0), (1, 1))
    assert ex.value.status == "reconstruction_error"
    assert ex.value.goal == (1, 1)


def test_cycle_is_bounded():
    table = CostTable(1, 3)
    table.record((0, 2), 1, 0, (0, 1))
    table.record((0, 1), 1, 0, (0, 2))
    with pytest.raises(ReconstructionError):
        reconstruct_path(table, (0, 0), (0, 2))


def test_max_steps_too_small():
    table = CostTable(1, 5)
    chain(table, [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)])
    with pytest.raises(ReconstructionError):
        reconstruct_path(table, (0, 0), (0, 4), max_steps=3)
    assert len(reconstruct_path(table, (0, 0), (0, 4), max_steps=5)) == 5


def test_goal_outside_table():
    with pytest.raises(ReconstructionError):
        reconstruct_path(CostTable(2, 2), (0, 0), (5, 5))


# -------------------- cost table --------------------

def test_table_starts_unvisited():
    table = CostTable(2, 3)
    assert table.size == 6
    for r in range(2):
        for c in range(3):
            e = table[(r, c)]
            assert math.isinf(e.f) and math.isinf(e.g)
            assert e.parent == (r, c)
            assert table.is_unvisited((r, c))


def test_table_improves_only_on_strictly_lower_f():
    table = CostTable(2, 2)
    assert table.improves((1, 1), 100.0)
    table.record((1, 1), 2, 1.5, (0, 1))
    assert table[(1, 1)].f == 3.5
    assert not table.is_unvisited((1, 1))
    assert not table.improves((1, 1), 3.5)
    assert not table.improves((1, 1), 4.0)
    assert table.improves((1, 1), 3.0)
    assert table.parent_of((1, 1)) == (0, 1)


def test_table_contains():
    table = CostTable(2, 2)
    assert (1, 1) in table
    assert (2, 0) not in table
    assert (0, -1) not in table
