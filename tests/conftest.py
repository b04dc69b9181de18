import pytest

from gridastar.core.types import Grid

REFERENCE_ROWS = [
    [1, 1, 1, 1, 1, 0, 1, 1],
    [1, 0, 1, 0, 1, 1, 1, 0],
    [1, 1, 1, 1, 0, 0, 0, 0],
    [0, 1, 0, 1, 1, 0, 1, 0],
    [0, 1, 1, 1, 0, 0, 1, 0],
    [1, 0, 0, 1, 0, 1, 1, 0],
    [1, 0, 1, 1, 0, 1, 0, 1],
    [0, 1, 1, 1, 1, 1, 0, 1],
]

REFERENCE_ROUTE = [
    (0, 1), (0, 2), (1, 2), (2, 2), (2, 3), (3, 3), (4, 3), (5, 3), (6, 3),
    (7, 3), (7, 4), (7, 5), (6, 5), (5, 5), (5, 6), (4, 6), (3, 6),
]


@pytest.fixture
def reference_grid():
    return Grid.from_rows(REFERENCE_ROWS)


@pytest.fixture
def open_grid():
    return Grid.from_rows([[1] * 7 for _ in range(6)])


@pytest.fixture
def split_grid():
    # column 2 is a solid wall
    return Grid.from_rows([[1, 1, 0, 1, 1] for _ in range(4)])


def assert_valid_route(grid, path, start, goal):
    assert path[0] == start
    assert path[-1] == goal
    for r, c in path:
        assert grid.is_valid(r, c)
        assert grid.is_passable(r, c)
    for (r0, c0), (r1, c1) in zip(path, path[1:]):
        assert abs(r0 - r1) + abs(c0 - c1) == 1


# (2, 2) is first queued from (2, 3) with g = 6, then improved from (2, 1)
# with g = 4; its first heap entry comes up again after it is closed.
DETOUR_ROWS = [
    [1, 1, 1, 1, 0, 1, 1],
    [1, 0, 0, 1, 0, 1, 1],
    [1, 1, 1, 1, 0, 1, 1],
    [1, 0, 0, 0, 0, 1, 1],
    [1, 1, 1, 1, 1, 1, 1],
]
DETOUR_START = (0, 0)
DETOUR_GOAL = (2, 6)


@pytest.fixture
def detour_grid():
    return Grid.from_rows(DETOUR_ROWS)


@pytest.fixture
def sealed_detour_grid():
    # same grid with (3, 0) blocked: the goal side can no longer be reached
    rows = [list(r) for r in DETOUR_ROWS]
    rows[3][0] = 0
    return Grid.from_rows(rows)
