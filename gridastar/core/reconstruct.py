# gridastar/core/reconstruct.py
#!/usr/bin/env python3
import logging
from typing import List, Optional, Tuple

from gridastar.core.cost_table import CostTable
from gridastar.core.errors import ReconstructionError

Cell = Tuple[int, int]  # (row, col)

log = logging.getLogger(__name__)


def reconstruct_path(table: CostTable, start: Cell, goal: Cell,
                     max_steps: Optional[int] = None) -> List[Cell]:
    """
    Walk parent pointers from goal back to start and return the route in
    start -> goal order, both ends included.

    The walk stops when the current cell equals start on both axes. It is
    bounded by max_steps (rows * cols by default) so a broken parent chain
    raises ReconstructionError instead of looping.
    """
    limit = table.size if max_steps is None else max_steps
    if goal not in table:
        raise ReconstructionError(f"goal {goal} is outside the cost table", start, goal)

    path: List[Cell] = [goal]
    cur = goal
    for _ in range(limit):
        if cur == start:
            path.reverse()
            return path
        parent = table.parent_of(cur)
        if parent == cur:
            raise ReconstructionError(f"cell {cur} has no parent; chain never reaches {start}",
                                      start, goal)
        if parent not in table:
            raise ReconstructionError(f"parent {parent} of {cur} is outside the cost table",
                                      start, goal)
        cur = parent
        path.append(cur)

    log.warning("parent chain from %s did not reach %s within %d steps", goal, start, limit)
    raise ReconstructionError(f"parent chain did not reach {start} within {limit} steps",
                              start, goal)
