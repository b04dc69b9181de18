# gridastar/core/astar.py
#!/usr/bin/env python3
"""
A* on a 4-connected binary occupancy grid.

AStarAlgo runs one expansion per step() so the viewer can animate it;
find_path() drives it to completion and returns a PathResult.

Heuristic:
- Euclidean distance to the goal. Admissible (and consistent) for unit-cost
  4-connected moves, so the returned route is a shortest one.

Open set:
- Binary heap of (f, h, seq, node): lower f, then lower h, then FIFO by seq.
- Improvements push a new node; stale entries are dropped on pop because
  their cell is already closed.

Goal handling:
- eager_goal=True (default): the search stops as soon as the goal shows up as
  a neighbor of the expanded cell. With this heuristic the cell being
  expanded has h == 1 next to the goal, so the route is still optimal; which
  of several equally short routes is returned depends on expansion order.
- eager_goal=False: the goal is queued like any other cell and the search
  stops when it is popped.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any
import heapq
import logging
import math

from gridastar.core.cost_table import CostTable
from gridastar.core.errors import (
    InvalidEndpoint,
    PathfindingError,
    ReconstructionError,
    SearchBudgetExceeded,
    Unreachable,
)
from gridastar.core.reconstruct import reconstruct_path
from gridastar.core.types import Grid, PathResult, SearchNode, StepResult

Cell = Tuple[int, int]  # (row, col)

# +row, +col, -col, -row
SUCCESSOR_DIRS: Tuple[Cell, ...] = ((1, 0), (0, 1), (0, -1), (-1, 0))

log = logging.getLogger(__name__)


def euclidean(a: Cell, b: Cell) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


@dataclass
class AStarAlgo:
    name: str = "A*"
    eager_goal: bool = True
    max_expansions: Optional[int] = None

    # Internal state
    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    goal: Optional[Cell] = None
    open_pq: List[Tuple[float, float, int, SearchNode]] = field(default_factory=list)  # (f, h, seq, node)
    open_set: set = field(default_factory=set)         # for overlay
    closed_set: set = field(default_factory=set)
    table: Optional[CostTable] = None
    path: Optional[List[Cell]] = None
    error: Optional[PathfindingError] = None
    popped_count: int = 0
    done: bool = False
    seq: int = 0  # monotonic counter for PQ stability

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Cell, goal: Cell) -> None:
        self.grid = grid
        self.start = tuple(start)
        self.goal = tuple(goal)
        self.reset()

    def reset(self) -> None:
        """Clear all state, check the endpoints and seed with the start node."""
        if self.grid is None:
            return
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.table = CostTable(self.grid.rows, self.grid.cols)
        self.path = None
        self.error = None
        self.popped_count = 0
        self.done = False
        self.seq = 0

        reason = self._endpoint_problem()
        if reason:
            self.error = InvalidEndpoint(reason, self.start, self.goal)
            log.warning("%s; search not started", self.error)
            return

        s = self.start
        h0 = self._h(s)
        self.table.record(s, 0.0, h0, s)

        if s == self.goal:
            self.done = True
            self.path = [s]
            return

        self._push(s, s, 0.0, h0)
        self.open_set.add(s)

    # -------------------- helpers --------------------

    def _endpoint_problem(self) -> Optional[str]:
        for label, c in (("start", self.start), ("goal", self.goal)):
            if not self.grid.in_bounds(c):
                return f"{label} {c} is outside the {self.grid.rows}x{self.grid.cols} grid"
        for label, c in (("start", self.start), ("goal", self.goal)):
            if self.grid.is_block(c):
                return f"{label} {c} is blocked"
        return None

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _h(self, c: Cell) -> float:
        return euclidean(c, self.goal)

    def _push(self, c: Cell, parent: Cell, g: float, h: float) -> None:
        node = SearchNode(c, parent, g, h)
        heapq.heappush(self.open_pq, (node.f, node.h, self._bump(), node))

    def _neighbors4(self, c: Cell) -> List[Cell]:
        """In-bounds, passable, not yet expanded neighbors in SUCCESSOR_DIRS order."""
        r, k = c
        out: List[Cell] = []
        for dr, dk in SUCCESSOR_DIRS:
            n = (r + dr, k + dk)
            if not self.grid.in_bounds(n):
                continue
            if self.grid.is_block(n):
                continue
            if n in self.closed_set:
                continue
            out.append(n)
        return out

    def _finish(self, u: Cell, opened: List[Cell]) -> StepResult:
        try:
            self.path = reconstruct_path(self.table, self.start, self.goal)
        except ReconstructionError as ex:
            self.error = ex
            log.error("Route reconstruction failed: %s", ex)
            return StepResult(status="no_path", opened=opened, closed=[u], current=u,
                              error=ex, metrics=self._metrics())
        self.done = True
        log.info("Successfully got to destination %s in %d moves", self.goal, len(self.path) - 1)
        return StepResult(
            status="done",
            opened=opened,
            closed=[u],
            current=u,
            path=list(self.path),
            metrics=self._metrics(),
        )

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion:
          - Pop the lowest (f, h, seq) node, skipping stale duplicates.
          - Close it and relax its neighbors with unit edge cost.
          - Finish when the goal is reached (see eager_goal).
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.error is not None:
            status = "invalid" if isinstance(self.error, InvalidEndpoint) else "no_path"
            return StepResult(status=status, error=self.error, metrics=self._metrics())

        if self.done:
            return StepResult(status="done", path=list(self.path), metrics=self._metrics())

        budget_spent = self.max_expansions is not None and self.popped_count >= self.max_expansions
        if budget_spent:
            # stale entries do not count against the budget
            while self.open_pq and self.open_pq[0][3].cell in self.closed_set:
                heapq.heappop(self.open_pq)

        if not self.open_pq:
            self.error = Unreachable(self.start, self.goal)
            log.info("Could not find the destination %s", self.goal)
            return StepResult(status="no_path", error=self.error, metrics=self._metrics())

        if budget_spent:
            self.error = SearchBudgetExceeded(self.max_expansions, self.start, self.goal)
            log.info("%s", self.error)
            return StepResult(status="no_path", error=self.error, metrics=self._metrics())

        _, _, _, node = heapq.heappop(self.open_pq)
        u = node.cell

        # Ignore stale pops
        if u in self.closed_set:
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.popped_count += 1
        self.open_set.discard(u)
        self.closed_set.add(u)
        log.debug("expand %s g=%.1f h=%.3f f=%.3f", u, node.g, node.h, node.f)

        if u == self.goal:
            return self._finish(u, [])

        g_u = self.table[u].g
        opened_now: List[Cell] = []
        for v in self._neighbors4(u):
            if self.eager_goal and v == self.goal:
                self.table.record(v, g_u + 1, 0.0, u)
                return self._finish(u, opened_now)

            g_new = g_u + 1
            h_new = self._h(v)
            if self.table.improves(v, g_new + h_new):
                self.table.record(v, g_new, h_new, u)
                self._push(v, u, g_new, h_new)
                if v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return StepResult(
            status="running",
            opened=opened_now,
            closed=[u],
            current=u,
            metrics=self._metrics(),
        )

    def run(self) -> StepResult:
        """Step until the search stops."""
        while True:
            res = self.step()
            if res.status != "running":
                return res

    # -------------------- metrics --------------------

    def _metrics(self) -> Dict[str, Any]:
        total = None
        if self.done and self.table is not None:
            total = self.table[self.goal].g
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": len(self.path) if self.path else 0,
            "total_cost": total,
        }


def find_path(grid: Grid, start: Cell, goal: Cell, *,
              eager_goal: bool = True, max_expansions: Optional[int] = None) -> PathResult:
    """
    Shortest 4-connected route from start to goal.

    Never raises for search failures: the returned PathResult carries either
    the route (start and goal included) or one of InvalidEndpoint,
    Unreachable, ReconstructionError or SearchBudgetExceeded.
    """
    algo = AStarAlgo(eager_goal=eager_goal, max_expansions=max_expansions)
    algo.init(grid, start, goal)
    log.debug("Attempting to search from %s to %s", algo.start, algo.goal)
    res = algo.run()
    if res.status == "done":
        return PathResult(path=res.path, metrics=res.metrics)
    return PathResult(error=res.error, metrics=res.metrics)
