# gridastar/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any, Sequence

from gridastar.core.errors import GridError, PathfindingError

Cell = Tuple[int, int]  # (row, col)

PASSABLE = 1
BLOCKED = 0


@dataclass(frozen=True)
class Grid:
    rows: int
    cols: int
    cells: Tuple[Tuple[int, ...], ...]   # [row][col]

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise GridError(f"grid dimensions must be positive, got {self.rows}x{self.cols}")
        try:
            cells = tuple(tuple(r) for r in self.cells)
        except TypeError as ex:
            raise GridError(f"cells must be a sequence of rows: {ex}") from ex
        if len(cells) != self.rows:
            raise GridError(f"expected {self.rows} rows, got {len(cells)}")
        for i, r in enumerate(cells):
            if len(r) != self.cols:
                raise GridError(f"row {i} has {len(r)} cells, expected {self.cols}")
            for v in r:
                # no coercion: 0.9, "1" and True are all rejected
                if isinstance(v, bool) or not isinstance(v, int) or v not in (PASSABLE, BLOCKED):
                    raise GridError(f"row {i} holds {v!r}; cells must be {BLOCKED} or {PASSABLE}")
        object.__setattr__(self, "cells", cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        if not rows:
            raise GridError("grid has no rows")
        return cls(len(rows), len(rows[0]), tuple(tuple(r) for r in rows))

    def is_valid(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_passable(self, row: int, col: int) -> bool:
        """Caller checks is_valid() first."""
        return self.cells[row][col] == PASSABLE

    def in_bounds(self, c: Cell) -> bool:
        r, k = c
        return self.is_valid(r, k)

    def is_block(self, c: Cell) -> bool:
        r, k = c
        return not self.is_passable(r, k)

    def render(self, path: Optional[Sequence[Cell]] = None,
               start: Optional[Cell] = None, goal: Optional[Cell] = None) -> str:
        """Text picture of the grid: '#' blocked, '.' free, '*' route, S/G endpoints."""
        on_path = set(path or ())
        lines = []
        for r in range(self.rows):
            chars = []
            for k in range(self.cols):
                c = (r, k)
                if c == start:
                    chars.append("S")
                elif c == goal:
                    chars.append("G")
                elif c in on_path:
                    chars.append("*")
                elif self.is_passable(r, k):
                    chars.append(".")
                else:
                    chars.append("#")
            lines.append(" ".join(chars))
        return "\n".join(lines)


@dataclass(frozen=True)
class SearchNode:
    cell: Cell
    parent: Cell
    g: float
    h: float

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path" | "invalid"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    error: Optional[PathfindingError] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PathResult:
    path: Optional[List[Cell]] = None
    error: Optional[PathfindingError] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.error is None and self.path is not None

    @property
    def status(self) -> str:
        return "found" if self.error is None else self.error.status

    @property
    def moves(self) -> int:
        return len(self.path) - 1 if self.path else 0

    def unwrap(self) -> List[Cell]:
        """Return the route, or raise the failure that ended the search."""
        if self.error is not None:
            raise self.error
        return list(self.path)
