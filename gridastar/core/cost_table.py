# gridastar/core/cost_table.py
#!/usr/bin/env python3
from dataclasses import dataclass
from typing import List, Tuple
from math import inf

Cell = Tuple[int, int]  # (row, col)


@dataclass
class CostEntry:
    f: float
    g: float
    h: float
    parent: Cell


class CostTable:
    """Best-known f/g/h and parent for every cell of a rows x cols grid.

    Entries start at f = g = inf with the cell as its own parent ("no parent").
    """

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self._entries: List[List[CostEntry]] = [
            [CostEntry(inf, inf, 0.0, (r, c)) for c in range(cols)]
            for r in range(rows)
        ]

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def __contains__(self, c: Cell) -> bool:
        r, k = c
        return 0 <= r < self.rows and 0 <= k < self.cols

    def __getitem__(self, c: Cell) -> CostEntry:
        r, k = c
        return self._entries[r][k]

    def is_unvisited(self, c: Cell) -> bool:
        return self[c].f == inf

    def improves(self, c: Cell, f_new: float) -> bool:
        """Equal or worse costs are never adopted."""
        e = self[c]
        return e.f == inf or f_new < e.f

    def record(self, c: Cell, g: float, h: float, parent: Cell) -> CostEntry:
        e = self[c]
        e.g = g
        e.h = h
        e.f = g + h
        e.parent = parent
        return e

    def parent_of(self, c: Cell) -> Cell:
        return self[c].parent
