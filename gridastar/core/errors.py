# gridastar/core/errors.py
"""
Failure types.

Search failures (everything under PathfindingError) are handed back inside a
PathResult by find_path(); they are exceptions only so that callers can
raise them with PathResult.unwrap(). GridError is raised when a grid or a map
file is malformed.
"""

from typing import Optional, Tuple

Cell = Tuple[int, int]  # (row, col)


class PathfindingError(Exception):
    status = "failed"

    def __init__(self, message: str, start: Optional[Cell] = None, goal: Optional[Cell] = None):
        super().__init__(message)
        self.start = start
        self.goal = goal


class InvalidEndpoint(PathfindingError):
    """Start or goal is out of bounds or sits on a blocked cell."""
    status = "invalid_endpoint"

    def __init__(self, reason: str, start: Optional[Cell] = None, goal: Optional[Cell] = None):
        super().__init__(f"Invalid endpoint: {reason}", start, goal)
        self.reason = reason


class Unreachable(PathfindingError):
    """Open set ran dry before the goal was reached."""
    status = "unreachable"

    def __init__(self, start: Optional[Cell] = None, goal: Optional[Cell] = None):
        super().__init__(f"Could not find the destination {goal} from {start}", start, goal)


class ReconstructionError(PathfindingError):
    status = "reconstruction_error"


class SearchBudgetExceeded(PathfindingError):
    status = "budget_exhausted"

    def __init__(self, limit: int, start: Optional[Cell] = None, goal: Optional[Cell] = None):
        super().__init__(f"Search stopped after {limit} expansions", start, goal)
        self.limit = limit


class GridError(ValueError):
    pass


class MapFormatError(GridError):
    pass
