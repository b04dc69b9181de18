# gridastar/core/maps.py
"""Map files: JSON with rows, cols, cells ([row][col], 1 = passable), start and goal."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from gridastar.core.errors import GridError, MapFormatError
from gridastar.core.types import Grid

Cell = Tuple[int, int]  # (row, col)

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"
DEFAULT_MAP = "01_reference"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapSpec:
    name: str
    grid: Grid
    start: Cell
    goal: Cell


def list_maps() -> List[str]:
    return sorted(p.stem for p in MAP_DIR.glob("*.json"))


def resolve_map_path(name_or_path: Union[str, Path]) -> Path:
    """A bundled map name ('01_reference') or a path to a JSON file."""
    p = Path(name_or_path)
    if p.suffix == ".json" or p.exists():
        return p
    bundled = MAP_DIR / f"{p.name}.json"
    if bundled.exists():
        return bundled
    raise MapFormatError(f"unknown map {str(name_or_path)!r}; bundled maps: {', '.join(list_maps())}")


def _cell(data: dict, key: str) -> Cell:
    try:
        r, c = data[key]
        return int(r), int(c)
    except KeyError:
        raise MapFormatError(f"map has no {key!r}")
    except (TypeError, ValueError):
        raise MapFormatError(f"{key!r} must be a [row, col] pair, got {data[key]!r}")


def parse_map(data: dict, name: str = "custom") -> MapSpec:
    try:
        cells = data["cells"]
    except KeyError:
        raise MapFormatError("map has no 'cells'")
    try:
        rows = int(data.get("rows", len(cells)))
        cols = int(data.get("cols", len(cells[0]) if cells else 0))
    except (TypeError, ValueError) as ex:
        raise MapFormatError(f"map {name!r}: bad dimensions: {ex}") from ex
    try:
        grid = Grid(rows, cols, cells)
    except GridError as ex:
        raise MapFormatError(f"map {name!r}: {ex}") from ex

    start = _cell(data, "start")
    goal = _cell(data, "goal")
    if not grid.in_bounds(start):
        raise MapFormatError(f"map {name!r}: start {start} out of bounds")
    if not grid.in_bounds(goal):
        raise MapFormatError(f"map {name!r}: goal {goal} out of bounds")
    return MapSpec(name, grid, start, goal)


def load_map(name_or_path: Union[str, Path]) -> MapSpec:
    path = resolve_map_path(name_or_path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as ex:
        raise MapFormatError(f"cannot read map {str(path)!r}: {ex}") from ex
    except json.JSONDecodeError as ex:
        raise MapFormatError(f"map {str(path)!r} is not valid JSON: {ex}") from ex
    if not isinstance(data, dict):
        raise MapFormatError(f"map {str(path)!r} must hold a JSON object")
    spec = parse_map(data, name=path.stem)
    log.debug("loaded map %s (%dx%d)", spec.name, spec.grid.rows, spec.grid.cols)
    return spec
