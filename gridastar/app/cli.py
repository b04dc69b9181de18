# gridastar/app/cli.py
#!/usr/bin/env python3
"""
Command-line demo: load a map, print it, search, print the route.

Config (environment, overridden by --key=value arguments):
    GRIDASTAR_MAP        / --map=NAME|PATH       (default 01_reference)
    GRIDASTAR_LOG_LEVEL  / --log-level=LEVEL     (default WARNING)
                           --lazy-goal           stop when the goal is popped
                           --max-expansions=N    give up after N expansions
                           --list                list bundled maps
"""

import logging
import os
import sys
from typing import List, Optional, Sequence

from gridastar.core.astar import find_path
from gridastar.core.errors import GridError
from gridastar.core.maps import DEFAULT_MAP, list_maps, load_map

log = logging.getLogger(__name__)


def _arg(argv: Sequence[str], key: str) -> Optional[str]:
    prefix = f"--{key}="
    value = None
    for a in argv:
        if a.startswith(prefix):
            value = a.split("=", 1)[1]
    return value


def resolve_map(argv: Sequence[str]) -> str:
    return _arg(argv, "map") or os.getenv("GRIDASTAR_MAP", DEFAULT_MAP)


def resolve_log_level(argv: Sequence[str]) -> int:
    name = (_arg(argv, "log-level") or os.getenv("GRIDASTAR_LOG_LEVEL", "WARNING")).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def resolve_max_expansions(argv: Sequence[str]) -> Optional[int]:
    raw = _arg(argv, "max-expansions")
    if raw is None:
        return None
    try:
        return max(0, int(raw))
    except ValueError:
        log.warning("ignoring --max-expansions=%s (not an integer)", raw)
        return None


def format_route(path: Sequence) -> str:
    return " -> ".join(f"({r}, {c})" for r, c in path)


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=resolve_log_level(argv),
                        format="%(asctime)s - %(levelname)s: %(message)s")

    if "--list" in argv:
        for name in list_maps():
            print(name)
        return 0

    try:
        spec = load_map(resolve_map(argv))
    except GridError as ex:
        print(f"Failed to load map: {ex}")
        return 2

    print(spec.grid.render(start=spec.start, goal=spec.goal))
    print()
    print("Attempting to search...")
    result = find_path(spec.grid, spec.start, spec.goal,
                       eager_goal="--lazy-goal" not in argv,
                       max_expansions=resolve_max_expansions(argv))

    if result.found:
        print("Successfully got to destination.")
        print(format_route(result.path))
        print(f"{result.moves} moves, {result.metrics['popped']} cells expanded")
        print()
        print(spec.grid.render(path=result.path, start=spec.start, goal=spec.goal))
    else:
        print(f"Could not find the destination ({result.status}): {result.error}")
    print("Done.")
    return 0 if result.found else 1


if __name__ == "__main__":
    sys.exit(main())
