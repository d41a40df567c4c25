# pathviz/app/cli.py
#!/usr/bin/env python3
"""
Headless runner: search a map and print the outcome as ASCII.

    pathviz-run --algo bfs --map 02_wall_gap
    pathviz-run --map path/to/custom.json --delay 0.01

Exit status: 0 path found, 1 no path, 2 bad map.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from pathviz.app import settings
from pathviz.core.engine import ALGORITHMS, iter_events
from pathviz.core.grid import Grid
from pathviz.core.maps import MapError, load_map, preset_maps, render_ascii
from pathviz.core.types import VISIT, PATH, DONE

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathviz-run", description=__doc__.strip().splitlines()[0])
    parser.add_argument("--algo", choices=sorted(ALGORITHMS), default=None,
                        help="search algorithm (default: $PATHVIZ_ALGO or astar)")
    parser.add_argument("--map", dest="map_name", default=None,
                        help="preset map name or path to a JSON map (default: empty 30x30 grid)")
    parser.add_argument("--delay", type=float, default=0.0,
                        help="seconds to wait between visit events")
    parser.add_argument("--quiet", action="store_true", help="print only the summary line")
    return parser


def resolve_grid(map_name: Optional[str]) -> Grid:
    if not map_name:
        return Grid.empty(settings.ROWS, settings.COLS, settings.DEFAULT_START, settings.DEFAULT_GOAL)
    presets = preset_maps()
    if map_name in presets:
        return load_map(presets[map_name])
    return load_map(map_name)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings.configure_logging()
    algo = args.algo or settings.resolve_algo([])

    try:
        grid = resolve_grid(args.map_name)
    except MapError as ex:
        logger.error("%s", ex)
        print(f"error: {ex}", file=sys.stderr)
        return 2

    result = None
    for ev in iter_events(grid, algorithm=algo):
        if ev.kind == VISIT:
            if args.delay > 0:
                time.sleep(args.delay)
        elif ev.kind == PATH:
            continue
        else:
            result = ev.result

    if not args.quiet:
        print(render_ascii(grid, path=result.path or (), visited=result.visited))
    if result.status == DONE:
        print(f"{algo}: path length {result.cost} ({len(result.path)} cells), "
              f"visited {len(result.visited)}")
        return 0
    print(f"{algo}: no path, visited {len(result.visited)}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
