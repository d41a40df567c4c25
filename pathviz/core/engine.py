# pathviz/core/engine.py
#!/usr/bin/env python3
"""
Search engine entry points.

The engine is a pure function of (grid, start, goal, algorithm): every call
builds a fresh algorithm object, drives it step by step and hands each
settled cell to the caller as it happens. It never sleeps; any pacing
belongs to whoever consumes the events.
"""

import logging
from typing import Callable, Dict, Iterator, List, Optional

from pathviz.core.astar import AStarAlgo
from pathviz.core.bfs import BFSAlgo
from pathviz.core.dijkstra import DijkstraAlgo
from pathviz.core.grid import Grid, Cell
from pathviz.core.types import SearchEvent, SearchResult, DONE, NO_PATH, VISIT, PATH

logger = logging.getLogger(__name__)

ALGORITHMS: Dict[str, type] = {
    "bfs": BFSAlgo,
    "dijkstra": DijkstraAlgo,
    "astar": AStarAlgo,
}

_ALIASES = {"a*": "astar", "a-star": "astar", "breadth-first": "bfs"}


def normalize_algorithm(name: str) -> str:
    key = (name or "").strip().lower()
    key = _ALIASES.get(key, key)
    if key not in ALGORITHMS:
        raise ValueError(
            f"Unknown algorithm {name!r}; expected one of {', '.join(sorted(ALGORITHMS))}"
        )
    return key


def make_algo(name: str):
    """Fresh, uninitialised algorithm instance for `name`."""
    return ALGORITHMS[normalize_algorithm(name)]()


def iter_events(
    grid: Grid,
    start: Optional[Cell] = None,
    goal: Optional[Cell] = None,
    algorithm: str = "astar",
) -> Iterator[SearchEvent]:
    """
    Yield SearchEvents for one search.

    Order: one "visit" per settled cell, then (on success) one "path" per
    path cell from start to goal, then a single terminal "done" or
    "no_path" event carrying the SearchResult. Closing the generator early
    abandons the search; the grid is never touched.
    """
    key = normalize_algorithm(algorithm)
    board = grid.with_endpoints(start, goal)
    algo = ALGORITHMS[key]()
    algo.init(board)
    logger.debug("search %s start=%s goal=%s", key, board.start, board.goal)

    visited: List[Cell] = []
    while True:
        res = algo.step()
        for c in res.closed:
            visited.append(c)
            yield SearchEvent(VISIT, cell=c)

        if res.status == DONE:
            result = SearchResult(key, DONE, path=list(res.path), visited=visited,
                                  metrics=res.metrics)
            logger.info("%s found path of %d cells after %d visits",
                        key, len(result.path), len(visited))
            for c in result.path:
                yield SearchEvent(PATH, cell=c)
            yield SearchEvent(DONE, result=result)
            return

        if res.status == NO_PATH:
            result = SearchResult(key, NO_PATH, visited=visited, metrics=res.metrics)
            logger.info("%s found no path after %d visits", key, len(visited))
            yield SearchEvent(NO_PATH, result=result)
            return


def run_search(
    grid: Grid,
    start: Optional[Cell] = None,
    goal: Optional[Cell] = None,
    algorithm: str = "astar",
    on_visit: Optional[Callable[[Cell], None]] = None,
) -> SearchResult:
    """Run a search to completion; on_visit(cell) is called once per settled cell, in order."""
    for ev in iter_events(grid, start, goal, algorithm):
        if ev.kind == VISIT:
            if on_visit is not None:
                on_visit(ev.cell)
        elif ev.result is not None:
            return ev.result
    raise RuntimeError("search ended without a terminal event")
