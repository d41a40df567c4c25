# pathviz/core/maps.py
#!/usr/bin/env python3
"""
Map loading.

JSON presets:
    {"rows": 10, "cols": 12, "start": [1, 1], "goal": [8, 10],
     "cells": [[0, 1, ...], ...]}        # or "walls": [[r, c], ...]
ASCII:
    "S..#"
    ".#.G"                               # '.' open, '#' wall
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Union

from pathviz.core.grid import Grid, Cell

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"


class MapError(ValueError):
    """Raised when a map file or map text cannot be turned into a Grid."""


def _cell(value, what: str) -> Cell:
    try:
        r, c = value
        return int(r), int(c)
    except (TypeError, ValueError):
        raise MapError(f"{what} must be a [row, col] pair, got {value!r}") from None


def grid_from_dict(data: Dict) -> Grid:
    try:
        rows = int(data["rows"])
        cols = int(data["cols"])
    except (KeyError, TypeError, ValueError) as ex:
        raise MapError(f"map needs integer 'rows' and 'cols': {ex}") from None
    if rows <= 0 or cols <= 0:
        raise MapError(f"map size must be positive, got {rows}x{cols}")

    start = _cell(data.get("start", (0, 0)), "start")
    goal = _cell(data.get("goal", (rows - 1, cols - 1)), "goal")
    grid = Grid.empty(rows, cols, start, goal)

    if "cells" in data:
        cells = data["cells"]
        if not isinstance(cells, list) or not all(isinstance(r, list) for r in cells):
            raise MapError("cells must be a list of rows")
        if len(cells) != rows or not all(len(r) == cols for r in cells):
            raise MapError("cells size mismatch")
        try:
            grid.cells = [[bool(int(v)) for v in row] for row in cells]
        except (TypeError, ValueError):
            raise MapError("cells must hold 0 (open) or 1 (wall)") from None

    walls = data.get("walls", [])
    if not isinstance(walls, list):
        raise MapError("walls must be a list of [row, col] pairs")
    for w in walls:
        wc = _cell(w, "wall")
        if not grid.in_bounds(wc):
            raise MapError(f"wall {wc} out of bounds")
        grid.set_wall(wc)

    if not grid.in_bounds(start):
        raise MapError("start out of bounds")
    if not grid.in_bounds(goal):
        raise MapError("goal out of bounds")
    return grid


def load_map(path: Union[str, Path]) -> Grid:
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as ex:
        raise MapError(f"cannot read map {path}: {ex}") from ex
    except json.JSONDecodeError as ex:
        raise MapError(f"invalid JSON in {path}: {ex}") from ex
    if not isinstance(data, dict):
        raise MapError(f"{path}: top-level JSON value must be an object")
    return grid_from_dict(data)


def parse_ascii(text: Union[str, Iterable[str]]) -> Grid:
    """Build a Grid from rows of '.', '#', 'S', 'G'. Exactly one S and one G."""
    lines: List[str] = text.splitlines() if isinstance(text, str) else list(text)
    lines = [ln.strip() for ln in lines if ln.strip()]
    if not lines:
        raise MapError("empty map")
    cols = len(lines[0])
    if not all(len(ln) == cols for ln in lines):
        raise MapError("ragged map: all rows must have the same width")

    cells: List[List[bool]] = []
    start = goal = None
    for r, ln in enumerate(lines):
        row: List[bool] = []
        for c, ch in enumerate(ln):
            if ch == "S":
                if start is not None:
                    raise MapError("more than one start")
                start = (r, c)
            elif ch == "G":
                if goal is not None:
                    raise MapError("more than one goal")
                goal = (r, c)
            elif ch not in ".#":
                raise MapError(f"unexpected character {ch!r} at ({r}, {c})")
            row.append(ch == "#")
        cells.append(row)
    if start is None or goal is None:
        raise MapError("map needs both 'S' and 'G'")
    return Grid(len(lines), cols, cells, start, goal)


def render_ascii(grid: Grid, path: Iterable[Cell] = (), visited: Iterable[Cell] = ()) -> str:
    """Inverse of parse_ascii, with '*' for path cells and 'o' for visited cells."""
    on_path = set(path)
    seen = set(visited)
    out: List[str] = []
    for r in range(grid.rows):
        chars = []
        for c in range(grid.cols):
            cell = (r, c)
            if cell == grid.start:
                chars.append("S")
            elif cell == grid.goal:
                chars.append("G")
            elif grid.is_wall(cell):
                chars.append("#")
            elif cell in on_path:
                chars.append("*")
            elif cell in seen:
                chars.append("o")
            else:
                chars.append(".")
        out.append("".join(chars))
    return "\n".join(out)


def preset_maps() -> Dict[str, Path]:
    """Shipped maps keyed by file stem, sorted by name."""
    return {p.stem: p for p in sorted(MAP_DIR.glob("*.json"))}
