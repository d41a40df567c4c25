# pathviz/core/grid.py
#!/usr/bin/env python3
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

Cell = Tuple[int, int]  # (row, col)

# down, up, right, left; this order is part of every algorithm's visit order
DIRECTIONS: List[Tuple[int, int]] = [(1, 0), (-1, 0), (0, 1), (0, -1)]


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[bool]]            # [row][col], True = wall
    start: Cell
    goal: Cell

    @classmethod
    def empty(cls, rows: int, cols: int, start: Optional[Cell] = None, goal: Optional[Cell] = None) -> "Grid":
        """Open field; endpoints default to two cells in from opposite corners."""
        cells = [[False] * cols for _ in range(rows)]
        if start is None:
            start = (min(2, rows - 1), min(2, cols - 1))
        if goal is None:
            goal = (max(0, rows - 3), max(0, cols - 3))
        return cls(rows, cols, cells, start, goal)

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def is_wall(self, c: Cell) -> bool:
        r, col = c
        return self.cells[r][col]

    def neighbors(self, c: Cell) -> List[Cell]:
        """Walkable 4-connected neighbors of c, in DIRECTIONS order."""
        r, col = c
        out: List[Cell] = []
        for dr, dc in DIRECTIONS:
            n = (r + dr, col + dc)
            if self.in_bounds(n) and not self.is_wall(n):
                out.append(n)
        return out

    # -------------------- editing (between searches only) --------------------

    def set_wall(self, c: Cell, wall: bool = True) -> None:
        r, col = c
        self.cells[r][col] = bool(wall)

    def toggle_wall(self, c: Cell) -> bool:
        r, col = c
        self.cells[r][col] = not self.cells[r][col]
        return self.cells[r][col]

    def clear(self) -> None:
        for row in self.cells:
            for i in range(len(row)):
                row[i] = False

    def with_endpoints(self, start: Optional[Cell] = None, goal: Optional[Cell] = None) -> "Grid":
        """Same cells (shared, not copied), other start/goal."""
        return replace(
            self,
            start=self.start if start is None else tuple(start),
            goal=self.goal if goal is None else tuple(goal),
        )

    def wall_count(self) -> int:
        return sum(sum(1 for v in row if v) for row in self.cells)


def heuristic(a: Cell, b: Cell) -> int:
    """Manhattan distance; admissible and consistent for unit-cost 4-connected moves."""
    (r1, c1), (r2, c2) = a, b
    return abs(r1 - r2) + abs(c1 - c2)
