# pathviz/core/dijkstra.py
#!/usr/bin/env python3

from dataclasses import dataclass, field
from typing import Dict, Tuple, List, Optional
import heapq
from math import inf

from pathviz.core.grid import Grid, Cell
from pathviz.core.path import path_from_parents
from pathviz.core.types import StepResult, IDLE, RUNNING, DONE, NO_PATH


@dataclass
class DijkstraAlgo:
    """
    Dijkstra with unit edge weights, one settled cell per step().

    The heap is keyed (distance, cell) and cells are (row, col), so among
    equal distances the lowest row, then lowest column, is settled first.
    Stale heap entries are skipped, which makes the pop order identical to
    a linear scan over all unsettled cells with that same tie-break.
    """
    name: str = "Dijkstra"

    grid: Optional[Grid] = None
    open_pq: List[Tuple[int, Cell]] = field(default_factory=list)   # (g, cell)
    open_set: set = field(default_factory=set)
    closed_set: set = field(default_factory=set)
    g: Dict[Cell, int] = field(default_factory=dict)                 # missing = inf
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    goal_cell: Optional[Cell] = None

    def init(self, grid: Grid) -> None:
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.g.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.goal_cell = self.grid.goal

        s = self.grid.start
        if self.grid.is_wall(s):
            self.no_path = True
            return
        self.g[s] = 0
        heapq.heappush(self.open_pq, (0, s))
        self.open_set.add(s)

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        return path_from_parents(self.parent, end, self.grid.start)

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status=IDLE, metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.goal_cell)
            return StepResult(status=DONE, path=path,
                              metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status=NO_PATH, metrics=self._metrics())

        # drop stale entries until a live one is on top
        while self.open_pq:
            g_u, u = self.open_pq[0]
            if u in self.closed_set or g_u != self.g.get(u, inf):
                heapq.heappop(self.open_pq)
                continue
            break

        if not self.open_pq:
            self.no_path = True
            return StepResult(status=NO_PATH, metrics=self._metrics())

        g_u, u = heapq.heappop(self.open_pq)
        self.popped_count += 1
        self.open_set.discard(u)
        self.closed_set.add(u)

        if u == self.goal_cell:
            self.done = True
            path = self._reconstruct_path(u)
            return StepResult(status=DONE, closed=[u], current=u, path=path,
                              metrics=self._metrics(path_len=len(path)))

        opened_now: List[Cell] = []
        for v in self.grid.neighbors(u):
            if v in self.closed_set:
                continue
            alt = g_u + 1
            if alt < self.g.get(v, inf):
                self.g[v] = alt
                self.parent[v] = u
                heapq.heappush(self.open_pq, (alt, v))
                if v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return StepResult(status=RUNNING, opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
            "total_cost": self.g.get(self.goal_cell) if self.done else None,
        }
