# pathviz/core/astar.py
#!/usr/bin/env python3
"""
A* - one expansion per step() for animation.

Implements the algorithm API the engine and viewer expect:
- init(grid) - reset() - step() -> StepResult

Heuristic:
- Manhattan distance (admissible and consistent on a unit-cost 4-connected grid).

Tie-breaking in the PQ:
- (f, h, cell): lower f, then lower h (i.e. deeper g), then lowest row, then lowest column.

An open cell reached again with a smaller g is pushed again with the new
priority; the older entry goes stale and is skipped when it surfaces.
Closed cells are never reopened.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple, List, Optional
import heapq
from math import inf

from pathviz.core.grid import Grid, Cell, heuristic
from pathviz.core.path import path_from_parents
from pathviz.core.types import StepResult, IDLE, RUNNING, DONE, NO_PATH


@dataclass
class AStarAlgo:
    name: str = "A*"

    # Internal state
    grid: Optional[Grid] = None
    open_pq: List[Tuple[int, int, Cell]] = field(default_factory=list)  # (f, h, cell)
    open_set: set = field(default_factory=set)
    closed_set: set = field(default_factory=set)
    g: Dict[Cell, int] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    goal_cell: Optional[Cell] = None

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        """Initialize on a given grid."""
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
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
        h0 = self._h(s)
        heapq.heappush(self.open_pq, (h0, h0, s))
        self.open_set.add(s)

    # -------------------- helpers --------------------

    def _h(self, c: Cell) -> int:
        return heuristic(c, self.grid.goal)

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        return path_from_parents(self.parent, end, self.grid.start)

    def _pop_live(self) -> Optional[Tuple[int, int, Cell]]:
        while self.open_pq:
            f_u, h_u, u = heapq.heappop(self.open_pq)
            # stale: closed already, or superseded by a cheaper push
            if u in self.closed_set or f_u - h_u != self.g.get(u, inf):
                continue
            return f_u, h_u, u
        return None

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion step:
          - Pop the lowest-f open node.
          - If goal, reconstruct and finish.
          - Else relax neighbors with edge cost 1.
        """
        if self.grid is None:
            return StepResult(status=IDLE, metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.goal_cell)
            return StepResult(
                status=DONE,
                path=path,
                metrics=self._metrics(path_len=len(path)),
            )

        if self.no_path:
            return StepResult(status=NO_PATH, metrics=self._metrics())

        popped = self._pop_live()
        if popped is None:
            self.no_path = True
            return StepResult(status=NO_PATH, metrics=self._metrics())

        # Finalize u
        _, _, u = popped
        self.popped_count += 1
        self.open_set.discard(u)
        self.closed_set.add(u)

        if u == self.goal_cell:
            self.done = True
            path = self._reconstruct_path(u)
            return StepResult(
                status=DONE,
                closed=[u],
                current=u,
                path=path,
                metrics=self._metrics(path_len=len(path)),
            )

        # Relax neighbors
        opened_now: List[Cell] = []
        for v in self.grid.neighbors(u):
            if v in self.closed_set:
                continue
            tentative_g = self.g[u] + 1
            if tentative_g < self.g.get(v, inf):
                self.g[v] = tentative_g
                self.parent[v] = u
                h_v = self._h(v)
                heapq.heappush(self.open_pq, (tentative_g + h_v, h_v, v))
                if v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return StepResult(
            status=RUNNING,
            opened=opened_now,
            closed=[u],
            current=u,
            metrics=self._metrics(),
        )

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
            "total_cost": self.g.get(self.goal_cell) if self.done else None,
        }
