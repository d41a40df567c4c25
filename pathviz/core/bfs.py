# pathviz/core/bfs.py
#!/usr/bin/env python3
"""
Breadth-first search, one dequeue per step().

Every edge costs 1, so FIFO order alone yields a shortest path. The goal
check happens on dequeue, right after the visit is reported.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from pathviz.core.grid import Grid, Cell
from pathviz.core.path import SearchNode, path_from_node
from pathviz.core.types import StepResult, IDLE, RUNNING, DONE, NO_PATH


@dataclass
class BFSAlgo:
    name: str = "BFS"

    grid: Optional[Grid] = None
    queue: Deque[SearchNode] = field(default_factory=deque)
    visited: set = field(default_factory=set)      # enqueued at least once
    closed_set: set = field(default_factory=set)   # dequeued
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    path: Optional[List[Cell]] = None

    def init(self, grid: Grid) -> None:
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.queue.clear()
        self.visited.clear()
        self.closed_set.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.path = None

        s = self.grid.start
        if self.grid.is_wall(s):
            self.no_path = True
            return
        self.queue.append(SearchNode(s))
        self.visited.add(s)

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status=IDLE, metrics={"algo": self.name})

        if self.done:
            return StepResult(status=DONE, path=self.path,
                              metrics=self._metrics(path_len=len(self.path)))

        if self.no_path:
            return StepResult(status=NO_PATH, metrics=self._metrics())

        if not self.queue:
            self.no_path = True
            return StepResult(status=NO_PATH, metrics=self._metrics())

        node = self.queue.popleft()
        u = node.cell
        self.popped_count += 1
        self.closed_set.add(u)

        if u == self.grid.goal:
            self.done = True
            self.path = path_from_node(node)
            return StepResult(status=DONE, closed=[u], current=u, path=self.path,
                              metrics=self._metrics(path_len=len(self.path)))

        opened_now: List[Cell] = []
        for v in self.grid.neighbors(u):
            if v in self.visited:
                continue
            self.visited.add(v)
            self.queue.append(SearchNode(v, g=node.g + 1, prev=node))
            opened_now.append(v)

        return StepResult(status=RUNNING, opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.queue),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
            "total_cost": path_len - 1 if path_len else None,
        }
