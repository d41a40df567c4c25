# pathviz/core/path.py
#!/usr/bin/env python3
from dataclasses import dataclass
from typing import Dict, List, Optional

from pathviz.core.grid import Cell


@dataclass
class SearchNode:
    cell: Cell
    g: int = 0
    prev: Optional["SearchNode"] = None


def path_from_node(node: Optional[SearchNode]) -> List[Cell]:
    """Follow prev links back to the start node and return start..node."""
    path: List[Cell] = []
    cur = node
    while cur is not None:
        path.append(cur.cell)
        cur = cur.prev
    path.reverse()
    return path


def path_from_parents(parent: Dict[Cell, Cell], end: Cell, start: Cell) -> List[Cell]:
    """
    Backtrack through a predecessor map from end to start.

    Returns [] when the chain stops before reaching start (end was never
    reached from start).
    """
    path: List[Cell] = []
    cur = end
    while True:
        path.append(cur)
        if cur == start:
            break
        if cur not in parent:
            return []
        cur = parent[cur]
    path.reverse()
    return path
