# pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from pathviz.core.grid import Cell

IDLE = "idle"
RUNNING = "running"
DONE = "done"
NO_PATH = "no_path"

# SearchEvent kinds
VISIT = "visit"
PATH = "path"


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchResult:
    algorithm: str
    status: str                   # "done" | "no_path"
    path: Optional[List[Cell]] = None
    visited: List[Cell] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status == DONE

    @property
    def cost(self) -> Optional[int]:
        """Edge count of the path, None when no path exists."""
        if not self.path:
            return None
        return len(self.path) - 1


@dataclass
class SearchEvent:
    kind: str                     # "visit" | "path" | "done" | "no_path"
    cell: Optional[Cell] = None
    result: Optional[SearchResult] = None
