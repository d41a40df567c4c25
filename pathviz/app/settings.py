# pathviz/app/settings.py
"""
Runtime configuration for the viewer and the command line runner.

Constants live here; choices that a user may want to change per run are
resolved from an environment variable first and then from a
`--name=value` command line flag, the flag winning.

- ENV: PATHVIZ_ALGO=bfs|dijkstra|astar     CLI: --algo=...
- ENV: PATHVIZ_SPEED=<events per second>    CLI: --speed=...
- ENV: PATHVIZ_LOG_LEVEL=DEBUG|INFO|...
"""

import logging
import os
import sys
from typing import List, Optional

from pathviz.core.engine import normalize_algorithm

logger = logging.getLogger(__name__)

# ---------- Grid ----------
ROWS = 30
COLS = 30
DEFAULT_START = (2, 2)
DEFAULT_GOAL = (ROWS - 3, COLS - 3)

# ---------- Playback ----------
DEFAULT_ALGO = "astar"
DEFAULT_SPEED = 30          # visit events consumed per second
MIN_SPEED = 1
MAX_SPEED = 240
PATH_SPEED_FACTOR = 2       # path cells are drawn this many times faster than visits

DEFAULT_LOG_LEVEL = "WARNING"


def _flag(name: str, argv: Optional[List[str]]) -> Optional[str]:
    prefix = f"--{name}="
    value = None
    for arg in (sys.argv[1:] if argv is None else argv):
        if arg.startswith(prefix):
            value = arg.split("=", 1)[1]
    return value


def resolve_algo(argv: Optional[List[str]] = None) -> str:
    raw = _flag("algo", argv) or os.getenv("PATHVIZ_ALGO") or DEFAULT_ALGO
    try:
        return normalize_algorithm(raw)
    except ValueError as ex:
        logger.warning("%s; falling back to %s", ex, DEFAULT_ALGO)
        return DEFAULT_ALGO


def clamp_speed(value: int) -> int:
    return int(max(MIN_SPEED, min(MAX_SPEED, value)))


def resolve_speed(argv: Optional[List[str]] = None) -> int:
    raw = _flag("speed", argv) or os.getenv("PATHVIZ_SPEED")
    if raw is None:
        return DEFAULT_SPEED
    try:
        return clamp_speed(int(raw))
    except ValueError:
        logger.warning("Ignoring non-integer speed %r", raw)
        return DEFAULT_SPEED


def resolve_log_level() -> int:
    name = os.getenv("PATHVIZ_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: Optional[int] = None) -> None:
    logging.basicConfig(
        level=resolve_log_level() if level is None else level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
