"""
Pytest configuration and shared fixtures.
"""

import pytest

from pathviz.core.grid import Grid
from pathviz.core.maps import parse_ascii

ALGOS = ["bfs", "dijkstra", "astar"]


@pytest.fixture(params=ALGOS)
def algo(request) -> str:
    """Each search algorithm in turn."""
    return request.param


@pytest.fixture
def open_grid() -> Grid:
    """5x5 grid, no walls, corner to corner."""
    return Grid.empty(5, 5, (0, 0), (4, 4))


@pytest.fixture
def split_grid() -> Grid:
    """Full-row wall with no gap between start and goal."""
    return parse_ascii(
        """
        ..S..
        .....
        #####
        .....
        ...G.
        """
    )


@pytest.fixture
def maze_grid() -> Grid:
    """Walls force a detour; shortest path is 12 edges."""
    return parse_ascii(
        """
        S.#....
        .##.##.
        ...#...
        .#...#.
        .#.#.#G
        """
    )
