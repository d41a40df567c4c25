"""
Tests for the engine entry points and the search properties every
algorithm must share.
"""

import copy

import pytest

from pathviz.core.engine import ALGORITHMS, iter_events, make_algo, normalize_algorithm, run_search
from pathviz.core.grid import Grid, heuristic
from pathviz.core.types import DONE, NO_PATH, PATH, VISIT


def reachable(grid, start):
    """Connected component of start, by flood fill."""
    seen, stack = {start}, [start]
    while stack:
        cur = stack.pop()
        for n in grid.neighbors(cur):
            if n not in seen:
                seen.add(n)
                stack.append(n)
    return seen


class TestRegistry:
    def test_three_algorithms(self):
        assert sorted(ALGORITHMS) == ["astar", "bfs", "dijkstra"]

    @pytest.mark.parametrize("raw,key", [("BFS", "bfs"), (" Dijkstra ", "dijkstra"),
                                         ("A*", "astar"), ("astar", "astar")])
    def test_normalize(self, raw, key):
        assert normalize_algorithm(raw) == key

    def test_unknown_algorithm_raises(self):
        with pytest.raises(ValueError, match="Unknown algorithm"):
            make_algo("dfs")

    def test_make_algo_returns_fresh_instances(self):
        assert make_algo("bfs") is not make_algo("bfs")


class TestShortestPaths:
    """Properties shared by all three algorithms."""

    @pytest.mark.parametrize("start,goal", [((0, 0), (4, 4)), ((2, 2), (0, 4)),
                                            ((4, 0), (0, 0)), ((3, 1), (3, 4))])
    def test_open_grid_length_is_manhattan(self, algo, start, goal):
        grid = Grid.empty(5, 5)
        result = run_search(grid, start, goal, algo)
        assert result.found
        assert result.cost == heuristic(start, goal)

    def test_five_by_five_corner_to_corner(self, algo, open_grid):
        result = run_search(open_grid, (0, 0), (4, 4), algo)
        assert result.cost == 8
        assert len(result.path) == 9
        assert result.path[0] == (0, 0)
        assert result.path[-1] == (4, 4)

    def test_algorithms_agree_on_length(self, maze_grid):
        costs = {name: run_search(maze_grid, algorithm=name).cost for name in ALGORITHMS}
        assert set(costs.values()) == {12}

    def test_path_is_continuous_and_avoids_walls(self, algo, maze_grid):
        path = run_search(maze_grid, algorithm=algo).path
        for a, b in zip(path, path[1:]):
            assert heuristic(a, b) == 1
        assert not any(maze_grid.is_wall(c) for c in path)

    def test_start_equals_goal(self, algo, open_grid):
        """Single-cell path, and the start is the only visit."""
        result = run_search(open_grid, (2, 2), (2, 2), algo)
        assert result.path == [(2, 2)]
        assert result.cost == 0
        assert result.visited == [(2, 2)]


class TestNoPath:
    def test_full_row_wall(self, algo, split_grid):
        """No path; exactly the start's component is visited."""
        result = run_search(split_grid, algorithm=algo)
        assert result.status == NO_PATH
        assert not result.found
        assert result.path is None
        assert result.cost is None
        assert len(result.visited) == len(set(result.visited))
        assert set(result.visited) == reachable(split_grid, split_grid.start)
        assert len(result.visited) == 10

    def test_walled_goal_is_never_reached(self, algo):
        grid = Grid.empty(3, 3, (0, 0), (2, 2))
        grid.set_wall((2, 2))
        result = run_search(grid, algorithm=algo)
        assert result.status == NO_PATH
        assert len(result.visited) == 8
        assert (2, 2) not in result.visited

    def test_walled_start_is_never_expanded(self, algo):
        grid = Grid.empty(3, 3, (0, 0), (2, 2))
        grid.set_wall((0, 0))
        result = run_search(grid, algorithm=algo)
        assert result.status == NO_PATH
        assert result.visited == []


class TestEvents:
    def test_event_sequence_on_success(self, algo, maze_grid):
        events = list(iter_events(maze_grid, algorithm=algo))
        kinds = [ev.kind for ev in events]
        result = events[-1].result

        assert kinds[-1] == DONE
        n_visit = kinds.count(VISIT)
        n_path = kinds.count(PATH)
        assert kinds == [VISIT] * n_visit + [PATH] * n_path + [DONE]
        assert [ev.cell for ev in events if ev.kind == VISIT] == result.visited
        assert [ev.cell for ev in events if ev.kind == PATH] == result.path

    def test_event_sequence_on_failure(self, algo, split_grid):
        events = list(iter_events(split_grid, algorithm=algo))
        assert events[-1].kind == NO_PATH
        assert all(ev.kind == VISIT for ev in events[:-1])

    def test_each_cell_visited_once(self, algo):
        grid = Grid.empty(8, 8, (0, 0), (7, 7))
        result = run_search(grid, algorithm=algo)
        assert len(result.visited) == len(set(result.visited))

    def test_on_visit_callback_order(self, algo, maze_grid):
        seen = []
        result = run_search(maze_grid, algorithm=algo, on_visit=seen.append)
        assert seen == result.visited

    def test_abandoning_leaves_grid_untouched(self, algo, maze_grid):
        before = copy.deepcopy(maze_grid)
        events = iter_events(maze_grid, algorithm=algo)
        next(events)
        next(events)
        events.close()
        assert maze_grid == before


class TestDeterminism:
    def test_repeat_runs_identical(self, algo, maze_grid):
        first = run_search(maze_grid, algorithm=algo)
        second = run_search(maze_grid, algorithm=algo)
        assert first.visited == second.visited
        assert first.path == second.path

    def test_search_does_not_mutate_grid(self, algo, maze_grid):
        before = copy.deepcopy(maze_grid)
        run_search(maze_grid, (0, 0), (4, 0), algo)
        assert maze_grid == before

    def test_endpoint_overrides(self, algo, open_grid):
        """Explicit start/goal win over the grid's own endpoints."""
        result = run_search(open_grid, (4, 0), (0, 4), algo)
        assert result.path[0] == (4, 0)
        assert result.path[-1] == (0, 4)
        assert open_grid.start == (0, 0)

    def test_result_names_algorithm(self, algo, open_grid):
        assert run_search(open_grid, algorithm=algo).algorithm == algo
