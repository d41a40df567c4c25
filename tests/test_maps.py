"""
Unit tests for map loading.
"""

import json

import pytest

from pathviz.core.engine import run_search
from pathviz.core.maps import (MapError, grid_from_dict, load_map, parse_ascii,
                               preset_maps, render_ascii)


class TestPresets:
    def test_presets_shipped(self):
        assert list(preset_maps()) == ["01_open_field", "02_wall_gap", "03_sealed_goal"]

    def test_open_field(self):
        grid = load_map(preset_maps()["01_open_field"])
        assert (grid.rows, grid.cols) == (30, 30)
        assert grid.wall_count() == 0
        assert run_search(grid, algorithm="astar").cost == 50

    def test_wall_gap_has_path(self):
        grid = load_map(preset_maps()["02_wall_gap"])
        assert grid.is_wall((15, 0))
        assert not grid.is_wall((15, 26))
        assert run_search(grid, algorithm="bfs").found

    def test_sealed_goal_has_no_path(self):
        grid = load_map(preset_maps()["03_sealed_goal"])
        assert not run_search(grid, algorithm="dijkstra").found


class TestJson:
    def test_cells_layout(self, tmp_path):
        path = tmp_path / "m.json"
        path.write_text(json.dumps({
            "rows": 2, "cols": 3, "start": [0, 0], "goal": [1, 2],
            "cells": [[0, 1, 0], [0, 0, 0]],
        }))
        grid = load_map(path)
        assert grid.is_wall((0, 1))
        assert grid.goal == (1, 2)

    def test_cells_size_mismatch(self):
        with pytest.raises(MapError, match="size mismatch"):
            grid_from_dict({"rows": 2, "cols": 2, "cells": [[0, 0]]})

    @pytest.mark.parametrize("data", [
        {"rows": 2, "cols": 2, "cells": 5},
        {"rows": 2, "cols": 2, "cells": [[0, 0], 7]},
        {"rows": 2, "cols": 2, "cells": "0000"},
        {"rows": 2, "cols": 2, "walls": 5},
        {"rows": 2, "cols": 2, "walls": {"r": 0, "c": 1}},
    ])
    def test_wrong_container_types(self, data):
        """Non-list cells, rows or walls are map errors, not TypeErrors."""
        with pytest.raises(MapError):
            grid_from_dict(data)

    def test_cell_strings_read_as_numbers(self):
        grid = grid_from_dict({"rows": 2, "cols": 2, "cells": [["0", "1"], ["0", "0"]]})
        assert not grid.is_wall((0, 0))
        assert grid.is_wall((0, 1))
        assert grid.wall_count() == 1

    def test_cell_values_must_be_numeric(self):
        with pytest.raises(MapError, match="0 \\(open\\) or 1 \\(wall\\)"):
            grid_from_dict({"rows": 2, "cols": 2, "cells": [["x", 0], [0, 0]]})

    def test_start_out_of_bounds(self):
        with pytest.raises(MapError, match="start out of bounds"):
            grid_from_dict({"rows": 2, "cols": 2, "start": [5, 0], "goal": [1, 1]})

    def test_missing_size(self):
        with pytest.raises(MapError):
            grid_from_dict({"start": [0, 0]})

    def test_bad_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(MapError, match="invalid JSON"):
            load_map(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(MapError, match="cannot read"):
            load_map(tmp_path / "nope.json")

    def test_map_error_is_value_error(self):
        assert issubclass(MapError, ValueError)


class TestAscii:
    def test_parse(self):
        grid = parse_ascii("S.#\n..G")
        assert (grid.rows, grid.cols) == (2, 3)
        assert grid.start == (0, 0)
        assert grid.goal == (1, 2)
        assert grid.is_wall((0, 2))

    @pytest.mark.parametrize("text,msg", [
        ("S..\n..", "ragged"),
        ("...\n..G", "both"),
        ("S.S\n..G", "more than one start"),
        ("S.x\n..G", "unexpected character"),
        ("", "empty"),
    ])
    def test_parse_errors(self, text, msg):
        with pytest.raises(MapError, match=msg):
            parse_ascii(text)

    def test_render_marks_path_and_visits(self):
        grid = parse_ascii("S..\n.#.\n..G")
        result = run_search(grid, algorithm="bfs")
        text = render_ascii(grid, path=result.path, visited=result.visited)
        lines = text.splitlines()
        assert lines[1][1] == "#"
        assert lines[0][0] == "S" and lines[2][2] == "G"
        assert text.count("*") == len(result.path) - 2
