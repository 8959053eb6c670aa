from __future__ import annotations

import random

import networkx as nx
import pytest

from maze_engine import BoundaryError, CellState, GridMaze, PathStatus
from maze_engine.render import render_maze
from maze_engine.validation import validate_path


def build_small_maze() -> GridMaze:
    maze = GridMaze(3, 3)
    maze.set_start(maze.coordinate_to_id(1, 1))
    maze.set_end(maze.coordinate_to_id(3, 3))
    return maze


def interior_neighbors(maze: GridMaze, x: int, y: int) -> list[int]:
    candidates = [(x, y - 1), (x - 1, y), (x + 1, y), (x, y + 1)]
    return sorted(
        maze.coordinate_to_id(cx, cy)
        for cx, cy in candidates
        if 1 <= cx <= maze.width and 1 <= cy <= maze.height
    )


def border_ids(maze: GridMaze) -> list[int]:
    return [node for node in range(len(maze)) if not maze.is_interior(node)]


def test_default_maze_layout() -> None:
    maze = GridMaze()
    assert (maze.width, maze.height) == (10, 10)
    assert len(maze) == 144
    assert maze.start == maze.end == maze.coordinate_to_id(1, 1) == 13


def test_invalid_dimensions_rejected() -> None:
    with pytest.raises(ValueError):
        GridMaze(0, 3)


@pytest.mark.parametrize("width,height", [(3, 3), (5, 2), (2, 6)])
def test_coordinate_round_trip(width: int, height: int) -> None:
    maze = GridMaze(width, height)
    seen = set()
    for y in range(height + 2):
        for x in range(width + 2):
            node = maze.coordinate_to_id(x, y)
            assert maze.id_to_coordinate(node) == (x, y)
            seen.add(node)
    assert seen == set(range(len(maze)))


@pytest.mark.parametrize("width,height", [(3, 3), (4, 2)])
def test_initial_adjacency_is_interior_grid(width: int, height: int) -> None:
    maze = GridMaze(width, height)
    for y in range(1, height + 1):
        for x in range(1, width + 1):
            node = maze.coordinate_to_id(x, y)
            assert list(maze.get_relation(node)) == interior_neighbors(maze, x, y)
            assert maze.cell_state(node) is CellState.ALIVE
    for node in border_ids(maze):
        assert maze.graph.neighbors(node) == ()
        assert maze.cell_state(node) is CellState.BORDER


def test_get_relation_rejects_border_and_out_of_range() -> None:
    maze = GridMaze(3, 3)
    for node in border_ids(maze):
        with pytest.raises(BoundaryError):
            maze.get_relation(node)
    for node in (-1, len(maze), len(maze) + 10):
        with pytest.raises(BoundaryError):
            maze.get_relation(node)
    maze.get_relation(maze.coordinate_to_id(2, 2))


def test_mutations_on_border_raise() -> None:
    maze = GridMaze(3, 3)
    corner = maze.coordinate_to_id(0, 0)
    for operation in (maze.kill, maze.revive, maze.toggle, maze.move_to):
        with pytest.raises(BoundaryError):
            operation(corner)
    with pytest.raises(BoundaryError):
        maze.toggle(len(maze))
    assert maze.graph.neighbors(corner) == ()


def test_kill_removes_every_edge() -> None:
    maze = GridMaze(3, 3)
    center = maze.coordinate_to_id(2, 2)
    former = maze.get_relation(center)

    maze.kill(center)

    assert maze.get_relation(center) == ()
    assert maze.cell_state(center) is CellState.DEAD
    assert all(center not in maze.get_relation(node) for node in former)
    assert maze.graph.is_symmetric()


def test_toggle_twice_restores_adjacency() -> None:
    maze = GridMaze(4, 4)
    for node in maze.interior_ids():
        before = maze.get_relation(node)
        assert maze.toggle(node) is CellState.DEAD
        assert maze.toggle(node) is CellState.ALIVE
        assert maze.get_relation(node) == before


def test_random_toggles_keep_lists_sorted_and_symmetric() -> None:
    maze = GridMaze(6, 5)
    rng = random.Random(7)
    cells = maze.interior_ids()
    for _ in range(300):
        maze.toggle(rng.choice(cells))
        assert maze.graph.is_sorted()
        assert maze.graph.is_symmetric()

    for node in cells:
        if maze.is_alive(node):
            assert list(maze.get_relation(node)) == sorted(maze.alive_neighbors(node))
        else:
            assert maze.get_relation(node) == ()


def test_revived_cell_without_alive_neighbors_is_alive() -> None:
    maze = GridMaze(3, 3)
    corner = maze.coordinate_to_id(1, 1)
    maze.kill(maze.coordinate_to_id(2, 1))
    maze.kill(maze.coordinate_to_id(1, 2))

    maze.toggle(corner)
    assert maze.cell_state(corner) is CellState.DEAD
    maze.toggle(corner)
    assert maze.cell_state(corner) is CellState.ALIVE
    assert maze.get_relation(corner) == ()


def test_start_equals_end_returns_start() -> None:
    maze = GridMaze(3, 3)
    assert maze.shortest_path() == [maze.start]
    assert maze.find_path().status is PathStatus.TRIVIAL


def test_shortest_path_across_small_maze() -> None:
    maze = build_small_maze()
    path = maze.shortest_path()

    assert len(path) == 5
    assert path[0] == maze.start
    assert path[-1] == maze.end
    assert validate_path(path, maze.graph, maze.start, maze.end)["is_valid"]


def test_dead_column_splits_maze() -> None:
    maze = build_small_maze()
    for y in range(1, 4):
        maze.kill(maze.coordinate_to_id(2, y))

    assert maze.shortest_path() == [maze.start]
    assert maze.find_path().status is PathStatus.UNREACHABLE


def test_path_detours_around_dead_cells() -> None:
    maze = build_small_maze()
    maze.kill(maze.coordinate_to_id(2, 1))
    maze.kill(maze.coordinate_to_id(2, 2))

    path = maze.shortest_path()
    coords = [maze.id_to_coordinate(node) for node in path]
    assert coords == [(1, 1), (1, 2), (1, 3), (2, 3), (3, 3)]


def test_bfs_matches_networkx_on_random_layouts() -> None:
    rng = random.Random(11)
    for _ in range(10):
        maze = GridMaze(7, 5)
        for node in rng.sample(maze.interior_ids(), 12):
            maze.kill(node)
        alive = [node for node in maze.interior_ids() if maze.is_alive(node)]
        maze.set_start(rng.choice(alive))
        maze.set_end(rng.choice(alive))

        result = maze.find_path()
        reference = maze.graph.to_networkx()
        if nx.has_path(reference, maze.start, maze.end):
            assert result.distance == nx.shortest_path_length(reference, maze.start, maze.end)
        else:
            assert result.status is PathStatus.UNREACHABLE


def test_move_to_advances_start_only_on_success() -> None:
    maze = GridMaze(3, 3)
    far_corner = maze.coordinate_to_id(3, 3)

    result = maze.move_to(far_corner)
    assert result.status is PathStatus.REACHED
    assert maze.start == maze.end == far_corner

    for y in range(1, 4):
        maze.kill(maze.coordinate_to_id(2, y))
    origin = maze.coordinate_to_id(1, 1)
    result = maze.move_to(origin)
    assert result.status is PathStatus.UNREACHABLE
    assert maze.start == far_corner
    assert maze.end == origin


def test_layout_round_trip() -> None:
    maze = build_small_maze()
    maze.kill(maze.coordinate_to_id(2, 2))
    payload = maze.to_dict()

    assert payload == {"width": 3, "height": 3, "start": [1, 1], "end": [3, 3], "dead": [[2, 2]]}

    loaded = GridMaze.from_dict(payload)
    assert loaded.to_dict() == payload
    assert loaded.shortest_path() == maze.shortest_path()


def test_load_layout_revives_previous_dead_cells() -> None:
    maze = GridMaze(3, 3)
    maze.kill(maze.coordinate_to_id(1, 3))
    maze.load_from_dict({"width": 3, "height": 3, "dead": [[3, 1]]})

    assert maze.is_alive(maze.coordinate_to_id(1, 3))
    assert not maze.is_alive(maze.coordinate_to_id(3, 1))

    with pytest.raises(ValueError):
        maze.load_from_dict({"width": 4, "height": 3})


@pytest.mark.parametrize(
    "payload,error",
    [
        ({"width": 3, "height": 3, "start": [50, 50]}, BoundaryError),
        ({"width": 3, "height": 3, "end": [0, 0]}, BoundaryError),
        ({"width": 3, "height": 3, "dead": [[4, 1]]}, BoundaryError),
        ({"width": 3, "height": 3, "start": [1]}, ValueError),
        ({"width": 3, "height": 3, "end": ["a", 2]}, ValueError),
        ({"width": 3, "height": 3, "dead": {"x": 1}}, ValueError),
        ({"width": "wide", "height": 3}, ValueError),
    ],
)
def test_invalid_layout_leaves_maze_untouched(payload: dict, error: type) -> None:
    maze = build_small_maze()
    maze.kill(maze.coordinate_to_id(2, 2))
    before = maze.to_dict()

    with pytest.raises(error):
        maze.load_from_dict(payload)
    assert maze.to_dict() == before


def test_from_dict_rejects_non_object_payload() -> None:
    with pytest.raises(ValueError):
        GridMaze.from_dict([3, 3])  # type: ignore[arg-type]


def test_render_marks_cells() -> None:
    maze = build_small_maze()
    maze.kill(maze.coordinate_to_id(2, 2))

    assert render_maze(maze, maze.shortest_path()) == "S**\n.#*\n..E"
    assert render_maze(maze) == "S..\n.#.\n..E"
